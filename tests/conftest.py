from typing import Generator

import pytest

from messaging_api.config import get_settings


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("LINE_ACCESS_TOKEN", "line-token")
    monkeypatch.setenv("LINE_CHANNEL_SECRET", "line-secret")
    monkeypatch.setenv("MESSENGER_ACCESS_TOKEN", "page-token")
    monkeypatch.setenv("MESSENGER_APP_ID", "app-id")
    # Clients skip appsecret_proof unless a test passes an app secret explicitly
    monkeypatch.delenv("MESSENGER_APP_SECRET", raising=False)
    monkeypatch.delenv("MESSENGER_SKIP_APP_SECRET_PROOF", raising=False)
    monkeypatch.delenv("MESSENGER_GRAPH_VERSION", raising=False)
    monkeypatch.delenv("LINE_API_ORIGIN", raising=False)
    monkeypatch.delenv("LINE_DATA_API_ORIGIN", raising=False)
    monkeypatch.delenv("MESSENGER_GRAPH_ORIGIN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
