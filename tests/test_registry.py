import pytest

from messaging_api import ClientRegistry, LineClient, MessengerClient


class DummyClient:
    def __init__(self, **kwargs) -> None:  # type: ignore[no-untyped-def]
        self.kwargs = kwargs


def test_registry_get_and_register(monkeypatch: pytest.MonkeyPatch) -> None:
    # line and messenger are pre-registered
    assert isinstance(ClientRegistry.get("line"), LineClient)
    assert isinstance(ClientRegistry.get("messenger"), MessengerClient)

    client = ClientRegistry.get("line", access_token="other-token")
    assert client.access_token == "other-token"

    # register custom; the class-level mapping is restored after the test
    monkeypatch.setattr(ClientRegistry, "_registry", dict(ClientRegistry._registry))
    ClientRegistry.register("dummy", DummyClient)
    d = ClientRegistry.get("dummy", token="x")
    assert isinstance(d, DummyClient)
    assert d.kwargs == {"token": "x"}
    assert "dummy" in ClientRegistry.names()


def test_registry_unknown() -> None:
    with pytest.raises(KeyError):
        ClientRegistry.get("missing")
