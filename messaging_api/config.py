"""Configuration management for the messaging API clients.

Every field reads its environment variable when the settings object is
created, so explicit constructor arguments on the clients always win and
unset ones fall back to the environment.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_LINE_ORIGIN = "https://api.line.me"
DEFAULT_LINE_DATA_ORIGIN = "https://api-data.line.me"
DEFAULT_GRAPH_ORIGIN = "https://graph.facebook.com"
DEFAULT_GRAPH_VERSION = "6.0"
# Same as httpx's own default timeout
DEFAULT_HTTP_TIMEOUT = 5.0


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip().lower() not in {"0", "false", "no", "off"}


class Settings(BaseModel):
    """Settings shared by the LINE and Messenger clients."""

    env: str = Field(default_factory=lambda: os.getenv("ENV", "dev"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # HTTP behaviour
    http_timeout_seconds: float = Field(
        default_factory=lambda: _env_float("MESSAGING_API_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)
    )

    # LINE Messaging API
    line_access_token: Optional[str] = Field(default_factory=lambda: os.getenv("LINE_ACCESS_TOKEN"))
    line_channel_secret: Optional[str] = Field(
        default_factory=lambda: os.getenv("LINE_CHANNEL_SECRET")
    )
    line_origin: str = Field(
        default_factory=lambda: os.getenv("LINE_API_ORIGIN", DEFAULT_LINE_ORIGIN)
    )
    line_data_origin: str = Field(
        default_factory=lambda: os.getenv("LINE_DATA_API_ORIGIN", DEFAULT_LINE_DATA_ORIGIN)
    )

    # Messenger Platform (Graph API)
    messenger_access_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("MESSENGER_ACCESS_TOKEN")
    )
    messenger_app_id: Optional[str] = Field(default_factory=lambda: os.getenv("MESSENGER_APP_ID"))
    messenger_app_secret: Optional[str] = Field(
        default_factory=lambda: os.getenv("MESSENGER_APP_SECRET")
    )
    messenger_graph_version: str = Field(
        default_factory=lambda: os.getenv("MESSENGER_GRAPH_VERSION", DEFAULT_GRAPH_VERSION)
    )
    messenger_origin: str = Field(
        default_factory=lambda: os.getenv("MESSENGER_GRAPH_ORIGIN", DEFAULT_GRAPH_ORIGIN)
    )
    messenger_skip_app_secret_proof: Optional[bool] = Field(
        default_factory=lambda: _env_flag("MESSENGER_SKIP_APP_SECRET_PROOF")
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
