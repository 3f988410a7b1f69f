from __future__ import annotations

from typing import Any, Dict

from messaging_api.adapters.line import LineClient
from messaging_api.adapters.messenger import MessengerClient


class ClientRegistry:
    """Registry of platform clients by name.

    Lets callers pick a platform from configuration (``"line"``,
    ``"messenger"``) and plug in further platforms without touching the
    calling code.
    """

    _registry: Dict[str, type] = {
        "line": LineClient,
        "messenger": MessengerClient,
    }

    @classmethod
    def get(cls, name: str, **kwargs: Any) -> Any:
        """Build the client registered as ``name``; ``kwargs`` go to its constructor."""
        client_cls = cls._registry.get(name)
        if client_cls is None:
            raise KeyError(f"Unknown messaging platform: {name}")
        return client_cls(**kwargs)

    @classmethod
    def register(cls, name: str, client_cls: type) -> None:
        cls._registry[name] = client_cls

    @classmethod
    def names(cls) -> list:
        return sorted(cls._registry)
