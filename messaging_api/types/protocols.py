from __future__ import annotations

from typing import Any, Dict, Protocol


class RequestHook(Protocol):
    """Callback invoked with a summary of every outgoing request.

    The summary is a dict with ``method`` (lower case), ``url`` (absolute),
    ``headers`` and ``body`` (decoded JSON, or ``None`` for binary and
    multipart uploads). Clients log the request at DEBUG level when no hook is
    given.

    Minimal example:
        >>> from messaging_api import LineClient
        >>> seen = []
        >>> client = LineClient("token", "secret", on_request=seen.append)
    """

    def __call__(self, request: Dict[str, Any]) -> None:
        ...
