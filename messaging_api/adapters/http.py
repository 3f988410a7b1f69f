"""Shared httpx plumbing for the platform clients.

Clients own one ``httpx.Client`` built by ``build_client`` and issue every
call through ``send`` (or ``stream`` for downloads), which turns transport
failures and non-2xx statuses into the client's ``MessagingAPIError``
subclass.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Type

import httpx

from messaging_api.config import get_settings
from messaging_api.errors import MessagingAPIError, decode_body, redact_url
from messaging_api.types import RequestHook

logger = logging.getLogger(__name__)


def summarize_request(request: httpx.Request) -> Dict[str, Any]:
    """Describe an outgoing request for ``on_request`` hooks."""
    content_type = request.headers.get("content-type", "")
    body = None
    if "json" in content_type:
        body = decode_body(request.content, content_type)
    return {
        "method": request.method.lower(),
        "url": str(request.url),
        "headers": dict(request.headers),
        "body": body,
    }


def log_request(request: Dict[str, Any]) -> None:
    """Default ``on_request`` hook: one DEBUG line per request, secrets redacted."""
    logger.debug(
        "%s %s", request["method"].upper(), redact_url(httpx.URL(request["url"]))
    )


def _event_hook(on_request: RequestHook) -> Callable[[httpx.Request], None]:
    def hook(request: httpx.Request) -> None:
        on_request(summarize_request(request))

    return hook


def build_client(
    base_url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    on_request: Optional[RequestHook] = None,
) -> httpx.Client:
    """Create the ``httpx.Client`` a platform client talks through."""
    if timeout is None:
        timeout = get_settings().http_timeout_seconds
    return httpx.Client(
        base_url=base_url,
        headers=headers,
        timeout=httpx.Timeout(timeout),
        event_hooks={"request": [_event_hook(on_request or log_request)]},
    )


def _log_failure(error: MessagingAPIError) -> None:
    logger.warning(
        "Platform API request failed",
        extra={
            "method": error.request.method if error.request else None,
            "url": error.request.url if error.request else None,
            "status": error.status,
        },
    )


def send(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    error_cls: Type[MessagingAPIError],
    **kwargs: Any,
) -> httpx.Response:
    """Perform one request and raise ``error_cls`` unless it succeeds."""
    try:
        response = client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        error = error_cls.from_http_error(exc)
        _log_failure(error)
        raise error from exc
    return response


def stream(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    error_cls: Type[MessagingAPIError],
    **kwargs: Any,
) -> Iterator[bytes]:
    """Like ``send`` but yield the response body in chunks."""
    try:
        with client.stream(method, url, **kwargs) as response:
            if response.is_error:
                response.read()
            response.raise_for_status()
            yield from response.iter_bytes()
    except httpx.HTTPError as exc:
        error = error_cls.from_http_error(exc)
        _log_failure(error)
        raise error from exc


def json_or_none(response: httpx.Response) -> Any:
    """Decode a JSON response body; empty bodies decode to ``None``."""
    if not response.content:
        return None
    return response.json()
