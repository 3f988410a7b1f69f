"""Printable API errors raised by the LINE and Messenger clients.

Every non-2xx response and every transport failure is raised as one of the
classes below, chained to the original ``httpx`` exception. The error keeps a
snapshot of the request and the response so ``describe()`` can render a
readable report:

    Error Message -
      LINE API - The request body has 1 error(s)
      - messages[0].text: may not be empty

    Request -
      POST https://api.line.me/v2/bot/message/push

    Request Data -
      {...}

    Response -
      400 Bad Request

    Response Data -
      {...}
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type, TypeVar

import httpx

from messaging_api.types import RequestInfo, ResponseInfo

E = TypeVar("E", bound="MessagingAPIError")

# Query parameters that must never end up in error reports or logs
SECRET_PARAMS = ("access_token", "appsecret_proof", "input_token")


def redact_url(url: httpx.URL) -> str:
    for name in SECRET_PARAMS:
        if name in url.params:
            url = url.copy_remove_param(name)
    return str(url)


def decode_body(content: bytes, content_type: str) -> Any:
    """Decode a request/response body for display: JSON, text, or a size note."""
    if not content:
        return None
    if "json" in content_type:
        try:
            return json.loads(content)
        except ValueError:
            pass
    if content_type.startswith("text/") or "urlencoded" in content_type or "json" in content_type:
        return content.decode("utf-8", errors="replace")
    return f"<{len(content)} bytes>"


def _request_info(request: httpx.Request) -> RequestInfo:
    try:
        content = request.content
    except httpx.RequestNotRead:
        content = b""
    return RequestInfo(
        method=request.method.upper(),
        url=redact_url(request.url),
        data=decode_body(content, request.headers.get("content-type", "")),
    )


def _response_info(response: httpx.Response) -> ResponseInfo:
    try:
        content = response.content
    except httpx.ResponseNotRead:
        content = b""
    return ResponseInfo(
        status=response.status_code,
        reason=response.reason_phrase,
        headers={k: v for k, v in response.headers.items()},
        data=decode_body(content, response.headers.get("content-type", "application/json")),
    )


def _fallback_message(
    exc: httpx.HTTPError,
    request_info: Optional[RequestInfo],
    response_info: Optional[ResponseInfo],
) -> str:
    """Message for errors without a platform error body, built without secrets."""
    name = exc.__class__.__name__
    url = request_info.url if request_info is not None else None
    if response_info is not None:
        message = f"{name}: {response_info.status} {response_info.reason}".rstrip()
        return f"{message} for url '{url}'" if url else message

    message = str(exc)
    if request_info is not None:
        raw_url = exc.request.url
        message = message.replace(str(raw_url), request_info.url)
        for param in SECRET_PARAMS:
            value = raw_url.params.get(param)
            if value:
                message = message.replace(value, "[REDACTED]")
    return f"{name}: {message}" if message else name


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" if line else "" for line in text.split("\n"))


def _pretty(data: Any) -> str:
    if isinstance(data, (dict, list)):
        return json.dumps(data, indent=2, ensure_ascii=False)
    return str(data)


class MessagingAPIError(Exception):
    """An API call failed, either in transport or with a non-2xx status.

    Attributes:
        message: Human readable summary (also ``str(error)``).
        request: Snapshot of the request that failed, when known.
        response: Snapshot of the platform response, ``None`` for transport
            failures such as connection resets or timeouts.
        status: Response status code, or ``None`` without a response.
    """

    def __init__(
        self,
        message: str,
        *,
        request: Optional[RequestInfo] = None,
        response: Optional[ResponseInfo] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.request = request
        self.response = response
        self.status: Optional[int] = response.status if response is not None else None

    @classmethod
    def format_message(cls, data: Any) -> Optional[str]:
        """Build the error message from a decoded error body, if it has the platform's shape."""
        return None

    @classmethod
    def from_http_error(cls: Type[E], exc: httpx.HTTPError) -> E:
        request_info: Optional[RequestInfo] = None
        try:
            request_info = _request_info(exc.request)
        except RuntimeError:
            # httpx raises RuntimeError when the error was built without a request
            request_info = None

        response_info: Optional[ResponseInfo] = None
        if isinstance(exc, httpx.HTTPStatusError):
            response_info = _response_info(exc.response)

        message = None
        if response_info is not None and response_info.data:
            message = cls.format_message(response_info.data)
        if message is None:
            message = _fallback_message(exc, request_info, response_info)
        return cls(message, request=request_info, response=response_info)

    def describe(self) -> str:
        """Render the message, request and response as an indented report."""
        sections = ["Error Message -", _indent(self.message)]
        if self.request is not None:
            sections += ["", "Request -", _indent(f"{self.request.method} {self.request.url}")]
            if self.request.data is not None:
                sections += ["", "Request Data -", _indent(_pretty(self.request.data))]
        if self.response is not None:
            sections += [
                "",
                "Response -",
                _indent(f"{self.response.status} {self.response.reason}".rstrip()),
            ]
            if self.response.data is not None:
                sections += ["", "Response Data -", _indent(_pretty(self.response.data))]
        return "\n".join(sections)


class LineAPIError(MessagingAPIError):
    """Error raised by ``LineClient``.

    LINE reports failures as ``{"message": ..., "details": [{"property", "message"}]}``;
    each detail becomes one ``- property: message`` line.
    """

    @classmethod
    def format_message(cls, data: Any) -> Optional[str]:
        if not isinstance(data, dict) or "message" not in data:
            return None
        msg = f"LINE API - {data['message']}"
        for detail in data.get("details") or []:
            msg += f"\n- {detail.get('property')}: {detail.get('message')}"
        return msg


class MessengerAPIError(MessagingAPIError):
    """Error raised by ``MessengerClient`` from a Graph ``{"error": {...}}`` body."""

    def __init__(
        self,
        message: str,
        *,
        request: Optional[RequestInfo] = None,
        response: Optional[ResponseInfo] = None,
    ) -> None:
        super().__init__(message, request=request, response=response)
        error: Dict[str, Any] = {}
        if response is not None and isinstance(response.data, dict):
            error = response.data.get("error") or {}
        self.code: Optional[int] = error.get("code")
        self.type: Optional[str] = error.get("type")
        self.error_subcode: Optional[int] = error.get("error_subcode")
        self.fbtrace_id: Optional[str] = error.get("fbtrace_id")

    @classmethod
    def format_message(cls, data: Any) -> Optional[str]:
        if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
            return None
        error = data["error"]
        return f"Messenger API - {error.get('code')} {error.get('type')} {error.get('message')}"
