from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class RequestInfo(BaseModel):
    """Snapshot of the outgoing request attached to an API error.

    Attributes:
        method: Upper-case HTTP method.
        url: Absolute URL the request was sent to.
        data: Decoded JSON body, or the raw text for non-JSON bodies.
    """

    method: str
    url: str
    data: Any = None


class ResponseInfo(BaseModel):
    """Snapshot of the platform response attached to an API error."""

    status: int
    reason: str = ""
    headers: Dict[str, str] = {}
    data: Any = None


class BatchResult(BaseModel):
    """One entry of a Messenger batch response.

    Attributes:
        code: HTTP status of the individual operation.
        headers: Response headers, present when the batch asked for them.
        body: Parsed JSON body, narrowed by ``response_access_path`` when the
            descriptor carried one. ``None`` for operations sent with
            ``omit_response_on_success``.

    Example:
        >>> from messaging_api.types import BatchResult
        >>> BatchResult(code=200, body={"recipient_id": "1", "message_id": "mid.1"})
    """

    code: int
    headers: Optional[List[Dict[str, Any]]] = None
    body: Any = None
