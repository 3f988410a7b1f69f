"""Shared types for the messaging API clients.

Enums constrain the platform values the builders and clients accept, result
models describe structured responses and error snapshots, and protocols
describe the callables clients accept.

Usage:
    from messaging_api.types import MessagingType, BatchResult
"""

from .enums import (
    AttachmentType,
    AudienceGroupAuthorityLevel,
    AudienceGroupCreateRoute,
    AudienceGroupStatus,
    GenericImageAspectRatio,
    ImageAspectRatio,
    ImageSize,
    MessagingType,
    SenderAction,
    TopElementStyle,
)
from .protocols import RequestHook
from .results import BatchResult, RequestInfo, ResponseInfo

__all__ = [
    "AttachmentType",
    "AudienceGroupAuthorityLevel",
    "AudienceGroupCreateRoute",
    "AudienceGroupStatus",
    "GenericImageAspectRatio",
    "ImageAspectRatio",
    "ImageSize",
    "MessagingType",
    "SenderAction",
    "TopElementStyle",
    "RequestHook",
    "BatchResult",
    "RequestInfo",
    "ResponseInfo",
]
