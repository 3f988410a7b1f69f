from __future__ import annotations

from enum import Enum


class ImageAspectRatio(str, Enum):
    """Aspect ratio of the image in LINE buttons and carousel templates."""

    RECTANGLE = "rectangle"
    SQUARE = "square"


class ImageSize(str, Enum):
    """How LINE fits a template image into its frame."""

    COVER = "cover"
    CONTAIN = "contain"


class AudienceGroupStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    READY = "READY"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


class AudienceGroupCreateRoute(str, Enum):
    OA_MANAGER = "OA_MANAGER"
    MESSAGING_API = "MESSAGING_API"


class AudienceGroupAuthorityLevel(str, Enum):
    """Who may use the audience groups of a LINE channel.

    - PUBLIC: audience groups are shared with other channels of the account
    - PRIVATE: audience groups are only usable by the channel that made them
    """

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class MessagingType(str, Enum):
    """Messenger Send API ``messaging_type`` values.

    Sends default to UPDATE; MESSAGE_TAG is chosen automatically when a
    ``tag`` is supplied.
    """

    RESPONSE = "RESPONSE"
    UPDATE = "UPDATE"
    MESSAGE_TAG = "MESSAGE_TAG"


class SenderAction(str, Enum):
    MARK_SEEN = "mark_seen"
    TYPING_ON = "typing_on"
    TYPING_OFF = "typing_off"


class AttachmentType(str, Enum):
    """Media attachment types accepted by the Messenger Send and Attachment Upload APIs."""

    AUDIO = "audio"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"


class GenericImageAspectRatio(str, Enum):
    HORIZONTAL = "horizontal"
    SQUARE = "square"


class TopElementStyle(str, Enum):
    LARGE = "large"
    COMPACT = "compact"
