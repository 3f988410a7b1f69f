"""Messenger message object builders.

Builders return plain dicts in the Graph API's snake_case format, ready to be
used as the ``message`` of a Send API request or a batch item.

Example:
    >>> from messaging_api import Messenger
    >>> Messenger.create_text("Hello!", quick_replies=[
    ...     {"content_type": "text", "title": "Yes", "payload": "YES"},
    ... ])
"""

from __future__ import annotations

import warnings
from typing import Any, Dict, List, Mapping, Optional, Union

from messaging_api.types import AttachmentType, GenericImageAspectRatio, TopElementStyle

Message = Dict[str, Any]
QuickReplies = Optional[List[Dict[str, Any]]]

MAX_QUICK_REPLIES = 11
MAX_QUICK_REPLY_TITLE = 20
MAX_QUICK_REPLY_PAYLOAD = 1000


def validate_quick_replies(quick_replies: List[Dict[str, Any]]) -> None:
    """Raise ``ValueError`` unless ``quick_replies`` satisfies Messenger's limits."""
    if not isinstance(quick_replies, list) or len(quick_replies) > MAX_QUICK_REPLIES:
        raise ValueError(f"quick_replies is a list and limited to {MAX_QUICK_REPLIES}")

    for quick_reply in quick_replies:
        if quick_reply.get("content_type") != "text":
            continue
        title = (quick_reply.get("title") or "").strip()
        if not title or len(title) > MAX_QUICK_REPLY_TITLE:
            raise ValueError(
                f"title of quick reply has a {MAX_QUICK_REPLY_TITLE} character limit, "
                "after that it gets truncated"
            )
        payload = quick_reply.get("payload")
        if not payload or len(payload) > MAX_QUICK_REPLY_PAYLOAD:
            raise ValueError(
                f"payload of quick reply has a {MAX_QUICK_REPLY_PAYLOAD} character limit"
            )


def _deprecated(name: str, replacement: str) -> None:
    warnings.warn(
        f"`Messenger.{name}` is deprecated. Use `Messenger.{replacement}` instead.",
        DeprecationWarning,
        stacklevel=3,
    )


class Messenger:
    """Namespace of Messenger message builders."""

    @staticmethod
    def create_message(
        message: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        result = dict(message)
        if quick_replies:
            validate_quick_replies(quick_replies)
            result["quick_replies"] = quick_replies
        return result

    @staticmethod
    def create_text(text: str, *, quick_replies: QuickReplies = None) -> Message:
        return Messenger.create_message({"text": text}, quick_replies=quick_replies)

    @staticmethod
    def create_attachment(
        attachment: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_message(
            {"attachment": dict(attachment)}, quick_replies=quick_replies
        )

    @staticmethod
    def create_media(
        media_type: str,
        media: Union[str, Mapping[str, Any]],
        *,
        quick_replies: QuickReplies = None,
    ) -> Message:
        """Attachment of ``media_type``; a string is a URL, a mapping is the payload
        (``{"url": ...}`` or ``{"attachment_id": ...}``)."""
        payload = {"url": media} if isinstance(media, str) else dict(media)
        attachment = {"type": AttachmentType(media_type).value, "payload": payload}
        return Messenger.create_attachment(attachment, quick_replies=quick_replies)

    @staticmethod
    def create_audio(
        audio: Union[str, Mapping[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_media("audio", audio, quick_replies=quick_replies)

    @staticmethod
    def create_image(
        image: Union[str, Mapping[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_media("image", image, quick_replies=quick_replies)

    @staticmethod
    def create_video(
        video: Union[str, Mapping[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_media("video", video, quick_replies=quick_replies)

    @staticmethod
    def create_file(
        file: Union[str, Mapping[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_media("file", file, quick_replies=quick_replies)

    @staticmethod
    def create_template(
        payload: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_attachment(
            {"type": "template", "payload": dict(payload)}, quick_replies=quick_replies
        )

    @staticmethod
    def create_button_template(
        text: str, buttons: List[Dict[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "button", "text": text, "buttons": buttons},
            quick_replies=quick_replies,
        )

    @staticmethod
    def create_generic_template(
        elements: List[Dict[str, Any]],
        *,
        image_aspect_ratio: str = "horizontal",
        quick_replies: QuickReplies = None,
    ) -> Message:
        return Messenger.create_template(
            {
                "template_type": "generic",
                "elements": elements,
                "image_aspect_ratio": GenericImageAspectRatio(image_aspect_ratio).value,
            },
            quick_replies=quick_replies,
        )

    @staticmethod
    def create_list_template(
        elements: List[Dict[str, Any]],
        buttons: List[Dict[str, Any]],
        *,
        top_element_style: str = "large",
        quick_replies: QuickReplies = None,
    ) -> Message:
        """Deprecated: the list template was removed from the Messenger Platform."""
        _deprecated("create_list_template", "create_generic_template")
        return Messenger.create_template(
            {
                "template_type": "list",
                "elements": elements,
                "buttons": buttons,
                "top_element_style": TopElementStyle(top_element_style).value,
            },
            quick_replies=quick_replies,
        )

    @staticmethod
    def create_open_graph_template(
        elements: List[Dict[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        """Deprecated: the open graph template was removed from the Messenger Platform."""
        _deprecated("create_open_graph_template", "create_generic_template")
        return Messenger.create_template(
            {"template_type": "open_graph", "elements": elements}, quick_replies=quick_replies
        )

    @staticmethod
    def create_media_template(
        elements: List[Dict[str, Any]], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "media", "elements": elements}, quick_replies=quick_replies
        )

    @staticmethod
    def create_receipt_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "receipt", **attrs}, quick_replies=quick_replies
        )

    @staticmethod
    def create_airline_boarding_pass_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "airline_boardingpass", **attrs}, quick_replies=quick_replies
        )

    @staticmethod
    def create_airline_checkin_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "airline_checkin", **attrs}, quick_replies=quick_replies
        )

    @staticmethod
    def create_airline_itinerary_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "airline_itinerary", **attrs}, quick_replies=quick_replies
        )

    @staticmethod
    def create_airline_update_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        return Messenger.create_template(
            {"template_type": "airline_update", **attrs}, quick_replies=quick_replies
        )

    @staticmethod
    def create_one_time_notif_req_template(
        attrs: Mapping[str, Any], *, quick_replies: QuickReplies = None
    ) -> Message:
        """One-time notification request; ``attrs`` carries ``title`` and ``payload``."""
        return Messenger.create_template(
            {"template_type": "one_time_notif_req", **attrs}, quick_replies=quick_replies
        )
