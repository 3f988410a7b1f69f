"""LINE message object builders.

Builders return plain dicts in LINE's camelCase wire format, ready to be
passed to ``LineClient.reply`` / ``push`` / ``multicast`` / ``broadcast``.
Attribute mappings (image, video, template bodies...) may use either LINE's
camelCase keys or snake_case keys. Fields left as ``None`` are omitted.

Every builder accepts ``quick_reply`` plus arbitrary keyword options (for
example ``sender={"name": "Cony"}``) which are camelCased and merged into the
message.

Example:
    >>> from messaging_api import Line
    >>> Line.create_text("Hello!")
    {'type': 'text', 'text': 'Hello!'}
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from messaging_api.types import ImageAspectRatio, ImageSize
from messaging_api.utils.case import camelcase_keys

Message = Dict[str, Any]

_BUTTONS_FIELDS = (
    "thumbnailImageUrl",
    "imageAspectRatio",
    "imageSize",
    "imageBackgroundColor",
    "title",
    "text",
    "defaultAction",
    "actions",
)


def _compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _attrs(attrs: Mapping[str, Any]) -> Dict[str, Any]:
    return camelcase_keys(dict(attrs))


def _enum_value(enum_cls: Any, value: Optional[str]) -> Optional[str]:
    return enum_cls(value).value if value is not None else None


def _with_options(
    message: Dict[str, Any], quick_reply: Optional[Dict[str, Any]], options: Dict[str, Any]
) -> Message:
    result = _compact(message)
    if quick_reply is not None:
        result["quickReply"] = quick_reply
    result.update(camelcase_keys(_compact(options)))
    return result


class Line:
    """Namespace of LINE message builders."""

    @staticmethod
    def create_text(
        text: str,
        *,
        emojis: Optional[List[Dict[str, Any]]] = None,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        return _with_options({"type": "text", "text": text, "emojis": emojis}, quick_reply, options)

    @staticmethod
    def create_image(
        image: Union[str, Mapping[str, Any]],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        """Image message; ``previewImageUrl`` falls back to the original content URL."""
        attrs = {"originalContentUrl": image} if isinstance(image, str) else _attrs(image)
        original = attrs.get("originalContentUrl")
        return _with_options(
            {
                "type": "image",
                "originalContentUrl": original,
                "previewImageUrl": attrs.get("previewImageUrl") or original,
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_video(
        video: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        attrs = _attrs(video)
        return _with_options(
            {
                "type": "video",
                "originalContentUrl": attrs.get("originalContentUrl"),
                "previewImageUrl": attrs.get("previewImageUrl"),
                "trackingId": attrs.get("trackingId"),
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_audio(
        audio: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        attrs = _attrs(audio)
        return _with_options(
            {
                "type": "audio",
                "originalContentUrl": attrs.get("originalContentUrl"),
                "duration": attrs.get("duration"),
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_location(
        location: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        return _with_options(
            {
                "type": "location",
                "title": location.get("title"),
                "address": location.get("address"),
                "latitude": location.get("latitude"),
                "longitude": location.get("longitude"),
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_sticker(
        sticker: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        attrs = _attrs(sticker)
        return _with_options(
            {
                "type": "sticker",
                "packageId": attrs.get("packageId"),
                "stickerId": attrs.get("stickerId"),
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_imagemap(
        alt_text: str,
        imagemap: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        attrs = _attrs(imagemap)
        return _with_options(
            {
                "type": "imagemap",
                "baseUrl": attrs.get("baseUrl"),
                "altText": alt_text,
                "baseSize": attrs.get("baseSize"),
                "video": attrs.get("video"),
                "actions": attrs.get("actions"),
            },
            quick_reply,
            options,
        )

    @staticmethod
    def create_template(
        alt_text: str,
        template: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        return _with_options(
            {"type": "template", "altText": alt_text, "template": dict(template)},
            quick_reply,
            options,
        )

    @staticmethod
    def create_buttons_template(
        alt_text: str,
        buttons: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        """Buttons template; ``buttons`` carries ``text``, ``actions`` and optional image fields."""
        attrs = _attrs(buttons)
        template: Dict[str, Any] = {"type": "buttons"}
        for field in _BUTTONS_FIELDS:
            template[field] = attrs.get(field)
        template["imageAspectRatio"] = _enum_value(ImageAspectRatio, template["imageAspectRatio"])
        template["imageSize"] = _enum_value(ImageSize, template["imageSize"])
        return Line.create_template(
            alt_text, _compact(template), quick_reply=quick_reply, **options
        )

    create_button_template = create_buttons_template

    @staticmethod
    def create_confirm_template(
        alt_text: str,
        confirm: Mapping[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        template = {
            "type": "confirm",
            "text": confirm.get("text"),
            "actions": confirm.get("actions"),
        }
        return Line.create_template(
            alt_text, _compact(template), quick_reply=quick_reply, **options
        )

    @staticmethod
    def create_carousel_template(
        alt_text: str,
        columns: List[Dict[str, Any]],
        *,
        image_aspect_ratio: Optional[str] = None,
        image_size: Optional[str] = None,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        template = {
            "type": "carousel",
            "columns": columns,
            "imageAspectRatio": _enum_value(ImageAspectRatio, image_aspect_ratio),
            "imageSize": _enum_value(ImageSize, image_size),
        }
        return Line.create_template(
            alt_text, _compact(template), quick_reply=quick_reply, **options
        )

    @staticmethod
    def create_image_carousel_template(
        alt_text: str,
        columns: List[Dict[str, Any]],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        template = {"type": "image_carousel", "columns": columns}
        return Line.create_template(alt_text, template, quick_reply=quick_reply, **options)

    @staticmethod
    def create_flex(
        alt_text: str,
        contents: Dict[str, Any],
        *,
        quick_reply: Optional[Dict[str, Any]] = None,
        **options: Any,
    ) -> Message:
        return _with_options(
            {"type": "flex", "altText": alt_text, "contents": contents}, quick_reply, options
        )


# Legacy upper-case name kept for existing callers
LINE = Line
