import pytest

from messaging_api import LINE, Line

QUICK_REPLY = {
    "items": [
        {
            "type": "action",
            "action": {"type": "message", "label": "Sushi", "text": "Sushi"},
        }
    ]
}


def test_line_alias() -> None:
    assert LINE is Line


def test_create_text() -> None:
    assert Line.create_text("Hello") == {"type": "text", "text": "Hello"}


def test_create_text_with_quick_reply_and_options() -> None:
    message = Line.create_text(
        "Hello",
        quick_reply=QUICK_REPLY,
        sender={"name": "Cony", "icon_url": "https://example.com/cony.png"},
    )
    assert message == {
        "type": "text",
        "text": "Hello",
        "quickReply": QUICK_REPLY,
        # option values are passed through untouched
        "sender": {"name": "Cony", "icon_url": "https://example.com/cony.png"},
    }


def test_create_image_from_url_uses_it_as_preview() -> None:
    assert Line.create_image("https://example.com/original.jpg") == {
        "type": "image",
        "originalContentUrl": "https://example.com/original.jpg",
        "previewImageUrl": "https://example.com/original.jpg",
    }


def test_create_image_accepts_snake_case_attributes() -> None:
    message = Line.create_image(
        {
            "original_content_url": "https://example.com/original.jpg",
            "preview_image_url": "https://example.com/preview.jpg",
        }
    )
    assert message["previewImageUrl"] == "https://example.com/preview.jpg"


def test_create_video_omits_missing_fields() -> None:
    message = Line.create_video(
        {
            "originalContentUrl": "https://example.com/original.mp4",
            "previewImageUrl": "https://example.com/preview.jpg",
        }
    )
    assert message == {
        "type": "video",
        "originalContentUrl": "https://example.com/original.mp4",
        "previewImageUrl": "https://example.com/preview.jpg",
    }


def test_create_audio_location_sticker() -> None:
    assert Line.create_audio({"originalContentUrl": "https://example.com/a.m4a", "duration": 240000}) == {
        "type": "audio",
        "originalContentUrl": "https://example.com/a.m4a",
        "duration": 240000,
    }
    assert Line.create_location(
        {"title": "my location", "address": "Tokyo", "latitude": 35.65910807942215, "longitude": 139.70372892916203}
    )["type"] == "location"
    assert Line.create_sticker({"package_id": "1", "sticker_id": "1"}) == {
        "type": "sticker",
        "packageId": "1",
        "stickerId": "1",
    }


def test_create_imagemap() -> None:
    message = Line.create_imagemap(
        "this is an imagemap",
        {
            "base_url": "https://example.com/bot/images/rm001",
            "base_size": {"height": 1040, "width": 1040},
            "actions": [{"type": "uri", "linkUri": "https://example.com/", "area": {"x": 0, "y": 0, "width": 520, "height": 1040}}],
        },
    )
    assert message["type"] == "imagemap"
    assert message["altText"] == "this is an imagemap"
    assert message["baseUrl"] == "https://example.com/bot/images/rm001"
    assert message["baseSize"] == {"height": 1040, "width": 1040}
    assert "video" not in message


def test_create_buttons_template() -> None:
    actions = [{"type": "postback", "label": "Buy", "data": "action=buy&itemid=123"}]
    message = Line.create_buttons_template(
        "this is a buttons template",
        {
            "thumbnail_image_url": "https://example.com/bot/images/image.jpg",
            "image_aspect_ratio": "rectangle",
            "title": "Menu",
            "text": "Please select",
            "actions": actions,
        },
    )
    assert message == {
        "type": "template",
        "altText": "this is a buttons template",
        "template": {
            "type": "buttons",
            "thumbnailImageUrl": "https://example.com/bot/images/image.jpg",
            "imageAspectRatio": "rectangle",
            "title": "Menu",
            "text": "Please select",
            "actions": actions,
        },
    }
    assert Line.create_button_template is Line.create_buttons_template


def test_create_buttons_template_rejects_unknown_aspect_ratio() -> None:
    with pytest.raises(ValueError):
        Line.create_buttons_template(
            "alt", {"text": "x", "actions": [], "image_aspect_ratio": "wide"}
        )


def test_create_confirm_and_carousel_templates() -> None:
    actions = [{"type": "message", "label": "Yes", "text": "yes"}]
    confirm = Line.create_confirm_template("confirm", {"text": "Are you sure?", "actions": actions})
    assert confirm["template"] == {"type": "confirm", "text": "Are you sure?", "actions": actions}

    columns = [{"text": "description", "actions": actions}]
    carousel = Line.create_carousel_template("carousel", columns, image_size="contain")
    assert carousel["template"] == {"type": "carousel", "columns": columns, "imageSize": "contain"}

    image_carousel = Line.create_image_carousel_template("images", columns)
    assert image_carousel["template"] == {"type": "image_carousel", "columns": columns}


def test_create_flex() -> None:
    contents = {"type": "bubble", "body": {"type": "box", "layout": "horizontal", "contents": []}}
    assert Line.create_flex("this is a flex", contents) == {
        "type": "flex",
        "altText": "this is a flex",
        "contents": contents,
    }
