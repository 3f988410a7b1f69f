import pytest

from messaging_api import Messenger

QUICK_REPLIES = [{"content_type": "text", "title": "Red", "payload": "PICK_RED"}]


def test_create_text_with_quick_replies() -> None:
    assert Messenger.create_text("Hello", quick_replies=QUICK_REPLIES) == {
        "text": "Hello",
        "quick_replies": QUICK_REPLIES,
    }


def test_quick_replies_limits() -> None:
    with pytest.raises(ValueError):
        Messenger.create_text("x", quick_replies=QUICK_REPLIES * 12)
    with pytest.raises(ValueError):
        Messenger.create_text(
            "x", quick_replies=[{"content_type": "text", "title": "a" * 21, "payload": "P"}]
        )
    with pytest.raises(ValueError):
        Messenger.create_text(
            "x", quick_replies=[{"content_type": "text", "title": "   ", "payload": "P"}]
        )
    with pytest.raises(ValueError):
        Messenger.create_text(
            "x", quick_replies=[{"content_type": "text", "title": "ok", "payload": "p" * 1001}]
        )
    # non-text quick replies carry no title
    email = Messenger.create_text("x", quick_replies=[{"content_type": "user_email"}])
    assert email["quick_replies"] == [{"content_type": "user_email"}]


def test_create_media_from_url_and_payload() -> None:
    assert Messenger.create_image("https://example.com/pic.png") == {
        "attachment": {"type": "image", "payload": {"url": "https://example.com/pic.png"}}
    }
    assert Messenger.create_file({"attachment_id": "5566"}) == {
        "attachment": {"type": "file", "payload": {"attachment_id": "5566"}}
    }
    with pytest.raises(ValueError):
        Messenger.create_media("sticker", "https://example.com/s.png")


def test_create_generic_template_defaults_to_horizontal() -> None:
    elements = [{"title": "Welcome", "subtitle": "We have the right hat"}]
    assert Messenger.create_generic_template(elements) == {
        "attachment": {
            "type": "template",
            "payload": {
                "template_type": "generic",
                "elements": elements,
                "image_aspect_ratio": "horizontal",
            },
        }
    }


def test_create_button_and_receipt_templates() -> None:
    buttons = [{"type": "postback", "title": "Start Chatting", "payload": "USER_DEFINED_PAYLOAD"}]
    assert Messenger.create_button_template("What?", buttons)["attachment"]["payload"] == {
        "template_type": "button",
        "text": "What?",
        "buttons": buttons,
    }
    receipt = Messenger.create_receipt_template(
        {"recipient_name": "Stephane Crozatier", "order_number": "12345678902"}
    )
    assert receipt["attachment"]["payload"]["template_type"] == "receipt"
    assert receipt["attachment"]["payload"]["order_number"] == "12345678902"


def test_airline_and_one_time_notif_templates() -> None:
    boarding = Messenger.create_airline_boarding_pass_template(
        {"intro_message": "You are checked in."}
    )
    assert boarding["attachment"]["payload"]["template_type"] == "airline_boardingpass"
    update = Messenger.create_airline_update_template({"update_type": "delay"})
    assert update["attachment"]["payload"]["template_type"] == "airline_update"
    notif = Messenger.create_one_time_notif_req_template(
        {"title": "Back in stock", "payload": "NOTIFY"}
    )
    assert notif["attachment"]["payload"] == {
        "template_type": "one_time_notif_req",
        "title": "Back in stock",
        "payload": "NOTIFY",
    }


def test_deprecated_templates_warn() -> None:
    with pytest.warns(DeprecationWarning):
        message = Messenger.create_list_template([{"title": "a"}], [])
    assert message["attachment"]["payload"]["top_element_style"] == "large"
    with pytest.warns(DeprecationWarning):
        Messenger.create_open_graph_template([{"url": "https://open.spotify.com/track/1"}])
