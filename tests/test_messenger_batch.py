import pytest

from messaging_api import MessengerBatch

RECIPIENT_ID = "1QAZ2WSX"
LABEL_ID = 123456


def test_send_request() -> None:
    body = {"messaging_type": "UPDATE", "message": {"text": "Hello"}, "recipient": {"id": RECIPIENT_ID}}
    assert MessengerBatch.send_request(body) == {
        "method": "POST",
        "relative_url": "me/messages",
        "body": body,
    }


def test_execution_options_are_merged_at_top_level() -> None:
    item = MessengerBatch.send_text(
        RECIPIENT_ID, "Hello", name="second", depends_on="first", omit_response_on_success=False
    )
    assert item == {
        "method": "POST",
        "relative_url": "me/messages",
        "body": {
            "messaging_type": "UPDATE",
            "recipient": {"id": RECIPIENT_ID},
            "message": {"text": "Hello"},
        },
        "name": "second",
        "depends_on": "first",
        "omit_response_on_success": False,
    }


def test_send_message_messaging_type() -> None:
    tagged = MessengerBatch.send_text(RECIPIENT_ID, "Hi", tag="CONFIRMED_EVENT_UPDATE")
    assert tagged["body"]["messaging_type"] == "MESSAGE_TAG"
    assert tagged["body"]["tag"] == "CONFIRMED_EVENT_UPDATE"

    response = MessengerBatch.send_text(
        RECIPIENT_ID, "Hi", messaging_type="RESPONSE", persona_id="42"
    )
    assert response["body"]["messaging_type"] == "RESPONSE"
    assert response["body"]["persona_id"] == "42"


def test_send_message_to_recipient_object() -> None:
    item = MessengerBatch.send_image({"user_ref": "ref"}, "https://example.com/pic.png")
    assert item["body"]["recipient"] == {"user_ref": "ref"}
    assert item["body"]["message"] == {
        "attachment": {"type": "image", "payload": {"url": "https://example.com/pic.png"}}
    }


def test_quick_replies_go_into_the_message() -> None:
    quick_replies = [{"content_type": "text", "title": "Red", "payload": "RED"}]
    item = MessengerBatch.send_text(RECIPIENT_ID, "Pick", quick_replies=quick_replies)
    assert item["body"]["message"]["quick_replies"] == quick_replies
    assert "quick_replies" not in item["body"]


def test_custom_access_token_placement() -> None:
    post_item = MessengerBatch.send_text(RECIPIENT_ID, "Hi", access_token="other")
    assert post_item["body"]["access_token"] == "other"
    assert post_item["relative_url"] == "me/messages"

    get_item = MessengerBatch.get_user_profile(RECIPIENT_ID, access_token="other")
    assert get_item == {"method": "GET", "relative_url": f"{RECIPIENT_ID}?access_token=other"}


def test_get_user_profile_fields() -> None:
    assert MessengerBatch.get_user_profile(RECIPIENT_ID) == {"method": "GET", "relative_url": RECIPIENT_ID}
    item = MessengerBatch.get_user_profile(RECIPIENT_ID, fields=["id", "name"])
    assert item["relative_url"] == f"{RECIPIENT_ID}?fields=id,name"


def test_sender_actions() -> None:
    assert MessengerBatch.typing_on(RECIPIENT_ID) == {
        "method": "POST",
        "relative_url": "me/messages",
        "body": {"recipient": {"id": RECIPIENT_ID}, "sender_action": "typing_on"},
    }
    assert MessengerBatch.mark_seen(RECIPIENT_ID)["body"]["sender_action"] == "mark_seen"


def test_handover_protocol() -> None:
    assert MessengerBatch.pass_thread_control_to_page_inbox(RECIPIENT_ID, "free formed text") == {
        "method": "POST",
        "relative_url": "me/pass_thread_control",
        "body": {
            "recipient": {"id": RECIPIENT_ID},
            "target_app_id": 263902037430900,
            "metadata": "free formed text",
        },
    }
    take = MessengerBatch.take_thread_control(RECIPIENT_ID)
    assert take["body"] == {"recipient": {"id": RECIPIENT_ID}}


def test_get_thread_owner() -> None:
    assert MessengerBatch.get_thread_owner(RECIPIENT_ID, name="second", depends_on="first") == {
        "method": "GET",
        "relative_url": f"me/thread_owner?recipient={RECIPIENT_ID}",
        "response_access_path": "data[0].thread_owner",
        "name": "second",
        "depends_on": "first",
    }


def test_labels() -> None:
    assert MessengerBatch.associate_label(RECIPIENT_ID, LABEL_ID) == {
        "method": "POST",
        "relative_url": f"{LABEL_ID}/label",
        "body": {"user": RECIPIENT_ID},
    }
    assert MessengerBatch.dissociate_label(RECIPIENT_ID, LABEL_ID, access_token="t")["body"] == {
        "user": RECIPIENT_ID,
        "access_token": "t",
    }
    assert MessengerBatch.get_associated_labels(RECIPIENT_ID) == {
        "method": "GET",
        "relative_url": f"{RECIPIENT_ID}/custom_labels",
    }


def test_deprecated_list_template_warns() -> None:
    with pytest.warns(DeprecationWarning):
        MessengerBatch.send_list_template(RECIPIENT_ID, [{"title": "a"}], [])
