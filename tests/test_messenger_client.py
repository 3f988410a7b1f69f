from __future__ import annotations

import hashlib
import hmac
import json
from urllib.parse import parse_qs

import httpx
import pytest
import respx

from messaging_api import MessengerAPIError, MessengerBatch, MessengerClient
from messaging_api.config import get_settings
from messaging_api.types import BatchResult

GRAPH = "https://graph.facebook.com/v6.0"
PSID = "1QAZ2WSX"


def proof(secret: str, token: str) -> str:
    return hmac.new(secret.encode(), token.encode(), hashlib.sha256).hexdigest()


def sent_json(route: respx.Route) -> dict:
    return json.loads(route.calls.last.request.content.decode())


def test_constructor_defaults() -> None:
    client = MessengerClient()
    assert client.access_token == "page-token"
    assert client.app_id == "app-id"
    assert client.version == "6.0"
    assert client.skip_app_secret_proof is True
    assert str(client.http.base_url) == f"{GRAPH}/"


def test_constructor_strips_version_prefix() -> None:
    assert MessengerClient(version="v12.0").version == "12.0"


def test_constructor_requires_secret_for_proof() -> None:
    with pytest.raises(ValueError):
        MessengerClient(skip_app_secret_proof=False)


@respx.mock
def test_send_text() -> None:
    route = respx.post(f"{GRAPH}/me/messages").mock(
        return_value=httpx.Response(200, json={"recipient_id": PSID, "message_id": "mid.1"})
    )

    resp = MessengerClient().send_text(PSID, "Hello!")

    request = route.calls.last.request
    assert request.url.params["access_token"] == "page-token"
    assert "appsecret_proof" not in request.url.params
    assert sent_json(route) == {
        "messaging_type": "UPDATE",
        "recipient": {"id": PSID},
        "message": {"text": "Hello!"},
    }
    assert resp == {"recipient_id": PSID, "message_id": "mid.1"}


@respx.mock
def test_send_message_with_tag_and_persona() -> None:
    route = respx.post(f"{GRAPH}/me/messages").mock(return_value=httpx.Response(200, json={}))

    MessengerClient().send_text(PSID, "Update", tag="ACCOUNT_UPDATE", persona_id="p1")

    body = sent_json(route)
    assert body["messaging_type"] == "MESSAGE_TAG"
    assert body["tag"] == "ACCOUNT_UPDATE"
    assert body["persona_id"] == "p1"


@respx.mock
def test_appsecret_proof_is_added() -> None:
    route = respx.get(f"{GRAPH}/me").mock(
        return_value=httpx.Response(200, json={"id": "1", "name": "Page"})
    )

    MessengerClient(app_secret="app-secret").get_page_info(fields=["id", "name"])

    params = route.calls.last.request.url.params
    assert params["appsecret_proof"] == proof("app-secret", "page-token")
    assert params["fields"] == "id,name"


@respx.mock
def test_debug_token_uses_app_token() -> None:
    route = respx.get(f"{GRAPH}/debug_token").mock(
        return_value=httpx.Response(200, json={"data": {"is_valid": True}})
    )

    result = MessengerClient(app_secret="app-secret").debug_token()

    params = route.calls.last.request.url.params
    assert result == {"is_valid": True}
    assert params["input_token"] == "page-token"
    assert params["access_token"] == "app-id|app-secret"
    assert params["appsecret_proof"] == proof("app-secret", "app-id|app-secret")


@respx.mock
def test_send_image_bytes_is_multipart() -> None:
    route = respx.post(f"{GRAPH}/me/messages").mock(return_value=httpx.Response(200, json={}))

    MessengerClient().send_image(PSID, b"\xff\xd8\xff\xe0jpegdata")

    request = route.calls.last.request
    content = request.read()
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="filedata"' in content
    assert b"image/jpeg" in content
    assert b'{"attachment": {"type": "image", "payload": {}}}' in content


@respx.mock
def test_persistent_menu_is_wrapped_in_default_locale() -> None:
    route = respx.post(f"{GRAPH}/me/messenger_profile").mock(
        return_value=httpx.Response(200, json={"result": "success"})
    )
    items = [{"type": "postback", "title": "Restart", "payload": "RESTART"}]

    MessengerClient().set_persistent_menu(items)

    assert sent_json(route) == {
        "persistent_menu": [
            {"locale": "default", "composer_input_disabled": False, "call_to_actions": items}
        ]
    }


@respx.mock
def test_get_account_linking_url() -> None:
    respx.get(f"{GRAPH}/me/messenger_profile").mock(
        return_value=httpx.Response(
            200, json={"data": [{"account_linking_url": "https://www.example.com/oauth"}]}
        )
    )
    assert MessengerClient().get_account_linking_url() == "https://www.example.com/oauth"


@respx.mock
def test_get_thread_owner() -> None:
    respx.get(f"{GRAPH}/me/thread_owner").mock(
        return_value=httpx.Response(200, json={"data": [{"thread_owner": {"app_id": "12345"}}]})
    )
    assert MessengerClient().get_thread_owner(PSID) == {"app_id": "12345"}


@respx.mock
def test_get_all_personas_follows_cursor() -> None:
    route = respx.get(f"{GRAPH}/me/personas").mock(
        side_effect=[
            httpx.Response(
                200,
                json={
                    "data": [{"id": "1", "name": "a"}],
                    "paging": {"cursors": {"after": "c1"}, "next": f"{GRAPH}/me/personas?after=c1"},
                },
            ),
            httpx.Response(
                200,
                json={"data": [{"id": "2", "name": "b"}], "paging": {"cursors": {"after": "c2"}}},
            ),
        ]
    )

    personas = MessengerClient().get_all_personas()

    assert [p["id"] for p in personas] == ["1", "2"]
    assert route.calls[1].request.url.params["after"] == "c1"


@respx.mock
def test_send_batch() -> None:
    route = respx.post(f"{GRAPH}/").mock(
        return_value=httpx.Response(
            200,
            json=[
                {
                    "code": 200,
                    "headers": [{"name": "Content-Type", "value": "text/javascript; charset=UTF-8"}],
                    "body": json.dumps({"recipient_id": PSID, "message_id": "mid.1"}),
                },
                {"code": 200, "body": json.dumps({"data": [{"thread_owner": {"app_id": "12345"}}]})},
            ],
        )
    )

    results = MessengerClient().send_batch(
        [MessengerBatch.send_text(PSID, "Hi", name="first"), MessengerBatch.get_thread_owner(PSID)]
    )

    sent = sent_json(route)
    assert sent["access_token"] == "page-token"
    assert sent["include_headers"] is True
    first, second = sent["batch"]
    assert first["name"] == "first"
    form = parse_qs(first["body"])
    assert form["messaging_type"] == ["UPDATE"]
    assert json.loads(form["recipient"][0]) == {"id": PSID}
    assert json.loads(form["message"][0]) == {"text": "Hi"}
    assert "response_access_path" not in second

    assert results[0] == BatchResult(
        code=200,
        headers=[{"name": "Content-Type", "value": "text/javascript; charset=UTF-8"}],
        body={"recipient_id": PSID, "message_id": "mid.1"},
    )
    assert results[1].body == {"app_id": "12345"}


@respx.mock
def test_send_batch_signs_items_with_their_own_token() -> None:
    route = respx.post(f"{GRAPH}/").mock(
        return_value=httpx.Response(
            200, json=[{"code": 200, "body": "{}"}, {"code": 200, "body": "{}"}]
        )
    )

    MessengerClient(app_secret="app-secret").send_batch(
        [
            MessengerBatch.send_text(PSID, "Hi", access_token="other-token"),
            MessengerBatch.get_user_profile(PSID, access_token="third-token"),
        ]
    )

    first, second = sent_json(route)["batch"]
    assert first["relative_url"] == f"me/messages?appsecret_proof={proof('app-secret', 'other-token')}"
    assert parse_qs(first["body"])["access_token"] == ["other-token"]
    assert second["relative_url"] == (
        f"{PSID}?access_token=third-token&appsecret_proof={proof('app-secret', 'third-token')}"
    )
    assert route.calls.last.request.url.params["appsecret_proof"] == proof(
        "app-secret", "page-token"
    )


def test_send_batch_limit() -> None:
    with pytest.raises(ValueError):
        MessengerClient().send_batch([MessengerBatch.typing_on(PSID)] * 51)


@respx.mock
def test_error_message_from_graph_error() -> None:
    respx.post(f"{GRAPH}/me/messages").mock(
        return_value=httpx.Response(
            400,
            json={
                "error": {
                    "message": "Invalid OAuth access token.",
                    "type": "OAuthException",
                    "code": 190,
                    "error_subcode": 1234567,
                    "fbtrace_id": "BLBz/WZt8dN",
                }
            },
        )
    )

    with pytest.raises(MessengerAPIError) as excinfo:
        MessengerClient().send_text(PSID, "Hello")

    error = excinfo.value
    assert str(error) == "Messenger API - 190 OAuthException Invalid OAuth access token."
    assert error.code == 190
    assert error.error_subcode == 1234567
    assert error.fbtrace_id == "BLBz/WZt8dN"
    # the page token must not leak into the report
    assert "page-token" not in error.describe()


@respx.mock
def test_non_json_error_keeps_tokens_out_of_message() -> None:
    respx.post(f"{GRAPH}/me/messages").mock(return_value=httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(MessengerAPIError) as excinfo:
        MessengerClient(app_secret="app-secret").send_text(PSID, "Hello")

    error = excinfo.value
    assert str(error).startswith(f"HTTPStatusError: 502 Bad Gateway for url '{GRAPH}/me/messages")
    assert error.status == 502
    assert error.code is None
    assert "page-token" not in error.describe()
    assert proof("app-secret", "page-token") not in error.describe()


@respx.mock
def test_transport_error_keeps_tokens_out_of_message() -> None:
    respx.get(f"{GRAPH}/me").mock(side_effect=httpx.ConnectTimeout)

    with pytest.raises(MessengerAPIError) as excinfo:
        MessengerClient(app_secret="app-secret").get_page_info()

    error = excinfo.value
    assert str(error).startswith("ConnectTimeout")
    assert error.request is not None
    assert error.response is None
    assert "page-token" not in error.describe()


def test_empty_app_secret_skips_proof(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MESSENGER_APP_SECRET", "")
    get_settings.cache_clear()

    client = MessengerClient()

    assert client.skip_app_secret_proof is True
