from __future__ import annotations

import hashlib
import hmac
import json
import re
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import parse_qs, urlencode, urlsplit

import httpx

from messaging_api.adapters.http import build_client, json_or_none, send
from messaging_api.config import get_settings
from messaging_api.errors import MessengerAPIError
from messaging_api.messages.messenger import Messenger, validate_quick_replies
from messaging_api.messages.messenger_batch import PAGE_INBOX_APP_ID
from messaging_api.types import (
    AttachmentType,
    BatchResult,
    MessagingType,
    RequestHook,
    SenderAction,
)
from messaging_api.utils.image import detect_image_mime

Recipient = Union[str, Mapping[str, Any]]
Media = Union[str, bytes, Mapping[str, Any]]

MAX_BATCH_SIZE = 50

DEFAULT_USER_PROFILE_FIELDS = ("id", "name", "first_name", "last_name", "profile_pic")
DEFAULT_SUBSCRIPTION_FIELDS = (
    "messages",
    "messaging_postbacks",
    "messaging_optins",
    "messaging_referrals",
    "messaging_handovers",
    "messaging_policy_enforcement",
)

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


def _compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _recipient(psid_or_recipient: Recipient) -> Dict[str, Any]:
    if isinstance(psid_or_recipient, str):
        return {"id": psid_or_recipient}
    return dict(psid_or_recipient)


def _extract_version(version: str) -> str:
    return version[1:] if version.startswith("v") else version


def app_secret_proof(app_secret: str, access_token: str) -> str:
    """HMAC-SHA256 of the access token keyed by the app secret, hex encoded."""
    return hmac.new(app_secret.encode(), access_token.encode(), hashlib.sha256).hexdigest()


def access_path(data: Any, path: str) -> Any:
    """Follow a ``data[0].thread_owner`` style path; ``None`` when any step is missing."""
    for key, index in _PATH_TOKEN.findall(path):
        try:
            data = data[int(index)] if index else data[key]
        except (KeyError, IndexError, TypeError):
            return None
    return data


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_batch_body(body: Mapping[str, Any]) -> str:
    """URL-encode a batch item body; nested objects are sent as JSON strings."""
    return urlencode({key: _form_value(value) for key, value in body.items() if value is not None})


class MessengerClient:
    """Client for the Messenger Platform on the Facebook Graph API.

    Requests go to ``https://graph.facebook.com/v{version}/`` with the page
    access token in the ``access_token`` query parameter. When an app secret
    is configured every request also carries ``appsecret_proof`` unless
    ``skip_app_secret_proof`` is set.

    Example:
        >>> from messaging_api import MessengerClient
        >>> client = MessengerClient("PAGE_TOKEN", app_secret="APP_SECRET")
        >>> client.send_text(psid, "Hello!")
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        *,
        app_id: Optional[str] = None,
        app_secret: Optional[str] = None,
        version: Optional[str] = None,
        origin: Optional[str] = None,
        skip_app_secret_proof: Optional[bool] = None,
        on_request: Optional[RequestHook] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.access_token = access_token or settings.messenger_access_token
        if not self.access_token:
            raise RuntimeError(
                "Missing Messenger access token: pass access_token or set MESSENGER_ACCESS_TOKEN"
            )
        self.app_id = app_id or settings.messenger_app_id
        self.app_secret = app_secret or settings.messenger_app_secret
        self.version = _extract_version(version or settings.messenger_graph_version)
        self.origin = (origin or settings.messenger_origin).rstrip("/")

        if skip_app_secret_proof is None:
            skip_app_secret_proof = settings.messenger_skip_app_secret_proof
        if skip_app_secret_proof is None:
            skip_app_secret_proof = not self.app_secret
        if not skip_app_secret_proof and not self.app_secret:
            raise ValueError("Must provide app_secret when skip_app_secret_proof is false")
        self.skip_app_secret_proof = skip_app_secret_proof

        self._http = build_client(
            f"{self.origin}/v{self.version}/", timeout=timeout, on_request=on_request
        )

    @property
    def http(self) -> httpx.Client:
        return self._http

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "MessengerClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- Plumbing ---
    def _proof_for(self, access_token: str) -> Optional[str]:
        if self.skip_app_secret_proof:
            return None
        return app_secret_proof(self.app_secret, access_token)

    def _call(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        access_token: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        query = _compact(params or {})
        query["access_token"] = access_token or self.access_token
        if "appsecret_proof" not in query:
            proof = self._proof_for(query["access_token"])
            if proof:
                query["appsecret_proof"] = proof
        response = send(
            self._http, method, path, error_cls=MessengerAPIError, params=query, **kwargs
        )
        return json_or_none(response)

    def _app_access_token(self, app_access_token: Optional[str], action: str) -> str:
        if not self.app_id:
            raise ValueError(f"App ID is required to {action}")
        if app_access_token:
            return app_access_token
        if not self.app_secret:
            raise ValueError(f"App Secret or App Token is required to {action}")
        return f"{self.app_id}|{self.app_secret}"

    # --- Page and app ---
    def get_page_info(self, *, fields: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._call("GET", "/me", params={"fields": ",".join(fields) if fields else None})

    def debug_token(self) -> Dict[str, Any]:
        """Inspect the page access token with the app token."""
        if not self.app_id:
            raise ValueError("App ID is required to debug token")
        if not self.app_secret:
            raise ValueError("App Secret is required to debug token")
        data = self._call(
            "GET",
            "/debug_token",
            params={"input_token": self.access_token},
            access_token=f"{self.app_id}|{self.app_secret}",
        )
        return data["data"]

    def create_subscription(
        self,
        callback_url: str,
        verify_token: str,
        *,
        object: str = "page",
        fields: Optional[List[str]] = None,
        include_values: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Subscribe the app to webhook ``fields`` of ``object``.

        ``access_token`` is an app access token; ``{app_id}|{app_secret}`` is
        used when omitted.
        """
        token = self._app_access_token(access_token, "create subscription")
        body = _compact(
            {
                "object": object,
                "callback_url": callback_url,
                "fields": ",".join(fields or DEFAULT_SUBSCRIPTION_FIELDS),
                "include_values": include_values,
                "verify_token": verify_token,
            }
        )
        return self._call("POST", f"/{self.app_id}/subscriptions", json=body, access_token=token)

    def get_subscriptions(self, *, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        token = self._app_access_token(access_token, "get subscriptions")
        return self._call("GET", f"/{self.app_id}/subscriptions", access_token=token)["data"]

    def get_page_subscription(
        self, *, access_token: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        for subscription in self.get_subscriptions(access_token=access_token):
            if subscription.get("object") == "page":
                return subscription
        return None

    def get_messaging_feature_review(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/me/messaging_feature_review")["data"]

    def get_user_profile(
        self, user_id: str, *, fields: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        return self._call(
            "GET", f"/{user_id}", params={"fields": ",".join(fields or DEFAULT_USER_PROFILE_FIELDS)}
        )

    # --- Messenger profile ---
    def get_messenger_profile(self, fields: List[str]) -> List[Dict[str, Any]]:
        data = self._call("GET", "/me/messenger_profile", params={"fields": ",".join(fields)})
        return data["data"]

    def set_messenger_profile(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", "/me/messenger_profile", json=profile)

    def delete_messenger_profile(self, fields: List[str]) -> Dict[str, Any]:
        return self._call("DELETE", "/me/messenger_profile", json={"fields": fields})

    def _get_profile_field(self, field: str) -> Any:
        profiles = self.get_messenger_profile([field])
        return profiles[0].get(field) if profiles else None

    def get_get_started(self) -> Optional[Dict[str, Any]]:
        return self._get_profile_field("get_started")

    def set_get_started(self, payload: str) -> Dict[str, Any]:
        return self.set_messenger_profile({"get_started": {"payload": payload}})

    def delete_get_started(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["get_started"])

    @staticmethod
    def _persistent_menu(
        menu_items: List[Dict[str, Any]], composer_input_disabled: bool
    ) -> List[Dict[str, Any]]:
        # A list that already has a "default" locale entry is a full menu definition
        if any(item.get("locale") == "default" for item in menu_items):
            return menu_items
        return [
            {
                "locale": "default",
                "composer_input_disabled": composer_input_disabled,
                "call_to_actions": menu_items,
            }
        ]

    def get_persistent_menu(self) -> Optional[List[Dict[str, Any]]]:
        return self._get_profile_field("persistent_menu")

    def set_persistent_menu(
        self, menu_items: List[Dict[str, Any]], *, composer_input_disabled: bool = False
    ) -> Dict[str, Any]:
        return self.set_messenger_profile(
            {"persistent_menu": self._persistent_menu(menu_items, composer_input_disabled)}
        )

    def delete_persistent_menu(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["persistent_menu"])

    def get_user_persistent_menu(self, user_id: str) -> Optional[List[Dict[str, Any]]]:
        data = self._call("GET", "/me/custom_user_settings", params={"psid": user_id})["data"]
        return data[0].get("user_level_persistent_menu") if data else None

    def set_user_persistent_menu(
        self,
        user_id: str,
        menu_items: List[Dict[str, Any]],
        *,
        composer_input_disabled: bool = False,
    ) -> Dict[str, Any]:
        return self._call(
            "POST",
            "/me/custom_user_settings",
            json={
                "psid": user_id,
                "persistent_menu": self._persistent_menu(menu_items, composer_input_disabled),
            },
        )

    def delete_user_persistent_menu(self, user_id: str) -> Dict[str, Any]:
        return self._call(
            "DELETE",
            "/me/custom_user_settings",
            params={"psid": user_id, "params": json.dumps(["persistent_menu"])},
        )

    def get_greeting(self) -> Optional[List[Dict[str, Any]]]:
        return self._get_profile_field("greeting")

    def set_greeting(self, greeting: Union[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
        if isinstance(greeting, str):
            greeting = [{"locale": "default", "text": greeting}]
        return self.set_messenger_profile({"greeting": greeting})

    def delete_greeting(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["greeting"])

    def get_ice_breakers(self) -> Optional[List[Dict[str, Any]]]:
        return self._get_profile_field("ice_breakers")

    def set_ice_breakers(self, ice_breakers: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self.set_messenger_profile({"ice_breakers": ice_breakers})

    def delete_ice_breakers(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["ice_breakers"])

    def get_whitelisted_domains(self) -> Optional[List[str]]:
        return self._get_profile_field("whitelisted_domains")

    def set_whitelisted_domains(self, domains: List[str]) -> Dict[str, Any]:
        return self.set_messenger_profile({"whitelisted_domains": domains})

    def delete_whitelisted_domains(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["whitelisted_domains"])

    def get_account_linking_url(self) -> Optional[str]:
        return self._get_profile_field("account_linking_url")

    def set_account_linking_url(self, url: str) -> Dict[str, Any]:
        return self.set_messenger_profile({"account_linking_url": url})

    def delete_account_linking_url(self) -> Dict[str, Any]:
        return self.delete_messenger_profile(["account_linking_url"])

    # --- Send API ---
    def send_raw_body(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``body`` to ``/me/messages`` as is; returns ``recipient_id`` and ``message_id``."""
        return self._call("POST", "/me/messages", json=body)

    @staticmethod
    def _messaging_type(messaging_type: Optional[str], tag: Optional[str]) -> str:
        if messaging_type is not None:
            return MessagingType(messaging_type).value
        return (MessagingType.MESSAGE_TAG if tag else MessagingType.UPDATE).value

    def send_message(
        self,
        psid_or_recipient: Recipient,
        message: Mapping[str, Any],
        *,
        messaging_type: Optional[str] = None,
        tag: Optional[str] = None,
        quick_replies: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Dict[str, Any]:
        """Send ``message``. Extra ``options`` such as ``persona_id`` or
        ``notification_type`` are added to the request body."""
        body = {
            "messaging_type": self._messaging_type(messaging_type, tag),
            "recipient": _recipient(psid_or_recipient),
            "message": Messenger.create_message(message, quick_replies=quick_replies),
            "tag": tag,
            **options,
        }
        return self.send_raw_body(_compact(body))

    def send_message_form_data(
        self,
        psid_or_recipient: Recipient,
        message: Dict[str, Any],
        filedata: bytes,
        *,
        filename: str = "file",
        content_type: Optional[str] = None,
        messaging_type: Optional[str] = None,
        tag: Optional[str] = None,
        **options: Any,
    ) -> Dict[str, Any]:
        """Send ``message`` with an uploaded file as multipart form data."""
        form = {
            "messaging_type": self._messaging_type(messaging_type, tag),
            "recipient": json.dumps(_recipient(psid_or_recipient)),
            "message": json.dumps(message),
            "tag": tag,
            **options,
        }
        files = {
            "filedata": (
                filename,
                filedata,
                content_type or detect_image_mime(filedata) or "application/octet-stream",
            )
        }
        return self._call(
            "POST",
            "/me/messages",
            data={key: _form_value(value) for key, value in form.items() if value is not None},
            files=files,
        )

    def send_attachment(
        self, psid_or_recipient: Recipient, attachment: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_attachment(attachment), **options
        )

    def send_text(self, psid_or_recipient: Recipient, text: str, **options: Any) -> Dict[str, Any]:
        return self.send_message(psid_or_recipient, Messenger.create_text(text), **options)

    def _send_media(
        self,
        media_type: str,
        psid_or_recipient: Recipient,
        media: Media,
        *,
        quick_replies: Optional[List[Dict[str, Any]]] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        **options: Any,
    ) -> Dict[str, Any]:
        if isinstance(media, (bytes, bytearray)):
            message: Dict[str, Any] = {
                "attachment": {"type": AttachmentType(media_type).value, "payload": {}}
            }
            if quick_replies:
                validate_quick_replies(quick_replies)
                message["quick_replies"] = quick_replies
            return self.send_message_form_data(
                psid_or_recipient,
                message,
                bytes(media),
                filename=filename or media_type,
                content_type=content_type,
                **options,
            )
        return self.send_message(
            psid_or_recipient,
            Messenger.create_media(media_type, media),
            quick_replies=quick_replies,
            **options,
        )

    def send_audio(
        self, psid_or_recipient: Recipient, audio: Media, **options: Any
    ) -> Dict[str, Any]:
        """Send audio by URL, attachment payload or raw bytes (uploaded as multipart)."""
        return self._send_media("audio", psid_or_recipient, audio, **options)

    def send_image(
        self, psid_or_recipient: Recipient, image: Media, **options: Any
    ) -> Dict[str, Any]:
        return self._send_media("image", psid_or_recipient, image, **options)

    def send_video(
        self, psid_or_recipient: Recipient, video: Media, **options: Any
    ) -> Dict[str, Any]:
        return self._send_media("video", psid_or_recipient, video, **options)

    def send_file(
        self, psid_or_recipient: Recipient, file: Media, **options: Any
    ) -> Dict[str, Any]:
        return self._send_media("file", psid_or_recipient, file, **options)

    def send_template(
        self, psid_or_recipient: Recipient, payload: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(psid_or_recipient, Messenger.create_template(payload), **options)

    def send_button_template(
        self, psid_or_recipient: Recipient, text: str, buttons: List[Dict[str, Any]], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_button_template(text, buttons), **options
        )

    def send_generic_template(
        self,
        psid_or_recipient: Recipient,
        elements: List[Dict[str, Any]],
        *,
        image_aspect_ratio: str = "horizontal",
        **options: Any,
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient,
            Messenger.create_generic_template(elements, image_aspect_ratio=image_aspect_ratio),
            **options,
        )

    def send_list_template(
        self,
        psid_or_recipient: Recipient,
        elements: List[Dict[str, Any]],
        buttons: List[Dict[str, Any]],
        *,
        top_element_style: str = "large",
        **options: Any,
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient,
            Messenger.create_list_template(elements, buttons, top_element_style=top_element_style),
            **options,
        )

    def send_open_graph_template(
        self, psid_or_recipient: Recipient, elements: List[Dict[str, Any]], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_open_graph_template(elements), **options
        )

    def send_receipt_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_receipt_template(attrs), **options
        )

    def send_media_template(
        self, psid_or_recipient: Recipient, elements: List[Dict[str, Any]], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_media_template(elements), **options
        )

    def send_airline_boarding_pass_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_airline_boarding_pass_template(attrs), **options
        )

    def send_airline_checkin_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_airline_checkin_template(attrs), **options
        )

    def send_airline_itinerary_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_airline_itinerary_template(attrs), **options
        )

    def send_airline_update_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_airline_update_template(attrs), **options
        )

    def send_one_time_notif_req_template(
        self, psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> Dict[str, Any]:
        return self.send_message(
            psid_or_recipient, Messenger.create_one_time_notif_req_template(attrs), **options
        )

    def send_sender_action(
        self, psid_or_recipient: Recipient, sender_action: str
    ) -> Dict[str, Any]:
        return self.send_raw_body(
            {
                "recipient": _recipient(psid_or_recipient),
                "sender_action": SenderAction(sender_action).value,
            }
        )

    def mark_seen(self, psid_or_recipient: Recipient) -> Dict[str, Any]:
        return self.send_sender_action(psid_or_recipient, "mark_seen")

    def typing_on(self, psid_or_recipient: Recipient) -> Dict[str, Any]:
        return self.send_sender_action(psid_or_recipient, "typing_on")

    def typing_off(self, psid_or_recipient: Recipient) -> Dict[str, Any]:
        return self.send_sender_action(psid_or_recipient, "typing_off")

    # --- Batch ---
    def _sign_batch_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        if self.skip_app_secret_proof:
            return item
        relative_url = item["relative_url"]
        tokens = parse_qs(urlsplit(relative_url).query).get("access_token")
        token = tokens[0] if tokens else (item.get("body") or {}).get("access_token")
        if not token:
            return item
        separator = "&" if "?" in relative_url else "?"
        proof = urlencode({"appsecret_proof": app_secret_proof(self.app_secret, token)})
        return {**item, "relative_url": f"{relative_url}{separator}{proof}"}

    def send_batch(
        self, batch: List[Dict[str, Any]], *, include_headers: bool = True
    ) -> List[BatchResult]:
        """Run up to 50 ``MessengerBatch`` items in one Graph request.

        Items carrying their own ``access_token`` get their own
        ``appsecret_proof``. Each item's JSON body is decoded and, for items
        built with a ``response_access_path``, narrowed to that path.
        """
        if len(batch) > MAX_BATCH_SIZE:
            raise ValueError(
                f"limit the number of requests which can be in a batch to {MAX_BATCH_SIZE}"
            )

        paths: List[Optional[str]] = []
        encoded: List[Dict[str, Any]] = []
        for item in batch:
            item = dict(item)
            paths.append(item.pop("response_access_path", None))
            item = self._sign_batch_item(item)
            if item.get("body") is not None:
                item["body"] = encode_batch_body(item["body"])
            encoded.append(item)

        data = self._call(
            "POST",
            "/",
            json={
                "access_token": self.access_token,
                "include_headers": include_headers,
                "batch": encoded,
            },
        )

        results: List[BatchResult] = []
        for path, datum in zip(paths, data):
            if datum is None:
                # Graph returns null for items it did not run
                results.append(BatchResult(code=0))
                continue
            body = json.loads(datum["body"]) if datum.get("body") else None
            if path and body is not None:
                body = access_path(body, path)
            results.append(BatchResult(code=datum["code"], headers=datum.get("headers"), body=body))
        return results

    # --- Labels ---
    def create_label(self, name: str) -> Dict[str, Any]:
        return self._call("POST", "/me/custom_labels", json={"page_label_name": name})

    def associate_label(self, user_id: str, label_id: Union[int, str]) -> Dict[str, Any]:
        return self._call("POST", f"/{label_id}/label", json={"user": user_id})

    def dissociate_label(self, user_id: str, label_id: Union[int, str]) -> Dict[str, Any]:
        return self._call("DELETE", f"/{label_id}/label", json={"user": user_id})

    def get_associated_labels(
        self, user_id: str, *, fields: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        return self._call(
            "GET", f"/{user_id}/custom_labels", params={"fields": ",".join(fields or ["name"])}
        )

    def get_label_details(
        self, label_id: Union[int, str], *, fields: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        return self._call("GET", f"/{label_id}", params={"fields": ",".join(fields or ["name"])})

    def get_label_list(self, *, fields: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._call(
            "GET", "/me/custom_labels", params={"fields": ",".join(fields or ["name"])}
        )

    def delete_label(self, label_id: Union[int, str]) -> Dict[str, Any]:
        return self._call("DELETE", f"/{label_id}")

    # --- Attachment upload ---
    def upload_attachment(
        self,
        attachment_type: str,
        attachment: Union[str, bytes],
        *,
        is_reusable: bool = False,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Upload by URL or raw bytes; returns ``{"attachment_id": ...}``."""
        attachment_type = AttachmentType(attachment_type).value
        if isinstance(attachment, str):
            body = {
                "message": {
                    "attachment": {
                        "type": attachment_type,
                        "payload": {"url": attachment, "is_reusable": is_reusable},
                    }
                }
            }
            return self._call("POST", "/me/message_attachments", json=body)

        message = {"attachment": {"type": attachment_type, "payload": {"is_reusable": is_reusable}}}
        mime = content_type or detect_image_mime(attachment) or "application/octet-stream"
        return self._call(
            "POST",
            "/me/message_attachments",
            data={"message": json.dumps(message)},
            files={"filedata": (filename or attachment_type, attachment, mime)},
        )

    def upload_audio(self, attachment: Union[str, bytes], **options: Any) -> Dict[str, Any]:
        return self.upload_attachment("audio", attachment, **options)

    def upload_image(self, attachment: Union[str, bytes], **options: Any) -> Dict[str, Any]:
        return self.upload_attachment("image", attachment, **options)

    def upload_video(self, attachment: Union[str, bytes], **options: Any) -> Dict[str, Any]:
        return self.upload_attachment("video", attachment, **options)

    def upload_file(self, attachment: Union[str, bytes], **options: Any) -> Dict[str, Any]:
        return self.upload_attachment("file", attachment, **options)

    # --- Handover protocol ---
    def pass_thread_control(
        self, recipient_id: str, target_app_id: int, metadata: Optional[str] = None
    ) -> Dict[str, Any]:
        body = _compact(
            {
                "recipient": {"id": recipient_id},
                "target_app_id": target_app_id,
                "metadata": metadata,
            }
        )
        return self._call("POST", "/me/pass_thread_control", json=body)

    def pass_thread_control_to_page_inbox(
        self, recipient_id: str, metadata: Optional[str] = None
    ) -> Dict[str, Any]:
        return self.pass_thread_control(recipient_id, PAGE_INBOX_APP_ID, metadata)

    def take_thread_control(
        self, recipient_id: str, metadata: Optional[str] = None
    ) -> Dict[str, Any]:
        body = _compact({"recipient": {"id": recipient_id}, "metadata": metadata})
        return self._call("POST", "/me/take_thread_control", json=body)

    def request_thread_control(
        self, recipient_id: str, metadata: Optional[str] = None
    ) -> Dict[str, Any]:
        body = _compact({"recipient": {"id": recipient_id}, "metadata": metadata})
        return self._call("POST", "/me/request_thread_control", json=body)

    def get_secondary_receivers(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/me/secondary_receivers", params={"fields": "id,name"})["data"]

    def get_thread_owner(self, recipient_id: str) -> Optional[Dict[str, Any]]:
        data = self._call("GET", "/me/thread_owner", params={"recipient": recipient_id})
        return access_path(data, "data[0].thread_owner")

    # --- Page messaging insights ---
    def get_insights(
        self,
        metrics: List[str],
        *,
        since: Optional[int] = None,
        until: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params = {"metric": ",".join(metrics), "since": since, "until": until}
        return self._call("GET", "/me/insights", params=params)["data"]

    def _get_insight(
        self, metric: str, since: Optional[int], until: Optional[int]
    ) -> Optional[Dict[str, Any]]:
        data = self.get_insights([metric], since=since, until=until)
        return data[0] if data else None

    def get_blocked_conversations(
        self, *, since: Optional[int] = None, until: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_insight("page_messages_blocked_conversations_unique", since, until)

    def get_reported_conversations(
        self, *, since: Optional[int] = None, until: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_insight("page_messages_reported_conversations_unique", since, until)

    def get_total_messaging_connections(
        self, *, since: Optional[int] = None, until: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_insight("page_messages_total_messaging_connections", since, until)

    def get_new_conversations(
        self, *, since: Optional[int] = None, until: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_insight("page_messages_new_conversations_unique", since, until)

    # --- Built-in NLP ---
    def set_nlp_configs(
        self,
        *,
        nlp_enabled: Optional[bool] = None,
        model: Optional[str] = None,
        custom_token: Optional[str] = None,
        verbose: Optional[bool] = None,
        n_best: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {
            "nlp_enabled": nlp_enabled,
            "model": model,
            "custom_token": custom_token,
            "verbose": verbose,
            "n_best": n_best,
        }
        return self._call("POST", "/me/nlp_configs", params=params)

    def enable_nlp(self) -> Dict[str, Any]:
        return self.set_nlp_configs(nlp_enabled=True)

    def disable_nlp(self) -> Dict[str, Any]:
        return self.set_nlp_configs(nlp_enabled=False)

    # --- App events ---
    def log_custom_events(
        self,
        events: List[Dict[str, Any]],
        *,
        page_id: Union[int, str],
        page_scoped_user_id: str,
        app_id: Optional[Union[int, str]] = None,
    ) -> Dict[str, Any]:
        app_id = app_id or self.app_id
        if not app_id:
            raise ValueError("App ID is required to log custom events")
        body = {
            "event": "CUSTOM_APP_EVENTS",
            "custom_events": json.dumps(events),
            "advertiser_tracking_enabled": 0,
            "application_tracking_enabled": 0,
            "extinfo": json.dumps(["mb1"]),
            "page_id": page_id,
            "page_scoped_user_id": page_scoped_user_id,
        }
        return self._call("POST", f"/{app_id}/activities", json=body)

    # --- ID matching ---
    def get_user_field(
        self,
        field: str,
        user_id: str,
        *,
        app_secret: Optional[str] = None,
        app: Optional[str] = None,
        page: Optional[str] = None,
    ) -> Dict[str, Any]:
        """ID matching always needs ``appsecret_proof``, even when the client skips it."""
        secret = app_secret or self.app_secret
        if not secret:
            raise ValueError("App Secret is required for ID matching")
        params = {
            "appsecret_proof": app_secret_proof(secret, self.access_token),
            "app": app,
            "page": page,
        }
        return self._call("GET", f"/{user_id}/{field}", params=params)

    def get_ids_for_apps(self, user_id: str, **options: Any) -> Dict[str, Any]:
        return self.get_user_field("ids_for_apps", user_id, **options)

    def get_ids_for_pages(self, user_id: str, **options: Any) -> Dict[str, Any]:
        return self.get_user_field("ids_for_pages", user_id, **options)

    # --- Personas ---
    def create_persona(self, persona: Dict[str, Any]) -> Dict[str, Any]:
        """Create a persona from ``{"name", "profile_picture_url"}``; returns ``{"id": ...}``."""
        return self._call("POST", "/me/personas", json=persona)

    def get_persona(self, persona_id: str) -> Dict[str, Any]:
        return self._call("GET", f"/{persona_id}")

    def get_personas(self, cursor: Optional[str] = None) -> Dict[str, Any]:
        return self._call("GET", "/me/personas", params={"after": cursor})

    def get_all_personas(self) -> List[Dict[str, Any]]:
        personas: List[Dict[str, Any]] = []
        cursor: Optional[str] = None
        while True:
            page = self.get_personas(cursor)
            personas.extend(page.get("data", []))
            paging = page.get("paging") or {}
            cursor = (paging.get("cursors") or {}).get("after") if paging.get("next") else None
            if not cursor:
                return personas

    def delete_persona(self, persona_id: str) -> Dict[str, Any]:
        return self._call("DELETE", f"/{persona_id}")
