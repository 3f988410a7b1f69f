"""Descriptors for the Graph API batch endpoint.

Each function returns one batch item ``{"method", "relative_url", "body"?}``
for ``MessengerClient.send_batch``. Nothing here talks to the network.

Every function takes the same execution-control keywords:

- ``name``: label other items can reference with JSONPath (``{result=first:$.id}``).
- ``depends_on``: name of the item that must run first. Passed through as is.
- ``omit_response_on_success``: drop this item's body from the batch response.
- ``access_token``: per-item token. Goes into the body of POST/DELETE items
  and into the query string of GET items.

Example:
    >>> MessengerBatch.send_text("PSID", "Hello", name="first")
    {'method': 'POST', 'relative_url': 'me/messages', 'body': {...}, 'name': 'first'}
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlencode

from messaging_api.messages.messenger import Messenger
from messaging_api.types import MessagingType

BatchItem = Dict[str, Any]
Recipient = Union[str, Mapping[str, Any]]

PAGE_INBOX_APP_ID = 263902037430900


def _compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _recipient(psid_or_recipient: Recipient) -> Dict[str, Any]:
    if isinstance(psid_or_recipient, str):
        return {"id": psid_or_recipient}
    return dict(psid_or_recipient)


def _item(
    method: str,
    relative_url: str,
    body: Optional[Dict[str, Any]] = None,
    *,
    name: Optional[str] = None,
    depends_on: Optional[str] = None,
    omit_response_on_success: Optional[bool] = None,
    access_token: Optional[str] = None,
    response_access_path: Optional[str] = None,
    query: Optional[Mapping[str, Any]] = None,
) -> BatchItem:
    query = _compact(query or {})
    if method == "GET":
        if access_token is not None:
            query["access_token"] = access_token
    elif access_token is not None:
        body = {**(body or {}), "access_token": access_token}

    if query:
        relative_url = f"{relative_url}?{urlencode(query, safe=',')}"

    item: BatchItem = {"method": method, "relative_url": relative_url}
    if body is not None:
        item["body"] = body
    item.update(
        _compact(
            {
                "name": name,
                "depends_on": depends_on,
                "omit_response_on_success": omit_response_on_success,
                "response_access_path": response_access_path,
            }
        )
    )
    return item


class MessengerBatch:
    """Namespace of batch item builders."""

    @staticmethod
    def send_request(
        body: Mapping[str, Any],
        *,
        name: Optional[str] = None,
        depends_on: Optional[str] = None,
        omit_response_on_success: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> BatchItem:
        return _item(
            "POST",
            "me/messages",
            dict(body),
            name=name,
            depends_on=depends_on,
            omit_response_on_success=omit_response_on_success,
            access_token=access_token,
        )

    @staticmethod
    def send_message(
        psid_or_recipient: Recipient,
        message: Mapping[str, Any],
        *,
        messaging_type: Optional[str] = None,
        tag: Optional[str] = None,
        quick_replies: Optional[List[Dict[str, Any]]] = None,
        name: Optional[str] = None,
        depends_on: Optional[str] = None,
        omit_response_on_success: Optional[bool] = None,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> BatchItem:
        """Send API item. Remaining ``options`` (``persona_id``, ``notification_type``...)
        are added to the request body."""
        if messaging_type is None:
            messaging_type = MessagingType.MESSAGE_TAG.value if tag else MessagingType.UPDATE.value
        body = {
            "messaging_type": messaging_type,
            "recipient": _recipient(psid_or_recipient),
            "message": Messenger.create_message(message, quick_replies=quick_replies),
            "tag": tag,
            **options,
        }
        return MessengerBatch.send_request(
            _compact(body),
            name=name,
            depends_on=depends_on,
            omit_response_on_success=omit_response_on_success,
            access_token=access_token,
        )

    @staticmethod
    def send_text(psid_or_recipient: Recipient, text: str, **options: Any) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_text(text), **options
        )

    @staticmethod
    def send_attachment(
        psid_or_recipient: Recipient, attachment: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_attachment(attachment), **options
        )

    @staticmethod
    def send_audio(
        psid_or_recipient: Recipient, audio: Union[str, Mapping[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_audio(audio), **options
        )

    @staticmethod
    def send_image(
        psid_or_recipient: Recipient, image: Union[str, Mapping[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_image(image), **options
        )

    @staticmethod
    def send_video(
        psid_or_recipient: Recipient, video: Union[str, Mapping[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_video(video), **options
        )

    @staticmethod
    def send_file(
        psid_or_recipient: Recipient, file: Union[str, Mapping[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_file(file), **options
        )

    @staticmethod
    def send_template(
        psid_or_recipient: Recipient, payload: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_template(payload), **options
        )

    @staticmethod
    def send_button_template(
        psid_or_recipient: Recipient, text: str, buttons: List[Dict[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_button_template(text, buttons), **options
        )

    @staticmethod
    def send_generic_template(
        psid_or_recipient: Recipient,
        elements: List[Dict[str, Any]],
        *,
        image_aspect_ratio: str = "horizontal",
        **options: Any,
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient,
            Messenger.create_generic_template(elements, image_aspect_ratio=image_aspect_ratio),
            **options,
        )

    @staticmethod
    def send_list_template(
        psid_or_recipient: Recipient,
        elements: List[Dict[str, Any]],
        buttons: List[Dict[str, Any]],
        *,
        top_element_style: str = "large",
        **options: Any,
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient,
            Messenger.create_list_template(elements, buttons, top_element_style=top_element_style),
            **options,
        )

    @staticmethod
    def send_open_graph_template(
        psid_or_recipient: Recipient, elements: List[Dict[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_open_graph_template(elements), **options
        )

    @staticmethod
    def send_receipt_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_receipt_template(attrs), **options
        )

    @staticmethod
    def send_media_template(
        psid_or_recipient: Recipient, elements: List[Dict[str, Any]], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_media_template(elements), **options
        )

    @staticmethod
    def send_airline_boarding_pass_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_airline_boarding_pass_template(attrs), **options
        )

    @staticmethod
    def send_airline_checkin_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_airline_checkin_template(attrs), **options
        )

    @staticmethod
    def send_airline_itinerary_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_airline_itinerary_template(attrs), **options
        )

    @staticmethod
    def send_airline_update_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_airline_update_template(attrs), **options
        )

    @staticmethod
    def send_one_time_notif_req_template(
        psid_or_recipient: Recipient, attrs: Mapping[str, Any], **options: Any
    ) -> BatchItem:
        return MessengerBatch.send_message(
            psid_or_recipient, Messenger.create_one_time_notif_req_template(attrs), **options
        )

    @staticmethod
    def get_user_profile(
        user_id: str,
        *,
        fields: Optional[List[str]] = None,
        name: Optional[str] = None,
        depends_on: Optional[str] = None,
        omit_response_on_success: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> BatchItem:
        return _item(
            "GET",
            user_id,
            query={"fields": ",".join(fields) if fields else None},
            name=name,
            depends_on=depends_on,
            omit_response_on_success=omit_response_on_success,
            access_token=access_token,
        )

    @staticmethod
    def send_sender_action(
        psid_or_recipient: Recipient,
        action: str,
        *,
        name: Optional[str] = None,
        depends_on: Optional[str] = None,
        omit_response_on_success: Optional[bool] = None,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> BatchItem:
        body = {
            "recipient": _recipient(psid_or_recipient),
            "sender_action": action,
            **options,
        }
        return MessengerBatch.send_request(
            _compact(body),
            name=name,
            depends_on=depends_on,
            omit_response_on_success=omit_response_on_success,
            access_token=access_token,
        )

    @staticmethod
    def typing_on(psid_or_recipient: Recipient, **options: Any) -> BatchItem:
        return MessengerBatch.send_sender_action(psid_or_recipient, "typing_on", **options)

    @staticmethod
    def typing_off(psid_or_recipient: Recipient, **options: Any) -> BatchItem:
        return MessengerBatch.send_sender_action(psid_or_recipient, "typing_off", **options)

    @staticmethod
    def mark_seen(psid_or_recipient: Recipient, **options: Any) -> BatchItem:
        return MessengerBatch.send_sender_action(psid_or_recipient, "mark_seen", **options)

    @staticmethod
    def pass_thread_control(
        recipient_id: str,
        target_app_id: int,
        metadata: Optional[str] = None,
        **options: Any,
    ) -> BatchItem:
        body = {
            "recipient": {"id": recipient_id},
            "target_app_id": target_app_id,
            "metadata": metadata,
        }
        return _item("POST", "me/pass_thread_control", _compact(body), **options)

    @staticmethod
    def pass_thread_control_to_page_inbox(
        recipient_id: str, metadata: Optional[str] = None, **options: Any
    ) -> BatchItem:
        return MessengerBatch.pass_thread_control(
            recipient_id, PAGE_INBOX_APP_ID, metadata, **options
        )

    @staticmethod
    def take_thread_control(
        recipient_id: str, metadata: Optional[str] = None, **options: Any
    ) -> BatchItem:
        body = {"recipient": {"id": recipient_id}, "metadata": metadata}
        return _item("POST", "me/take_thread_control", _compact(body), **options)

    @staticmethod
    def request_thread_control(
        recipient_id: str, metadata: Optional[str] = None, **options: Any
    ) -> BatchItem:
        body = {"recipient": {"id": recipient_id}, "metadata": metadata}
        return _item("POST", "me/request_thread_control", _compact(body), **options)

    @staticmethod
    def get_thread_owner(recipient_id: str, **options: Any) -> BatchItem:
        """The batch response is narrowed to ``data[0].thread_owner`` by ``send_batch``."""
        return _item(
            "GET",
            "me/thread_owner",
            query={"recipient": recipient_id},
            response_access_path="data[0].thread_owner",
            **options,
        )

    @staticmethod
    def associate_label(user_id: str, label_id: Union[int, str], **options: Any) -> BatchItem:
        return _item("POST", f"{label_id}/label", {"user": user_id}, **options)

    @staticmethod
    def dissociate_label(user_id: str, label_id: Union[int, str], **options: Any) -> BatchItem:
        return _item("DELETE", f"{label_id}/label", {"user": user_id}, **options)

    @staticmethod
    def get_associated_labels(user_id: str, **options: Any) -> BatchItem:
        return _item("GET", f"{user_id}/custom_labels", **options)
