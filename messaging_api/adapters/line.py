from __future__ import annotations

import warnings
from typing import Any, Dict, Iterator, List, Mapping, Optional

import httpx

from messaging_api.adapters.http import build_client, json_or_none, send, stream
from messaging_api.config import get_settings
from messaging_api.errors import LineAPIError
from messaging_api.messages.line import Line
from messaging_api.types import (
    AudienceGroupAuthorityLevel,
    AudienceGroupCreateRoute,
    AudienceGroupStatus,
    RequestHook,
)
from messaging_api.utils.case import camelcase_keys
from messaging_api.utils.image import detect_image_mime

Messages = List[Dict[str, Any]]


def _compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


class LineClient:
    """Client for the LINE Messaging API.

    One method per REST endpoint. Requests go to ``https://api.line.me/``
    (``origin``) except content upload/download which use
    ``https://api-data.line.me/`` (``data_origin``). Every endpoint method
    accepts ``access_token=`` to override the channel access token for that
    call only.

    Responses are returned as decoded JSON in LINE's camelCase format.
    Failures raise ``LineAPIError``; a few lookups return ``None`` on 404
    because LINE uses it to mean "nothing linked/found".

    Example:
        >>> from messaging_api import LineClient
        >>> client = LineClient("ACCESS_TOKEN", "CHANNEL_SECRET")
        >>> client.reply_text(reply_token, "Hello!")
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        channel_secret: Optional[str] = None,
        *,
        origin: Optional[str] = None,
        data_origin: Optional[str] = None,
        on_request: Optional[RequestHook] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.access_token = access_token or settings.line_access_token
        if not self.access_token:
            raise RuntimeError(
                "Missing LINE access token: pass access_token or set LINE_ACCESS_TOKEN"
            )
        self.channel_secret = channel_secret or settings.line_channel_secret
        self.origin = (origin or settings.line_origin).rstrip("/")
        self.data_origin = (data_origin or settings.line_data_origin).rstrip("/")
        self._http = build_client(
            f"{self.origin}/",
            headers={"Authorization": f"Bearer {self.access_token}"},
            timeout=timeout,
            on_request=on_request,
        )

    @classmethod
    def connect(
        cls, access_token: Optional[str] = None, channel_secret: Optional[str] = None, **kwargs: Any
    ) -> "LineClient":
        warnings.warn(
            "`LineClient.connect(...)` is deprecated. Use `LineClient(...)` instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return cls(access_token, channel_secret, **kwargs)

    @property
    def http(self) -> httpx.Client:
        """The underlying ``httpx.Client``."""
        return self._http

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LineClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- Plumbing ---
    def _request(
        self, method: str, url: str, *, access_token: Optional[str] = None, **kwargs: Any
    ) -> httpx.Response:
        if access_token is not None:
            kwargs["headers"] = {
                **(kwargs.get("headers") or {}),
                "Authorization": f"Bearer {access_token}",
            }
        return send(self._http, method, url, error_cls=LineAPIError, **kwargs)

    def _call(self, method: str, url: str, **kwargs: Any) -> Any:
        return json_or_none(self._request(method, url, **kwargs))

    def _get_or_none(self, url: str, *, access_token: Optional[str] = None) -> Any:
        try:
            return self._call("GET", url, access_token=access_token)
        except LineAPIError as exc:
            if exc.status == 404:
                return None
            raise

    def _data_url(self, path: str) -> str:
        return f"{self.data_origin}{path}"

    # --- Reply ---
    def reply_raw_body(self, body: Dict[str, Any], *, access_token: Optional[str] = None) -> Any:
        """Send a reply message with a ready-made body.

        See: https://developers.line.biz/en/reference/messaging-api/#send-reply-message
        """
        return self._call("POST", "/v2/bot/message/reply", json=body, access_token=access_token)

    def reply(
        self, reply_token: str, messages: Messages, *, access_token: Optional[str] = None
    ) -> Any:
        return self.reply_raw_body(
            {"replyToken": reply_token, "messages": messages}, access_token=access_token
        )

    reply_messages = reply

    def reply_text(
        self, reply_token: str, text: str, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_text(text, **options)], access_token=access_token
        )

    def reply_image(
        self, reply_token: str, image: Any, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_image(image, **options)], access_token=access_token
        )

    def reply_video(
        self,
        reply_token: str,
        video: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_video(video, **options)], access_token=access_token
        )

    def reply_audio(
        self,
        reply_token: str,
        audio: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_audio(audio, **options)], access_token=access_token
        )

    def reply_location(
        self,
        reply_token: str,
        location: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_location(location, **options)], access_token=access_token
        )

    def reply_sticker(
        self,
        reply_token: str,
        sticker: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token, [Line.create_sticker(sticker, **options)], access_token=access_token
        )

    def reply_imagemap(
        self,
        reply_token: str,
        alt_text: str,
        imagemap: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_imagemap(alt_text, imagemap, **options)],
            access_token=access_token,
        )

    def reply_flex(
        self,
        reply_token: str,
        alt_text: str,
        contents: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_flex(alt_text, contents, **options)],
            access_token=access_token,
        )

    def reply_template(
        self,
        reply_token: str,
        alt_text: str,
        template: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_template(alt_text, template, **options)],
            access_token=access_token,
        )

    def reply_buttons_template(
        self,
        reply_token: str,
        alt_text: str,
        buttons: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_buttons_template(alt_text, buttons, **options)],
            access_token=access_token,
        )

    reply_button_template = reply_buttons_template

    def reply_confirm_template(
        self,
        reply_token: str,
        alt_text: str,
        confirm: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_confirm_template(alt_text, confirm, **options)],
            access_token=access_token,
        )

    def reply_carousel_template(
        self,
        reply_token: str,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    def reply_image_carousel_template(
        self,
        reply_token: str,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.reply(
            reply_token,
            [Line.create_image_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    # --- Push ---
    def push_raw_body(self, body: Dict[str, Any], *, access_token: Optional[str] = None) -> Any:
        """See: https://developers.line.biz/en/reference/messaging-api/#send-push-message"""
        return self._call("POST", "/v2/bot/message/push", json=body, access_token=access_token)

    def push(self, to: str, messages: Messages, *, access_token: Optional[str] = None) -> Any:
        return self.push_raw_body({"to": to, "messages": messages}, access_token=access_token)

    push_messages = push

    def push_text(
        self, to: str, text: str, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.push(to, [Line.create_text(text, **options)], access_token=access_token)

    def push_image(
        self, to: str, image: Any, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.push(to, [Line.create_image(image, **options)], access_token=access_token)

    def push_video(
        self,
        to: str,
        video: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(to, [Line.create_video(video, **options)], access_token=access_token)

    def push_audio(
        self,
        to: str,
        audio: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(to, [Line.create_audio(audio, **options)], access_token=access_token)

    def push_location(
        self,
        to: str,
        location: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(to, [Line.create_location(location, **options)], access_token=access_token)

    def push_sticker(
        self,
        to: str,
        sticker: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(to, [Line.create_sticker(sticker, **options)], access_token=access_token)

    def push_imagemap(
        self,
        to: str,
        alt_text: str,
        imagemap: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to, [Line.create_imagemap(alt_text, imagemap, **options)], access_token=access_token
        )

    def push_flex(
        self,
        to: str,
        alt_text: str,
        contents: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to, [Line.create_flex(alt_text, contents, **options)], access_token=access_token
        )

    def push_template(
        self,
        to: str,
        alt_text: str,
        template: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to, [Line.create_template(alt_text, template, **options)], access_token=access_token
        )

    def push_buttons_template(
        self,
        to: str,
        alt_text: str,
        buttons: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to,
            [Line.create_buttons_template(alt_text, buttons, **options)],
            access_token=access_token,
        )

    push_button_template = push_buttons_template

    def push_confirm_template(
        self,
        to: str,
        alt_text: str,
        confirm: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to,
            [Line.create_confirm_template(alt_text, confirm, **options)],
            access_token=access_token,
        )

    def push_carousel_template(
        self,
        to: str,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to,
            [Line.create_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    def push_image_carousel_template(
        self,
        to: str,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.push(
            to,
            [Line.create_image_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    # --- Multicast ---
    def multicast_raw_body(
        self, body: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Any:
        """See: https://developers.line.biz/en/reference/messaging-api/#send-multicast-message"""
        return self._call("POST", "/v2/bot/message/multicast", json=body, access_token=access_token)

    def multicast(
        self, to: List[str], messages: Messages, *, access_token: Optional[str] = None
    ) -> Any:
        return self.multicast_raw_body({"to": to, "messages": messages}, access_token=access_token)

    multicast_messages = multicast

    def multicast_text(
        self, to: List[str], text: str, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.multicast(to, [Line.create_text(text, **options)], access_token=access_token)

    def multicast_image(
        self, to: List[str], image: Any, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.multicast(to, [Line.create_image(image, **options)], access_token=access_token)

    def multicast_video(
        self,
        to: List[str],
        video: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(to, [Line.create_video(video, **options)], access_token=access_token)

    def multicast_audio(
        self,
        to: List[str],
        audio: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(to, [Line.create_audio(audio, **options)], access_token=access_token)

    def multicast_location(
        self,
        to: List[str],
        location: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to, [Line.create_location(location, **options)], access_token=access_token
        )

    def multicast_sticker(
        self,
        to: List[str],
        sticker: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to, [Line.create_sticker(sticker, **options)], access_token=access_token
        )

    def multicast_imagemap(
        self,
        to: List[str],
        alt_text: str,
        imagemap: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to, [Line.create_imagemap(alt_text, imagemap, **options)], access_token=access_token
        )

    def multicast_flex(
        self,
        to: List[str],
        alt_text: str,
        contents: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to, [Line.create_flex(alt_text, contents, **options)], access_token=access_token
        )

    def multicast_template(
        self,
        to: List[str],
        alt_text: str,
        template: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to, [Line.create_template(alt_text, template, **options)], access_token=access_token
        )

    def multicast_buttons_template(
        self,
        to: List[str],
        alt_text: str,
        buttons: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to,
            [Line.create_buttons_template(alt_text, buttons, **options)],
            access_token=access_token,
        )

    multicast_button_template = multicast_buttons_template

    def multicast_confirm_template(
        self,
        to: List[str],
        alt_text: str,
        confirm: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to,
            [Line.create_confirm_template(alt_text, confirm, **options)],
            access_token=access_token,
        )

    def multicast_carousel_template(
        self,
        to: List[str],
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to,
            [Line.create_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    def multicast_image_carousel_template(
        self,
        to: List[str],
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.multicast(
            to,
            [Line.create_image_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    # --- Broadcast ---
    def broadcast_raw_body(
        self, body: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Any:
        """See: https://developers.line.biz/en/reference/messaging-api/#send-broadcast-message"""
        return self._call("POST", "/v2/bot/message/broadcast", json=body, access_token=access_token)

    def broadcast(self, messages: Messages, *, access_token: Optional[str] = None) -> Any:
        return self.broadcast_raw_body({"messages": messages}, access_token=access_token)

    broadcast_messages = broadcast

    def broadcast_text(
        self, text: str, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast([Line.create_text(text, **options)], access_token=access_token)

    def broadcast_image(
        self, image: Any, *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast([Line.create_image(image, **options)], access_token=access_token)

    def broadcast_video(
        self, video: Mapping[str, Any], *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast([Line.create_video(video, **options)], access_token=access_token)

    def broadcast_audio(
        self, audio: Mapping[str, Any], *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast([Line.create_audio(audio, **options)], access_token=access_token)

    def broadcast_location(
        self, location: Mapping[str, Any], *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast(
            [Line.create_location(location, **options)], access_token=access_token
        )

    def broadcast_sticker(
        self, sticker: Mapping[str, Any], *, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        return self.broadcast([Line.create_sticker(sticker, **options)], access_token=access_token)

    def broadcast_imagemap(
        self,
        alt_text: str,
        imagemap: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_imagemap(alt_text, imagemap, **options)], access_token=access_token
        )

    def broadcast_flex(
        self,
        alt_text: str,
        contents: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_flex(alt_text, contents, **options)], access_token=access_token
        )

    def broadcast_template(
        self,
        alt_text: str,
        template: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_template(alt_text, template, **options)], access_token=access_token
        )

    def broadcast_buttons_template(
        self,
        alt_text: str,
        buttons: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_buttons_template(alt_text, buttons, **options)], access_token=access_token
        )

    broadcast_button_template = broadcast_buttons_template

    def broadcast_confirm_template(
        self,
        alt_text: str,
        confirm: Mapping[str, Any],
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_confirm_template(alt_text, confirm, **options)], access_token=access_token
        )

    def broadcast_carousel_template(
        self,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_carousel_template(alt_text, columns, **options)], access_token=access_token
        )

    def broadcast_image_carousel_template(
        self,
        alt_text: str,
        columns: Messages,
        *,
        access_token: Optional[str] = None,
        **options: Any,
    ) -> Any:
        return self.broadcast(
            [Line.create_image_carousel_template(alt_text, columns, **options)],
            access_token=access_token,
        )

    # --- Narrowcast ---
    def narrowcast_raw_body(
        self, body: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """Send a narrowcast message.

        LINE answers 202 with the request id in the ``X-Line-Request-Id``
        header; it is returned as ``requestId`` so progress can be polled with
        ``get_narrowcast_progress``.
        """
        response = self._request(
            "POST", "/v2/bot/message/narrowcast", json=body, access_token=access_token
        )
        data = json_or_none(response) or {}
        request_id = response.headers.get("x-line-request-id")
        if request_id and "requestId" not in data:
            data["requestId"] = request_id
        return data

    def narrowcast(
        self,
        messages: Messages,
        *,
        recipient: Optional[Dict[str, Any]] = None,
        demographic: Optional[Dict[str, Any]] = None,
        limit_max: Optional[int] = None,
        up_to_remaining_quota: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        limit = _compact({"max": limit_max, "upToRemainingQuota": up_to_remaining_quota})
        body = _compact(
            {
                "messages": messages,
                "recipient": recipient,
                "filter": {"demographic": demographic} if demographic is not None else None,
                "limit": limit or None,
            }
        )
        return self.narrowcast_raw_body(body, access_token=access_token)

    narrowcast_messages = narrowcast

    def get_narrowcast_progress(
        self, request_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET",
            "/v2/bot/message/progress/narrowcast",
            params={"requestId": request_id},
            access_token=access_token,
        )

    # --- Content ---
    def get_message_content(self, message_id: str, *, access_token: Optional[str] = None) -> bytes:
        """Download the binary content (image, video, audio, file) sent by a user."""
        response = self._request(
            "GET",
            self._data_url(f"/v2/bot/message/{message_id}/content"),
            access_token=access_token,
        )
        return response.content

    retrieve_message_content = get_message_content

    def get_message_content_stream(
        self, message_id: str, *, access_token: Optional[str] = None
    ) -> Iterator[bytes]:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token is not None else None
        return stream(
            self._http,
            "GET",
            self._data_url(f"/v2/bot/message/{message_id}/content"),
            error_cls=LineAPIError,
            headers=headers,
        )

    # --- Quota and delivery statistics ---
    def get_target_limit_for_additional_messages(
        self, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call("GET", "/v2/bot/message/quota", access_token=access_token)

    def get_number_of_messages_sent_this_month(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", "/v2/bot/message/quota/consumption", access_token=access_token)

    def _get_number_of_sent_messages(
        self, kind: str, date: str, access_token: Optional[str]
    ) -> Any:
        return self._call(
            "GET",
            f"/v2/bot/message/delivery/{kind}",
            params={"date": date},
            access_token=access_token,
        )

    def get_number_of_sent_reply_messages(
        self, date: str, *, access_token: Optional[str] = None
    ) -> Any:
        """``date`` is ``yyyyMMdd`` in UTC+9."""
        return self._get_number_of_sent_messages("reply", date, access_token)

    def get_number_of_sent_push_messages(
        self, date: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._get_number_of_sent_messages("push", date, access_token)

    def get_number_of_sent_multicast_messages(
        self, date: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._get_number_of_sent_messages("multicast", date, access_token)

    def get_number_of_sent_broadcast_messages(
        self, date: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._get_number_of_sent_messages("broadcast", date, access_token)

    # --- Profiles ---
    def get_user_profile(
        self, user_id: str, *, access_token: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Return the user's profile, or ``None`` when LINE answers 404."""
        return self._get_or_none(f"/v2/bot/profile/{user_id}", access_token=access_token)

    def get_group_member_profile(
        self, group_id: str, user_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET", f"/v2/bot/group/{group_id}/member/{user_id}", access_token=access_token
        )

    def get_room_member_profile(
        self, room_id: str, user_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET", f"/v2/bot/room/{room_id}/member/{user_id}", access_token=access_token
        )

    # --- Groups and rooms ---
    def get_group_summary(self, group_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", f"/v2/bot/group/{group_id}/summary", access_token=access_token)

    def get_group_members_count(self, group_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call(
            "GET", f"/v2/bot/group/{group_id}/members/count", access_token=access_token
        )

    def get_room_members_count(self, room_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", f"/v2/bot/room/{room_id}/members/count", access_token=access_token)

    def get_group_member_ids(
        self, group_id: str, start: Optional[str] = None, *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """One page of member ids: ``{"memberIds": [...], "next": "..."}``."""
        return self._call(
            "GET",
            f"/v2/bot/group/{group_id}/members/ids",
            params=_compact({"start": start}),
            access_token=access_token,
        )

    def get_all_group_member_ids(
        self, group_id: str, *, access_token: Optional[str] = None
    ) -> List[str]:
        member_ids: List[str] = []
        start: Optional[str] = None
        while True:
            page = self.get_group_member_ids(group_id, start, access_token=access_token)
            member_ids.extend(page.get("memberIds", []))
            start = page.get("next")
            if not start:
                return member_ids

    def get_room_member_ids(
        self, room_id: str, start: Optional[str] = None, *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._call(
            "GET",
            f"/v2/bot/room/{room_id}/members/ids",
            params=_compact({"start": start}),
            access_token=access_token,
        )

    def get_all_room_member_ids(
        self, room_id: str, *, access_token: Optional[str] = None
    ) -> List[str]:
        member_ids: List[str] = []
        start: Optional[str] = None
        while True:
            page = self.get_room_member_ids(room_id, start, access_token=access_token)
            member_ids.extend(page.get("memberIds", []))
            start = page.get("next")
            if not start:
                return member_ids

    def leave_group(self, group_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("POST", f"/v2/bot/group/{group_id}/leave", access_token=access_token)

    def leave_room(self, room_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("POST", f"/v2/bot/room/{room_id}/leave", access_token=access_token)

    # --- Followers ---
    def get_bot_followers_ids(
        self,
        start: Optional[str] = None,
        *,
        limit: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """One page of follower ids: ``{"userIds": [...], "next": "..."}``."""
        return self._call(
            "GET",
            "/v2/bot/followers/ids",
            params=_compact({"start": start, "limit": limit}),
            access_token=access_token,
        )

    def get_all_bot_followers_ids(
        self, *, limit: Optional[int] = None, access_token: Optional[str] = None
    ) -> List[str]:
        user_ids: List[str] = []
        start: Optional[str] = None
        while True:
            page = self.get_bot_followers_ids(start, limit=limit, access_token=access_token)
            user_ids.extend(page.get("userIds", []))
            start = page.get("next")
            if not start:
                return user_ids

    # --- Rich menu ---
    def get_rich_menu_list(self, *, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._call("GET", "/v2/bot/richmenu/list", access_token=access_token)["richmenus"]

    def get_rich_menu(
        self, rich_menu_id: str, *, access_token: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_or_none(f"/v2/bot/richmenu/{rich_menu_id}", access_token=access_token)

    def create_rich_menu(
        self, rich_menu: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a rich menu; returns ``{"richMenuId": ...}``."""
        return self._call("POST", "/v2/bot/richmenu", json=rich_menu, access_token=access_token)

    def delete_rich_menu(self, rich_menu_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("DELETE", f"/v2/bot/richmenu/{rich_menu_id}", access_token=access_token)

    def get_linked_rich_menu(
        self, user_id: str, *, access_token: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_or_none(f"/v2/bot/user/{user_id}/richmenu", access_token=access_token)

    def link_rich_menu(
        self, user_id: str, rich_menu_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST", f"/v2/bot/user/{user_id}/richmenu/{rich_menu_id}", access_token=access_token
        )

    def unlink_rich_menu(self, user_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("DELETE", f"/v2/bot/user/{user_id}/richmenu", access_token=access_token)

    def get_default_rich_menu(
        self, *, access_token: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        return self._get_or_none("/v2/bot/user/all/richmenu", access_token=access_token)

    def set_default_rich_menu(
        self, rich_menu_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST", f"/v2/bot/user/all/richmenu/{rich_menu_id}", access_token=access_token
        )

    def delete_default_rich_menu(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("DELETE", "/v2/bot/user/all/richmenu", access_token=access_token)

    def link_rich_menu_to_multiple_users(
        self, rich_menu_id: str, user_ids: List[str], *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST",
            "/v2/bot/richmenu/bulk/link",
            json={"richMenuId": rich_menu_id, "userIds": user_ids},
            access_token=access_token,
        )

    def unlink_rich_menus_from_multiple_users(
        self, user_ids: List[str], *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST",
            "/v2/bot/richmenu/bulk/unlink",
            json={"userIds": user_ids},
            access_token=access_token,
        )

    def create_rich_menu_alias(
        self, rich_menu_id: str, rich_menu_alias_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST",
            "/v2/bot/richmenu/alias",
            json={"richMenuAliasId": rich_menu_alias_id, "richMenuId": rich_menu_id},
            access_token=access_token,
        )

    def update_rich_menu_alias(
        self, rich_menu_alias_id: str, rich_menu_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST",
            f"/v2/bot/richmenu/alias/{rich_menu_alias_id}",
            json={"richMenuId": rich_menu_id},
            access_token=access_token,
        )

    def delete_rich_menu_alias(
        self, rich_menu_alias_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "DELETE", f"/v2/bot/richmenu/alias/{rich_menu_alias_id}", access_token=access_token
        )

    def get_rich_menu_alias(
        self, rich_menu_alias_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET", f"/v2/bot/richmenu/alias/{rich_menu_alias_id}", access_token=access_token
        )

    def get_rich_menu_alias_list(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", "/v2/bot/richmenu/alias/list", access_token=access_token)

    def upload_rich_menu_image(
        self, rich_menu_id: str, image: bytes, *, access_token: Optional[str] = None
    ) -> Any:
        """Upload the rich menu image.

        LINE only accepts JPEG or PNG; the type is detected from the image
        bytes and anything else is rejected before a request is made.
        """
        mime = detect_image_mime(image)
        if mime not in ("image/jpeg", "image/png"):
            raise ValueError("Image must be `image/jpeg` or `image/png`")
        return self._call(
            "POST",
            self._data_url(f"/v2/bot/richmenu/{rich_menu_id}/content"),
            content=image,
            headers={"Content-Type": mime},
            access_token=access_token,
        )

    def download_rich_menu_image(
        self, rich_menu_id: str, *, access_token: Optional[str] = None
    ) -> Optional[bytes]:
        try:
            response = self._request(
                "GET",
                self._data_url(f"/v2/bot/richmenu/{rich_menu_id}/content"),
                access_token=access_token,
            )
        except LineAPIError as exc:
            if exc.status == 404:
                return None
            raise
        return response.content

    # --- Account link ---
    def issue_link_token(
        self, user_id: str, *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._call("POST", f"/v2/bot/user/{user_id}/linkToken", access_token=access_token)

    def get_link_token(self, user_id: str, *, access_token: Optional[str] = None) -> str:
        return self.issue_link_token(user_id, access_token=access_token)["linkToken"]

    # --- LIFF ---
    def get_liff_app_list(self, *, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._call("GET", "/liff/v1/apps", access_token=access_token)["apps"]

    def create_liff_app(
        self, view: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """Add a LIFF app; returns ``{"liffId": ...}``."""
        return self._call("POST", "/liff/v1/apps", json=view, access_token=access_token)

    def update_liff_app(
        self, liff_id: str, app: Dict[str, Any], *, access_token: Optional[str] = None
    ) -> Any:
        return self._call("PUT", f"/liff/v1/apps/{liff_id}", json=app, access_token=access_token)

    def delete_liff_app(self, liff_id: str, *, access_token: Optional[str] = None) -> Any:
        return self._call("DELETE", f"/liff/v1/apps/{liff_id}", access_token=access_token)

    # --- Bot info and webhook ---
    def get_bot_info(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", "/v2/bot/info", access_token=access_token)

    def get_webhook_endpoint_info(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", "/v2/bot/channel/webhook/endpoint", access_token=access_token)

    def set_webhook_endpoint_url(self, endpoint: str, *, access_token: Optional[str] = None) -> Any:
        return self._call(
            "PUT",
            "/v2/bot/channel/webhook/endpoint",
            json={"endpoint": endpoint},
            access_token=access_token,
        )

    def test_webhook_endpoint(
        self, endpoint: Optional[str] = None, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "POST",
            "/v2/bot/channel/webhook/test",
            json=_compact({"endpoint": endpoint}),
            access_token=access_token,
        )

    # --- Insight ---
    def get_number_of_message_deliveries(
        self, date: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET",
            "/v2/bot/insight/message/delivery",
            params={"date": date},
            access_token=access_token,
        )

    def get_number_of_followers(self, date: str, *, access_token: Optional[str] = None) -> Any:
        return self._call(
            "GET", "/v2/bot/insight/followers", params={"date": date}, access_token=access_token
        )

    def get_friend_demographics(self, *, access_token: Optional[str] = None) -> Any:
        return self._call("GET", "/v2/bot/insight/demographic", access_token=access_token)

    def get_user_interaction_statistics(
        self, request_id: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET",
            "/v2/bot/insight/message/event",
            params={"requestId": request_id},
            access_token=access_token,
        )

    # --- Audience ---
    def create_upload_audience_group(
        self,
        description: str,
        is_ifa_audience: bool,
        audiences: List[Dict[str, str]],
        *,
        upload_description: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = _compact(
            {
                "description": description,
                "isIfaAudience": is_ifa_audience,
                "audiences": audiences,
                "uploadDescription": upload_description,
            }
        )
        return self._call(
            "POST", "/v2/bot/audienceGroup/upload", json=body, access_token=access_token
        )

    def update_upload_audience_group(
        self,
        audience_group_id: int,
        audiences: List[Dict[str, str]],
        *,
        description: Optional[str] = None,
        upload_description: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Any:
        body = _compact(
            {
                "audienceGroupId": audience_group_id,
                "audiences": audiences,
                "description": description,
                "uploadDescription": upload_description,
            }
        )
        return self._call(
            "PUT", "/v2/bot/audienceGroup/upload", json=body, access_token=access_token
        )

    def _audience_file_fields(self, fields: Dict[str, Any]) -> Dict[str, str]:
        form: Dict[str, str] = {}
        for key, value in _compact(fields).items():
            form[key] = ("true" if value else "false") if isinstance(value, bool) else str(value)
        return form

    def create_upload_audience_group_by_file(
        self,
        description: str,
        is_ifa_audience: bool,
        file: bytes,
        *,
        upload_description: Optional[str] = None,
        filename: str = "audiences.txt",
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an audience group from a text file with one user id or IFA per line."""
        data = self._audience_file_fields(
            {
                "description": description,
                "isIfaAudience": is_ifa_audience,
                "uploadDescription": upload_description,
            }
        )
        return self._call(
            "POST",
            self._data_url("/v2/bot/audienceGroup/upload/byFile"),
            data=data,
            files={"file": (filename, file, "text/plain")},
            access_token=access_token,
        )

    def update_upload_audience_group_by_file(
        self,
        audience_group_id: int,
        file: bytes,
        *,
        upload_description: Optional[str] = None,
        filename: str = "audiences.txt",
        access_token: Optional[str] = None,
    ) -> Any:
        data = self._audience_file_fields(
            {"audienceGroupId": audience_group_id, "uploadDescription": upload_description}
        )
        return self._call(
            "PUT",
            self._data_url("/v2/bot/audienceGroup/upload/byFile"),
            data=data,
            files={"file": (filename, file, "text/plain")},
            access_token=access_token,
        )

    def create_click_audience_group(
        self,
        description: str,
        request_id: str,
        *,
        click_url: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = _compact(
            {"description": description, "requestId": request_id, "clickUrl": click_url}
        )
        return self._call(
            "POST", "/v2/bot/audienceGroup/click", json=body, access_token=access_token
        )

    def create_imp_audience_group(
        self, description: str, request_id: str, *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._call(
            "POST",
            "/v2/bot/audienceGroup/imp",
            json={"description": description, "requestId": request_id},
            access_token=access_token,
        )

    def set_description_audience_group(
        self, description: str, audience_group_id: int, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "PUT",
            f"/v2/bot/audienceGroup/{audience_group_id}/updateDescription",
            json={"description": description},
            access_token=access_token,
        )

    def activate_audience_group(
        self, audience_group_id: int, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "PUT", f"/v2/bot/audienceGroup/{audience_group_id}/activate", access_token=access_token
        )

    def delete_audience_group(
        self, audience_group_id: int, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "DELETE", f"/v2/bot/audienceGroup/{audience_group_id}", access_token=access_token
        )

    def get_audience_group(
        self, audience_group_id: int, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "GET", f"/v2/bot/audienceGroup/{audience_group_id}", access_token=access_token
        )

    def get_audience_groups(
        self,
        *,
        page: int = 1,
        description: Optional[str] = None,
        status: Optional[str] = None,
        size: Optional[int] = None,
        includes_external_public_groups: Optional[bool] = None,
        create_route: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = camelcase_keys(
            _compact(
                {
                    "page": page,
                    "description": description,
                    "status": AudienceGroupStatus(status).value if status else None,
                    "size": size,
                    "includes_external_public_groups": includes_external_public_groups,
                    "create_route": (
                        AudienceGroupCreateRoute(create_route).value if create_route else None
                    ),
                }
            )
        )
        return self._call(
            "GET", "/v2/bot/audienceGroup/list", params=params, access_token=access_token
        )

    def get_audience_group_authority_level(
        self, *, access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._call("GET", "/v2/bot/audienceGroup/authorityLevel", access_token=access_token)

    def change_audience_group_authority_level(
        self, authority_level: str, *, access_token: Optional[str] = None
    ) -> Any:
        return self._call(
            "PUT",
            "/v2/bot/audienceGroup/authorityLevel",
            json={"authorityLevel": AudienceGroupAuthorityLevel(authority_level).value},
            access_token=access_token,
        )


# Legacy upper-case name kept for existing callers
LINEClient = LineClient
