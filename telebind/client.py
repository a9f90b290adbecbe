"""TelegramClient -- transport and typed surface for the Telegram Bot API.

:meth:`TelegramClient.call` performs one authenticated ``POST`` to
``https://api.telegram.org/bot<token>/<method>`` with a JSON body, parses the
response envelope, and raises a :class:`~telebind.exceptions.TelegramError`
on failure.  Every typed endpoint method is a projection over it: build the
payload, call, validate ``result`` against the type registered in
:mod:`telebind.methods`.

HTTP calls use the ``requests`` library.  The client holds no mutable state
beyond its immutable token and base URL, so a single instance can be shared
between threads.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import BaseModel, ValidationError

from telebind.exceptions import NetworkFault, RemoteRejection
from telebind.methods import result_adapter
from telebind.models import (
    BotCommand,
    Chat,
    ChatMember,
    ChatPermissions,
    Envelope,
    File,
    InlineKeyboardMarkup,
    LabeledPrice,
    Message,
    MessageEntity,
    MessageId,
    Poll,
    ReplyMarkup,
    ShippingOption,
    Update,
    UpdateBatch,
    User,
    UserProfilePhotos,
    WebhookInfo,
)

_logger = logging.getLogger("telebind.client")

ChatId = Union[int, str]


def _serialize(value: Any) -> Any:
    """Convert *value* into JSON-ready data.

    Pydantic models are dumped by alias, ``None`` entries are dropped from
    mappings, and sequences are walked recursively.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class TelegramClient:
    """Client for the Telegram Bot API.

    Each public endpoint method corresponds to a Bot API method and returns
    the validated ``result`` payload.  Failures raise
    :class:`~telebind.exceptions.RemoteRejection` (``ok: false``) or
    :class:`~telebind.exceptions.NetworkFault` (transport or parse error).
    Nothing is retried at this layer.
    """

    _DEFAULT_TIMEOUT: int = 10
    _DEFAULT_API_URL: str = "https://api.telegram.org"

    def __init__(self, token: str, timeout: int = _DEFAULT_TIMEOUT, api_url: str = _DEFAULT_API_URL) -> None:
        """Create a new client for the bot identified by *token*.

        Args:
            token: Bot token issued by @BotFather.
            timeout: Default request timeout in seconds.
            api_url: Bot API server root, without the ``/bot<token>`` suffix.

        Raises:
            ValueError: If *token* is missing or empty.
        """
        if not isinstance(token, str) or not token.strip():
            raise ValueError("Telegram Bot Token is required")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._base_url = f"{self._api_url}/bot{token}"
        self._timeout = timeout

    @property
    def token(self) -> str:
        return self._token

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"TelegramClient(api_url={self._api_url!r})"

    # ------------------------------------------------------------------
    #  Transport
    # ------------------------------------------------------------------

    def call(self, method: str, params: Optional[Union[Dict[str, Any], BaseModel]] = None, *, timeout: Optional[float] = None) -> Envelope:
        """Invoke *method* once and return the parsed response envelope.

        Args:
            method: Bot API method name, e.g. ``"sendMessage"``.
            params: Request parameters; ``None`` values are omitted.  No body
                is sent when *params* is empty.
            timeout: Request timeout override in seconds.

        Raises:
            RemoteRejection: If the envelope's ``ok`` flag is false.
            NetworkFault: On transport failures or an unparseable body.
        """
        if not method:
            raise ValueError("method name is required")
        payload = _serialize(params) or None
        url = f"{self._base_url}/{method}"

        _logger.debug("Calling Bot API", extra={"api_endpoint": method})
        try:
            response = requests.post(url, json=payload, timeout=timeout or self._timeout)
            envelope = Envelope.model_validate(response.json())
        except (requests.RequestException, ValueError) as exc:
            # requests' JSONDecodeError and pydantic's ValidationError are both ValueErrors.
            _logger.error("Bot API request failed", extra={"api_endpoint": method, "error": str(exc)})
            raise NetworkFault(f"Network error: {exc}", parameters=payload, method=method) from exc

        if not envelope.ok:
            extra = envelope.parameters
            code = envelope.error_code if envelope.error_code is not None else response.status_code
            _logger.warning(
                "Bot API rejected request",
                extra={"api_endpoint": method, "error_code": code, "description": envelope.description},
            )
            raise RemoteRejection(
                envelope.description or "Unknown error",
                code=code,
                parameters=payload,
                method=method,
                retry_after=extra.retry_after if extra else None,
                migrate_to_chat_id=extra.migrate_to_chat_id if extra else None,
            )
        return envelope

    def _invoke(self, method: str, params: Optional[Dict[str, Any]] = None, *, timeout: Optional[float] = None) -> Any:
        """Call *method* and validate ``result`` against its registered type."""
        adapter = result_adapter(method)
        envelope = self.call(method, params, timeout=timeout)
        try:
            return adapter.validate_python(envelope.result)
        except ValidationError as exc:
            _logger.error("Unexpected result shape", extra={"api_endpoint": method, "error": str(exc)})
            raise NetworkFault(f"Network error: malformed {method} result", parameters=_serialize(params) or None, method=method) from exc

    # ------------------------------------------------------------------
    #  Files
    # ------------------------------------------------------------------

    def file_url(self, file_path: str) -> str:
        """Return the download URL for a :attr:`File.file_path`."""
        return f"{self._api_url}/file/bot{self._token}/{file_path.lstrip('/')}"

    def download_file(self, file_path: str, timeout: Optional[float] = None) -> bytes:
        """Download raw bytes from the Telegram file server.

        Raises:
            NetworkFault: If the HTTP status is not 2xx or the transfer fails.
        """
        try:
            response = requests.get(self.file_url(file_path), timeout=timeout or 30)
            response.raise_for_status()
        except requests.RequestException as exc:
            _logger.error("File download failed", extra={"api_endpoint": "downloadFile", "file_path": file_path, "error": str(exc)})
            raise NetworkFault(f"Network error: {exc}", parameters={"file_path": file_path}, method="downloadFile") from exc
        return response.content

    # ------------------------------------------------------------------
    #  Getting updates
    # ------------------------------------------------------------------

    def get_updates(self, offset: Optional[int] = None, limit: Optional[int] = None, timeout: Optional[int] = None, allowed_updates: Optional[List[str]] = None) -> UpdateBatch:
        """Receive incoming updates using long polling.

        The HTTP timeout is widened by *timeout* so the server can hold the
        request open for the full long-poll window.

        Updates are validated one at a time.  One that does not fit the
        models is logged and left out of the batch; its id still counts
        towards :attr:`UpdateBatch.last_update_id`.

        Raises:
            NetworkFault: If ``result`` is not a list.
        """
        payload = {"offset": offset, "limit": limit, "timeout": timeout, "allowed_updates": allowed_updates}
        envelope = self.call("getUpdates", payload, timeout=self._timeout + (timeout or 0))
        if not isinstance(envelope.result, list):
            _logger.error("Unexpected result shape", extra={"api_endpoint": "getUpdates", "error": "result is not a list"})
            raise NetworkFault("Network error: malformed getUpdates result", parameters=_serialize(payload) or None, method="getUpdates")

        batch = UpdateBatch()
        for item in envelope.result:
            update_id = item.get("update_id") if isinstance(item, dict) else None
            if isinstance(update_id, int) and not isinstance(update_id, bool):
                batch.last_update_id = update_id if batch.last_update_id is None else max(batch.last_update_id, update_id)
            try:
                batch.append(Update.model_validate(item))
            except ValidationError as exc:
                _logger.warning("Skipping malformed update", extra={"api_endpoint": "getUpdates", "update_id": update_id, "error": str(exc)})
        return batch

    def set_webhook(self, url: str, ip_address: Optional[str] = None, max_connections: Optional[int] = None, allowed_updates: Optional[List[str]] = None, drop_pending_updates: Optional[bool] = None, secret_token: Optional[str] = None) -> bool:
        """Specify a URL to receive incoming updates via an outgoing webhook."""
        return self._invoke("setWebhook", {"url": url, "ip_address": ip_address, "max_connections": max_connections, "allowed_updates": allowed_updates, "drop_pending_updates": drop_pending_updates, "secret_token": secret_token})

    def delete_webhook(self, drop_pending_updates: Optional[bool] = None) -> bool:
        """Remove webhook integration to switch back to :meth:`get_updates`."""
        return self._invoke("deleteWebhook", {"drop_pending_updates": drop_pending_updates})

    def get_webhook_info(self) -> WebhookInfo:
        return self._invoke("getWebhookInfo")

    # ------------------------------------------------------------------
    #  Bot lifecycle
    # ------------------------------------------------------------------

    def get_me(self) -> User:
        """Test the bot's auth token. Returns basic information about the bot."""
        return self._invoke("getMe")

    def log_out(self) -> bool:
        return self._invoke("logOut")

    def close(self) -> bool:
        """Close the bot instance before moving it from one local server to another."""
        return self._invoke("close")

    # ------------------------------------------------------------------
    #  Sending messages
    # ------------------------------------------------------------------

    def send_message(self, chat_id: ChatId, text: str, parse_mode: Optional[str] = None, entities: Optional[List[MessageEntity]] = None, message_thread_id: Optional[int] = None, link_preview_options: Optional[Dict[str, Any]] = None, disable_notification: Optional[bool] = None, protect_content: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a text message. On success, the sent Message is returned."""
        return self._invoke("sendMessage", {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
            "entities": entities,
            "message_thread_id": message_thread_id,
            "link_preview_options": link_preview_options,
            "disable_notification": disable_notification,
            "protect_content": protect_content,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def forward_message(self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, message_thread_id: Optional[int] = None, disable_notification: Optional[bool] = None, protect_content: Optional[bool] = None) -> Message:
        """Forward a message of any kind."""
        return self._invoke("forwardMessage", {
            "chat_id": chat_id,
            "from_chat_id": from_chat_id,
            "message_id": message_id,
            "message_thread_id": message_thread_id,
            "disable_notification": disable_notification,
            "protect_content": protect_content,
        })

    def copy_message(self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, caption: Optional[str] = None, parse_mode: Optional[str] = None, caption_entities: Optional[List[MessageEntity]] = None, disable_notification: Optional[bool] = None, protect_content: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> MessageId:
        """Copy a message without a link to the original. Returns the new MessageId."""
        return self._invoke("copyMessage", {
            "chat_id": chat_id,
            "from_chat_id": from_chat_id,
            "message_id": message_id,
            "caption": caption,
            "parse_mode": parse_mode,
            "caption_entities": caption_entities,
            "disable_notification": disable_notification,
            "protect_content": protect_content,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def _send_media(self, method: str, chat_id: ChatId, field: str, media: str, caption: Optional[str], parse_mode: Optional[str], disable_notification: Optional[bool], reply_parameters: Optional[Dict[str, Any]], reply_markup: Optional[ReplyMarkup], **extra: Any) -> Message:
        # Media is referenced by file_id or HTTP URL; multipart upload is not supported.
        payload = {
            "chat_id": chat_id,
            field: media,
            "caption": caption,
            "parse_mode": parse_mode,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        }
        payload.update(extra)
        return self._invoke(method, payload)

    def send_photo(self, chat_id: ChatId, photo: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, has_spoiler: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a photo by ``file_id`` or URL."""
        return self._send_media("sendPhoto", chat_id, "photo", photo, caption, parse_mode, disable_notification, reply_parameters, reply_markup, has_spoiler=has_spoiler)

    def send_audio(self, chat_id: ChatId, audio: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, performer: Optional[str] = None, title: Optional[str] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send an audio file to be shown in the music player."""
        return self._send_media("sendAudio", chat_id, "audio", audio, caption, parse_mode, disable_notification, reply_parameters, reply_markup, duration=duration, performer=performer, title=title)

    def send_document(self, chat_id: ChatId, document: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, disable_content_type_detection: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._send_media("sendDocument", chat_id, "document", document, caption, parse_mode, disable_notification, reply_parameters, reply_markup, disable_content_type_detection=disable_content_type_detection)

    def send_video(self, chat_id: ChatId, video: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, width: Optional[int] = None, height: Optional[int] = None, supports_streaming: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._send_media("sendVideo", chat_id, "video", video, caption, parse_mode, disable_notification, reply_parameters, reply_markup, duration=duration, width=width, height=height, supports_streaming=supports_streaming)

    def send_animation(self, chat_id: ChatId, animation: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, width: Optional[int] = None, height: Optional[int] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a GIF or H.264/MPEG-4 AVC video without sound."""
        return self._send_media("sendAnimation", chat_id, "animation", animation, caption, parse_mode, disable_notification, reply_parameters, reply_markup, duration=duration, width=width, height=height)

    def send_voice(self, chat_id: ChatId, voice: str, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._send_media("sendVoice", chat_id, "voice", voice, caption, parse_mode, disable_notification, reply_parameters, reply_markup, duration=duration)

    def send_video_note(self, chat_id: ChatId, video_note: str, duration: Optional[int] = None, length: Optional[int] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._send_media("sendVideoNote", chat_id, "video_note", video_note, None, None, disable_notification, reply_parameters, reply_markup, duration=duration, length=length)

    def send_media_group(self, chat_id: ChatId, media: List[Dict[str, Any]], disable_notification: Optional[bool] = None, protect_content: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None) -> List[Message]:
        """Send 2-10 photos, videos, documents or audios as an album."""
        return self._invoke("sendMediaGroup", {
            "chat_id": chat_id,
            "media": media,
            "disable_notification": disable_notification,
            "protect_content": protect_content,
            "reply_parameters": reply_parameters,
        })

    def send_location(self, chat_id: ChatId, latitude: float, longitude: float, horizontal_accuracy: Optional[float] = None, live_period: Optional[int] = None, heading: Optional[int] = None, proximity_alert_radius: Optional[int] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._invoke("sendLocation", {
            "chat_id": chat_id,
            "latitude": latitude,
            "longitude": longitude,
            "horizontal_accuracy": horizontal_accuracy,
            "live_period": live_period,
            "heading": heading,
            "proximity_alert_radius": proximity_alert_radius,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def edit_message_live_location(self, latitude: float, longitude: float, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, horizontal_accuracy: Optional[float] = None, heading: Optional[int] = None, proximity_alert_radius: Optional[int] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Union[Message, bool]:
        """Edit a live location message. Returns the Message, or True for inline messages."""
        return self._invoke("editMessageLiveLocation", {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "latitude": latitude,
            "longitude": longitude,
            "horizontal_accuracy": horizontal_accuracy,
            "heading": heading,
            "proximity_alert_radius": proximity_alert_radius,
            "reply_markup": reply_markup,
        })

    def stop_message_live_location(self, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Union[Message, bool]:
        return self._invoke("stopMessageLiveLocation", {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "reply_markup": reply_markup,
        })

    def send_venue(self, chat_id: ChatId, latitude: float, longitude: float, title: str, address: str, foursquare_id: Optional[str] = None, google_place_id: Optional[str] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._invoke("sendVenue", {
            "chat_id": chat_id,
            "latitude": latitude,
            "longitude": longitude,
            "title": title,
            "address": address,
            "foursquare_id": foursquare_id,
            "google_place_id": google_place_id,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def send_contact(self, chat_id: ChatId, phone_number: str, first_name: str, last_name: Optional[str] = None, vcard: Optional[str] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._invoke("sendContact", {
            "chat_id": chat_id,
            "phone_number": phone_number,
            "first_name": first_name,
            "last_name": last_name,
            "vcard": vcard,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def send_poll(self, chat_id: ChatId, question: str, options: List[str], is_anonymous: Optional[bool] = None, type: Optional[str] = None, allows_multiple_answers: Optional[bool] = None, correct_option_id: Optional[int] = None, explanation: Optional[str] = None, open_period: Optional[int] = None, close_date: Optional[int] = None, is_closed: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a native poll. Each option is sent as ``{"text": option}``."""
        return self._invoke("sendPoll", {
            "chat_id": chat_id,
            "question": question,
            "options": [{"text": option} for option in options],
            "is_anonymous": is_anonymous,
            "type": type,
            "allows_multiple_answers": allows_multiple_answers,
            "correct_option_id": correct_option_id,
            "explanation": explanation,
            "open_period": open_period,
            "close_date": close_date,
            "is_closed": is_closed,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def send_dice(self, chat_id: ChatId, emoji: Optional[str] = None, disable_notification: Optional[bool] = None, reply_parameters: Optional[Dict[str, Any]] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        return self._invoke("sendDice", {
            "chat_id": chat_id,
            "emoji": emoji,
            "disable_notification": disable_notification,
            "reply_parameters": reply_parameters,
            "reply_markup": reply_markup,
        })

    def send_chat_action(self, chat_id: ChatId, action: str, message_thread_id: Optional[int] = None) -> bool:
        """Show a status such as ``"typing"`` for up to 5 seconds."""
        return self._invoke("sendChatAction", {"chat_id": chat_id, "action": action, "message_thread_id": message_thread_id})

    def get_user_profile_photos(self, user_id: int, offset: Optional[int] = None, limit: Optional[int] = None) -> UserProfilePhotos:
        return self._invoke("getUserProfilePhotos", {"user_id": user_id, "offset": offset, "limit": limit})

    def get_file(self, file_id: str) -> File:
        """Resolve a ``file_id``; download the result with :meth:`download_file`."""
        return self._invoke("getFile", {"file_id": file_id})

    # ------------------------------------------------------------------
    #  Chat administration
    # ------------------------------------------------------------------

    def ban_chat_member(self, chat_id: ChatId, user_id: int, until_date: Optional[int] = None, revoke_messages: Optional[bool] = None) -> bool:
        """Ban a user in a group, supergroup or channel."""
        return self._invoke("banChatMember", {"chat_id": chat_id, "user_id": user_id, "until_date": until_date, "revoke_messages": revoke_messages})

    def unban_chat_member(self, chat_id: ChatId, user_id: int, only_if_banned: Optional[bool] = None) -> bool:
        return self._invoke("unbanChatMember", {"chat_id": chat_id, "user_id": user_id, "only_if_banned": only_if_banned})

    def restrict_chat_member(self, chat_id: ChatId, user_id: int, permissions: ChatPermissions, use_independent_chat_permissions: Optional[bool] = None, until_date: Optional[int] = None) -> bool:
        return self._invoke("restrictChatMember", {
            "chat_id": chat_id,
            "user_id": user_id,
            "permissions": permissions,
            "use_independent_chat_permissions": use_independent_chat_permissions,
            "until_date": until_date,
        })

    def promote_chat_member(self, chat_id: ChatId, user_id: int, **rights: Optional[bool]) -> bool:
        """Promote or demote a user; pass rights such as ``can_delete_messages=True``."""
        return self._invoke("promoteChatMember", {"chat_id": chat_id, "user_id": user_id, **rights})

    def export_chat_invite_link(self, chat_id: ChatId) -> str:
        return self._invoke("exportChatInviteLink", {"chat_id": chat_id})

    def pin_chat_message(self, chat_id: ChatId, message_id: int, disable_notification: Optional[bool] = None) -> bool:
        return self._invoke("pinChatMessage", {"chat_id": chat_id, "message_id": message_id, "disable_notification": disable_notification})

    def unpin_chat_message(self, chat_id: ChatId, message_id: Optional[int] = None) -> bool:
        return self._invoke("unpinChatMessage", {"chat_id": chat_id, "message_id": message_id})

    def leave_chat(self, chat_id: ChatId) -> bool:
        return self._invoke("leaveChat", {"chat_id": chat_id})

    def get_chat(self, chat_id: ChatId) -> Chat:
        return self._invoke("getChat", {"chat_id": chat_id})

    def get_chat_administrators(self, chat_id: ChatId) -> List[ChatMember]:
        return self._invoke("getChatAdministrators", {"chat_id": chat_id})

    def get_chat_member_count(self, chat_id: ChatId) -> int:
        return self._invoke("getChatMemberCount", {"chat_id": chat_id})

    def get_chat_member(self, chat_id: ChatId, user_id: int) -> ChatMember:
        return self._invoke("getChatMember", {"chat_id": chat_id, "user_id": user_id})

    def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None, show_alert: Optional[bool] = None, url: Optional[str] = None, cache_time: Optional[int] = None) -> bool:
        """Acknowledge a callback query so the client's spinner disappears."""
        return self._invoke("answerCallbackQuery", {
            "callback_query_id": callback_query_id,
            "text": text,
            "show_alert": show_alert,
            "url": url,
            "cache_time": cache_time,
        })

    def set_my_commands(self, commands: List[BotCommand], scope: Optional[Dict[str, Any]] = None, language_code: Optional[str] = None) -> bool:
        return self._invoke("setMyCommands", {"commands": commands, "scope": scope, "language_code": language_code})

    def get_my_commands(self, scope: Optional[Dict[str, Any]] = None, language_code: Optional[str] = None) -> List[BotCommand]:
        return self._invoke("getMyCommands", {"scope": scope, "language_code": language_code})

    def delete_my_commands(self, scope: Optional[Dict[str, Any]] = None, language_code: Optional[str] = None) -> bool:
        return self._invoke("deleteMyCommands", {"scope": scope, "language_code": language_code})

    # ------------------------------------------------------------------
    #  Updating messages
    # ------------------------------------------------------------------

    def edit_message_text(self, text: str, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, parse_mode: Optional[str] = None, entities: Optional[List[MessageEntity]] = None, link_preview_options: Optional[Dict[str, Any]] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Union[Message, bool]:
        """Edit a text or game message. Returns the Message, or True for inline messages."""
        return self._invoke("editMessageText", {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "text": text,
            "parse_mode": parse_mode,
            "entities": entities,
            "link_preview_options": link_preview_options,
            "reply_markup": reply_markup,
        })

    def edit_message_caption(self, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, caption: Optional[str] = None, parse_mode: Optional[str] = None, caption_entities: Optional[List[MessageEntity]] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Union[Message, bool]:
        return self._invoke("editMessageCaption", {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "caption": caption,
            "parse_mode": parse_mode,
            "caption_entities": caption_entities,
            "reply_markup": reply_markup,
        })

    def edit_message_reply_markup(self, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Union[Message, bool]:
        """Replace only the inline keyboard of a message."""
        return self._invoke("editMessageReplyMarkup", {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "reply_markup": reply_markup,
        })

    def stop_poll(self, chat_id: ChatId, message_id: int, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Poll:
        return self._invoke("stopPoll", {"chat_id": chat_id, "message_id": message_id, "reply_markup": reply_markup})

    def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        """Delete a message, including service messages. Messages older than 48 hours cannot be deleted."""
        return self._invoke("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    # ------------------------------------------------------------------
    #  Inline mode
    # ------------------------------------------------------------------

    def answer_inline_query(self, inline_query_id: str, results: List[Dict[str, Any]], cache_time: Optional[int] = None, is_personal: Optional[bool] = None, next_offset: Optional[str] = None, button: Optional[Dict[str, Any]] = None) -> bool:
        """Send answers to an inline query. At most 50 results are allowed."""
        return self._invoke("answerInlineQuery", {
            "inline_query_id": inline_query_id,
            "results": results,
            "cache_time": cache_time,
            "is_personal": is_personal,
            "next_offset": next_offset,
            "button": button,
        })

    # ------------------------------------------------------------------
    #  Payments
    # ------------------------------------------------------------------

    def send_invoice(self, chat_id: ChatId, title: str, description: str, payload: str, currency: str, prices: List[LabeledPrice], provider_token: Optional[str] = None, max_tip_amount: Optional[int] = None, start_parameter: Optional[str] = None, photo_url: Optional[str] = None, need_name: Optional[bool] = None, need_email: Optional[bool] = None, need_shipping_address: Optional[bool] = None, is_flexible: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_markup: Optional[InlineKeyboardMarkup] = None) -> Message:
        return self._invoke("sendInvoice", {
            "chat_id": chat_id,
            "title": title,
            "description": description,
            "payload": payload,
            "currency": currency,
            "prices": prices,
            "provider_token": provider_token,
            "max_tip_amount": max_tip_amount,
            "start_parameter": start_parameter,
            "photo_url": photo_url,
            "need_name": need_name,
            "need_email": need_email,
            "need_shipping_address": need_shipping_address,
            "is_flexible": is_flexible,
            "disable_notification": disable_notification,
            "reply_markup": reply_markup,
        })

    def create_invoice_link(self, title: str, description: str, payload: str, currency: str, prices: List[LabeledPrice], provider_token: Optional[str] = None, max_tip_amount: Optional[int] = None, photo_url: Optional[str] = None, need_name: Optional[bool] = None, need_email: Optional[bool] = None, is_flexible: Optional[bool] = None) -> str:
        """Create a link for an invoice. Returns the created invoice link."""
        return self._invoke("createInvoiceLink", {
            "title": title,
            "description": description,
            "payload": payload,
            "currency": currency,
            "prices": prices,
            "provider_token": provider_token,
            "max_tip_amount": max_tip_amount,
            "photo_url": photo_url,
            "need_name": need_name,
            "need_email": need_email,
            "is_flexible": is_flexible,
        })

    def answer_shipping_query(self, shipping_query_id: str, ok: bool, shipping_options: Optional[List[ShippingOption]] = None, error_message: Optional[str] = None) -> bool:
        return self._invoke("answerShippingQuery", {
            "shipping_query_id": shipping_query_id,
            "ok": ok,
            "shipping_options": shipping_options,
            "error_message": error_message,
        })

    def answer_pre_checkout_query(self, pre_checkout_query_id: str, ok: bool, error_message: Optional[str] = None) -> bool:
        """Respond to a pre-checkout query within 10 seconds."""
        return self._invoke("answerPreCheckoutQuery", {
            "pre_checkout_query_id": pre_checkout_query_id,
            "ok": ok,
            "error_message": error_message,
        })
