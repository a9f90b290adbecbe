"""Pydantic data models for the Telegram Bot API.

Every class corresponds to an object documented at
https://core.telegram.org/bots/api#available-types.  Unknown fields are kept
(``extra="allow"``) so a payload survives a validate/dump cycle even when the
API grows new fields this binding does not yet name.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TelegramObject(BaseModel):
    """Base class for every Telegram object."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ── Envelope ─────────────────────────────────────────────────────────────────


class ResponseParameters(TelegramObject):
    """Describes why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None


class Envelope(TelegramObject):
    """Uniform wrapper around every Bot API response.

    ``ok`` false implies ``result`` is absent and ``description`` explains the
    failure; ``ok`` true implies ``result`` holds the method's payload.
    """

    ok: bool
    result: Any = None
    error_code: Optional[int] = None
    description: Optional[str] = None
    parameters: Optional[ResponseParameters] = None


# ── Users and chats ──────────────────────────────────────────────────────────


class User(TelegramObject):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    is_premium: Optional[bool] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None


class ChatPhoto(TelegramObject):
    small_file_id: str
    small_file_unique_id: str
    big_file_id: str
    big_file_unique_id: str


class ChatPermissions(TelegramObject):
    """Actions that a non-administrator user is allowed to take in a chat."""

    can_send_messages: Optional[bool] = None
    can_send_audios: Optional[bool] = None
    can_send_documents: Optional[bool] = None
    can_send_photos: Optional[bool] = None
    can_send_videos: Optional[bool] = None
    can_send_video_notes: Optional[bool] = None
    can_send_voice_notes: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    can_manage_topics: Optional[bool] = None


class Chat(TelegramObject):
    """This object represents a chat.

    ``getChat`` returns the extended form; fields beyond the ones named here
    are preserved as extras.
    """

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None
    photo: Optional[ChatPhoto] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    invite_link: Optional[str] = None
    permissions: Optional[ChatPermissions] = None


class ChatMember(TelegramObject):
    """Information about one member of a chat.

    The API returns one of six shapes keyed by ``status`` (``creator``,
    ``administrator``, ``member``, ``restricted``, ``left``, ``kicked``);
    status-specific fields are kept as extras.
    """

    status: str
    user: User
    is_anonymous: Optional[bool] = None
    custom_title: Optional[str] = None
    until_date: Optional[int] = None


class ChatInviteLink(TelegramObject):
    invite_link: str
    creator: User
    creates_join_request: bool
    is_primary: bool
    is_revoked: bool
    name: Optional[str] = None
    expire_date: Optional[int] = None
    member_limit: Optional[int] = None
    pending_join_request_count: Optional[int] = None


class ChatMemberUpdated(TelegramObject):
    """Changes in the status of a chat member."""

    chat: Chat
    from_field: User = Field(..., alias="from")
    date: int
    old_chat_member: ChatMember
    new_chat_member: ChatMember
    invite_link: Optional[ChatInviteLink] = None


class ChatJoinRequest(TelegramObject):
    """A join request sent to a chat."""

    chat: Chat
    from_field: User = Field(..., alias="from")
    user_chat_id: int
    date: int
    bio: Optional[str] = None
    invite_link: Optional[ChatInviteLink] = None


# ── Media ────────────────────────────────────────────────────────────────────


class PhotoSize(TelegramObject):
    """One size of a photo or a file / sticker thumbnail."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None


class Animation(TelegramObject):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Audio(TelegramObject):
    file_id: str
    file_unique_id: str
    duration: int
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    thumbnail: Optional[PhotoSize] = None


class Document(TelegramObject):
    file_id: str
    file_unique_id: str
    thumbnail: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Video(TelegramObject):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class VideoNote(TelegramObject):
    file_id: str
    file_unique_id: str
    length: int
    duration: int
    thumbnail: Optional[PhotoSize] = None
    file_size: Optional[int] = None


class Voice(TelegramObject):
    file_id: str
    file_unique_id: str
    duration: int
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Sticker(TelegramObject):
    file_id: str
    file_unique_id: str
    type: str
    width: int
    height: int
    is_animated: bool
    is_video: bool
    thumbnail: Optional[PhotoSize] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    file_size: Optional[int] = None


class File(TelegramObject):
    """A file ready to be downloaded via :meth:`TelegramClient.download_file`."""

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None


class UserProfilePhotos(TelegramObject):
    total_count: int
    photos: List[List[PhotoSize]]


# ── Message content ──────────────────────────────────────────────────────────


class MessageEntity(TelegramObject):
    """One special entity in a text message: hashtag, username, URL, etc."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional[User] = None
    language: Optional[str] = None
    custom_emoji_id: Optional[str] = None


class Contact(TelegramObject):
    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    user_id: Optional[int] = None
    vcard: Optional[str] = None


class Dice(TelegramObject):
    emoji: str
    value: int


class Location(TelegramObject):
    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None


class Venue(TelegramObject):
    location: Location
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None
    google_place_id: Optional[str] = None
    google_place_type: Optional[str] = None


class PollOption(TelegramObject):
    text: str
    voter_count: int


class Poll(TelegramObject):
    """Information about a poll."""

    id: str
    question: str
    options: List[PollOption]
    total_voter_count: int
    is_closed: bool
    is_anonymous: bool
    type: str
    allows_multiple_answers: bool
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None


class PollAnswer(TelegramObject):
    """An answer of a user in a non-anonymous poll."""

    poll_id: str
    option_ids: List[int]
    user: Optional[User] = None
    voter_chat: Optional[Chat] = None


# ── Keyboards ────────────────────────────────────────────────────────────────


class LoginUrl(TelegramObject):
    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None


class InlineKeyboardButton(TelegramObject):
    """One button of an inline keyboard. Exactly one optional field must be used."""

    text: str
    url: Optional[str] = None
    callback_data: Optional[str] = None
    login_url: Optional[LoginUrl] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    pay: Optional[bool] = None


class InlineKeyboardMarkup(TelegramObject):
    inline_keyboard: List[List[InlineKeyboardButton]]


class KeyboardButton(TelegramObject):
    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None


class ReplyKeyboardMarkup(TelegramObject):
    keyboard: List[List[KeyboardButton]]
    is_persistent: Optional[bool] = None
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None


class ReplyKeyboardRemove(TelegramObject):
    remove_keyboard: bool = True
    selective: Optional[bool] = None


class ForceReply(TelegramObject):
    force_reply: bool = True
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None


ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply]


class BotCommand(TelegramObject):
    command: str
    description: str


# ── Payments ─────────────────────────────────────────────────────────────────


class LabeledPrice(TelegramObject):
    label: str
    amount: int


class ShippingAddress(TelegramObject):
    country_code: str
    state: str
    city: str
    street_line1: str
    street_line2: str
    post_code: str


class OrderInfo(TelegramObject):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None


class ShippingOption(TelegramObject):
    id: str
    title: str
    prices: List[LabeledPrice]


class ShippingQuery(TelegramObject):
    id: str
    from_field: User = Field(..., alias="from")
    invoice_payload: str
    shipping_address: ShippingAddress


class PreCheckoutQuery(TelegramObject):
    id: str
    from_field: User = Field(..., alias="from")
    currency: str
    total_amount: int
    invoice_payload: str
    shipping_option_id: Optional[str] = None
    order_info: Optional[OrderInfo] = None


# ── Messages ─────────────────────────────────────────────────────────────────


class MessageId(TelegramObject):
    message_id: int


class Message(TelegramObject):
    """This object represents a message."""

    message_id: int
    date: int
    chat: Chat
    message_thread_id: Optional[int] = None
    from_field: Optional[User] = Field(None, alias="from")
    sender_chat: Optional[Chat] = None
    reply_to_message: Optional[Message] = None
    via_bot: Optional[User] = None
    edit_date: Optional[int] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None
    text: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    animation: Optional[Animation] = None
    audio: Optional[Audio] = None
    document: Optional[Document] = None
    photo: Optional[List[PhotoSize]] = None
    sticker: Optional[Sticker] = None
    video: Optional[Video] = None
    video_note: Optional[VideoNote] = None
    voice: Optional[Voice] = None
    caption: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    contact: Optional[Contact] = None
    dice: Optional[Dice] = None
    poll: Optional[Poll] = None
    venue: Optional[Venue] = None
    location: Optional[Location] = None
    new_chat_members: Optional[List[User]] = None
    left_chat_member: Optional[User] = None
    new_chat_title: Optional[str] = None
    pinned_message: Optional[Message] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None


class CallbackQuery(TelegramObject):
    """An incoming callback query from a callback button in an inline keyboard."""

    id: str
    from_field: User = Field(..., alias="from")
    chat_instance: str
    message: Optional[Message] = None
    inline_message_id: Optional[str] = None
    data: Optional[str] = None
    game_short_name: Optional[str] = None


class InlineQuery(TelegramObject):
    """An incoming inline query."""

    id: str
    from_field: User = Field(..., alias="from")
    query: str
    offset: str
    chat_type: Optional[str] = None
    location: Optional[Location] = None


class ChosenInlineResult(TelegramObject):
    result_id: str
    from_field: User = Field(..., alias="from")
    query: str
    location: Optional[Location] = None
    inline_message_id: Optional[str] = None


class MessageReactionUpdated(TelegramObject):
    """A change of a reaction on a message performed by a user."""

    chat: Chat
    message_id: int
    date: int
    old_reaction: List[dict]
    new_reaction: List[dict]
    user: Optional[User] = None
    actor_chat: Optional[Chat] = None


class WebhookInfo(TelegramObject):
    """Current status of a webhook."""

    url: str
    has_custom_certificate: bool
    pending_update_count: int
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None


# ── Updates ──────────────────────────────────────────────────────────────────


UPDATE_TYPES: tuple[str, ...] = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "business_message",
    "edited_business_message",
    "message_reaction",
    "inline_query",
    "chosen_inline_result",
    "callback_query",
    "shipping_query",
    "pre_checkout_query",
    "poll",
    "poll_answer",
    "my_chat_member",
    "chat_member",
    "chat_join_request",
)


class Update(TelegramObject):
    """An incoming update.

    At most **one** variant field is populated per update.  :attr:`kind`
    names it and :attr:`payload` returns its value, so handlers can switch on
    a single tag instead of probing every optional field.  Variants this
    binding does not model (newer API additions) arrive as extras and are
    reported by :attr:`kind` under their wire name.
    """

    update_id: int
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None
    business_message: Optional[Message] = None
    edited_business_message: Optional[Message] = None
    message_reaction: Optional[MessageReactionUpdated] = None
    inline_query: Optional[InlineQuery] = None
    chosen_inline_result: Optional[ChosenInlineResult] = None
    callback_query: Optional[CallbackQuery] = None
    shipping_query: Optional[ShippingQuery] = None
    pre_checkout_query: Optional[PreCheckoutQuery] = None
    poll: Optional[Poll] = None
    poll_answer: Optional[PollAnswer] = None
    my_chat_member: Optional[ChatMemberUpdated] = None
    chat_member: Optional[ChatMemberUpdated] = None
    chat_join_request: Optional[ChatJoinRequest] = None

    @model_validator(mode="after")
    def _single_variant(self) -> Update:
        populated = self._populated()
        if len(populated) > 1:
            raise ValueError(f"update {self.update_id} has more than one variant: {', '.join(populated)}")
        return self

    def _populated(self) -> list[str]:
        names = [name for name in UPDATE_TYPES if getattr(self, name) is not None]
        names.extend(key for key, value in (self.model_extra or {}).items() if value is not None)
        return names

    @property
    def kind(self) -> Optional[str]:
        """Name of the populated variant, or ``None`` for an empty update."""
        populated = self._populated()
        return populated[0] if populated else None

    @property
    def payload(self) -> Any:
        """Value of the populated variant, or ``None``."""
        kind = self.kind
        if kind is None:
            return None
        if kind in UPDATE_TYPES:
            return getattr(self, kind)
        return (self.model_extra or {})[kind]


class UpdateBatch(list):
    """Updates returned by one ``getUpdates`` call.

    Entries that fail validation are left out, but :attr:`last_update_id`
    still counts them, so a poller can confirm past an update it cannot parse.
    """

    def __init__(self, updates: Iterable[Update] = (), last_update_id: Optional[int] = None) -> None:
        super().__init__(updates)
        self.last_update_id = last_update_id
