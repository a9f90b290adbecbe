"""Table of every remote method the client exposes.

Each entry names the Bot API method and the type its ``result`` payload is
validated against.  :class:`~telebind.client.TelegramClient` looks results up
here, so adding an endpoint means adding a row and a thin wrapper method.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, NamedTuple, Union

from pydantic import TypeAdapter

from telebind.models import (
    BotCommand,
    Chat,
    ChatMember,
    File,
    Message,
    MessageId,
    Poll,
    Update,
    User,
    UserProfilePhotos,
    WebhookInfo,
)


class ApiMethod(NamedTuple):
    """One row of the method table."""

    name: str
    result: Any


# Editing methods return the edited Message, or True for inline messages.
_EditResult = Union[Message, bool]

METHODS: dict[str, ApiMethod] = {
    m.name: m
    for m in (
        # Getting updates
        ApiMethod("getUpdates", List[Update]),
        ApiMethod("setWebhook", bool),
        ApiMethod("deleteWebhook", bool),
        ApiMethod("getWebhookInfo", WebhookInfo),
        # Bot lifecycle
        ApiMethod("getMe", User),
        ApiMethod("logOut", bool),
        ApiMethod("close", bool),
        # Sending
        ApiMethod("sendMessage", Message),
        ApiMethod("forwardMessage", Message),
        ApiMethod("copyMessage", MessageId),
        ApiMethod("sendPhoto", Message),
        ApiMethod("sendAudio", Message),
        ApiMethod("sendDocument", Message),
        ApiMethod("sendVideo", Message),
        ApiMethod("sendAnimation", Message),
        ApiMethod("sendVoice", Message),
        ApiMethod("sendVideoNote", Message),
        ApiMethod("sendMediaGroup", List[Message]),
        ApiMethod("sendLocation", Message),
        ApiMethod("editMessageLiveLocation", _EditResult),
        ApiMethod("stopMessageLiveLocation", _EditResult),
        ApiMethod("sendVenue", Message),
        ApiMethod("sendContact", Message),
        ApiMethod("sendPoll", Message),
        ApiMethod("sendDice", Message),
        ApiMethod("sendChatAction", bool),
        ApiMethod("getUserProfilePhotos", UserProfilePhotos),
        ApiMethod("getFile", File),
        # Chat administration
        ApiMethod("banChatMember", bool),
        ApiMethod("unbanChatMember", bool),
        ApiMethod("restrictChatMember", bool),
        ApiMethod("promoteChatMember", bool),
        ApiMethod("exportChatInviteLink", str),
        ApiMethod("pinChatMessage", bool),
        ApiMethod("unpinChatMessage", bool),
        ApiMethod("leaveChat", bool),
        ApiMethod("getChat", Chat),
        ApiMethod("getChatAdministrators", List[ChatMember]),
        ApiMethod("getChatMemberCount", int),
        ApiMethod("getChatMember", ChatMember),
        ApiMethod("answerCallbackQuery", bool),
        ApiMethod("setMyCommands", bool),
        ApiMethod("getMyCommands", List[BotCommand]),
        ApiMethod("deleteMyCommands", bool),
        # Updating messages
        ApiMethod("editMessageText", _EditResult),
        ApiMethod("editMessageCaption", _EditResult),
        ApiMethod("editMessageReplyMarkup", _EditResult),
        ApiMethod("stopPoll", Poll),
        ApiMethod("deleteMessage", bool),
        # Inline mode
        ApiMethod("answerInlineQuery", bool),
        # Payments
        ApiMethod("sendInvoice", Message),
        ApiMethod("createInvoiceLink", str),
        ApiMethod("answerShippingQuery", bool),
        ApiMethod("answerPreCheckoutQuery", bool),
    )
}


@lru_cache(maxsize=None)
def result_adapter(name: str) -> TypeAdapter:
    """Return the cached :class:`TypeAdapter` for *name*'s result type.

    Raises:
        KeyError: If *name* is not a known method.
    """
    return TypeAdapter(METHODS[name].result)
