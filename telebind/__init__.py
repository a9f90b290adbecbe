"""telebind -- typed Telegram Bot API client.

:class:`TelegramClient` wraps every supported endpoint with a synchronous,
typed method built on a single transport call.  Failures surface as
:class:`TelegramError` subclasses.

Usage::

    from telebind import TelegramClient, RemoteRejection
    from telebind.models import Message, Update

    client = TelegramClient("123:ABC")
    me = client.get_me()
"""

from telebind.client import TelegramClient
from telebind.exceptions import NetworkFault, PollingExhausted, RemoteRejection, TelegramError

__all__ = [
    "TelegramClient",
    "TelegramError",
    "RemoteRejection",
    "NetworkFault",
    "PollingExhausted",
]
