"""Bot application layer: long polling and update routing.

This package may import from ``telebind/`` and ``core/`` only.
"""

from bot.poller import HandlerErrorPolicy, Poller, PollerState, backoff_delay
from bot.router import Route, UpdateRouter

__all__ = [
    # Polling
    "Poller",
    "PollerState",
    "HandlerErrorPolicy",
    "backoff_delay",
    # Routing
    "UpdateRouter",
    "Route",
]
