"""Update router: dispatch each update to the handler for its variant.

An :class:`Update` carries exactly one variant (``message``,
``callback_query``, ``inline_query``, …).  :class:`UpdateRouter` maps variant
names to handlers so application code registers one function per variant
instead of probing every optional field::

    router = UpdateRouter()

    @router.on("message")
    async def on_message(message: Message, update: Update) -> None: ...

    await poller.start(router)

The router is itself a valid poller handler.  Handlers may be plain
functions or coroutines; each receives the variant payload and the update.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from telebind.models import UPDATE_TYPES, Update

logger = logging.getLogger("telebind.router")

VariantHandler = Callable[[Any, Update], Union[None, Awaitable[Any]]]


@dataclasses.dataclass(frozen=True, slots=True)
class Route:
    """A handler bound to one update variant."""

    kind: str
    handler: VariantHandler


class UpdateRouter:
    """Maps update variants to handlers."""

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._fallback: Optional[VariantHandler] = None

    # ── decorators ───────────────────────────────────────────────────────

    def on(self, kind: str) -> Callable[[VariantHandler], VariantHandler]:
        """Decorator that registers *handler* for updates of *kind*.

        Raises:
            ValueError: If *kind* is not a known update variant.
        """
        if kind not in UPDATE_TYPES:
            raise ValueError(f"Unknown update type: {kind!r}")

        def decorator(func: VariantHandler) -> VariantHandler:
            if kind in self._routes:
                logger.warning("Replacing update handler", extra={"kind": kind})
            self._routes[kind] = Route(kind=kind, handler=func)
            return func
        return decorator

    def fallback(self, func: VariantHandler) -> VariantHandler:
        """Register a handler for variants without a route of their own."""
        self._fallback = func
        return func

    # ── lookup helpers ───────────────────────────────────────────────────

    def get(self, kind: str) -> Route | None:
        return self._routes.get(kind)

    def routes(self) -> dict[str, Route]:
        """Return a copy of the registered routes."""
        return dict(self._routes)

    def allowed_updates(self) -> list[str]:
        """Variant names with a route, in API order; useful for ``allowed_updates``."""
        return [kind for kind in UPDATE_TYPES if kind in self._routes]

    # ── dispatch ─────────────────────────────────────────────────────────

    async def dispatch(self, update: Update) -> bool:
        """Invoke the handler for *update*'s variant.

        Returns ``True`` if a handler (or the fallback) ran, ``False`` otherwise.
        """
        kind = update.kind
        route = self._routes.get(kind) if kind else None
        handler = route.handler if route else self._fallback
        if handler is None:
            logger.debug("No handler for update", extra={"update_id": update.update_id, "kind": kind})
            return False
        result = handler(update.payload, update)
        if inspect.isawaitable(result):
            await result
        return True

    async def __call__(self, update: Update) -> bool:
        return await self.dispatch(update)
