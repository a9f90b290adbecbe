"""Long-polling update loop.

:class:`Poller` owns the update cursor.  Each iteration fetches a batch with
``getUpdates`` (offloaded via :func:`asyncio.to_thread`, since the client is
built on ``requests``), hands every update to the caller's handler in
ascending ``update_id`` order, then advances the cursor past the batch.

Failed fetches are retried with exponential backoff (``2**n * base_delay``
after the n-th consecutive failure) until ``max_retries`` consecutive
failures, at which point :class:`~telebind.exceptions.PollingExhausted` is
raised from the last fault.  :meth:`Poller.stop` cancels cooperatively: it is
observed before every fetch and wakes any backoff or idle sleep at once.

The loop is a single logical stream.  It never fetches while dispatching and
never runs two handlers concurrently.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from telebind.client import TelegramClient
from telebind.exceptions import PollingExhausted, TelegramError
from telebind.models import Update, UpdateBatch

logger = logging.getLogger("telebind.poller")

UpdateHandler = Callable[[Update], Union[None, Awaitable[Any]]]


class PollerState(str, enum.Enum):
    IDLE = "idle"
    POLLING = "polling"
    BACKOFF = "backoff"
    STOPPED = "stopped"


class HandlerErrorPolicy(str, enum.Enum):
    """What the poller does when the handler raises.

    ``RAISE`` stops polling and propagates the exception out of
    :meth:`Poller.start`; the cursor points at the failing update so a resumed
    session redelivers it.  ``LOG`` logs the traceback, skips the update and
    carries on with the batch.
    """

    RAISE = "raise"
    LOG = "log"


def _current_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def backoff_delay(failures: int, base_delay: float) -> float:
    """Seconds to sleep after the *failures*-th consecutive failure."""
    return (2 ** failures) * base_delay


class Poller:
    """Fetch updates in a loop and deliver them to a handler.

    Usage::

        poller = Poller(TelegramClient(token), timeout=30, max_retries=3)

        async def handle(update: Update) -> None:
            ...

        await poller.start(handle)      # returns after poller.stop()

    Args:
        client: Client used for ``getUpdates``.
        timeout: Server-side long-poll wait in seconds.
        allowed_updates: Update types to receive; ``None`` keeps the
            server's current setting.
        max_retries: Consecutive fetch failures tolerated before giving up.
        base_delay: Backoff base in seconds.
        idle_delay: Pause after an empty batch, in seconds.
        limit: Maximum updates per batch (1-100, server default 100).
        on_handler_error: See :class:`HandlerErrorPolicy`.
    """

    def __init__(
        self,
        client: TelegramClient,
        *,
        timeout: int = 30,
        allowed_updates: Optional[List[str]] = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
        idle_delay: float = 0.0,
        limit: Optional[int] = None,
        on_handler_error: HandlerErrorPolicy = HandlerErrorPolicy.RAISE,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if timeout < 0 or base_delay < 0 or idle_delay < 0:
            raise ValueError("timeout and delays must be non-negative")
        self._client = client
        self._timeout = timeout
        self._allowed_updates = allowed_updates
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._idle_delay = idle_delay
        self._limit = limit
        self._on_handler_error = HandlerErrorPolicy(on_handler_error)

        self._state = PollerState.IDLE
        self._offset = 0
        self._failures = 0
        self._stop_requested = False
        self._stop_event: Optional[asyncio.Event] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    # ------------------------------------------------------------------
    #  Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def offset(self) -> int:
        """Next update identifier to request; persist it to resume later."""
        return self._offset

    @property
    def failures(self) -> int:
        """Consecutive failed fetches in the current session."""
        return self._failures

    @property
    def running(self) -> bool:
        return self._state in (PollerState.POLLING, PollerState.BACKOFF)

    # ------------------------------------------------------------------
    #  Control
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Request cancellation.  Idempotent; a no-op when not running.

        Safe to call from another thread or a signal handler; the event loop
        running the session is woken either way.
        """
        if not self.running:
            return
        if not self._stop_requested:
            logger.info("Stop requested", extra={"offset": self._offset})
        self._stop_requested = True
        event, loop = self._stop_event, self._loop
        if event is None or loop is None:
            return
        if _current_loop() is loop:
            event.set()
        else:
            # asyncio.Event is not thread-safe; hand the wakeup to its loop.
            # RuntimeError here means the loop already closed.
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(event.set)

    def run(self, handler: UpdateHandler, **options: Any) -> None:
        """Blocking wrapper around :meth:`start` for synchronous callers."""
        asyncio.run(self.start(handler, **options))

    async def start(
        self,
        handler: UpdateHandler,
        *,
        offset: int = 0,
        timeout: Optional[int] = None,
        allowed_updates: Optional[List[str]] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ) -> None:
        """Run one polling session until :meth:`stop` or retry exhaustion.

        Session state (cursor, failure counter, cancellation) is reset on
        entry; *offset* seeds the cursor.  Keyword options left as ``None``
        fall back to the values given at construction.

        Raises:
            PollingExhausted: After *max_retries* consecutive fetch failures.
            RuntimeError: If a session is already running.
            Exception: Whatever the handler raised, under
                :attr:`HandlerErrorPolicy.RAISE`.
        """
        if self.running:
            raise RuntimeError("Poller is already running")

        timeout = self._timeout if timeout is None else timeout
        allowed_updates = self._allowed_updates if allowed_updates is None else allowed_updates
        max_retries = self._max_retries if max_retries is None else max_retries
        base_delay = self._base_delay if base_delay is None else base_delay

        self._offset = offset
        self._failures = 0
        self._stop_requested = False
        self._stop_event = asyncio.Event()
        self._loop = asyncio.get_running_loop()
        self._state = PollerState.POLLING
        logger.info(
            "Polling started",
            extra={"offset": offset, "poll_timeout": timeout, "max_retries": max_retries, "allowed_updates": allowed_updates},
        )

        try:
            while not self._stop_requested:
                try:
                    updates = await asyncio.to_thread(
                        self._client.get_updates,
                        offset=self._offset,
                        limit=self._limit,
                        timeout=timeout,
                        allowed_updates=allowed_updates,
                    )
                except TelegramError as exc:
                    self._failures += 1
                    logger.warning(
                        "getUpdates failed",
                        extra={"attempt": self._failures, "max_retries": max_retries, "offset": self._offset, "error": str(exc)},
                    )
                    if self._failures >= max_retries:
                        logger.error("Retry budget exhausted, polling stopped", extra={"attempts": self._failures})
                        raise PollingExhausted(self._failures, exc) from exc
                    self._state = PollerState.BACKOFF
                    delay = backoff_delay(self._failures, base_delay)
                    logger.info("Backing off", extra={"delay": delay, "attempt": self._failures})
                    await self._sleep(delay)
                    self._state = PollerState.POLLING
                    continue

                self._failures = 0
                if self._stop_requested:
                    # The batch stays unconfirmed and is redelivered next session.
                    logger.debug("Discarding batch fetched after stop", extra={"count": len(updates)})
                    break
                if updates:
                    logger.debug("Received updates", extra={"count": len(updates), "offset": self._offset})
                    await self._dispatch(updates, handler)
                if isinstance(updates, UpdateBatch) and updates.last_update_id is not None:
                    # Confirm entries the client dropped as malformed.
                    self._offset = max(self._offset, updates.last_update_id + 1)
                if not updates:
                    await self._sleep(self._idle_delay)
        finally:
            self._state = PollerState.STOPPED
            self._stop_event = None
            self._loop = None
            logger.info("Polling stopped", extra={"offset": self._offset})

    # ------------------------------------------------------------------
    #  Internals
    # ------------------------------------------------------------------

    async def _dispatch(self, updates: List[Update], handler: UpdateHandler) -> None:
        """Deliver *updates* one at a time in ascending id order, then advance the cursor."""
        batch = sorted(updates, key=lambda update: update.update_id)
        for update in batch:
            try:
                result = handler(update)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                if self._on_handler_error is HandlerErrorPolicy.RAISE:
                    self._offset = max(self._offset, update.update_id)
                    logger.error("Handler failed, stopping", extra={"update_id": update.update_id})
                    raise
                logger.exception("Handler failed, skipping update", extra={"update_id": update.update_id})
        self._offset = max(self._offset, batch[-1].update_id + 1)

    async def _sleep(self, delay: float) -> None:
        """Sleep up to *delay* seconds, returning early once stop is requested."""
        if self._stop_event is None or delay <= 0:
            await asyncio.sleep(0)
            return
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
