"""Long-polling demo bot.

Verifies the token with ``getMe``, then polls for updates and logs every
message, callback query and inline query until SIGINT/SIGTERM.  Configure it
through the environment (see :mod:`config`)::

    TELEGRAM_BOT_TOKEN=123:ABC python main.py
"""

import asyncio
import contextlib
import signal
import sys

import config
from bot import HandlerErrorPolicy, Poller, UpdateRouter
from core.logger import TelebindLogger
from telebind import PollingExhausted, TelegramClient, TelegramError
from telebind.models import CallbackQuery, InlineQuery, Message, Update

logger = TelebindLogger.get_logger(config.LOG_LEVEL, config.LOG_DIR)


def build_router(client: TelegramClient) -> UpdateRouter:
    """Create the demo router: log messages, acknowledge button presses."""
    router = UpdateRouter()

    @router.on("message")
    def on_message(message: Message, update: Update) -> None:
        sender = message.from_field
        logger.info(
            "Message received",
            extra={
                "update_id": update.update_id,
                "chat_id": message.chat.id,
                "user_id": sender.id if sender else None,
                "text_preview": (message.text or "[no text]")[:80],
            },
        )

    @router.on("callback_query")
    async def on_callback_query(query: CallbackQuery, update: Update) -> None:
        logger.info(
            "Callback query received",
            extra={"update_id": update.update_id, "user_id": query.from_field.id, "data": query.data},
        )
        await asyncio.to_thread(client.answer_callback_query, query.id)

    @router.on("inline_query")
    def on_inline_query(query: InlineQuery, update: Update) -> None:
        logger.info(
            "Inline query received",
            extra={"update_id": update.update_id, "user_id": query.from_field.id, "query": query.query},
        )

    @router.fallback
    def on_other(payload: object, update: Update) -> None:
        logger.info("Unhandled update type", extra={"update_id": update.update_id, "kind": update.kind})

    return router


async def run(client: TelegramClient) -> None:
    """Poll until a shutdown signal arrives or retries are exhausted."""
    poller = Poller(
        client,
        timeout=config.POLL_TIMEOUT,
        allowed_updates=config.ALLOWED_UPDATES,
        max_retries=config.POLL_MAX_RETRIES,
        base_delay=config.POLL_BASE_DELAY,
        idle_delay=config.POLL_IDLE_DELAY,
        on_handler_error=HandlerErrorPolicy(config.HANDLER_ERROR_POLICY),
    )
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, poller.stop)

    await poller.start(build_router(client))


def main() -> int:
    if not config.BOT_TOKEN:
        logger.error("TELEGRAM_BOT_TOKEN environment variable is not set or is empty")
        return 1

    client = TelegramClient(config.BOT_TOKEN, timeout=config.REQUEST_TIMEOUT, api_url=config.API_URL)
    try:
        me = client.get_me()
    except TelegramError as exc:
        logger.error("Token check failed", extra={"api_endpoint": exc.method, "error_code": exc.code, "error": exc.message})
        return 1
    logger.info("Bot authorised", extra={"bot_id": me.id, "bot_username": me.username})

    try:
        asyncio.run(run(client))
    except PollingExhausted as exc:
        logger.error("Polling gave up", extra={"attempts": exc.attempts, "error": exc.last_error.message})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
