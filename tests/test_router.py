"""Tests for the update router."""

import sys
import os
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from bot.router import Route, UpdateRouter
from telebind.models import CallbackQuery, Message, Update


def _message_update(update_id: int = 1) -> Update:
    return Update.model_validate({
        "update_id": update_id,
        "message": {"message_id": 1, "date": 0, "chat": {"id": 1, "type": "private"}, "text": "/start"},
    })


def _callback_update() -> Update:
    return Update.model_validate({
        "update_id": 2,
        "callback_query": {"id": "cb1", "from": {"id": 7, "is_bot": False, "first_name": "U"}, "chat_instance": "x", "data": "ok"},
    })


# ── Registration ─────────────────────────────────────────────────────────────


class TestRegistration:
    """Validate route registration."""

    def test_on_registers_route(self) -> None:
        router = UpdateRouter()

        @router.on("message")
        def handler(message, update):
            pass

        route = router.get("message")
        assert isinstance(route, Route)
        assert route.handler is handler
        assert router.get("callback_query") is None

    def test_unknown_kind_rejected(self) -> None:
        router = UpdateRouter()
        with pytest.raises(ValueError, match="Unknown update type"):
            router.on("telepathy")

    def test_replacing_route(self) -> None:
        router = UpdateRouter()
        first, second = MagicMock(), MagicMock()
        router.on("message")(first)
        router.on("message")(second)
        assert router.get("message").handler is second

    def test_routes_returns_copy(self) -> None:
        router = UpdateRouter()
        router.on("message")(MagicMock())
        router.routes().clear()
        assert "message" in router.routes()

    def test_allowed_updates_in_api_order(self) -> None:
        router = UpdateRouter()
        router.on("callback_query")(MagicMock())
        router.on("message")(MagicMock())
        assert router.allowed_updates() == ["message", "callback_query"]


# ── Dispatch ─────────────────────────────────────────────────────────────────


class TestDispatch:
    """Validate that updates reach the handler for their variant."""

    @pytest.mark.asyncio
    async def test_sync_handler_gets_payload(self) -> None:
        router = UpdateRouter()
        handler = MagicMock(return_value=None)
        router.on("message")(handler)
        update = _message_update()

        assert await router.dispatch(update) is True
        payload, received = handler.call_args.args
        assert isinstance(payload, Message)
        assert payload.text == "/start"
        assert received is update

    @pytest.mark.asyncio
    async def test_async_handler_awaited(self) -> None:
        router = UpdateRouter()
        seen = []

        @router.on("callback_query")
        async def on_callback(query, update):
            seen.append(query)

        assert await router(_callback_update()) is True
        assert isinstance(seen[0], CallbackQuery)
        assert seen[0].data == "ok"

    @pytest.mark.asyncio
    async def test_unrouted_without_fallback(self) -> None:
        router = UpdateRouter()
        router.on("callback_query")(MagicMock())
        assert await router.dispatch(_message_update()) is False

    @pytest.mark.asyncio
    async def test_fallback_receives_unrouted(self) -> None:
        router = UpdateRouter()
        fallback = MagicMock(return_value=None)
        router.fallback(fallback)

        update = Update.model_validate({"update_id": 3, "chat_boost": {"boost": {}}})
        assert await router.dispatch(update) is True
        fallback.assert_called_once_with({"boost": {}}, update)

    @pytest.mark.asyncio
    async def test_empty_update_goes_to_fallback(self) -> None:
        router = UpdateRouter()
        fallback = MagicMock(return_value=None)
        router.fallback(fallback)
        update = Update.model_validate({"update_id": 4})
        assert await router.dispatch(update) is True
        fallback.assert_called_once_with(None, update)

    @pytest.mark.asyncio
    async def test_handler_error_propagates(self) -> None:
        router = UpdateRouter()
        router.on("message")(MagicMock(side_effect=KeyError("oops")))
        with pytest.raises(KeyError):
            await router.dispatch(_message_update())
