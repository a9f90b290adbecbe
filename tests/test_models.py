"""Tests for the Pydantic Telegram models and the method table."""

import sys
import os
import pytest

# Ensure the project root is importable.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pydantic import TypeAdapter, ValidationError

from telebind.methods import METHODS, result_adapter
from telebind.models import (
    UPDATE_TYPES,
    CallbackQuery,
    Chat,
    Envelope,
    Message,
    Update,
    User,
)


def _message(text: str = "hi") -> dict:
    return {
        "message_id": 1,
        "date": 0,
        "chat": {"id": 10, "type": "private"},
        "from": {"id": 100, "is_bot": False, "first_name": "Ann"},
        "text": text,
    }


# ── Envelope ─────────────────────────────────────────────────────────────────


class TestEnvelope:
    """Validate the response wrapper."""

    def test_success(self) -> None:
        env = Envelope.model_validate({"ok": True, "result": True})
        assert env.ok is True
        assert env.result is True
        assert env.error_code is None

    def test_failure(self) -> None:
        env = Envelope.model_validate({
            "ok": False,
            "error_code": 400,
            "description": "Bad Request: message to edit not found",
            "parameters": {"migrate_to_chat_id": -100123},
        })
        assert env.ok is False
        assert env.result is None
        assert env.parameters.migrate_to_chat_id == -100123

    def test_missing_ok_raises(self) -> None:
        with pytest.raises(ValidationError):
            Envelope.model_validate({"result": {}})


# ── Objects ──────────────────────────────────────────────────────────────────


class TestObjects:
    """Validate aliasing and extra-field handling."""

    def test_from_alias(self) -> None:
        msg = Message.model_validate(_message())
        assert msg.from_field.first_name == "Ann"
        assert msg.model_dump(by_alias=True, exclude_none=True)["from"]["id"] == 100

    def test_populate_by_name(self) -> None:
        msg = Message(message_id=1, date=0, chat=Chat(id=1, type="private"), from_field=User(id=1, is_bot=False, first_name="A"))
        assert msg.from_field.id == 1

    def test_nested_reply(self) -> None:
        data = _message("reply")
        data["reply_to_message"] = _message("original")
        msg = Message.model_validate(data)
        assert msg.reply_to_message.text == "original"

    def test_unknown_fields_preserved(self) -> None:
        data = {"id": 1, "type": "supergroup", "title": "G", "has_visible_history": True}
        chat = Chat.model_validate(data)
        assert chat.model_dump(exclude_none=True) == data

    def test_missing_required_raises(self) -> None:
        with pytest.raises(ValidationError):
            User(id=1, is_bot=False)  # missing first_name


# ── Update ───────────────────────────────────────────────────────────────────


class TestUpdate:
    """Validate the single-variant update union."""

    def test_message_kind(self) -> None:
        update = Update.model_validate({"update_id": 5, "message": _message()})
        assert update.kind == "message"
        assert isinstance(update.payload, Message)

    def test_callback_query_kind(self) -> None:
        update = Update.model_validate({
            "update_id": 6,
            "callback_query": {"id": "q", "from": {"id": 1, "is_bot": False, "first_name": "U"}, "chat_instance": "c", "data": "yes"},
        })
        assert update.kind == "callback_query"
        assert isinstance(update.payload, CallbackQuery)
        assert update.payload.data == "yes"

    def test_two_variants_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Update.model_validate({"update_id": 7, "message": _message(), "edited_message": _message()})

    def test_empty_update(self) -> None:
        update = Update.model_validate({"update_id": 8})
        assert update.kind is None
        assert update.payload is None

    def test_unmodelled_variant(self) -> None:
        update = Update.model_validate({"update_id": 9, "chat_boost": {"chat": {"id": 1, "type": "channel"}}})
        assert update.kind == "chat_boost"
        assert update.payload == {"chat": {"id": 1, "type": "channel"}}

    def test_update_types_are_fields(self) -> None:
        for name in UPDATE_TYPES:
            assert name in Update.model_fields


# ── Method table ─────────────────────────────────────────────────────────────


class TestMethodTable:
    """Validate the method-name to result-type registry."""

    def test_names_match_keys(self) -> None:
        for key, method in METHODS.items():
            assert key == method.name

    def test_adapter_is_cached(self) -> None:
        assert result_adapter("getMe") is result_adapter("getMe")
        assert isinstance(result_adapter("getMe"), TypeAdapter)

    def test_unknown_method(self) -> None:
        with pytest.raises(KeyError):
            result_adapter("sendTelepathy")

    def test_edit_result_accepts_message_or_true(self) -> None:
        adapter = result_adapter("editMessageText")
        assert adapter.validate_python(True) is True
        assert isinstance(adapter.validate_python(_message()), Message)

    def test_get_updates_result(self) -> None:
        updates = result_adapter("getUpdates").validate_python([{"update_id": 1}, {"update_id": 2}])
        assert [u.update_id for u in updates] == [1, 2]
