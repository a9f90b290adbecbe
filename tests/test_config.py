"""Tests for environment parsing helpers in config."""

import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import _parse_allowed_updates, _parse_float, _parse_int, _parse_log_level


class TestParseInt:
    """Validate integer parsing with defaults."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_unset_uses_default(self, raw) -> None:
        assert _parse_int("X", raw, 7) == 7

    def test_valid(self) -> None:
        assert _parse_int("X", " 42 ", 7) == 42

    def test_invalid_uses_default(self) -> None:
        assert _parse_int("X", "ten", 7) == 7

    def test_below_minimum_uses_default(self) -> None:
        assert _parse_int("POLL_MAX_RETRIES", "0", 3, minimum=1) == 3


class TestParseFloat:
    """Validate delay parsing."""

    def test_valid(self) -> None:
        assert _parse_float("X", "0.5", 1.0) == 0.5

    def test_negative_uses_default(self) -> None:
        assert _parse_float("X", "-2", 1.0) == 1.0

    def test_invalid_uses_default(self) -> None:
        assert _parse_float("X", "soon", 1.0) == 1.0


class TestParseAllowedUpdates:
    """Validate the comma-separated update type list."""

    def test_unset_is_none(self) -> None:
        assert _parse_allowed_updates(None) is None
        assert _parse_allowed_updates(" ") is None

    def test_split_and_strip(self) -> None:
        assert _parse_allowed_updates("message, callback_query,,") == ["message", "callback_query"]

    def test_unknown_names_kept(self) -> None:
        assert _parse_allowed_updates("message,chat_boost") == ["message", "chat_boost"]


class TestParseLogLevel:
    """Validate log level names."""

    def test_named_level(self) -> None:
        assert _parse_log_level("debug") == logging.DEBUG

    @pytest.mark.parametrize("raw", [None, "", "LOUD"])
    def test_fallback_to_info(self, raw) -> None:
        assert _parse_log_level(raw) == logging.INFO
