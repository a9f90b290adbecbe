"""Tests for the JSON log formatter."""

import json
import logging
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.logger import TelebindLogger, _JsonFormatter


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="telebind.poller", level=level, pathname=__file__, lineno=1, msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Validate the single-line JSON output."""

    def test_standard_fields(self) -> None:
        entry = json.loads(_JsonFormatter().format(_record("Polling started")))
        assert entry["message"] == "Polling started"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "telebind.poller"
        assert "timestamp" in entry

    def test_extra_fields_merged(self) -> None:
        entry = json.loads(_JsonFormatter().format(_record("getUpdates failed", attempt=2, offset=8)))
        assert entry["attempt"] == 2
        assert entry["offset"] == 8
        assert "lineno" not in entry

    def test_unserialisable_extra_stringified(self) -> None:
        entry = json.loads(_JsonFormatter().format(_record("x", payload=object())))
        assert entry["payload"].startswith("<object object")

    def test_exception_included(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record("failed", level=logging.ERROR)
            record.exc_info = sys.exc_info()
        entry = json.loads(_JsonFormatter().format(record))
        assert "ValueError: boom" in entry["exc_info"]


class TestTelebindLogger:
    """Validate one-time logger configuration."""

    def test_same_logger_returned(self) -> None:
        first = TelebindLogger.get_logger()
        second = TelebindLogger.get_logger(logging.DEBUG)
        assert first is second
        assert first.name == "telebind"
        assert logging.getLogger("telebind.client").parent is first

    def test_configured_once(self) -> None:
        logger = TelebindLogger.get_logger()
        count = len(logger.handlers)
        TelebindLogger.get_logger(logging.DEBUG, "ignored")
        assert len(logger.handlers) == count

    def test_rotating_file_written(self, tmp_path, monkeypatch) -> None:
        logger = logging.getLogger(TelebindLogger.NAME)
        before = list(logger.handlers)
        monkeypatch.setattr(TelebindLogger, "_configured", False)
        try:
            TelebindLogger.get_logger(logging.INFO, str(tmp_path))
            logger.info("Polling started", extra={"offset": 3})
            for handler in logger.handlers:
                handler.flush()
        finally:
            for handler in [h for h in logger.handlers if h not in before]:
                handler.close()
                logger.removeHandler(handler)

        line = (tmp_path / TelebindLogger.LOG_FILE).read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["offset"] == 3
