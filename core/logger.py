"""Structured JSON logging for telebind.

Library modules log through children of the ``telebind`` logger
(``telebind.client``, ``telebind.poller``, ...) and pass context via
``extra``.  :meth:`TelebindLogger.get_logger` attaches the JSON handlers to
the parent once per process: stderr always, plus a rotating
``<log_dir>/telebind.log`` when a log directory is given.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import List, Optional

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


class _JsonFormatter(logging.Formatter):
    """Render a record as one JSON line; ``extra`` keys become top-level fields.

    ``logger.warning("getUpdates failed", extra={"attempt": 2, "offset": 8})``
    becomes ``{"timestamp": ..., "level": "WARNING", ..., "attempt": 2, "offset": 8}``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update((key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS)
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TelebindLogger:
    """Process-wide setup of the ``telebind`` logger.

    Usage::

        logger = TelebindLogger.get_logger(logging.INFO, "logs")
        logger.info("Polling started")
    """

    NAME = "telebind"
    LOG_FILE = "telebind.log"
    MAX_BYTES = 5 * 1024 * 1024
    BACKUP_COUNT = 5

    _configured = False

    @classmethod
    def get_logger(cls, level: int = logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
        """Return the ``telebind`` logger, configuring it on the first call.

        Later calls ignore *level* and *log_dir*.
        """
        logger = logging.getLogger(cls.NAME)
        if not cls._configured:
            logger.setLevel(level)
            formatter = _JsonFormatter()
            for handler in cls._handlers(log_dir):
                handler.setFormatter(formatter)
                logger.addHandler(handler)
            cls._configured = True
        return logger

    @classmethod
    def _handlers(cls, log_dir: Optional[str]) -> List[logging.Handler]:
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(RotatingFileHandler(
                os.path.join(log_dir, cls.LOG_FILE),
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            ))
        return handlers
