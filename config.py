"""Application configuration: environment variables and derived constants.

Loads the bot token, Bot API host, polling options and logging settings from
the environment via ``python-dotenv``.  All values are resolved at import
time so other modules can ``from config import …`` without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── SDK ──────────────────────────────────────────────────────────────────────
from telebind.models import UPDATE_TYPES

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()

logger = logging.getLogger("telebind.config")


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_int(name: str, raw: str | None, default: int, minimum: int = 0) -> int:
    """Parse *raw* as an int no smaller than *minimum*, else return *default*."""
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid integer in environment, using default", extra={"variable": name, "value": raw, "default": default})
        return default
    if value < minimum:
        logger.warning("Value below minimum in environment, using default", extra={"variable": name, "value": value, "default": default})
        return default
    return value


def _parse_float(name: str, raw: str | None, default: float) -> float:
    """Parse *raw* as a non-negative float, else return *default*."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid number in environment, using default", extra={"variable": name, "value": raw, "default": default})
        return default
    if value < 0:
        logger.warning("Negative delay in environment, using default", extra={"variable": name, "value": value, "default": default})
        return default
    return value


def _parse_allowed_updates(raw: str | None) -> list[str] | None:
    """Parse a comma-separated list of update types.

    Returns ``None`` when unset (the server keeps its previous setting).
    Unknown names are kept, since the API may know types this binding does
    not, but are reported.
    """
    if raw is None or not raw.strip():
        return None
    result = [token.strip() for token in raw.split(",") if token.strip()]
    unknown = [name for name in result if name not in UPDATE_TYPES]
    if unknown:
        logger.warning("Unrecognised update types in ALLOWED_UPDATES", extra={"unknown": unknown})
    return result


def _parse_log_level(raw: str | None) -> int:
    """Map a level name such as ``"DEBUG"`` to its numeric value (INFO if unknown)."""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


# ── Public constants ─────────────────────────────────────────────────────────

BOT_TOKEN: str | None = os.environ.get("TELEGRAM_BOT_TOKEN") or os.environ.get("BOT_TOKEN")
API_URL: str = os.environ.get("TELEGRAM_API_URL", "https://api.telegram.org").rstrip("/")
REQUEST_TIMEOUT: int = _parse_int("REQUEST_TIMEOUT", os.environ.get("REQUEST_TIMEOUT"), 10, minimum=1)

POLL_TIMEOUT: int = _parse_int("POLL_TIMEOUT", os.environ.get("POLL_TIMEOUT"), 30)
POLL_MAX_RETRIES: int = _parse_int("POLL_MAX_RETRIES", os.environ.get("POLL_MAX_RETRIES"), 3, minimum=1)
POLL_BASE_DELAY: float = _parse_float("POLL_BASE_DELAY", os.environ.get("POLL_BASE_DELAY"), 1.0)
POLL_IDLE_DELAY: float = _parse_float("POLL_IDLE_DELAY", os.environ.get("POLL_IDLE_DELAY"), 1.0)
ALLOWED_UPDATES: list[str] | None = _parse_allowed_updates(os.environ.get("ALLOWED_UPDATES"))

LOG_LEVEL: int = _parse_log_level(os.environ.get("LOG_LEVEL"))
LOG_DIR: str | None = os.environ.get("LOG_DIR", "logs") or None

# "raise" stops polling on a handler error, "log" skips the failing update.
HANDLER_ERROR_POLICY: str = os.environ.get("HANDLER_ERROR_POLICY", "raise").strip().lower()
if HANDLER_ERROR_POLICY not in ("raise", "log"):
    logger.warning("Invalid HANDLER_ERROR_POLICY, using 'raise'", extra={"value": HANDLER_ERROR_POLICY})
    HANDLER_ERROR_POLICY = "raise"
