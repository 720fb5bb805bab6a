"""Application configuration — environment variables and derived constants.

Loads ``BOT_TOKEN``, ``TELEGRAM_API_URL``, ``REQUEST_TIMEOUT``, ``LOG_LEVEL``
and ``LOG_DIR`` from the environment via ``python-dotenv``.  All values are
resolved at import time so other modules can ``from config import …``
without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from core.logger import TgWireLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_timeout(raw: str | None, default: int = 10) -> int:
    """Parse ``REQUEST_TIMEOUT`` as a positive number of seconds.

    Empty, non-numeric or non-positive values fall back to *default*.
    """
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _parse_level(raw: str | None) -> int:
    """Map a level name such as ``"debug"`` to its :mod:`logging` constant (INFO if unknown)."""
    level = logging.getLevelName((raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


# ── Public constants ─────────────────────────────────────────────────────────

BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN")
API_URL: str = os.environ.get("TELEGRAM_API_URL", "https://api.telegram.org").rstrip("/")
BASE_URL: str = f"{API_URL}/bot{BOT_TOKEN or ''}"
REQUEST_TIMEOUT: int = _parse_timeout(os.environ.get("REQUEST_TIMEOUT"))
LOG_LEVEL: int = _parse_level(os.environ.get("LOG_LEVEL"))
LOG_DIR: str | None = os.environ.get("LOG_DIR") or None


# ── Logger (used for startup diagnostics at the bottom of this module) ───────
logger = TgWireLogger.get_logger(LOG_LEVEL, log_dir=LOG_DIR)


# ── Startup diagnostics ─────────────────────────────────────────────────────

if BOT_TOKEN:
    logger.info("Config loaded — BOT_TOKEN is set, BASE_URL ready", extra={"api_url": API_URL})
else:
    logger.warning("Config loaded — BOT_TOKEN is NOT set", extra={"api_url": API_URL})

logger.info("REQUEST_TIMEOUT resolved", extra={"request_timeout": REQUEST_TIMEOUT})
