"""
Logging setup for the MenStyle store.

The root logger is configured on first import: level from ``LOG_LEVEL``,
short format on Vercel, full format elsewhere.

Usage:
    from menstyle.logging import get_logger
    logger = get_logger(__name__)

    logger.info(f"Order {sanitize_id_for_logging(order.id)} created")
    logger.error("Error creating order", exc_info=True)

Customer data (names, phones, search terms) goes through the sanitize helpers
before it reaches a log line.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_SIMPLE = "[%(levelname)s] %(name)s: %(message)s"

# Client libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack")

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging(level: str | None = None, simple: bool | None = None) -> None:
    """
    Attach a stdout handler to the root logger, unless one is already there.

    Args:
        level: Level name; defaults to ``LOG_LEVEL`` or INFO
        simple: Short format; defaults to True when running on Vercel
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    if simple is None:
        simple = os.environ.get("VERCEL") == "1"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _clip(value: object, max_length: int) -> str:
    # Control characters would let user input forge log lines (CWE-117)
    text = str(value).translate(_CONTROL_CHARS)
    return text if len(text) <= max_length else text[:max_length] + "..."


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 characters of a row id, or "N/A"."""
    if not id_value:
        return "N/A"
    return _clip(id_value, 8)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """User-supplied text, escaped and truncated, or "N/A"."""
    if not value:
        return "N/A"
    return _clip(value, max_length)


def mask_phone_for_logging(phone: str | None) -> str:
    """Only the last four digits of a customer phone."""
    digits = "".join(ch for ch in str(phone or "") if ch.isdigit())
    if len(digits) < 4:
        return "N/A"
    return f"***{digits[-4:]}"


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
    "mask_phone_for_logging",
]
