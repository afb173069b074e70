"""
Logging for the storefront service.

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Values that come from the browser or from commerce ids go through the
``sanitize_*`` helpers before they reach a log line.
"""

import logging
import os
import sys
from functools import cache

# Vercel prefixes every line with its own timestamp
_VERCEL_FORMAT = "%(levelname)s %(name)s: %(message)s"
_LOCAL_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Chatty at INFO: one line per upstream GraphQL request
_QUIET_LOGGERS = ("httpx", "httpcore")

GID_PREFIX = "gid://shopify/"
ID_TAIL_LENGTH = 12


def configure_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the root logger unless one is already set up."""
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_VERCEL_FORMAT if os.environ.get("VERCEL") else _LOCAL_FORMAT))
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape(value: str) -> str:
    """Neutralise line breaks and NULs so one value stays one log line (CWE-117)."""
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t").replace("\x00", "")


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Loggable form of a commerce id (cart, line, variant).

    Cart GIDs carry the cart key as a query string (``?key=...``); that part
    is a credential and is dropped. What remains is shortened to the resource
    type and the last characters of the id, e.g. ``Cart/...abcdef123456``.
    """
    if not id_value:
        return "N/A"
    value = _escape(str(id_value)).split("?", 1)[0]
    resource = ""
    if value.startswith(GID_PREFIX):
        resource, _, value = value[len(GID_PREFIX):].partition("/")
    if len(value) > ID_TAIL_LENGTH:
        value = "..." + value[-ID_TAIL_LENGTH:]
    return f"{resource}/{value}" if resource else value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escaped and truncated user-controlled text (query, handle, provider error)."""
    if not value:
        return "N/A"
    safe_value = _escape(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
