# app/utils/logger.py
"""
Centralised logging configuration for the entire application.
Logs to console and to a rotating file in /logs/.

The remote user store ships plaintext passwords, so anything logged from a
request/response body goes through redact_for_log() first.
"""

import logging
import os
from collections.abc import Mapping, Sequence
from logging.handlers import RotatingFileHandler
from typing import Any

from app.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
os.makedirs(LOG_DIR, exist_ok=True)

SENSITIVE_KEYS = frozenset({"password", "senha", "token", "authorization", "api_key"})

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(LOG_LEVEL)
    console.setFormatter(fmt)

    # Rotating file handler — keeps last 10 × 5MB log files
    file_handler = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, "storefront.log"),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    root.addHandler(console)
    root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)


def redact_for_log(value: Any, _depth: int = 0) -> Any:
    """Copy of a JSON-like value with sensitive keys masked, safe for debug logs."""
    if _depth > 10:
        return "<max-depth>"
    if isinstance(value, Mapping):
        return {
            k: "<redacted>" if str(k).lower() in SENSITIVE_KEYS else redact_for_log(v, _depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, _depth + 1) for v in value]
    return value
