"""Logging setup for the timeclock logger hierarchy."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any

_LOGGER_PREFIX = "timeclock"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False
_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the timeclock namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(*, level: int | str = logging.INFO, stream: Any = None) -> None:
    """Attach a stream handler to the timeclock logger (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(handler)

