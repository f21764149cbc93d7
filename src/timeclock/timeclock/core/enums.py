from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Punch actions. Values are the labels stored in punch files."""

    CLOCK_IN = "Clock In"
    CLOCK_OUT = "Clock Out"
    START_LUNCH = "Start Lunch"
    END_LUNCH = "End Lunch"
    START_BREAK = "Start Break"
    END_BREAK = "End Break"


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class StorageBackend(str, Enum):
    JSON = "json"
    MYSQL = "mysql"
