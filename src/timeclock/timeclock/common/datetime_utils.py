from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import MS_PER_SECOND


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_epoch_ms(moment: datetime) -> int:
    """Naive datetimes are read as local time."""
    return int(round(moment.timestamp() * MS_PER_SECOND))


def from_epoch_ms(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp / MS_PER_SECOND)


def local_midnight(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)
