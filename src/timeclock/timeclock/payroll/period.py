from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from ..common.datetime_utils import local_midnight, to_epoch_ms
from ..core.constants import PAY_PERIOD_ANCHOR, PAY_PERIOD_DAYS
from ..punches.model import Punch


def start_of_pay_period(today: date | datetime) -> datetime:
    """Local midnight of the first day of the period covering `today`.

    Python's floor modulo keeps the offset in [0, 14) for dates before the
    anchor as well.
    """

    midnight = local_midnight(today)
    diff_days = (midnight.date() - PAY_PERIOD_ANCHOR.date()).days % PAY_PERIOD_DAYS
    return midnight - timedelta(days=diff_days)


@dataclass(frozen=True)
class PayPeriod:
    """Half-open 14-day window [start, end) in local time."""

    start: datetime

    @classmethod
    def containing(cls, moment: date | datetime) -> "PayPeriod":
        return cls(start=start_of_pay_period(moment))

    @property
    def end(self) -> datetime:
        return self.start + timedelta(days=PAY_PERIOD_DAYS)

    @property
    def start_ms(self) -> int:
        return to_epoch_ms(self.start)

    @property
    def end_ms(self) -> int:
        return to_epoch_ms(self.end)

    def contains(self, timestamp: int) -> bool:
        return self.start_ms <= timestamp < self.end_ms

    def shifted(self, periods: int) -> "PayPeriod":
        # Re-anchor on the target date so DST transitions land on midnight.
        target = self.start.date() + timedelta(days=PAY_PERIOD_DAYS * int(periods))
        return PayPeriod(start=local_midnight(target))

    def next(self) -> "PayPeriod":
        return self.shifted(1)

    def previous(self) -> "PayPeriod":
        return self.shifted(-1)

    def to_dict(self) -> dict:
        return {
            "start": self.start.strftime("%Y-%m-%d"),
            # Inclusive last day, for display.
            "last_day": (self.end - timedelta(days=1)).strftime("%Y-%m-%d"),
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
        }


def filter_to_period(punches: Iterable[Punch], period: PayPeriod) -> list[Punch]:
    start_ms, end_ms = period.start_ms, period.end_ms
    return [p for p in punches if start_ms <= p.timestamp < end_ms]
