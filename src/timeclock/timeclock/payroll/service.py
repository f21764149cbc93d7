from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import from_epoch_ms, now_local
from ..core.constants import PUNCH_TIME_FORMAT
from ..punches.model import Punch, sort_punches
from ..punches.service import PunchService
from ..punches.state_machine import find_invalid_punches
from ..users.service import SessionUser
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator, format_hours
from .period import PayPeriod, filter_to_period


@dataclass(frozen=True)
class PunchRow:
    punch: Punch
    invalid: bool
    deletable: bool

    def to_dict(self) -> dict:
        return {
            "timestamp": self.punch.timestamp,
            "label": self.punch.label.value,
            "time": from_epoch_ms(self.punch.timestamp).strftime(PUNCH_TIME_FORMAT),
            "invalid": self.invalid,
            "deletable": self.deletable,
        }


@dataclass(frozen=True)
class PeriodReport:
    period: PayPeriod
    rows: list[PunchRow]
    total_hours: str
    rejected_records: int = 0

    @property
    def invalid_punches(self) -> list[Punch]:
        return [r.punch for r in self.rows if r.invalid]

    def to_dict(self) -> dict:
        return {
            "period": self.period.to_dict(),
            "total_hours": self.total_hours,
            "punches": [r.to_dict() for r in self.rows],
            "rejected_records": self.rejected_records,
        }


def total_hours(punches: Iterable[Punch], period: PayPeriod, calculator: Optional[HoursCalculator] = None) -> str:
    """Worked hours inside `period`, formatted to 2 decimals."""
    calculator = calculator or StandardHoursCalculator()
    return format_hours(calculator.worked_milliseconds(filter_to_period(punches, period)))


class HoursReportService:
    """Use case: the Hours tab (summary for one pay period)."""

    def __init__(self, punches: PunchService, *, calculator: Optional[HoursCalculator] = None):
        self._punches = punches
        self._calculator = calculator or StandardHoursCalculator()

    def build_period_report(self, user: SessionUser, *, today: Optional[date] = None, offset: int = 0) -> PeriodReport:
        today = today or now_local()
        period = PayPeriod.containing(today)
        if offset:
            period = period.shifted(offset)

        snapshot = self._punches.get_log(user)
        in_period = sort_punches(filter_to_period(snapshot.punches, period))
        invalid = find_invalid_punches(in_period)

        rows = [PunchRow(punch=p, invalid=p in invalid, deletable=user.is_admin) for p in in_period]
        total = format_hours(self._calculator.worked_milliseconds(in_period))

        return PeriodReport(
            period=period,
            rows=rows,
            total_hours=total,
            rejected_records=snapshot.rejected_records,
        )
