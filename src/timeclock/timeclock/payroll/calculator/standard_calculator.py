from __future__ import annotations

from typing import Optional, Sequence

from ...core.constants import MS_PER_HOUR
from ...core.enums import PunchKind
from ...punches.model import Punch, sort_punches
from .base import HoursCalculator


def format_hours(milliseconds: int) -> str:
    return f"{milliseconds / MS_PER_HOUR:.2f}"


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) - lunch + break, per closed session.

    Break time is added back, not subtracted. Only fully closed intervals
    count; opens left pending when the next Clock In arrives are dropped.
    """

    def worked_milliseconds(self, punches: Sequence[Punch]) -> int:
        total = 0
        clock_in: Optional[int] = None
        lunch_start: Optional[int] = None
        break_start: Optional[int] = None
        lunch_sum = 0
        break_sum = 0

        for p in sort_punches(punches):
            ts = p.timestamp
            if p.label == PunchKind.CLOCK_IN:
                clock_in = ts
                lunch_start = break_start = None
                lunch_sum = break_sum = 0
            elif p.label == PunchKind.CLOCK_OUT:
                if clock_in is not None:
                    total += ts - clock_in - lunch_sum + break_sum
                    clock_in = None
            elif p.label == PunchKind.START_LUNCH:
                lunch_start = ts
            elif p.label == PunchKind.END_LUNCH:
                if lunch_start is not None:
                    lunch_sum += ts - lunch_start
                    lunch_start = None
            elif p.label == PunchKind.START_BREAK:
                break_start = ts
            elif p.label == PunchKind.END_BREAK:
                if break_start is not None:
                    break_sum += ts - break_start
                    break_start = None

        return total

    def worked_hours(self, punches: Sequence[Punch]) -> str:
        return format_hours(self.worked_milliseconds(punches))
