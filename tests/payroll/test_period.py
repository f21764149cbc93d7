from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.timeclock.timeclock.common.datetime_utils import to_epoch_ms
from src.timeclock.timeclock.core.enums import PunchKind
from src.timeclock.timeclock.payroll.period import PayPeriod, filter_to_period, start_of_pay_period
from src.timeclock.timeclock.payroll.service import total_hours
from src.timeclock.timeclock.punches.model import Punch


def test_anchor_is_a_period_start():
    assert start_of_pay_period(datetime(2025, 1, 5, 0, 0)) == datetime(2025, 1, 5)


@pytest.mark.parametrize(
    "today, expected",
    [
        (datetime(2025, 1, 5, 23, 59), datetime(2025, 1, 5)),
        (datetime(2025, 1, 18, 12, 0), datetime(2025, 1, 5)),
        (datetime(2025, 1, 19, 0, 0), datetime(2025, 1, 19)),
        (date(2026, 2, 3), datetime(2026, 2, 1)),
        (date(2026, 2, 14), datetime(2026, 2, 1)),
        (date(2026, 2, 15), datetime(2026, 2, 15)),
    ],
)
def test_start_of_pay_period(today, expected):
    assert start_of_pay_period(today) == expected


def test_dates_before_anchor_step_back_in_whole_periods():
    assert start_of_pay_period(date(2025, 1, 4)) == datetime(2024, 12, 22)
    assert start_of_pay_period(date(2024, 12, 22)) == datetime(2024, 12, 22)


def test_period_is_fourteen_days(fixed_now):
    period = PayPeriod.containing(fixed_now)
    assert period.start == datetime(2026, 2, 1)
    assert period.end == datetime(2026, 2, 15)
    assert period.end - period.start == timedelta(days=14)


def test_next_and_previous(fixed_now):
    period = PayPeriod.containing(fixed_now)
    assert period.next().start == datetime(2026, 2, 15)
    assert period.previous().start == datetime(2026, 1, 18)
    assert period.next().previous() == period


def test_punch_at_end_belongs_to_next_period(fixed_now):
    period = PayPeriod.containing(fixed_now)
    at_start = Punch(period.start_ms, PunchKind.CLOCK_IN)
    at_end = Punch(period.end_ms, PunchKind.CLOCK_OUT)

    assert period.contains(at_start.timestamp)
    assert not period.contains(at_end.timestamp)
    assert period.next().contains(at_end.timestamp)
    assert filter_to_period([at_start, at_end], period) == [at_start]


def test_total_hours_excludes_punches_outside_window(fixed_now):
    period = PayPeriod.containing(fixed_now)
    before = to_epoch_ms(datetime(2026, 1, 31, 9, 0))
    inside = to_epoch_ms(datetime(2026, 2, 3, 9, 0))
    log = [
        Punch(before, PunchKind.CLOCK_IN),
        Punch(before + 3_600_000, PunchKind.CLOCK_OUT),
        Punch(inside, PunchKind.CLOCK_IN),
        Punch(inside + 2 * 3_600_000, PunchKind.CLOCK_OUT),
        Punch(period.end_ms, PunchKind.CLOCK_IN),
        Punch(period.end_ms + 3_600_000, PunchKind.CLOCK_OUT),
    ]

    assert total_hours(log, period) == "2.00"
    assert total_hours(log, period.next()) == "1.00"
