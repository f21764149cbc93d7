from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

import pytest

from src.timeclock.timeclock.common.datetime_utils import to_epoch_ms
from src.timeclock.timeclock.core.enums import PunchKind
from src.timeclock.timeclock.core.exceptions import (
    AuthorizationError,
    InvalidRecordError,
    StorageError,
    ValidationError,
)
from src.timeclock.timeclock.punches.model import LoadedPunchLog, Punch
from src.timeclock.timeclock.punches.service import PunchService


class InMemoryPunches:
    def __init__(self, logs: dict[str, list[Punch]] | None = None, rejected: int = 0):
        self.logs = {k: list(v) for k, v in (logs or {}).items()}
        self.rejected = rejected
        self.load_calls = 0
        self.fail_saves = False

    def load(self, username: str) -> LoadedPunchLog:
        self.load_calls += 1
        errors = tuple(InvalidRecordError("bad label") for _ in range(self.rejected))
        return LoadedPunchLog(punches=tuple(self.logs.get(username, [])), rejected=errors)

    def save(self, username: str, punches: Sequence[Punch]) -> None:
        if self.fail_saves:
            raise StorageError("disk full")
        self.logs[username] = list(punches)


def test_unknown_user_gets_empty_log(staff_user):
    svc = PunchService(InMemoryPunches())

    snapshot = svc.get_log(staff_user)

    assert snapshot.punches == ()
    screen = svc.get_punch_screen(staff_user)
    assert screen.actions.last_punch is None
    assert screen.actions.can_clock_in


def test_record_punch_appends_and_saves(staff_user, fixed_now):
    repo = InMemoryPunches()
    svc = PunchService(repo)

    p = svc.record_punch(staff_user, PunchKind.CLOCK_IN, now=fixed_now)

    assert p == Punch(to_epoch_ms(fixed_now), PunchKind.CLOCK_IN)
    assert repo.logs["alice"] == [p]
    assert svc.get_punch_screen(staff_user).actions.can_clock_out


def test_log_is_loaded_once(staff_user, fixed_now):
    repo = InMemoryPunches()
    svc = PunchService(repo)

    svc.get_log(staff_user)
    svc.record_punch(staff_user, PunchKind.CLOCK_IN, now=fixed_now)
    svc.get_log(staff_user)

    assert repo.load_calls == 1


def test_disallowed_action_is_rejected(staff_user, fixed_now):
    repo = InMemoryPunches()
    svc = PunchService(repo)

    with pytest.raises(ValidationError):
        svc.record_punch(staff_user, PunchKind.CLOCK_OUT, now=fixed_now)
    assert repo.logs.get("alice") is None


def test_lunch_flow(staff_user, fixed_now):
    svc = PunchService(InMemoryPunches())

    svc.record_punch(staff_user, PunchKind.CLOCK_IN, now=fixed_now)
    svc.record_punch(staff_user, PunchKind.START_LUNCH, now=fixed_now + timedelta(hours=3))

    with pytest.raises(ValidationError):
        svc.record_punch(staff_user, PunchKind.CLOCK_OUT, now=fixed_now + timedelta(hours=3, minutes=5))

    svc.record_punch(staff_user, PunchKind.END_LUNCH, now=fixed_now + timedelta(hours=4))
    screen = svc.get_punch_screen(staff_user)
    assert screen.actions.last_punch == PunchKind.END_LUNCH
    assert screen.actions.can_clock_out


def test_save_failure_keeps_in_memory_log_and_retries(staff_user, fixed_now):
    repo = InMemoryPunches()
    svc = PunchService(repo)
    repo.fail_saves = True

    with pytest.raises(StorageError):
        svc.record_punch(staff_user, PunchKind.CLOCK_IN, now=fixed_now)

    assert len(svc.get_log(staff_user).punches) == 1
    assert svc.has_unsaved_changes(staff_user)
    assert svc.get_punch_screen(staff_user).actions.can_clock_out

    repo.fail_saves = False
    svc.record_punch(staff_user, PunchKind.CLOCK_OUT, now=fixed_now + timedelta(hours=8))

    assert [p.label for p in repo.logs["alice"]] == [PunchKind.CLOCK_IN, PunchKind.CLOCK_OUT]
    assert not svc.has_unsaved_changes(staff_user)


def test_non_admin_cannot_delete(staff_user, fixed_now):
    punch = Punch(to_epoch_ms(fixed_now), PunchKind.CLOCK_IN)
    svc = PunchService(InMemoryPunches({"alice": [punch]}))

    with pytest.raises(AuthorizationError):
        svc.delete_punch(staff_user, punch)


def test_admin_deletes_first_matching_punch(admin_user, fixed_now):
    ts = to_epoch_ms(fixed_now)
    first = Punch(ts, PunchKind.CLOCK_IN)
    out = Punch(ts + 1000, PunchKind.CLOCK_OUT)
    repo = InMemoryPunches({"admin": [first, out, first]})
    svc = PunchService(repo)

    svc.delete_punch(admin_user, Punch(ts, PunchKind.CLOCK_IN))

    assert repo.logs["admin"] == [out, first]


def test_delete_missing_punch(admin_user):
    svc = PunchService(InMemoryPunches())
    with pytest.raises(ValidationError):
        svc.delete_punch(admin_user, Punch(1, PunchKind.CLOCK_IN))


def test_rejected_records_are_reported(staff_user):
    svc = PunchService(InMemoryPunches(rejected=2))

    assert svc.get_log(staff_user).rejected_records == 2
    assert svc.get_punch_screen(staff_user, now=datetime(2026, 2, 3, 9, 0)).to_dict()["rejected_records"] == 2


def test_punch_screen_dict(staff_user, fixed_now):
    svc = PunchService(InMemoryPunches())
    svc.record_punch(staff_user, PunchKind.CLOCK_IN, now=fixed_now)
    svc.record_punch(staff_user, PunchKind.START_BREAK, now=fixed_now + timedelta(hours=2))

    data = svc.get_punch_screen(staff_user, now=fixed_now + timedelta(hours=2)).to_dict()

    assert data["last_punch"] == "Start Break"
    assert data["on_break"] is True
    assert data["now"] == "11:00:00 AM"
    assert {"label": "End Break", "enabled": True, "would_be_invalid": False} in data["buttons"]
    assert {"label": "Start Lunch", "enabled": False, "would_be_invalid": False} in data["buttons"]


def test_punch_screen_marks_enabled_buttons_that_would_be_invalid(staff_user):
    # Last label is End Lunch, but no session was ever opened.
    log = [Punch(0, PunchKind.CLOCK_OUT), Punch(1000, PunchKind.END_LUNCH)]
    svc = PunchService(InMemoryPunches({"alice": log}))

    screen = svc.get_punch_screen(staff_user, now=datetime(2026, 2, 3, 9, 0))
    buttons = {b["label"]: b for b in screen.to_dict()["buttons"]}

    assert buttons["Clock Out"] == {"label": "Clock Out", "enabled": True, "would_be_invalid": True}
    assert buttons["Clock In"] == {"label": "Clock In", "enabled": False, "would_be_invalid": False}
    assert PunchKind.START_LUNCH in screen.invalid_if_taken


def test_delete_saves_even_for_extreme_timestamps(admin_user):
    odd = Punch(10**20, PunchKind.CLOCK_IN)
    repo = InMemoryPunches({"admin": [odd]})
    svc = PunchService(repo)

    svc.delete_punch(admin_user, odd)

    assert svc.get_log(admin_user).punches == ()
    assert repo.logs["admin"] == []
    assert not svc.has_unsaved_changes(admin_user)
