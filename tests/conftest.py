from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.core.enums import PunchKind, Role
from src.timeclock.timeclock.punches.model import Punch
from src.timeclock.timeclock.users.service import SessionUser


@pytest.fixture
def fixed_now() -> datetime:
    # 2026-02-01 is a pay-period boundary; this is the Tuesday after.
    return datetime(2026, 2, 3, 9, 0, 0)


@pytest.fixture
def staff_user() -> SessionUser:
    return SessionUser(username="alice", display_name="Alice Martin", role=Role.USER)


@pytest.fixture
def admin_user() -> SessionUser:
    return SessionUser(username="admin", display_name="Administrator", role=Role.ADMIN)


@pytest.fixture
def punches():
    """Build punches from (timestamp, PunchKind) pairs."""

    def _build(*pairs: tuple[int, PunchKind]) -> list[Punch]:
        return [Punch(timestamp=ts, label=kind) for ts, kind in pairs]

    return _build
