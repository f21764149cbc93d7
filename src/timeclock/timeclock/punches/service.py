from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local, to_epoch_ms
from ..common.logging_utils import get_logger
from ..core.enums import PunchKind
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.service import SessionUser
from .model import Punch
from .repository import PunchRepository
from .state_machine import PunchActions, actions_for, would_be_invalid

logger = get_logger("punches.service")


@dataclass(frozen=True)
class PunchLogSnapshot:
    punches: tuple[Punch, ...]
    rejected_records: int = 0


@dataclass(frozen=True)
class PunchScreen:
    """What the Punch tab needs: clock, last punch and the button row."""

    now: datetime
    actions: PunchActions
    rejected_records: int = 0
    # Actions that would break the pairing rules if taken now, enabled or not.
    invalid_if_taken: frozenset[PunchKind] = frozenset()

    def to_dict(self) -> dict:
        last = self.actions.last_punch
        return {
            "now": self.now.strftime("%I:%M:%S %p"),
            "last_punch": last.value if last else None,
            "on_lunch": self.actions.on_lunch,
            "on_break": self.actions.on_break,
            "buttons": [
                {**b.to_dict(), "would_be_invalid": b.kind in self.invalid_if_taken}
                for b in self.actions.buttons()
            ],
            "rejected_records": self.rejected_records,
        }


class PunchService:
    """Owns the in-memory punch logs and writes them through a repository.

    The in-memory log is authoritative: when a save fails the change is kept
    and the whole log is written again on the next mutation.
    """

    def __init__(self, punches: PunchRepository):
        self._repo = punches
        self._logs: dict[str, list[Punch]] = {}
        self._rejected: dict[str, int] = {}
        self._dirty: set[str] = set()
        self._locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, username: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[username]

    def _ensure_loaded(self, username: str) -> list[Punch]:
        # Caller holds the user's lock.
        log = self._logs.get(username)
        if log is None:
            loaded = self._repo.load(username)
            log = list(loaded.punches)
            self._logs[username] = log
            self._rejected[username] = len(loaded.rejected)
            if loaded.rejected:
                logger.warning("%d punch record(s) dropped while loading %s", len(loaded.rejected), username)
        return log

    def _persist(self, username: str, log: list[Punch]) -> None:
        self._dirty.add(username)
        try:
            self._repo.save(username, tuple(log))
        except Exception:
            logger.exception("Saving punches for %s failed; keeping in-memory log", username)
            raise
        self._dirty.discard(username)

    def get_log(self, user: SessionUser) -> PunchLogSnapshot:
        with self._lock_for(user.username):
            log = self._ensure_loaded(user.username)
            return PunchLogSnapshot(punches=tuple(log), rejected_records=self._rejected.get(user.username, 0))

    def has_unsaved_changes(self, user: SessionUser) -> bool:
        return user.username in self._dirty

    def get_punch_screen(self, user: SessionUser, *, now: Optional[datetime] = None) -> PunchScreen:
        snapshot = self.get_log(user)
        return PunchScreen(
            now=now or now_local(),
            actions=actions_for(snapshot.punches),
            rejected_records=snapshot.rejected_records,
            invalid_if_taken=frozenset(k for k in PunchKind if would_be_invalid(snapshot.punches, k)),
        )

    def record_punch(self, user: SessionUser, kind: PunchKind, *, now: Optional[datetime] = None) -> Punch:
        now = now or now_local()
        with self._lock_for(user.username):
            log = self._ensure_loaded(user.username)
            actions = actions_for(log)
            if not actions.is_permitted(kind):
                raise ValidationError(f"{kind.value} is not available right now")

            punch = Punch(timestamp=to_epoch_ms(now), label=kind)
            log.append(punch)
            self._persist(user.username, log)
            logger.info("%s punched %s", user.username, kind.value)
            return punch

    def delete_punch(self, user: SessionUser, punch: Punch) -> None:
        if not user.is_admin:
            raise AuthorizationError("Only admins can delete punches")

        with self._lock_for(user.username):
            log = self._ensure_loaded(user.username)
            if punch not in log:
                raise ValidationError("Punch not found")
            log.remove(punch)
            self._persist(user.username, log)
            logger.info("%s deleted punch %s at %d ms", user.username, punch.label.value, punch.timestamp)
