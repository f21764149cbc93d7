from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..common.datetime_utils import from_epoch_ms
from ..common.validators import require_int
from ..core.enums import PunchKind
from ..core.exceptions import InvalidRecordError, ValidationError


@dataclass(frozen=True)
class Punch:
    """Domain entity: one timestamped punch (epoch milliseconds)."""

    timestamp: int
    label: PunchKind

    def to_dict(self) -> dict:
        return {"timestamp": int(self.timestamp), "label": self.label.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Punch":
        """Build a punch from its stored form.

        Raises InvalidRecordError when the label is not a known PunchKind or
        the timestamp is not an integer within the local datetime range.
        """

        if not isinstance(data, Mapping):
            raise InvalidRecordError("Punch record must be an object", record=data)

        try:
            label = PunchKind(data.get("label"))
        except ValueError:
            raise InvalidRecordError(f"Unknown punch label: {data.get('label')!r}", record=data)

        try:
            timestamp = require_int(data.get("timestamp"), "timestamp")
        except ValidationError as e:
            raise InvalidRecordError(str(e), record=data)

        try:
            from_epoch_ms(timestamp)
        except (OverflowError, OSError, ValueError):
            raise InvalidRecordError(f"timestamp out of range: {timestamp}", record=data)

        return cls(timestamp=timestamp, label=label)


@dataclass(frozen=True)
class LoadedPunchLog:
    """Result of loading a user's punch log.

    Records that could not be parsed are dropped from `punches` and kept in
    `rejected` so the caller can warn the user.
    """

    punches: tuple[Punch, ...] = ()
    rejected: tuple[InvalidRecordError, ...] = field(default_factory=tuple)


def sort_punches(punches: Iterable[Punch]) -> list[Punch]:
    """Ascending by timestamp; ties keep insertion order."""
    return sorted(punches, key=lambda p: p.timestamp)


def parse_punch_records(records: Iterable[Any]) -> LoadedPunchLog:
    punches: list[Punch] = []
    rejected: list[InvalidRecordError] = []
    for rec in records:
        try:
            punches.append(Punch.from_dict(rec))
        except InvalidRecordError as e:
            rejected.append(e)
    return LoadedPunchLog(punches=tuple(punches), rejected=tuple(rejected))
