"""Punch state machine.

Two views over the same vocabulary:

- gating: which buttons are enabled now, derived only from the label of the
  chronologically last punch;
- validation: which punches of a historical sequence break the open/close
  pairing rules.

Everything here is pure. Inputs are never mutated and rule breaks are
reported as membership in the returned set, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import PunchKind
from .model import Punch, sort_punches

_SESSION_OPEN_LABELS = frozenset({PunchKind.CLOCK_IN, PunchKind.END_LUNCH, PunchKind.END_BREAK})


@dataclass(frozen=True)
class PunchButton:
    kind: PunchKind
    enabled: bool

    def to_dict(self) -> dict:
        return {"label": self.kind.value, "enabled": self.enabled}


@dataclass(frozen=True)
class PunchActions:
    """Actions permitted right now, given the last punch label."""

    last_punch: Optional[PunchKind]
    can_clock_in: bool
    can_clock_out: bool
    can_start_lunch: bool
    can_start_break: bool
    on_lunch: bool
    on_break: bool

    def is_permitted(self, kind: PunchKind) -> bool:
        return {
            PunchKind.CLOCK_IN: self.can_clock_in,
            PunchKind.CLOCK_OUT: self.can_clock_out,
            PunchKind.START_LUNCH: self.can_start_lunch,
            PunchKind.END_LUNCH: self.on_lunch,
            PunchKind.START_BREAK: self.can_start_break,
            PunchKind.END_BREAK: self.on_break,
        }[kind]

    def buttons(self) -> list[PunchButton]:
        # Lunch and break slots swap to their End action while open.
        if self.on_lunch:
            lunch = PunchButton(PunchKind.END_LUNCH, True)
        else:
            lunch = PunchButton(PunchKind.START_LUNCH, self.can_start_lunch)

        if self.on_break:
            brk = PunchButton(PunchKind.END_BREAK, True)
        else:
            brk = PunchButton(PunchKind.START_BREAK, self.can_start_break)

        return [
            PunchButton(PunchKind.CLOCK_IN, self.can_clock_in),
            PunchButton(PunchKind.CLOCK_OUT, self.can_clock_out),
            lunch,
            brk,
        ]


@dataclass(frozen=True)
class SessionState:
    in_session: bool = False
    lunch_open: bool = False
    break_open: bool = False


def last_punch_label(punches: Sequence[Punch]) -> Optional[PunchKind]:
    """Label of the chronologically last punch, or None for an empty log."""
    if not punches:
        return None
    return sort_punches(punches)[-1].label


def available_actions(last: Optional[PunchKind]) -> PunchActions:
    can_clock_in = last is None or last == PunchKind.CLOCK_OUT
    session_open = last in _SESSION_OPEN_LABELS
    return PunchActions(
        last_punch=last,
        can_clock_in=can_clock_in,
        can_clock_out=session_open,
        can_start_lunch=session_open,
        can_start_break=session_open,
        on_lunch=last == PunchKind.START_LUNCH,
        on_break=last == PunchKind.START_BREAK,
    )


def actions_for(punches: Sequence[Punch]) -> PunchActions:
    return available_actions(last_punch_label(punches))


def _step(state: SessionState, kind: PunchKind) -> tuple[SessionState, bool]:
    """Apply one punch. Returns the next state and whether the punch broke a pairing rule."""

    if kind == PunchKind.CLOCK_IN:
        return SessionState(in_session=True), state.in_session

    if kind == PunchKind.CLOCK_OUT:
        if not state.in_session:
            return state, True
        return SessionState(False, state.lunch_open, state.break_open), False

    if kind == PunchKind.START_LUNCH:
        if not state.in_session or state.lunch_open:
            return state, True
        return SessionState(state.in_session, True, state.break_open), False

    if kind == PunchKind.END_LUNCH:
        if not state.lunch_open:
            return state, True
        return SessionState(state.in_session, False, state.break_open), False

    if kind == PunchKind.START_BREAK:
        if not state.in_session or state.break_open:
            return state, True
        return SessionState(state.in_session, state.lunch_open, True), False

    # END_BREAK
    if not state.break_open:
        return state, True
    return SessionState(state.in_session, state.lunch_open, False), False


def replay_state(punches: Sequence[Punch]) -> SessionState:
    """Session state after replaying the log in timestamp order."""
    state = SessionState()
    for p in sort_punches(punches):
        state, _ = _step(state, p.label)
    return state


def would_be_invalid(punches: Sequence[Punch], kind: PunchKind) -> bool:
    """Whether appending `kind` after the log would break a pairing rule.

    Unlike PunchActions.is_permitted this looks at the replayed state, not
    only at the last label.
    """

    _, invalid = _step(replay_state(punches), kind)
    return invalid


def find_invalid_punches(punches: Sequence[Punch]) -> frozenset[Punch]:
    """Punches that break the open/close pairing rules.

    A second Clock In inside an open session flags both Clock Ins. The
    chronologically last punch is never flagged: the log may simply be
    incomplete.
    """

    ordered = sort_punches(punches)
    invalid: set[Punch] = set()
    state = SessionState()
    open_clock_in: Optional[Punch] = None

    for i, p in enumerate(ordered):
        nxt = ordered[i + 1] if i + 1 < len(ordered) else None
        state, broken = _step(state, p.label)
        if broken:
            invalid.add(p)

        if p.label == PunchKind.CLOCK_IN:
            if broken and open_clock_in is not None:
                invalid.add(open_clock_in)
            open_clock_in = p
            if nxt is not None and nxt.label in (PunchKind.END_BREAK, PunchKind.END_LUNCH):
                invalid.add(p)
                invalid.add(nxt)
        elif p.label == PunchKind.CLOCK_OUT and not broken:
            open_clock_in = None
        elif p.label == PunchKind.START_LUNCH:
            if nxt is None or nxt.label != PunchKind.END_LUNCH:
                invalid.add(p)
                if nxt is not None:
                    invalid.add(nxt)
        elif p.label == PunchKind.START_BREAK:
            if nxt is None or nxt.label != PunchKind.END_BREAK:
                invalid.add(p)
                if nxt is not None:
                    invalid.add(nxt)

    if ordered:
        invalid.discard(ordered[-1])
    return frozenset(invalid)
