from __future__ import annotations

from typing import Protocol, Sequence

from .model import LoadedPunchLog, Punch


class PunchRepository(Protocol):
    """Storage interface for per-user punch logs.

    Note (DIP): the service depends on this interface, not on a concrete store.
    """

    def load(self, username: str) -> LoadedPunchLog:
        """Return the user's log. A missing log is an empty log, not an error."""

        raise NotImplementedError

    def save(self, username: str, punches: Sequence[Punch]) -> None:
        """Replace the whole log atomically. Raises StorageError on failure."""

        raise NotImplementedError
