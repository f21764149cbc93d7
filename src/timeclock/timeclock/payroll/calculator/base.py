from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...punches.model import Punch


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_milliseconds(self, punches: Sequence[Punch]) -> int:
        raise NotImplementedError
