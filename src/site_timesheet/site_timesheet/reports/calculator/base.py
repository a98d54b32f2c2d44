from __future__ import annotations

from abc import ABC, abstractmethod

from ...records.model import WorkRecord


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, record: WorkRecord) -> float:
        raise NotImplementedError
