from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import ShiftMode
from ...records.model import WorkRecord
from ...records.repository import RecordRepository
from ..model import ShiftOutcome, ShiftRequest


class ShiftAction(ABC):
    """Strategy Pattern: one transition of the shift state machine."""

    mode: ShiftMode

    @abstractmethod
    def apply(self, request: ShiftRequest, *, records: RecordRepository, active: Optional[WorkRecord]) -> ShiftOutcome:
        raise NotImplementedError
