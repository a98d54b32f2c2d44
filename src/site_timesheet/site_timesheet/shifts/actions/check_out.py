from __future__ import annotations

from typing import Optional

from ...core.enums import RecordStatus, ShiftMode
from ...core.exceptions import NotFoundError, ValidationError
from ...records.model import WorkRecord
from ...records.repository import RecordRepository
from ..model import ShiftOutcome, ShiftRequest
from .base import ShiftAction


class CheckOutAction(ShiftAction):
    """Active -> Completed: close the open shift.

    The site chosen at check-in is kept; check-out never changes it.
    """

    mode = ShiftMode.CHECK_OUT

    def apply(self, request: ShiftRequest, *, records: RecordRepository, active: Optional[WorkRecord]) -> ShiftOutcome:
        if active is None:
            raise ValidationError("Pracovník nemá v tento deň otvorenú smenu")

        updated = records.update(
            active.record_id,
            {
                "end_time": request.end_time,
                "lunch_duration": request.lunch_duration,
                "status": RecordStatus.COMPLETED,
            },
        )
        if not updated:
            raise NotFoundError("Záznam smeny už neexistuje")
        return ShiftOutcome(mode=self.mode, record_id=active.record_id)
