from __future__ import annotations

from typing import Optional

from ...core.enums import RecordStatus, ShiftMode
from ...core.exceptions import ActiveShiftConflictError
from ...records.model import WorkRecord, WorkRecordDraft
from ...records.repository import RecordRepository
from ..model import ShiftOutcome, ShiftRequest
from .base import ShiftAction


class CheckInAction(ShiftAction):
    """NoShift/Completed -> Active: open a shift with empty end time and lunch."""

    mode = ShiftMode.CHECK_IN

    def apply(self, request: ShiftRequest, *, records: RecordRepository, active: Optional[WorkRecord]) -> ShiftOutcome:
        if active is not None:
            raise ActiveShiftConflictError("Pracovník už má v tento deň otvorenú smenu")

        record_id = records.append(
            WorkRecordDraft(
                foreman_name=request.foreman_name,
                site_id=request.site_id,
                worker_id=request.worker_id,
                work_date=request.work_date,
                start_time=request.start_time,
                lunch_duration="",
                end_time="",
                status=RecordStatus.ACTIVE,
            )
        )
        return ShiftOutcome(mode=self.mode, record_id=record_id)
