from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ShiftMode, ShiftPhase
from ..records.model import WorkRecord


@dataclass(frozen=True)
class ShiftState:
    """Where a worker stands on a given date.

    `active` is the open shift, if any. `last_completed` is the most recent
    finished shift of that day, kept so the dashboard can show it.
    """

    worker_id: str
    work_date: str
    active: Optional[WorkRecord] = None
    last_completed: Optional[WorkRecord] = None

    @property
    def phase(self) -> ShiftPhase:
        if self.active is not None:
            return ShiftPhase.ACTIVE
        if self.last_completed is not None:
            return ShiftPhase.COMPLETED
        return ShiftPhase.NO_SHIFT

    @property
    def mode(self) -> ShiftMode:
        return ShiftMode.CHECK_OUT if self.active is not None else ShiftMode.CHECK_IN


@dataclass(frozen=True)
class ShiftRequest:
    """Dashboard input; check-in reads start_time, check-out reads end/lunch."""

    foreman_name: str
    worker_id: str
    site_id: str
    work_date: str
    start_time: str = ""
    end_time: str = ""
    lunch_duration: str = ""


@dataclass(frozen=True)
class ShiftOutcome:
    mode: ShiftMode
    record_id: str
