from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..common.datetime_utils import adjust_time, today_iso
from ..common.dispatch import WriteDispatcher
from ..core.constants import (
    CLOCK_STEP_MINUTES,
    DEFAULT_END_TIME,
    DEFAULT_LUNCH_DURATION,
    DEFAULT_START_TIME,
    DURATION_STEP_MINUTES,
)
from ..core.exceptions import ValidationError
from .service import ShiftService


@dataclass
class ShiftEntryForm:
    """State behind the dashboard entry form.

    Submitting hands the write to the dispatcher and resets the worker and
    time fields right away (site and date stay selected for the next entry).
    A failed write is reported through `on_error`; it is not retried.
    """

    service: ShiftService
    dispatcher: WriteDispatcher
    foreman_name: str
    on_error: Optional[Callable[[BaseException], None]] = None
    site_id: str = ""
    worker_id: str = ""
    work_date: str = field(default_factory=today_iso)
    start_time: str = DEFAULT_START_TIME
    lunch_duration: str = DEFAULT_LUNCH_DURATION
    end_time: str = DEFAULT_END_TIME

    def step_start(self, steps: int = 1) -> str:
        self.start_time = adjust_time(self.start_time, steps * CLOCK_STEP_MINUTES)
        return self.start_time

    def step_end(self, steps: int = 1) -> str:
        self.end_time = adjust_time(self.end_time, steps * CLOCK_STEP_MINUTES)
        return self.end_time

    def step_lunch(self, steps: int = 1) -> str:
        self.lunch_duration = adjust_time(self.lunch_duration, steps * DURATION_STEP_MINUTES, is_duration=True)
        return self.lunch_duration

    def reset(self) -> None:
        self.worker_id = ""
        self.start_time = DEFAULT_START_TIME
        self.lunch_duration = DEFAULT_LUNCH_DURATION
        self.end_time = DEFAULT_END_TIME

    def _require_selection(self) -> None:
        if not self.site_id or not self.worker_id:
            raise ValidationError("Vyberte stavbu aj pracovníka")

    def submit_manual(self) -> Future:
        self._require_selection()
        future = self.dispatcher.submit(
            self.service.record_manual,
            foreman_name=self.foreman_name,
            worker_id=self.worker_id,
            site_id=self.site_id,
            work_date=self.work_date,
            start_time=self.start_time,
            end_time=self.end_time,
            lunch_duration=self.lunch_duration,
            on_error=self.on_error,
        )
        self.reset()
        return future

    def submit_live(self) -> Future:
        self._require_selection()
        future = self.dispatcher.submit(
            self.service.submit,
            foreman_name=self.foreman_name,
            worker_id=self.worker_id,
            site_id=self.site_id,
            work_date=self.work_date,
            start_time=self.start_time,
            end_time=self.end_time,
            lunch_duration=self.lunch_duration,
            on_error=self.on_error,
        )
        self.reset()
        return future
