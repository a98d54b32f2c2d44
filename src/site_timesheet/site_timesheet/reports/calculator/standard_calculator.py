from __future__ import annotations

from .base import HoursCalculator
from ...common.datetime_utils import compute_worked_hours
from ...records.model import WorkRecord


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (end - start) - lunch, overnight aware, not below 0."""

    def worked_hours(self, record: WorkRecord) -> float:
        if record.is_active:
            return 0.0
        return compute_worked_hours(record.start_time, record.end_time, record.lunch_duration)
