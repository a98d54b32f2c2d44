from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import (
    require_duration,
    require_iso_date,
    require_month,
    require_non_empty,
    require_time_of_day,
)
from ..core.constants import UNKNOWN_HISTORY_WORKER_LABEL, UNKNOWN_SITE_LABEL
from ..core.exceptions import NotFoundError, ValidationError
from ..records.model import WorkRecord
from ..records.repository import RecordRepository
from ..reports.calculator.base import HoursCalculator
from ..reports.calculator.standard_calculator import StandardHoursCalculator
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository

logger = logging.getLogger(__name__)

# Ad-hoc edit rules: an open shift keeps its site until it is checked out.
COMPLETED_EDITABLE = frozenset({"work_date", "start_time", "end_time", "lunch_duration", "site_id", "worker_id"})
ACTIVE_EDITABLE = frozenset({"work_date", "start_time"})


@dataclass(frozen=True)
class HistoryItem:
    record: WorkRecord
    site_name: str
    worker_name: str
    hours: float


@dataclass(frozen=True)
class WorkerProfile:
    worker: Worker
    month: str
    items: list[HistoryItem]
    total_hours: float
    completed_shifts: int
    average_hours: float


class HistoryService:
    def __init__(
        self,
        records: RecordRepository,
        sites: SiteRepository,
        workers: WorkerRepository,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._records = records
        self._sites = sites
        self._workers = workers
        self._calculator = calculator or StandardHoursCalculator()

    def _items(self, records: list[WorkRecord]) -> list[HistoryItem]:
        sites = {s.site_id: s.name for s in self._sites.list_all()}
        workers = {w.worker_id: w.name for w in self._workers.list_all()}
        return [
            HistoryItem(
                record=r,
                site_name=sites.get(r.site_id, UNKNOWN_SITE_LABEL),
                worker_name=workers.get(r.worker_id, UNKNOWN_HISTORY_WORKER_LABEL),
                hours=self._calculator.worked_hours(r),
            )
            for r in records
        ]

    def list_history(self, *, date_from: Optional[str] = None, date_to: Optional[str] = None) -> list[HistoryItem]:
        """All records (open shifts included), most recently created first."""
        records = [
            r
            for r in self._records.list_all(order_by="created_at", descending=True)
            if not (date_from and r.work_date < date_from) and not (date_to and r.work_date > date_to)
        ]
        return self._items(records)

    def delete_record(self, record_id: str) -> None:
        if not self._records.remove(record_id):
            raise NotFoundError("Záznam neexistuje")
        logger.info("Record %s deleted from history", record_id)

    def edit_record(self, record_id: str, changes: dict[str, Any]) -> WorkRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Záznam neexistuje")

        allowed = ACTIVE_EDITABLE if record.is_active else COMPLETED_EDITABLE
        rejected = set(changes) - allowed
        if rejected:
            raise ValidationError(f"Tieto polia nie je možné upraviť: {', '.join(sorted(rejected))}")

        clean: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "work_date":
                clean[key] = require_iso_date(value)
            elif key in ("start_time", "end_time"):
                clean[key] = require_time_of_day(value, "Začiatok" if key == "start_time" else "Koniec")
            elif key == "lunch_duration":
                clean[key] = require_duration(value, "Obed")
            elif key == "site_id":
                clean[key] = require_non_empty(value, "Stavba")
                if not self._sites.get_by_id(clean[key]):
                    raise NotFoundError("Stavba neexistuje")
            elif key == "worker_id":
                clean[key] = require_non_empty(value, "Pracovník")
                if not self._workers.get_by_id(clean[key]):
                    raise NotFoundError("Pracovník neexistuje")

        if clean and not self._records.update(record_id, clean):
            raise NotFoundError("Záznam neexistuje")
        updated = self._records.get_by_id(record_id)
        if updated is None:
            raise NotFoundError("Záznam neexistuje")
        return updated

    def worker_profile(self, worker_id: str, month: str) -> WorkerProfile:
        """Monthly stats for one worker; the average counts finished shifts only."""
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Pracovník neexistuje")
        month = require_month(month)
        first, last = month_bounds(month)

        records = sorted(
            (r for r in self._records.list_all() if r.worker_id == worker_id and first <= r.work_date <= last),
            key=lambda r: r.work_date,
            reverse=True,
        )
        items = self._items(records)
        total = sum(i.hours for i in items)
        completed = sum(1 for i in items if not i.record.is_active)
        return WorkerProfile(
            worker=worker,
            month=month,
            items=items,
            total_hours=total,
            completed_shifts=completed,
            average_hours=total / completed if completed else 0.0,
        )
