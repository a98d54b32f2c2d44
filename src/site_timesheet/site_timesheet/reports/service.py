from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import ALL_FILTER, UNKNOWN_SITE_LABEL, UNKNOWN_WORKER_LABEL
from ..records.model import WorkRecord
from ..records.repository import RecordRepository
from ..sites.model import Site
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import ReportData, ReportFilter, ReportRow

logger = logging.getLogger(__name__)


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != ALL_FILTER


def filter_records(records: Iterable[WorkRecord], flt: ReportFilter) -> list[WorkRecord]:
    """Completed records matching the filter.

    Dates are ISO strings, so plain string comparison gives calendar order.
    """
    out = []
    for r in records:
        if r.is_active:
            continue
        if flt.date_from and r.work_date < flt.date_from:
            continue
        if flt.date_to and r.work_date > flt.date_to:
            continue
        if _is_set(flt.worker_id) and r.worker_id != flt.worker_id:
            continue
        if _is_set(flt.site_id) and r.site_id != flt.site_id:
            continue
        out.append(r)
    return out


def enrich(
    record: WorkRecord,
    sites: Mapping[str, Site],
    workers: Mapping[str, Worker],
    *,
    calculator: Optional[HoursCalculator] = None,
) -> ReportRow:
    calculator = calculator or StandardHoursCalculator()
    site = sites.get(record.site_id)
    worker = workers.get(record.worker_id)
    return ReportRow(
        record_id=record.record_id,
        work_date=record.work_date,
        site_id=record.site_id,
        site_name=site.name if site else UNKNOWN_SITE_LABEL,
        worker_id=record.worker_id,
        worker_name=worker.name if worker else UNKNOWN_WORKER_LABEL,
        worker_role=worker.role if worker else UNKNOWN_WORKER_LABEL,
        start_time=record.start_time,
        end_time=record.end_time,
        lunch_duration=record.lunch_duration,
        foreman_name=record.foreman_name,
        hours=calculator.worked_hours(record),
    )


def aggregate_total(rows: Iterable[ReportRow]) -> float:
    return sum(r.hours for r in rows)


class ReportService:
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

    def build_report(self, flt: ReportFilter) -> ReportData:
        sites = {s.site_id: s for s in self._sites.list_all()}
        workers = {w.worker_id: w for w in self._workers.list_all()}
        records: Sequence[WorkRecord] = self._records.list_all()

        rows = [
            enrich(r, sites, workers, calculator=self._calculator)
            for r in filter_records(records, flt)
        ]

        summary_map: dict[str, dict] = {}
        for row in rows:
            s = summary_map.get(row.worker_id)
            if not s:
                s = {
                    "worker_id": row.worker_id,
                    "worker_name": row.worker_name,
                    "worker_role": row.worker_role,
                    "shifts": 0,
                    "total_hours": 0.0,
                }
                summary_map[row.worker_id] = s
            s["shifts"] += 1
            s["total_hours"] += row.hours

        summary = sorted(summary_map.values(), key=lambda x: x["total_hours"], reverse=True)
        total = aggregate_total(rows)
        logger.debug("Report %s: %s rows, %.2f h", flt, len(rows), total)
        return ReportData(rows=rows, total_hours=total, summary=summary)
