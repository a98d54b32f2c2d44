from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ReportFilter:
    """Report query. Date bounds are inclusive; None (or "all") means no filter."""

    date_from: Optional[str] = None
    date_to: Optional[str] = None
    worker_id: Optional[str] = None
    site_id: Optional[str] = None


@dataclass(frozen=True)
class ReportRow:
    record_id: str
    work_date: str
    site_id: str
    site_name: str
    worker_id: str
    worker_name: str
    worker_role: str
    start_time: str
    end_time: str
    lunch_duration: str
    foreman_name: str
    hours: float


@dataclass(frozen=True)
class ReportData:
    rows: list[ReportRow]
    total_hours: float
    summary: list[dict]
