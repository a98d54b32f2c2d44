from __future__ import annotations

import pytest

from src.site_timesheet.site_timesheet.core.enums import RecordStatus
from src.site_timesheet.site_timesheet.records.model import WorkRecord
from src.site_timesheet.site_timesheet.reports.model import ReportFilter
from src.site_timesheet.site_timesheet.reports.service import (
    ReportService,
    aggregate_total,
    enrich,
    filter_records,
)
from src.site_timesheet.site_timesheet.sites.model import Site
from src.site_timesheet.site_timesheet.workers.model import Worker


def _rec(rid, worker, site, day, start="07:00", end="16:00", lunch="00:30", status=RecordStatus.COMPLETED, created=0):
    return WorkRecord(
        record_id=rid,
        foreman_name="Majster",
        site_id=site,
        worker_id=worker,
        work_date=day,
        start_time=start,
        lunch_duration=lunch if status == RecordStatus.COMPLETED else "",
        end_time=end if status == RecordStatus.COMPLETED else "",
        created_at=created,
        status=status,
    )


class InMemoryRecords:
    def __init__(self, items):
        self.items = list(items)

    def list_all(self, *, order_by="created_at", descending=True):
        return sorted(self.items, key=lambda r: getattr(r, order_by), reverse=descending)


class InMemoryList:
    def __init__(self, items):
        self.items = list(items)

    def list_all(self):
        return list(self.items)


SITES = [Site(site_id="S1", name="Rezidencia"), Site(site_id="S2", name="Nivy")]
WORKERS = [Worker(worker_id="W1", name="Ján Novák", role="Murár"), Worker(worker_id="W2", name="Peter Kováč", role="Zvárač")]


def test_filter_is_inclusive_and_skips_active():
    records = [
        _rec("a", "W1", "S1", "2024-05-01"),
        _rec("b", "W1", "S1", "2024-05-31"),
        _rec("c", "W1", "S1", "2024-06-01"),
        _rec("d", "W2", "S1", "2024-05-10", status=RecordStatus.ACTIVE),
    ]
    out = filter_records(records, ReportFilter(date_from="2024-05-01", date_to="2024-05-31"))
    assert [r.record_id for r in out] == ["a", "b"]


def test_filter_by_worker_and_site_with_all_meaning_no_filter():
    records = [
        _rec("a", "W1", "S1", "2024-05-02"),
        _rec("b", "W2", "S1", "2024-05-02"),
        _rec("c", "W1", "S2", "2024-05-02"),
    ]
    assert [r.record_id for r in filter_records(records, ReportFilter(worker_id="W1", site_id="all"))] == ["a", "c"]
    assert [r.record_id for r in filter_records(records, ReportFilter(site_id="S1"))] == ["a", "b"]
    assert len(filter_records(records, ReportFilter())) == 3


def test_enrich_uses_placeholders_for_missing_references():
    row = enrich(_rec("a", "gone", "gone", "2024-05-02"), {}, {})
    assert row.site_name == "Neznáma stavba"
    assert row.worker_name == "Neznámy"
    assert row.worker_role == "Neznámy"
    assert row.hours == 8.5


def test_total_equals_sum_of_rows():
    svc = ReportService(
        InMemoryRecords(
            [
                _rec("a", "W1", "S1", "2024-05-02"),
                _rec("b", "W2", "S2", "2024-05-03", start="22:00", end="02:00"),
                _rec("c", "W1", "S1", "2024-05-04", status=RecordStatus.ACTIVE),
            ]
        ),
        InMemoryList(SITES),
        InMemoryList(WORKERS),
    )
    data = svc.build_report(ReportFilter(date_from="2024-05-01", date_to="2024-05-31"))

    assert len(data.rows) == 2
    assert data.total_hours == pytest.approx(sum(r.hours for r in data.rows))
    assert data.total_hours == pytest.approx(8.5 + 3.5)
    assert aggregate_total(data.rows) == pytest.approx(data.total_hours)


def test_summary_totals_per_worker_sorted_descending():
    svc = ReportService(
        InMemoryRecords(
            [
                _rec("a", "W1", "S1", "2024-05-02"),
                _rec("b", "W2", "S1", "2024-05-02"),
                _rec("c", "W2", "S2", "2024-05-03"),
            ]
        ),
        InMemoryList(SITES),
        InMemoryList(WORKERS),
    )
    summary = svc.build_report(ReportFilter()).summary

    assert [s["worker_id"] for s in summary] == ["W2", "W1"]
    assert summary[0]["shifts"] == 2
    assert summary[0]["total_hours"] == pytest.approx(17.0)


def test_deleted_site_keeps_records_and_shows_placeholder():
    sites = InMemoryList(SITES)
    records = InMemoryRecords([_rec(f"r{i}", "W1", "S2", f"2024-05-0{i}") for i in range(1, 4)])
    svc = ReportService(records, sites, InMemoryList(WORKERS))

    sites.items = [s for s in sites.items if s.site_id != "S2"]
    data = svc.build_report(ReportFilter(date_from="2024-05-01", date_to="2024-05-31"))

    assert len(records.items) == 3
    assert [r.site_name for r in data.rows] == ["Neznáma stavba"] * 3
