from __future__ import annotations

import pytest

from src.site_timesheet.site_timesheet.core.enums import RecordStatus
from src.site_timesheet.site_timesheet.core.exceptions import NotFoundError, ValidationError
from src.site_timesheet.site_timesheet.history.service import HistoryService
from src.site_timesheet.site_timesheet.records.model import WorkRecordDraft
from src.site_timesheet.site_timesheet.storage.json_repositories import (
    JsonRecordRepository,
    JsonSiteRepository,
    JsonWorkerRepository,
)
from src.site_timesheet.site_timesheet.storage.json_store import JsonCollectionStore
from src.site_timesheet.site_timesheet.storage.seed import DEFAULT_SITES, DEFAULT_WORKERS


def _draft(worker="1", day="2024-05-10", status=RecordStatus.COMPLETED, site="1", start="07:00", end="16:00"):
    completed = status == RecordStatus.COMPLETED
    return WorkRecordDraft(
        foreman_name="Majster",
        site_id=site,
        worker_id=worker,
        work_date=day,
        start_time=start,
        lunch_duration="00:30" if completed else "",
        end_time=end if completed else "",
        status=status,
    )


@pytest.fixture
def env(tmp_path):
    store = JsonCollectionStore(tmp_path, defaults={"sites": DEFAULT_SITES, "workers": DEFAULT_WORKERS}).open()
    records = JsonRecordRepository(store)
    sites = JsonSiteRepository(store)
    workers = JsonWorkerRepository(store)
    return HistoryService(records, sites, workers), records, sites, workers


def test_history_is_newest_first_and_includes_active(env):
    svc, records, _, _ = env
    records.append(_draft(day="2024-05-12"))
    records.append(_draft(day="2024-05-01"))
    records.append(_draft(worker="2", status=RecordStatus.ACTIVE))

    items = svc.list_history()
    assert [i.record.work_date for i in items] == ["2024-05-10", "2024-05-01", "2024-05-12"]
    assert items[0].record.is_active
    assert items[0].hours == 0
    assert items[1].hours == 8.5


def test_history_date_range_and_placeholders(env):
    svc, records, _, _ = env
    records.append(_draft(day="2024-04-30"))
    records.append(_draft(day="2024-05-02", worker="ghost", site="ghost"))

    items = svc.list_history(date_from="2024-05-01", date_to="2024-05-31")
    assert len(items) == 1
    assert items[0].site_name == "Neznáma stavba"
    assert items[0].worker_name == "Neznámy pracovník"


def test_delete_record(env):
    svc, records, _, _ = env
    record_id = records.append(_draft())
    svc.delete_record(record_id)
    assert records.list_all() == []
    with pytest.raises(NotFoundError):
        svc.delete_record(record_id)


def test_edit_completed_record_validates_values(env):
    svc, records, _, _ = env
    record_id = records.append(_draft())

    updated = svc.edit_record(record_id, {"end_time": "17:00", "site_id": "2"})
    assert updated.end_time == "17:00"
    assert updated.site_id == "2"

    with pytest.raises(ValidationError):
        svc.edit_record(record_id, {"start_time": "7am"})
    with pytest.raises(NotFoundError):
        svc.edit_record(record_id, {"worker_id": "ghost"})


def test_active_record_keeps_its_site(env):
    svc, records, _, _ = env
    record_id = records.append(_draft(status=RecordStatus.ACTIVE))

    assert svc.edit_record(record_id, {"start_time": "6:30"}).start_time == "06:30"
    with pytest.raises(ValidationError):
        svc.edit_record(record_id, {"site_id": "2"})
    with pytest.raises(ValidationError):
        svc.edit_record(record_id, {"end_time": "16:00"})


def test_worker_profile_monthly_stats(env):
    svc, records, _, _ = env
    records.append(_draft(day="2024-05-02"))
    records.append(_draft(day="2024-05-20", start="22:00", end="02:00"))
    records.append(_draft(day="2024-05-21", status=RecordStatus.ACTIVE))
    records.append(_draft(day="2024-06-01"))
    records.append(_draft(day="2024-05-03", worker="2"))

    profile = svc.worker_profile("1", "2024-05")

    assert [i.record.work_date for i in profile.items] == ["2024-05-21", "2024-05-20", "2024-05-02"]
    assert profile.total_hours == pytest.approx(12.0)
    assert profile.completed_shifts == 2
    assert profile.average_hours == pytest.approx(6.0)


def test_worker_profile_without_shifts(env):
    svc, _, _, _ = env
    profile = svc.worker_profile("3", "2024-05")
    assert profile.total_hours == 0
    assert profile.average_hours == 0.0
    with pytest.raises(NotFoundError):
        svc.worker_profile("ghost", "2024-05")


def test_deleted_site_keeps_history(env):
    svc, records, sites, _ = env
    for day in ("2024-05-01", "2024-05-02", "2024-05-03"):
        records.append(_draft(day=day, site="2"))
    sites.remove("2")

    items = svc.list_history()
    assert len(items) == 3
    assert {i.site_name for i in items} == {"Neznáma stavba"}
