from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.site_timesheet.site_timesheet.common.datetime_utils import compute_worked_hours
from src.site_timesheet.site_timesheet.common.events import ChangeFeed
from src.site_timesheet.site_timesheet.core.enums import RecordStatus, ShiftMode, ShiftPhase
from src.site_timesheet.site_timesheet.core.exceptions import (
    ActiveShiftConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from src.site_timesheet.site_timesheet.records.model import WorkRecord
from src.site_timesheet.site_timesheet.shifts.service import ShiftService
from src.site_timesheet.site_timesheet.sites.model import Site
from src.site_timesheet.site_timesheet.workers.model import Worker


class InMemoryRecords:
    def __init__(self):
        self.items: list[WorkRecord] = []
        self._seq = 0
        self._feed = ChangeFeed()

    def append(self, draft):
        self._seq += 1
        record = WorkRecord.from_draft(draft, record_id=f"r{self._seq}", created_at=self._seq)
        self.items.insert(0, record)
        return record.record_id

    def update(self, record_id, changes):
        for i, r in enumerate(self.items):
            if r.record_id == record_id:
                self.items[i] = r.with_changes(changes)
                return True
        return False

    def remove(self, record_id):
        before = len(self.items)
        self.items = [r for r in self.items if r.record_id != record_id]
        return len(self.items) != before

    def get_by_id(self, record_id) -> Optional[WorkRecord]:
        return next((r for r in self.items if r.record_id == record_id), None)

    def find_active(self, worker_id, work_date):
        return next((r for r in self.items if r.is_active and r.worker_id == worker_id and r.work_date == work_date), None)

    def list_all(self, *, order_by="created_at", descending=True):
        return sorted(self.items, key=lambda r: getattr(r, order_by), reverse=descending)

    def subscribe(self, callback):
        sub = self._feed.subscribe(callback)
        callback(self.list_all())
        return sub


class InMemorySites:
    def __init__(self, *sites: Site):
        self.items = {s.site_id: s for s in sites}

    def get_by_id(self, site_id):
        return self.items.get(site_id)

    def list_all(self):
        return list(self.items.values())


class InMemoryWorkers:
    def __init__(self, *workers: Worker):
        self.items = {w.worker_id: w for w in workers}

    def get_by_id(self, worker_id):
        return self.items.get(worker_id)

    def list_all(self):
        return list(self.items.values())


class FailingRecords(InMemoryRecords):
    def append(self, draft):
        raise StorageError("offline")


def _service(records=None):
    records = records if records is not None else InMemoryRecords()
    sites = InMemorySites(Site(site_id="S1", name="Rezidencia"))
    workers = InMemoryWorkers(Worker(worker_id="W1", name="Ján Novák", role="Murár"))
    clock = lambda: datetime(2024, 5, 10, 6, 45)
    return ShiftService(records, sites, workers, clock=clock), records


def test_check_in_creates_active_record_with_empty_end_and_lunch():
    svc, records = _service()
    record_id = svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")

    record = records.get_by_id(record_id)
    assert record.status == RecordStatus.ACTIVE
    assert record.start_time == "07:00"
    assert record.end_time == ""
    assert record.lunch_duration == ""
    assert svc.current_state("W1", "2024-05-10").mode == ShiftMode.CHECK_OUT


def test_check_in_defaults_start_to_clock_time():
    svc, records = _service()
    record_id = svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10")
    assert records.get_by_id(record_id).start_time == "06:45"


def test_full_day_scenario_yields_eight_and_a_half_hours():
    svc, records = _service()
    svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    record_id = svc.check_out(worker_id="W1", work_date="2024-05-10", end_time="16:00", lunch_duration="00:30")

    record = records.get_by_id(record_id)
    assert record.status == RecordStatus.COMPLETED
    assert (record.start_time, record.end_time, record.lunch_duration) == ("07:00", "16:00", "00:30")
    assert record.site_id == "S1"

    assert compute_worked_hours(record.start_time, record.end_time, record.lunch_duration) == 8.5


def test_second_check_in_is_rejected():
    svc, records = _service()
    svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    with pytest.raises(ActiveShiftConflictError):
        svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="08:00")
    assert len([r for r in records.items if r.is_active]) == 1


def test_submit_routes_repeated_action_to_check_out():
    svc, records = _service()
    first = svc.submit(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    second = svc.submit(
        foreman_name="Majster",
        worker_id="W1",
        site_id="S1",
        work_date="2024-05-10",
        end_time="15:30",
        lunch_duration="00:30",
    )

    assert first.mode == ShiftMode.CHECK_IN
    assert second.mode == ShiftMode.CHECK_OUT
    assert first.record_id == second.record_id
    assert len(records.items) == 1
    assert not any(r.is_active for r in records.items)


def test_check_in_again_after_completed_shift():
    svc, records = _service()
    svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    svc.check_out(worker_id="W1", work_date="2024-05-10", end_time="11:00", lunch_duration="00:00")

    state = svc.current_state("W1", "2024-05-10")
    assert state.phase == ShiftPhase.COMPLETED
    assert state.mode == ShiftMode.CHECK_IN

    svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="12:00")
    assert svc.current_state("W1", "2024-05-10").phase == ShiftPhase.ACTIVE


def test_check_out_without_active_shift_is_rejected():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.check_out(worker_id="W1", work_date="2024-05-10", end_time="16:00", lunch_duration="00:30")


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"site_id": ""}, ValidationError),
        ({"worker_id": ""}, ValidationError),
        ({"site_id": "nope"}, NotFoundError),
        ({"worker_id": "nope"}, NotFoundError),
        ({"work_date": "10.05.2024"}, ValidationError),
        ({"start_time": "25:00"}, ValidationError),
    ],
)
def test_invalid_input_is_rejected_before_writing(kwargs, error):
    svc, records = _service()
    args = dict(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    args.update(kwargs)
    with pytest.raises(error):
        svc.check_in(**args)
    assert records.items == []


def test_manual_entry_is_completed_and_allowed_next_to_live_shift():
    svc, records = _service()
    svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
    record_id = svc.record_manual(
        foreman_name="Majster",
        worker_id="W1",
        site_id="S1",
        work_date="2024-05-10",
        start_time="22:00",
        end_time="02:00",
        lunch_duration="00:30",
    )

    assert records.get_by_id(record_id).status == RecordStatus.COMPLETED
    assert svc.current_state("W1", "2024-05-10").active is not None


def test_storage_failure_propagates():
    svc, _ = _service(FailingRecords())
    with pytest.raises(StorageError):
        svc.check_in(foreman_name="Majster", worker_id="W1", site_id="S1", work_date="2024-05-10", start_time="07:00")
