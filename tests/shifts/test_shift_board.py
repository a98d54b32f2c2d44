import threading
from datetime import datetime

from src.site_timesheet.site_timesheet.shifts.board import ShiftBoard
from src.site_timesheet.site_timesheet.shifts.service import ShiftService
from src.site_timesheet.site_timesheet.storage.json_repositories import (
    JsonRecordRepository,
    JsonSiteRepository,
    JsonWorkerRepository,
)
from src.site_timesheet.site_timesheet.storage.json_store import JsonCollectionStore
from src.site_timesheet.site_timesheet.storage.seed import DEFAULT_SITES, DEFAULT_WORKERS


def _setup(tmp_path):
    store = JsonCollectionStore(tmp_path, defaults={"sites": DEFAULT_SITES, "workers": DEFAULT_WORKERS}).open()
    records = JsonRecordRepository(store)
    workers = JsonWorkerRepository(store)
    svc = ShiftService(records, JsonSiteRepository(store), workers, clock=lambda: datetime(2024, 5, 10, 7, 0))
    return svc, records, workers


def test_board_follows_repository_changes(tmp_path):
    svc, records, _ = _setup(tmp_path)
    board = ShiftBoard(records)

    assert not board.is_active("1", "2024-05-10")

    svc.check_in(foreman_name="Majster", worker_id="1", site_id="1", work_date="2024-05-10", start_time="07:00")
    assert board.is_active("1", "2024-05-10")
    assert [r.worker_id for r in board.active_records("2024-05-10")] == ["1"]

    svc.check_out(worker_id="1", work_date="2024-05-10", end_time="16:00", lunch_duration="00:30")
    assert not board.is_active("1", "2024-05-10")
    assert board.active_records() == []


def test_snapshot_reports_mode_per_worker(tmp_path):
    svc, records, workers = _setup(tmp_path)
    board = ShiftBoard(records)
    svc.check_in(foreman_name="Majster", worker_id="2", site_id="1", work_date="2024-05-10", start_time="06:30")

    snapshot = {row["worker_id"]: row for row in board.snapshot("2024-05-10", workers.list_all())}
    assert snapshot["2"]["mode"] == "check_out"
    assert snapshot["2"]["start_time"] == "06:30"
    assert snapshot["1"]["mode"] == "check_in"
    assert snapshot["1"]["site_id"] is None


def test_closed_board_stops_receiving_updates(tmp_path):
    svc, records, _ = _setup(tmp_path)
    board = ShiftBoard(records)
    seen = board.changes_seen
    board.close()

    svc.check_in(foreman_name="Majster", worker_id="1", site_id="1", work_date="2024-05-10", start_time="07:00")
    assert board.changes_seen == seen
    assert not board.is_active("1", "2024-05-10")


def test_board_reflects_both_concurrent_check_ins(tmp_path):
    svc, records, _ = _setup(tmp_path)
    board = ShiftBoard(records)
    start = threading.Barrier(2)

    def check_in(worker):
        start.wait()
        svc.check_in(foreman_name="Majster", worker_id=worker, site_id="1", work_date="2024-05-10", start_time="07:00")

    threads = [threading.Thread(target=check_in, args=(w,)) for w in ("1", "2")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(r.worker_id for r in board.active_records("2024-05-10")) == ["1", "2"]
    assert board.changes_seen == 3
