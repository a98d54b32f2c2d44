from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.enums import ShiftMode
from ..records.model import WorkRecord
from ..records.repository import RecordRepository
from ..workers.model import Worker


class ShiftBoard:
    """Live view of who is currently on shift.

    Subscribes to the record repository and rebuilds its index on every
    change notification, so answers always reflect the latest record set
    rather than what was loaded at start-up.
    """

    def __init__(self, records: RecordRepository):
        self._lock = threading.Lock()
        self._records: list[WorkRecord] = []
        self._active: dict[tuple[str, str], WorkRecord] = {}
        self._changes = 0
        self._subscription = records.subscribe(self._on_change)

    def _on_change(self, records: Sequence[WorkRecord]) -> None:
        active = {(r.worker_id, r.work_date): r for r in records if r.is_active}
        with self._lock:
            self._records = list(records)
            self._active = active
            self._changes += 1

    @property
    def changes_seen(self) -> int:
        return self._changes

    def is_active(self, worker_id: str, work_date: str) -> bool:
        with self._lock:
            return (worker_id, work_date) in self._active

    def active_record(self, worker_id: str, work_date: str) -> Optional[WorkRecord]:
        with self._lock:
            return self._active.get((worker_id, work_date))

    def active_records(self, work_date: Optional[str] = None) -> list[WorkRecord]:
        with self._lock:
            items = [r for r in self._active.values() if work_date is None or r.work_date == work_date]
        return sorted(items, key=lambda r: r.created_at, reverse=True)

    def snapshot(self, work_date: str, workers: Sequence[Worker]) -> list[dict]:
        """Per-worker mode for the dashboard worker picker."""
        out: list[dict] = []
        for w in workers:
            active = self.active_record(w.worker_id, work_date)
            out.append(
                {
                    "worker_id": w.worker_id,
                    "name": w.name,
                    "role": w.role,
                    "mode": (ShiftMode.CHECK_OUT if active else ShiftMode.CHECK_IN).value,
                    "site_id": active.site_id if active else None,
                    "start_time": active.start_time if active else None,
                }
            )
        return out

    def close(self) -> None:
        self._subscription.cancel()
