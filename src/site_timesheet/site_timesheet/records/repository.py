from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from ..common.events import Subscription
from .model import WorkRecord, WorkRecordDraft

RecordsCallback = Callable[[Sequence[WorkRecord]], None]


class RecordRepository(Protocol):
    """Repository interface for work records.

    Contract the services rely on:
    - writes are visible to subsequent reads from the same process;
    - partial updates are last-write-wins;
    - at most one ACTIVE record per (worker_id, work_date): append() raises
      ActiveShiftConflictError otherwise;
    - failed writes raise StorageError and change nothing.
    """

    def append(self, draft: WorkRecordDraft) -> str:
        raise NotImplementedError

    def update(self, record_id: str, changes: dict[str, Any]) -> bool:
        raise NotImplementedError

    def remove(self, record_id: str) -> bool:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        raise NotImplementedError

    def find_active(self, worker_id: str, work_date: str) -> Optional[WorkRecord]:
        raise NotImplementedError

    def list_all(self, *, order_by: str = "created_at", descending: bool = True) -> Sequence[WorkRecord]:
        raise NotImplementedError

    def subscribe(self, callback: RecordsCallback) -> Subscription:
        """Call `callback` with the full record list now and after every write."""
        raise NotImplementedError
