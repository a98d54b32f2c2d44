from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class WorkRecordDraft:
    """A work record before the repository assigns its id and created_at."""

    foreman_name: str
    site_id: str
    worker_id: str
    work_date: str
    start_time: str
    lunch_duration: str
    end_time: str
    status: RecordStatus


@dataclass(frozen=True)
class WorkRecord:
    """Domain entity: one shift of one worker at one site.

    Invariants:
    - ACTIVE records have empty end_time and lunch_duration;
    - COMPLETED records have start_time, end_time and lunch_duration set;
    - created_at (epoch ms) strictly increases with insertion order.
    """

    record_id: str
    foreman_name: str
    site_id: str
    worker_id: str
    work_date: str
    start_time: str
    lunch_duration: str
    end_time: str
    created_at: int
    status: RecordStatus

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @classmethod
    def from_draft(cls, draft: WorkRecordDraft, *, record_id: str, created_at: int) -> "WorkRecord":
        values = {f.name: getattr(draft, f.name) for f in fields(draft)}
        return cls(record_id=record_id, created_at=int(created_at), **values)

    def with_changes(self, changes: dict[str, Any]) -> "WorkRecord":
        if "status" in changes:
            changes = {**changes, "status": RecordStatus(changes["status"])}
        return replace(self, **changes)


# Fields a partial update may touch; id and created_at are repository-owned.
UPDATABLE_FIELDS = frozenset(
    {
        "foreman_name",
        "site_id",
        "worker_id",
        "work_date",
        "start_time",
        "lunch_duration",
        "end_time",
        "status",
    }
)


def record_as_dict(record: WorkRecord) -> dict[str, Any]:
    """JSON-ready view of a record for the HTTP layer."""
    return {
        "record_id": record.record_id,
        "foreman_name": record.foreman_name,
        "site_id": record.site_id,
        "worker_id": record.worker_id,
        "work_date": record.work_date,
        "start_time": record.start_time,
        "lunch_duration": record.lunch_duration,
        "end_time": record.end_time,
        "created_at": record.created_at,
        "status": record.status.value,
    }
