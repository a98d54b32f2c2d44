from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import fields
from typing import Any, Callable, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import epoch_millis
from ..common.events import ChangeFeed, Subscription
from ..core.enums import RecordStatus
from ..core.exceptions import ActiveShiftConflictError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, WorkRecord, WorkRecordDraft
from .repository import RecordRepository, RecordsCallback

logger = logging.getLogger(__name__)

_COLUMNS = (
    "record_id, foreman_name, site_id, worker_id, work_date, "
    "start_time, lunch_duration, end_time, created_at, status"
)
_ORDERABLE = frozenset(f.name for f in fields(WorkRecord))


def _row_to_record(r: dict) -> WorkRecord:
    return WorkRecord(
        record_id=str(r["record_id"]),
        foreman_name=r.get("foreman_name") or "",
        site_id=str(r["site_id"]),
        worker_id=str(r["worker_id"]),
        work_date=str(r["work_date"]),
        start_time=r.get("start_time") or "",
        lunch_duration=r.get("lunch_duration") or "",
        end_time=r.get("end_time") or "",
        created_at=int(r["created_at"]),
        status=RecordStatus(r.get("status") or RecordStatus.COMPLETED.value),
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        clock: Callable[[], int] = epoch_millis,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._conn_factory = conn_factory
        self._clock = clock
        self._id_factory = id_factory
        self._feed: ChangeFeed[Sequence[WorkRecord]] = ChangeFeed()
        # Serializes write + publish so subscribers see snapshots in write order.
        self._write_lock = threading.RLock()

    def append(self, draft: WorkRecordDraft) -> str:
        with self._write_lock:
            return self._append(draft)

    def _append(self, draft: WorkRecordDraft) -> str:
        record_id = self._id_factory()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT COALESCE(MAX(created_at), 0) AS last_created FROM work_records")
                last_created = int((fetchone(cur) or {}).get("last_created") or 0)
                cur.execute(
                    f"""
                    INSERT INTO work_records({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record_id,
                        draft.foreman_name,
                        draft.site_id,
                        draft.worker_id,
                        draft.work_date,
                        draft.start_time,
                        draft.lunch_duration,
                        draft.end_time,
                        max(int(self._clock()), last_created + 1),
                        draft.status.value,
                    ),
                )
        except mysql.connector.IntegrityError as exc:
            raise ActiveShiftConflictError("Pracovník už má v tento deň otvorenú smenu") from exc

        logger.info("Record %s appended (worker=%s date=%s)", record_id, draft.worker_id, draft.work_date)
        self._notify()
        return record_id

    def update(self, record_id: str, changes: dict[str, Any]) -> bool:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Nepodporované polia: {', '.join(sorted(unknown))}")
        if not changes:
            return self.get_by_id(record_id) is not None

        with self._write_lock:
            return self._update(record_id, changes)

    def _update(self, record_id: str, changes: dict[str, Any]) -> bool:
        columns = sorted(changes)
        values = [RecordStatus(changes[c]).value if c == "status" else changes[c] for c in columns]
        assignments = ", ".join(f"{c}=%s" for c in columns)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE work_records SET {assignments} WHERE record_id=%s",
                    (*values, record_id),
                )
                updated = cur.rowcount > 0
        except mysql.connector.IntegrityError as exc:
            raise ActiveShiftConflictError("Pracovník už má v tento deň otvorenú smenu") from exc

        if updated:
            logger.info("Record %s updated: %s", record_id, columns)
            self._notify()
        return updated

    def remove(self, record_id: str) -> bool:
        with self._write_lock:
            return self._remove(record_id)

    def _remove(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_records WHERE record_id=%s", (record_id,))
            removed = cur.rowcount > 0
        if removed:
            logger.info("Record %s removed", record_id)
            self._notify()
        return removed

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find_active(self, worker_id: str, work_date: str) -> Optional[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_records
                WHERE worker_id=%s AND work_date=%s AND status=%s
                """,
                (worker_id, work_date, RecordStatus.ACTIVE.value),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_all(self, *, order_by: str = "created_at", descending: bool = True) -> Sequence[WorkRecord]:
        if order_by not in _ORDERABLE:
            raise ValueError(f"Unknown order_by field: {order_by}")
        direction = "DESC" if descending else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_records ORDER BY {order_by} {direction}")
            return [_row_to_record(r) for r in fetchall(cur)]

    def subscribe(self, callback: RecordsCallback) -> Subscription:
        # Only writes made through this process are observed.
        with self._write_lock:
            subscription = self._feed.subscribe(callback)
            callback(self.list_all())
        return subscription

    def _notify(self) -> None:
        if len(self._feed):
            self._feed.publish(self.list_all())
