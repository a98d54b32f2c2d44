from __future__ import annotations

import uuid
from typing import Callable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerRepository


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        self._conn_factory = conn_factory
        self._id_factory = id_factory

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id, name, role FROM workers ORDER BY name")
            return [Worker(worker_id=str(r["worker_id"]), name=r["name"], role=r.get("role") or "") for r in fetchall(cur)]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id, name, role FROM workers WHERE worker_id=%s", (worker_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Worker(worker_id=str(r["worker_id"]), name=r["name"], role=r.get("role") or "")

    def add(self, *, name: str, role: str) -> str:
        worker_id = self._id_factory()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO workers(worker_id, name, role) VALUES(%s,%s,%s)", (worker_id, name, role))
        return worker_id

    def update(self, worker_id: str, *, name: str, role: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE workers SET name=%s, role=%s WHERE worker_id=%s", (name, role, worker_id))
            return cur.rowcount > 0

    def remove(self, worker_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (worker_id,))
            return cur.rowcount > 0
