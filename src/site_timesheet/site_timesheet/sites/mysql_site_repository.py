from __future__ import annotations

import uuid
from typing import Callable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Site
from .repository import SiteRepository


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        self._conn_factory = conn_factory
        self._id_factory = id_factory

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, name, address FROM sites ORDER BY name")
            return [Site(site_id=str(r["site_id"]), name=r["name"], address=r.get("address") or "") for r in fetchall(cur)]

    def get_by_id(self, site_id: str) -> Optional[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, name, address FROM sites WHERE site_id=%s", (site_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Site(site_id=str(r["site_id"]), name=r["name"], address=r.get("address") or "")

    def add(self, *, name: str, address: str) -> str:
        site_id = self._id_factory()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO sites(site_id, name, address) VALUES(%s,%s,%s)", (site_id, name, address))
        return site_id

    def update(self, site_id: str, *, name: str, address: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE sites SET name=%s, address=%s WHERE site_id=%s", (name, address, site_id))
            return cur.rowcount > 0

    def remove(self, site_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sites WHERE site_id=%s", (site_id,))
            return cur.rowcount > 0
