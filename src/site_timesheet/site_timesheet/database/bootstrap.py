from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from ..core.enums import RecordStatus
from ..storage.seed import DEFAULT_SITES, DEFAULT_WORKERS
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", conn_factory.config.database)


def upgrade_legacy_records(conn_factory: DatabaseConnection) -> int:
    """Records imported from pre-lifecycle data have no status: they are completed."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute(
            "UPDATE work_records SET status=%s WHERE status IS NULL OR status=''",
            (RecordStatus.COMPLETED.value,),
        )
        conn.commit()
        upgraded = int(cur.rowcount or 0)
    finally:
        conn.close()
    if upgraded:
        logger.info("Defaulted status=completed on %s legacy record(s)", upgraded)
    return upgraded


def seed_defaults(conn_factory: DatabaseConnection) -> None:
    """Insert the demo sites/workers into empty tables."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) FROM sites")
        if cur.fetchone()[0] == 0:
            cur.executemany(
                "INSERT INTO sites(site_id, name, address) VALUES(%s,%s,%s)",
                [(s["id"], s["name"], s["address"]) for s in DEFAULT_SITES],
            )
        cur.execute("SELECT COUNT(*) FROM workers")
        if cur.fetchone()[0] == 0:
            cur.executemany(
                "INSERT INTO workers(worker_id, name, role) VALUES(%s,%s,%s)",
                [(w["id"], w["name"], w["role"]) for w in DEFAULT_WORKERS],
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
