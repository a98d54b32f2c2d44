from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _connect(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("MySQL connection failed: %s", exc)
        raise StorageError("Databáza je nedostupná, skúste to znova.") from exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on any error.

    Driver errors surface as StorageError, except IntegrityError which the
    repositories translate into domain errors themselves.
    """
    conn = _connect(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        conn.rollback()
        raise
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("MySQL operation failed: %s", exc)
        raise StorageError("Zápis do databázy sa nepodaril, skúste to znova.") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
