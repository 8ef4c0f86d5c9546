from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection, *, immediate: bool = False
) -> Iterator[Tuple[sqlite3.Connection, sqlite3.Cursor]]:
    """Run one transaction; commit on success, roll back on any error.

    ``immediate`` takes the write lock up front so a read-then-write sequence
    cannot interleave with another writer.
    """
    try:
        conn = conn_factory.connect()
    except sqlite3.Error as e:
        logger.error("Cannot open database %s: %s", conn_factory.path, e)
        raise StorageError("Database is unavailable") from e

    try:
        cur = conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except sqlite3.Error as e:
        conn.rollback()
        logger.error("Database error on %s: %s", conn_factory.path, e)
        raise StorageError("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur: sqlite3.Cursor) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur: sqlite3.Cursor) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]
