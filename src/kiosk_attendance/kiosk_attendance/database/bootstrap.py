from __future__ import annotations

from pathlib import Path

from .connection import DatabaseConnection
from .sqlite_base import db_cursor

SCHEMA_PATH = Path(__file__).resolve().parents[4] / "database" / "schema.sql"


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    """Apply schema.sql (idempotent: CREATE ... IF NOT EXISTS)."""
    sql = Path(schema_path).read_text(encoding="utf-8")
    conn = conn_factory.connect()
    try:
        conn.executescript(sql)
    finally:
        conn.close()


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
        return [row[0] for row in cur.fetchall()]
