"""Seed demo visitors into the relational store.

Each name is checked in; all but the last are checked out again so the
kiosk shows one person present.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "kiosk_attendance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from kiosk_attendance.attendance.service import AttendanceService
from kiosk_attendance.attendance.sqlite_attendance_repository import SQLiteAttendanceStore
from kiosk_attendance.core.exceptions import ConflictError
from kiosk_attendance.database.bootstrap import apply_schema
from kiosk_attendance.database.connection import DBConfig, DatabaseConnection

DEMO_VISITORS = [("Alice Nguyen", 5), ("Bob Tran", 4), ("Carmen Diaz", 3), ("Dev Patel", None)]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig(path=str(settings.DATABASE_PATH)))
    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")

    service = AttendanceService(SQLiteAttendanceStore(conn))
    for name, rating in DEMO_VISITORS:
        try:
            result = service.check_in(name)
        except ConflictError:
            print(f"skip: {name} is already checked in")
            continue
        if rating is not None:
            service.check_out(result.session.id, rating)

    print(f"OK: Seeded {len(DEMO_VISITORS)} demo visitors -> {conn.path}")


if __name__ == "__main__":
    main()
