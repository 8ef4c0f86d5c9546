from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kiosk_attendance.attendance.local_attendance_repository import LocalAttendanceStore
from kiosk_attendance.attendance.sqlite_attendance_repository import SQLiteAttendanceStore
from kiosk_attendance.container import build_container
from kiosk_attendance.database.bootstrap import apply_schema
from kiosk_attendance.database.connection import DBConfig, DatabaseConnection
from kiosk_attendance.main import create_app
from kiosk_attendance.storage.keyvalue import InMemoryKeyValueStorage


class TickingClock:
    """Returns ``start``, then ``start + step``, ... on each call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


@pytest.fixture
def db_conn(tmp_path) -> DatabaseConnection:
    conn = DatabaseConnection(DBConfig(path=str(tmp_path / "database.sqlite")))
    apply_schema(conn)
    return conn


@pytest.fixture
def sqlite_store(db_conn, clock) -> SQLiteAttendanceStore:
    return SQLiteAttendanceStore(db_conn, clock=clock)


@pytest.fixture
def kv_storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def local_store(kv_storage, clock) -> LocalAttendanceStore:
    return LocalAttendanceStore(kv_storage, clock=clock)


@pytest.fixture(params=["sqlite", "local"])
def store(request):
    """Runs a test once per backend; both must behave the same."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def local_app(tmp_path, kv_storage):
    container = build_container(
        app_config={
            "DATABASE_PATH": str(tmp_path / "api.sqlite"),
            "DATA_MODE": "local",
            "LOCAL_STORE_PATH": str(tmp_path / "local_store.json"),
        },
        local_storage=kv_storage,
    )
    return create_app("config.testing", container=container)


@pytest.fixture
def api_client(local_app):
    return local_app.test_client()
