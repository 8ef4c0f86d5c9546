from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceService
from .attendance.sqlite_attendance_repository import SQLiteAttendanceStore
from .core.constants import DEFAULT_API_TIMEOUT_SECONDS
from .core.enums import DataMode
from .database.connection import DBConfig, DatabaseConnection
from .gateway.base import AttendanceGateway, resolve_data_mode
from .gateway.factory import GatewayFactory
from .storage.keyvalue import JsonFileKeyValueStorage, KeyValueStorage


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_store: AttendanceStore
    attendance_service: AttendanceService

    data_mode: DataMode
    gateway: AttendanceGateway


def build_container(
    *,
    app_config: dict,
    local_storage: Optional[KeyValueStorage] = None,
    http_client: Optional[httpx.Client] = None,
) -> Container:
    """Wire stores, service and gateway from plain settings.

    The data mode is resolved here, once; nothing downstream re-reads it.
    """
    conn = DatabaseConnection(DBConfig(path=str(app_config["DATABASE_PATH"])))
    attendance_store = SQLiteAttendanceStore(conn)
    attendance_service = AttendanceService(attendance_store)

    api_base_url = str(app_config.get("API_BASE_URL") or "")
    data_mode = resolve_data_mode(app_config.get("DATA_MODE"), api_base_url)

    if data_mode == DataMode.LOCAL and local_storage is None:
        local_storage = JsonFileKeyValueStorage(str(app_config["LOCAL_STORE_PATH"]))

    gateway = GatewayFactory().build(
        data_mode,
        api_base_url=api_base_url,
        local_storage=local_storage,
        http_client=http_client,
        timeout=float(app_config.get("API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT_SECONDS)),
    )

    return Container(
        conn=conn,
        attendance_store=attendance_store,
        attendance_service=attendance_service,
        data_mode=data_mode,
        gateway=gateway,
    )
