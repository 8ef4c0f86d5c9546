from __future__ import annotations

from typing import Optional

import httpx

from ..attendance.local_attendance_repository import LocalAttendanceStore
from ..attendance.service import AttendanceService
from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.enums import DataMode
from ..storage.keyvalue import KeyValueStorage
from .base import AttendanceGateway
from .local_gateway import LocalGateway
from .remote_gateway import RemoteGateway


class GatewayFactory:
    """Builds the gateway for a resolved data mode (called once at startup)."""

    def build(
        self,
        mode: DataMode,
        *,
        api_base_url: Optional[str] = None,
        local_storage: Optional[KeyValueStorage] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_API_TIMEOUT_SECONDS,
    ) -> AttendanceGateway:
        if mode == DataMode.API:
            if not (api_base_url or "").strip():
                raise ValueError("API_BASE_URL must be set when DATA_MODE is 'api'")
            return RemoteGateway(api_base_url, client=http_client, timeout=timeout)

        if local_storage is None:
            raise ValueError("A key-value storage is required for local data mode")
        return LocalGateway(AttendanceService(LocalAttendanceStore(local_storage)))
