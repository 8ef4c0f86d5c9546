from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from ..core.enums import DataMode


class AttendanceGateway(Protocol):
    """What the kiosk screens call, whichever backend sits behind it.

    Every method returns the JSON-shaped payloads of the HTTP API and raises
    ``GatewayError`` on failure.
    """

    def check_in(self, name: str) -> Dict[str, Any]:
        raise NotImplementedError

    def check_out(self, session_id: int, rating: int) -> Dict[str, Any]:
        raise NotImplementedError

    def search_visitors(self, query: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_checked_in(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_visitors(self) -> List[Dict[str, Any]]:
        raise NotImplementedError


def resolve_data_mode(data_mode: Optional[str], api_base_url: Optional[str]) -> DataMode:
    """Explicit ``local``/``api`` wins; otherwise a base URL implies API mode."""
    mode = (data_mode or "").strip().lower()
    if mode == DataMode.API.value:
        return DataMode.API
    if mode == DataMode.LOCAL.value:
        return DataMode.LOCAL
    return DataMode.API if (api_base_url or "").strip() else DataMode.LOCAL
