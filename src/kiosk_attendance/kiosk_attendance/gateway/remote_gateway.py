from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import GatewayError
from .base import AttendanceGateway

logger = logging.getLogger(__name__)


def normalize_base_url(base_url: str) -> str:
    return (base_url or "").strip().rstrip("/")


class RemoteGateway(AttendanceGateway):
    """Talks to the attendance HTTP API with ``httpx``."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_API_TIMEOUT_SECONDS,
    ):
        self._base_url = normalize_base_url(base_url)
        if not self._base_url:
            raise ValueError("API base URL is required for the remote gateway")
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def api_url(self, path: str) -> str:
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized}"

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, self.api_url(path), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise GatewayError("Unable to reach the attendance server") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise GatewayError(message or "Request failed", status_code=response.status_code)
        if data is None:
            raise GatewayError("Request failed", status_code=response.status_code)
        return data

    def check_in(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/api/checkin", json={"name": name})

    def check_out(self, session_id: int, rating: int) -> Dict[str, Any]:
        return self._request("POST", "/api/checkout", json={"checkInId": session_id, "rating": rating})

    def search_visitors(self, query: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/students/search", params={"q": query})

    def list_checked_in(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/checked-in")

    def list_visitors(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/students")
