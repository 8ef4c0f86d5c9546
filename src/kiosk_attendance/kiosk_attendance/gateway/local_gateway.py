from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..attendance.service import AttendanceService
from ..core.constants import (
    ERROR_CHECK_IN,
    ERROR_CHECK_OUT,
    ERROR_CHECKED_IN,
    ERROR_SEARCH,
    ERROR_STUDENTS,
)
from ..core.exceptions import DomainError, GatewayError, StorageError
from .base import AttendanceGateway

logger = logging.getLogger(__name__)


class LocalGateway(AttendanceGateway):
    """Runs the attendance service in-process (no server needed).

    Storage failures surface with the same generic text the API sends
    for a 500; the underlying error is only logged.
    """

    def __init__(self, service: AttendanceService):
        self._service = service

    def check_in(self, name: str) -> Dict[str, Any]:
        try:
            return self._service.check_in(name).to_dict()
        except StorageError as e:
            logger.exception("Local check-in failed")
            raise GatewayError(ERROR_CHECK_IN) from e
        except DomainError as e:
            raise GatewayError(str(e)) from e

    def check_out(self, session_id: int, rating: int) -> Dict[str, Any]:
        try:
            return self._service.check_out(session_id, rating).to_dict()
        except StorageError as e:
            logger.exception("Local check-out failed")
            raise GatewayError(ERROR_CHECK_OUT) from e
        except DomainError as e:
            raise GatewayError(str(e)) from e

    def search_visitors(self, query: str) -> List[Dict[str, Any]]:
        try:
            return self._service.search_visitors(query)
        except StorageError as e:
            logger.exception("Local student search failed")
            raise GatewayError(ERROR_SEARCH) from e
        except DomainError as e:
            raise GatewayError(str(e)) from e

    def list_checked_in(self) -> List[Dict[str, Any]]:
        try:
            return self._service.list_checked_in()
        except StorageError as e:
            logger.exception("Local checked-in listing failed")
            raise GatewayError(ERROR_CHECKED_IN) from e
        except DomainError as e:
            raise GatewayError(str(e)) from e

    def list_visitors(self) -> List[Dict[str, Any]]:
        try:
            return self._service.list_visitors()
        except StorageError as e:
            logger.exception("Local student listing failed")
            raise GatewayError(ERROR_STUDENTS) from e
        except DomainError as e:
            raise GatewayError(str(e)) from e
