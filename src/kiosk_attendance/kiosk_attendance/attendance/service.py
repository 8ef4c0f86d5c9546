from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ..common.datetime_utils import to_iso
from ..common.validators import require_non_empty, require_positive_int, require_rating
from ..core.constants import DEFAULT_SEARCH_LIMIT, DEFAULT_VISITOR_LIMIT
from ..core.exceptions import ConflictError, NotFoundError
from .model import Session, Visitor
from .repository import AttendanceStore


@dataclass(frozen=True)
class CheckInResult:
    visitor: Visitor
    session: Session

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "student": self.visitor.to_dict(),
            "checkIn": {"id": self.session.id, "check_in_time": to_iso(self.session.check_in_time)},
        }


@dataclass(frozen=True)
class CheckOutResult:
    visitor: Visitor
    session: Session

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "student": {"id": self.visitor.id, "name": self.visitor.name},
            "checkOut": {
                "check_out_time": to_iso(self.session.check_out_time) if self.session.check_out_time else None,
                "rating": self.session.rating,
            },
        }


class AttendanceService:
    """Check-in/check-out use cases on top of any ``AttendanceStore``.

    Input is validated here before the store is touched, so a rejected request
    never mutates anything.
    """

    def __init__(self, store: AttendanceStore):
        self._store = store

    @property
    def store(self) -> AttendanceStore:
        return self._store

    def check_in(self, name: Any) -> CheckInResult:
        trimmed = require_non_empty(name, "Name is required")

        visitor = self._store.find_or_create_visitor(trimmed)
        if self._store.has_active_session(visitor.id):
            raise ConflictError("Student is already checked in")

        session = self._store.open_session(visitor.id)
        return CheckInResult(visitor=visitor, session=session)

    def check_out(self, session_id: Any, rating: Any) -> CheckOutResult:
        session_id = require_positive_int(session_id, "Check-in ID is required")
        rating = require_rating(rating)

        current = self._store.get_session(session_id)
        if current is not None and self._store.get_visitor(current.visitor_id) is None:
            raise NotFoundError("Student not found")

        session = self._store.close_session(session_id, rating)
        visitor = self._store.get_visitor(session.visitor_id)
        if visitor is None:
            raise NotFoundError("Student not found")
        return CheckOutResult(visitor=visitor, session=session)

    def list_checked_in(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self._store.list_active_sessions()]

    def search_visitors(self, query: Any, *, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Dict[str, Any]]:
        if not isinstance(query, str) or not query.strip():
            return []
        return [v.to_dict() for v in self._store.search_visitors(query.strip(), limit)]

    def list_visitors(self, *, limit: int = DEFAULT_VISITOR_LIMIT) -> List[Dict[str, Any]]:
        return [v.to_dict() for v in self._store.list_visitors(limit)]
