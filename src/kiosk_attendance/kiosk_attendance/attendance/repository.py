from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_SEARCH_LIMIT, DEFAULT_VISITOR_LIMIT
from .model import ActiveSession, Session, Visitor


class AttendanceStore(Protocol):
    """Storage contract shared by the relational and the local backend.

    Note (DIP): the service depends on this interface, never on a concrete store.
    Both implementations must produce the same outcomes for the same calls;
    only their id spaces differ.
    """

    def find_or_create_visitor(self, name: str) -> Visitor:
        raise NotImplementedError

    def get_visitor(self, visitor_id: int) -> Optional[Visitor]:
        raise NotImplementedError

    def has_active_session(self, visitor_id: int) -> bool:
        raise NotImplementedError

    def get_session(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def open_session(self, visitor_id: int) -> Session:
        raise NotImplementedError

    def close_session(self, session_id: int, rating: int) -> Session:
        raise NotImplementedError

    def list_active_sessions(self) -> Sequence[ActiveSession]:
        raise NotImplementedError

    def search_visitors(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> Sequence[Visitor]:
        raise NotImplementedError

    def list_visitors(self, limit: int = DEFAULT_VISITOR_LIMIT) -> Sequence[Visitor]:
        raise NotImplementedError
