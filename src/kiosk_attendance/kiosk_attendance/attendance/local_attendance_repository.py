from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso, to_iso
from ..common.validators import normalize_name, require_non_empty, require_positive_int, require_rating
from ..core.constants import (
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_VISITOR_LIMIT,
    KEY_CHECKINS,
    KEY_NEXT_CHECKIN_ID,
    KEY_NEXT_STUDENT_ID,
    KEY_STUDENTS,
)
from ..core.exceptions import ConflictError, NotFoundError, StorageError
from ..storage.keyvalue import KeyValueStorage
from .model import ActiveSession, Session, Visitor
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


class LocalAttendanceStore(AttendanceStore):
    """Key-value backend mirroring the browser-local store.

    Visitors and sessions each live as one JSON list under a fixed key, with
    their id counters under two more keys. Every operation reads the full
    lists, mutates them in memory and writes them back.

    All operations on one instance run under a single lock. Nothing
    coordinates two instances (or processes) sharing the same storage: the
    last writer wins.
    """

    def __init__(self, storage: KeyValueStorage, *, clock: Callable[[], datetime] = now_utc):
        self._storage = storage
        self._clock = clock
        self._lock = threading.RLock()

    # -- raw blob access -------------------------------------------------

    def _read_list(self, key: str) -> List[Dict[str, Any]]:
        raw = self._storage.get_item(key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Stored value under {key!r} is not valid JSON") from e
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise StorageError(f"Stored value under {key!r} is not a list of records")
        return items

    @staticmethod
    def _row_id(row: Dict[str, Any], field: str = "id") -> int:
        try:
            return int(row.get(field, 0))
        except (TypeError, ValueError) as e:
            raise StorageError(f"Malformed {field!r} in local store record") from e

    def _write_list(self, key: str, items: List[Dict[str, Any]]) -> None:
        self._storage.set_item(key, json.dumps(items, ensure_ascii=False))

    def _next_id(self, key: str, existing: List[Dict[str, Any]]) -> int:
        raw = self._storage.get_item(key)
        try:
            current = int(raw) if raw not in (None, "") else 1
        except (TypeError, ValueError) as e:
            raise StorageError(f"Stored counter under {key!r} is not an integer") from e

        highest = max((self._row_id(i) for i in existing), default=0)
        issued = max(current, 1, highest + 1)
        self._storage.set_item(key, str(issued + 1))
        return issued

    # -- row mapping -------------------------------------------------------

    @staticmethod
    def _visitor(row: Dict[str, Any]) -> Visitor:
        try:
            return Visitor(id=int(row["id"]), name=str(row["name"]), first_seen=parse_iso(row["first_seen"]))
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError("Malformed student record in local store") from e

    @staticmethod
    def _session(row: Dict[str, Any]) -> Session:
        try:
            return Session(
                id=int(row["id"]),
                visitor_id=int(row["student_id"]),
                check_in_time=parse_iso(row["check_in_time"]),
                check_out_time=parse_iso(row["check_out_time"]) if row.get("check_out_time") else None,
                rating=int(row["rating"]) if row.get("rating") is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError("Malformed check-in record in local store") from e

    @staticmethod
    def _by_first_seen(visitors: List[Visitor]) -> List[Visitor]:
        return sorted(visitors, key=lambda v: (v.first_seen, v.id), reverse=True)

    # -- AttendanceStore -----------------------------------------------------

    def find_or_create_visitor(self, name: str) -> Visitor:
        trimmed = require_non_empty(name, "Name is required")
        key = normalize_name(trimmed)

        with self._lock:
            students = self._read_list(KEY_STUDENTS)
            for row in sorted(students, key=lambda s: self._row_id(s)):
                if normalize_name(str(row.get("name", ""))) == key:
                    return self._visitor(row)

            row = {"id": self._next_id(KEY_NEXT_STUDENT_ID, students), "name": trimmed, "first_seen": to_iso(self._clock())}
            students.append(row)
            self._write_list(KEY_STUDENTS, students)

        logger.info("Created visitor %s (%r)", row["id"], trimmed)
        return self._visitor(row)

    def get_visitor(self, visitor_id: int) -> Optional[Visitor]:
        with self._lock:
            for row in self._read_list(KEY_STUDENTS):
                if self._row_id(row) == int(visitor_id):
                    return self._visitor(row)
        return None

    def has_active_session(self, visitor_id: int) -> bool:
        with self._lock:
            return any(
                self._row_id(c, "student_id") == int(visitor_id) and c.get("check_out_time") is None
                for c in self._read_list(KEY_CHECKINS)
            )

    def get_session(self, session_id: int) -> Optional[Session]:
        with self._lock:
            for row in self._read_list(KEY_CHECKINS):
                if self._row_id(row) == int(session_id):
                    return self._session(row)
        return None

    def open_session(self, visitor_id: int) -> Session:
        visitor_id = int(visitor_id)

        with self._lock:
            if self.get_visitor(visitor_id) is None:
                raise NotFoundError("Student not found")

            checkins = self._read_list(KEY_CHECKINS)
            if any(self._row_id(c, "student_id") == visitor_id and c.get("check_out_time") is None for c in checkins):
                logger.info("Visitor %s is already checked in", visitor_id)
                raise ConflictError("Student is already checked in")

            row = {
                "id": self._next_id(KEY_NEXT_CHECKIN_ID, checkins),
                "student_id": visitor_id,
                "check_in_time": to_iso(self._clock()),
                "check_out_time": None,
                "rating": None,
            }
            checkins.append(row)
            self._write_list(KEY_CHECKINS, checkins)

        logger.info("Opened session %s for visitor %s", row["id"], visitor_id)
        return self._session(row)

    def close_session(self, session_id: int, rating: int) -> Session:
        session_id = require_positive_int(session_id, "Check-in ID is required")
        rating = require_rating(rating)

        with self._lock:
            checkins = self._read_list(KEY_CHECKINS)
            idx = next((i for i, c in enumerate(checkins) if self._row_id(c) == session_id), None)
            if idx is None:
                logger.warning("Check-out for unknown session %s", session_id)
                raise NotFoundError("Check-in not found")
            if checkins[idx].get("check_out_time") is not None:
                raise ConflictError("Student is already checked out")

            # Both fields land in the same write.
            row = dict(checkins[idx], check_out_time=to_iso(self._clock()), rating=rating)
            checkins[idx] = row
            self._write_list(KEY_CHECKINS, checkins)

        logger.info("Closed session %s with rating %s", session_id, rating)
        return self._session(row)

    def list_active_sessions(self) -> Sequence[ActiveSession]:
        with self._lock:
            visitors = {v.id: v for v in map(self._visitor, self._read_list(KEY_STUDENTS))}
            sessions = [s for s in map(self._session, self._read_list(KEY_CHECKINS)) if s.is_active]

        active = []
        for s in sorted(sessions, key=lambda s: (s.check_in_time, s.id), reverse=True):
            visitor = visitors.get(s.visitor_id)
            if visitor is None:
                # Same as the relational inner join: orphaned sessions are not listed.
                logger.warning("Session %s references missing visitor %s", s.id, s.visitor_id)
                continue
            active.append(ActiveSession(visitor=visitor, session=s))
        return active

    def search_visitors(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> Sequence[Visitor]:
        needle = normalize_name(query or "")
        if not needle:
            return []

        with self._lock:
            visitors = [self._visitor(r) for r in self._read_list(KEY_STUDENTS)]
        matches = [v for v in visitors if needle in normalize_name(v.name)]
        return self._by_first_seen(matches)[: int(limit)]

    def list_visitors(self, limit: int = DEFAULT_VISITOR_LIMIT) -> Sequence[Visitor]:
        with self._lock:
            visitors = [self._visitor(r) for r in self._read_list(KEY_STUDENTS)]
        return self._by_first_seen(visitors)[: int(limit)]
