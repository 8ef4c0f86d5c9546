from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso, to_iso
from ..common.validators import normalize_name, require_non_empty, require_positive_int, require_rating
from ..core.constants import DEFAULT_SEARCH_LIMIT, DEFAULT_VISITOR_LIMIT, MAX_RECORD_ID
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import ActiveSession, Session, Visitor
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


def _bindable(record_id: Any) -> bool:
    # SQLite INTEGER is signed 64-bit; larger ids cannot be bound.
    return 0 < int(record_id) <= MAX_RECORD_ID


def _visitor(r: Dict[str, Any]) -> Visitor:
    return Visitor(id=int(r["id"]), name=r["name"], first_seen=parse_iso(r["first_seen"]))


def _session(r: Dict[str, Any]) -> Session:
    return Session(
        id=int(r["id"]),
        visitor_id=int(r["student_id"]),
        check_in_time=parse_iso(r["check_in_time"]),
        check_out_time=parse_iso(r["check_out_time"]) if r.get("check_out_time") else None,
        rating=int(r["rating"]) if r.get("rating") is not None else None,
    )


class SQLiteAttendanceStore(AttendanceStore):
    """Relational backend over the ``students`` and ``check_ins`` tables."""

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_utc):
        self._conn_factory = conn_factory
        self._clock = clock

    def find_or_create_visitor(self, name: str) -> Visitor:
        trimmed = require_non_empty(name, "Name is required")

        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute(
                """
                SELECT id, name, first_seen
                FROM students
                WHERE unicode_lower(name)=?
                ORDER BY id
                LIMIT 1
                """,
                (normalize_name(trimmed),),
            )
            r = fetchone(cur)
            if r:
                return _visitor(r)

            first_seen = to_iso(self._clock())
            cur.execute("INSERT INTO students(name, first_seen) VALUES(?, ?)", (trimmed, first_seen))
            visitor_id = int(cur.lastrowid)

        logger.info("Created visitor %s (%r)", visitor_id, trimmed)
        return Visitor(id=visitor_id, name=trimmed, first_seen=parse_iso(first_seen))

    def get_visitor(self, visitor_id: int) -> Optional[Visitor]:
        if not _bindable(visitor_id):
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, first_seen FROM students WHERE id=?", (int(visitor_id),))
            r = fetchone(cur)
            return _visitor(r) if r else None

    def has_active_session(self, visitor_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 FROM check_ins WHERE student_id=? AND check_out_time IS NULL LIMIT 1",
                (int(visitor_id),),
            )
            return cur.fetchone() is not None

    def get_session(self, session_id: int) -> Optional[Session]:
        if not _bindable(session_id):
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, check_in_time, check_out_time, rating
                FROM check_ins
                WHERE id=?
                """,
                (int(session_id),),
            )
            r = fetchone(cur)
            return _session(r) if r else None

    def open_session(self, visitor_id: int) -> Session:
        visitor_id = int(visitor_id)

        # Check and insert share one write transaction.
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute("SELECT 1 FROM students WHERE id=?", (visitor_id,))
            if cur.fetchone() is None:
                raise NotFoundError("Student not found")

            cur.execute(
                "SELECT 1 FROM check_ins WHERE student_id=? AND check_out_time IS NULL LIMIT 1",
                (visitor_id,),
            )
            if cur.fetchone() is not None:
                logger.info("Visitor %s is already checked in", visitor_id)
                raise ConflictError("Student is already checked in")

            check_in_time = to_iso(self._clock())
            try:
                cur.execute(
                    "INSERT INTO check_ins(student_id, check_in_time) VALUES(?, ?)",
                    (visitor_id, check_in_time),
                )
            except sqlite3.IntegrityError as e:
                # uq_check_ins_active_student
                raise ConflictError("Student is already checked in") from e
            session_id = int(cur.lastrowid)

        logger.info("Opened session %s for visitor %s", session_id, visitor_id)
        return Session(id=session_id, visitor_id=visitor_id, check_in_time=parse_iso(check_in_time))

    def close_session(self, session_id: int, rating: int) -> Session:
        session_id = require_positive_int(session_id, "Check-in ID is required")
        rating = require_rating(rating)

        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, check_in_time, check_out_time, rating
                FROM check_ins
                WHERE id=?
                """,
                (session_id,),
            )
            r = fetchone(cur)
            if not r:
                logger.warning("Check-out for unknown session %s", session_id)
                raise NotFoundError("Check-in not found")
            if r.get("check_out_time"):
                raise ConflictError("Student is already checked out")

            check_out_time = to_iso(self._clock())
            cur.execute(
                """
                UPDATE check_ins
                SET check_out_time=?, rating=?
                WHERE id=? AND check_out_time IS NULL
                """,
                (check_out_time, rating, session_id),
            )

        logger.info("Closed session %s with rating %s", session_id, rating)
        current = _session(r)
        return Session(
            id=current.id,
            visitor_id=current.visitor_id,
            check_in_time=current.check_in_time,
            check_out_time=parse_iso(check_out_time),
            rating=rating,
        )

    def list_active_sessions(self) -> Sequence[ActiveSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.id AS visitor_id, s.name, s.first_seen,
                    c.id AS check_in_id, c.check_in_time
                FROM students s
                INNER JOIN check_ins c ON s.id = c.student_id
                WHERE c.check_out_time IS NULL
                ORDER BY julianday(c.check_in_time) DESC, c.id DESC
                """
            )
            rows = fetchall(cur)
            return [
                ActiveSession(
                    visitor=Visitor(id=int(r["visitor_id"]), name=r["name"], first_seen=parse_iso(r["first_seen"])),
                    session=Session(
                        id=int(r["check_in_id"]),
                        visitor_id=int(r["visitor_id"]),
                        check_in_time=parse_iso(r["check_in_time"]),
                    ),
                )
                for r in rows
            ]

    def search_visitors(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> Sequence[Visitor]:
        needle = normalize_name(query or "")
        if not needle:
            return []

        # instr() keeps '%' and '_' in the query literal.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, first_seen
                FROM students
                WHERE instr(unicode_lower(name), ?) > 0
                ORDER BY julianday(first_seen) DESC, id DESC
                LIMIT ?
                """,
                (needle, int(limit)),
            )
            return [_visitor(r) for r in fetchall(cur)]

    def list_visitors(self, limit: int = DEFAULT_VISITOR_LIMIT) -> Sequence[Visitor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, first_seen
                FROM students
                ORDER BY julianday(first_seen) DESC, id DESC
                LIMIT ?
                """,
                (int(limit),),
            )
            return [_visitor(r) for r in fetchall(cur)]
