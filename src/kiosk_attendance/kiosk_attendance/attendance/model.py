from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Visitor:
    """Domain entity: a person who checks in by name.

    Created once per distinct (trimmed, case-insensitive) name and never mutated.
    """

    id: int
    name: str
    first_seen: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "first_seen": to_iso(self.first_seen)}


@dataclass(frozen=True)
class Session:
    """Domain entity: one check-in/check-out cycle.

    ``check_out_time`` and ``rating`` are both None while the session is active
    and are set together, exactly once, at check-out.
    """

    id: int
    visitor_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    rating: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class ActiveSession:
    """Read-model for the "who is here" list (session joined to its visitor)."""

    visitor: Visitor
    session: Session

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.visitor.id,
            "name": self.visitor.name,
            "first_seen": to_iso(self.visitor.first_seen),
            "check_in_id": self.session.id,
            "check_in_time": to_iso(self.session.check_in_time),
        }
