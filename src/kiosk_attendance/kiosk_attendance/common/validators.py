from __future__ import annotations

from typing import Any

from ..core.constants import MAX_RATING, MAX_RECORD_ID, MIN_RATING
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def _as_int(value: Any) -> int | None:
    # bool is an int subclass; a JSON true is not a rating.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def require_positive_int(value: Any, message: str) -> int:
    number = _as_int(value)
    if number is None or number <= 0 or number > MAX_RECORD_ID:
        raise ValidationError(message)
    return number


def require_rating(value: Any) -> int:
    """Return ``value`` as an int rating in [MIN_RATING, MAX_RATING]."""
    number = _as_int(value)
    if number is None or number < MIN_RATING or number > MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return number


def normalize_name(value: str) -> str:
    """Lookup key for visitor identity: trimmed and lower-cased."""
    return value.strip().lower()
