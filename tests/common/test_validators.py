from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kiosk_attendance.common.datetime_utils import parse_iso, to_iso
from kiosk_attendance.common.validators import normalize_name, require_non_empty, require_positive_int, require_rating
from kiosk_attendance.core.exceptions import ValidationError


def test_require_non_empty_trims():
    assert require_non_empty("  Ana ", "Name is required") == "Ana"


@pytest.mark.parametrize("value, expected", [(1, 1), (5, 5), ("3", 3), (" 2 ", 2)])
def test_require_rating_accepts_integers(value, expected):
    assert require_rating(value) == expected


@pytest.mark.parametrize("value", [0, 6, "6", "--3", "", None, 2.0, False, [3]])
def test_require_rating_rejects(value):
    with pytest.raises(ValidationError, match="between 1 and 5"):
        require_rating(value)


@pytest.mark.parametrize("value", [0, -1, "0", None, "abc", True, 2**63, 10**20, str(10**20)])
def test_require_positive_int_rejects(value):
    with pytest.raises(ValidationError, match="Check-in ID is required"):
        require_positive_int(value, "Check-in ID is required")


def test_require_positive_int_accepts_largest_sqlite_integer():
    assert require_positive_int(2**63 - 1, "Check-in ID is required") == 2**63 - 1


def test_normalize_name():
    assert normalize_name("  BaNaNa ") == "banana"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2026-02-01T10:00:00.000000+00:00", datetime(2026, 2, 1, 10, tzinfo=timezone.utc)),
        ("2026-02-01T10:00:00Z", datetime(2026, 2, 1, 10, tzinfo=timezone.utc)),
        ("2026-02-01 10:00:00", datetime(2026, 2, 1, 10, tzinfo=timezone.utc)),
    ],
)
def test_parse_iso(text, expected):
    assert parse_iso(text) == expected


def test_to_iso_normalises_to_utc():
    naive = datetime(2026, 2, 1, 10, 0, 0)

    assert to_iso(naive) == "2026-02-01T10:00:00.000000+00:00"
