from __future__ import annotations

import logging

import pytest

from kiosk_attendance.attendance.local_attendance_repository import LocalAttendanceStore
from kiosk_attendance.attendance.service import AttendanceService
from kiosk_attendance.core.constants import KEY_CHECKINS, KEY_STUDENTS
from kiosk_attendance.core.exceptions import GatewayError
from kiosk_attendance.gateway.local_gateway import LocalGateway
from kiosk_attendance.storage.keyvalue import InMemoryKeyValueStorage


def _gateway(blob):
    return LocalGateway(AttendanceService(LocalAttendanceStore(InMemoryKeyValueStorage(blob))))


def test_corrupt_storage_gives_generic_message_and_is_logged(caplog):
    gateway = _gateway({KEY_STUDENTS: "{bad"})

    with caplog.at_level(logging.ERROR, logger="kiosk_attendance.gateway.local_gateway"):
        with pytest.raises(GatewayError) as exc:
            gateway.check_in("Alice")

    assert str(exc.value) == "Failed to check in student"
    assert KEY_STUDENTS not in str(exc.value)
    assert any(r.exc_info for r in caplog.records)


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda gw: gw.check_out(1, 3), "Failed to check out student"),
        (lambda gw: gw.search_visitors("al"), "Failed to search students"),
        (lambda gw: gw.list_checked_in(), "Failed to get checked-in students"),
        (lambda gw: gw.list_visitors(), "Failed to get students"),
    ],
)
def test_each_operation_hides_storage_details(call, message):
    gateway = _gateway({KEY_STUDENTS: "{bad", KEY_CHECKINS: "[1, 2]"})

    with pytest.raises(GatewayError) as exc:
        call(gateway)

    assert str(exc.value) == message


def test_domain_errors_keep_their_message():
    gateway = _gateway({})
    gateway.check_in("Alice")

    with pytest.raises(GatewayError, match="Student is already checked in"):
        gateway.check_in("alice")
