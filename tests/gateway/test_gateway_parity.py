from __future__ import annotations

import httpx
import pytest

from kiosk_attendance.attendance.local_attendance_repository import LocalAttendanceStore
from kiosk_attendance.attendance.service import AttendanceService
from kiosk_attendance.core.exceptions import GatewayError
from kiosk_attendance.gateway.local_gateway import LocalGateway
from kiosk_attendance.gateway.remote_gateway import RemoteGateway
from kiosk_attendance.storage.keyvalue import InMemoryKeyValueStorage


@pytest.fixture
def remote_gateway(local_app):
    # The API app always serves the relational store.
    client = httpx.Client(transport=httpx.WSGITransport(app=local_app))
    gw = RemoteGateway("http://kiosk.test", client=client)
    yield gw
    gw.close()


@pytest.fixture
def local_gateway():
    return LocalGateway(AttendanceService(LocalAttendanceStore(InMemoryKeyValueStorage())))


def _run(gateway):
    """Apply one fixed scenario; return outcomes and the final active names."""
    outcomes = []
    sessions = {}

    def attempt(label, fn, *args):
        try:
            result = fn(*args)
        except GatewayError as e:
            outcomes.append((label, "error", e.message))
            return None
        outcomes.append((label, "ok"))
        return result

    for name in ["Alice", "Bob", "  bob  ", "", "Carol"]:
        result = attempt(f"check_in {name!r}", gateway.check_in, name)
        if result:
            sessions[result["student"]["name"]] = result["checkIn"]["id"]

    attempt("check_out bad rating", gateway.check_out, sessions["Alice"], 7)
    attempt("check_out missing id", gateway.check_out, None, 3)
    attempt("check_out Alice", gateway.check_out, sessions["Alice"], 4)
    attempt("check_out Alice again", gateway.check_out, sessions["Alice"], 2)
    attempt("check_in alice again", gateway.check_in, "ALICE")

    searches = [[v["name"] for v in gateway.search_visitors(q)] for q in ["", "o", "CAR"]]
    active = [row["name"] for row in gateway.list_checked_in()]
    visitors = sorted(v["name"] for v in gateway.list_visitors())
    return outcomes, searches, active, visitors


def test_local_and_remote_backends_behave_identically(local_gateway, remote_gateway):
    local = _run(local_gateway)
    remote = _run(remote_gateway)

    assert local == remote

    outcomes, searches, active, visitors = local
    assert ("check_in '  bob  '", "error", "Student is already checked in") in outcomes
    assert ("check_in ''", "error", "Name is required") in outcomes
    assert ("check_out Alice again", "error", "Student is already checked out") in outcomes
    assert searches[0] == []
    assert active[-1] == "Bob"
    assert active[0] == "Alice"
    assert visitors == ["Alice", "Bob", "Carol"]
