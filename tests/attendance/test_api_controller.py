from __future__ import annotations

from datetime import datetime, timedelta, timezone

from kiosk_attendance.common.datetime_utils import parse_iso
from kiosk_attendance.core.exceptions import StorageError


def _check_in(client, name):
    return client.post("/api/checkin", json={"name": name})


def test_health(api_client):
    assert api_client.get("/api/health").get_json() == {"status": "ok"}


def test_alice_checks_in_and_out(api_client):
    res = _check_in(api_client, "Alice")
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["student"]["name"] == "Alice"
    first_seen = body["student"]["first_seen"]

    active = api_client.get("/api/checked-in").get_json()
    assert [row["name"] for row in active] == ["Alice"]
    assert abs(parse_iso(active[0]["check_in_time"]) - datetime.now(timezone.utc)) < timedelta(minutes=1)
    assert active[0]["check_in_id"] == body["checkIn"]["id"]

    res = api_client.post("/api/checkout", json={"checkInId": body["checkIn"]["id"], "rating": 4})
    assert res.status_code == 200
    out = res.get_json()
    assert out["student"] == {"id": body["student"]["id"], "name": "Alice"}
    assert out["checkOut"]["rating"] == 4
    assert out["checkOut"]["check_out_time"]

    assert api_client.get("/api/checked-in").get_json() == []
    students = api_client.get("/api/students").get_json()
    assert [(s["name"], s["first_seen"]) for s in students] == [("Alice", first_seen)]


def test_second_check_in_with_other_case_is_rejected(api_client):
    assert _check_in(api_client, "Bob").status_code == 200

    res = _check_in(api_client, "bob")

    assert res.status_code == 400
    assert res.get_json() == {"error": "Student is already checked in"}
    assert [row["name"] for row in api_client.get("/api/checked-in").get_json()] == ["Bob"]


def test_blank_name_is_400(api_client):
    for body in ({"name": "   "}, {}, None):
        res = api_client.post("/api/checkin", json=body)
        assert res.status_code == 400
        assert res.get_json() == {"error": "Name is required"}


def test_non_json_body_is_treated_as_empty(api_client):
    res = api_client.post("/api/checkin", data="name=Alice", content_type="application/x-www-form-urlencoded")

    assert res.status_code == 400


def test_checkout_validation_errors(api_client):
    check_in_id = _check_in(api_client, "Alice").get_json()["checkIn"]["id"]

    cases = [
        ({"rating": 3}, "Check-in ID is required"),
        ({"checkInId": check_in_id}, "Rating must be between 1 and 5"),
        ({"checkInId": check_in_id, "rating": 9}, "Rating must be between 1 and 5"),
    ]
    for body, message in cases:
        res = api_client.post("/api/checkout", json=body)
        assert res.status_code == 400
        assert res.get_json() == {"error": message}

    assert len(api_client.get("/api/checked-in").get_json()) == 1


def test_checkout_unknown_session_is_404(api_client):
    res = api_client.post("/api/checkout", json={"checkInId": 999, "rating": 3})

    assert res.status_code == 404
    assert res.get_json() == {"error": "Check-in not found"}


def test_checkout_id_beyond_integer_range_is_400(api_client):
    res = api_client.post("/api/checkout", json={"checkInId": 10**20, "rating": 3})

    assert res.status_code == 400
    assert res.get_json() == {"error": "Check-in ID is required"}


def test_double_checkout_is_400(api_client):
    check_in_id = _check_in(api_client, "Alice").get_json()["checkIn"]["id"]
    api_client.post("/api/checkout", json={"checkInId": check_in_id, "rating": 5})

    res = api_client.post("/api/checkout", json={"checkInId": check_in_id, "rating": 1})

    assert res.status_code == 400
    assert res.get_json() == {"error": "Student is already checked out"}


def test_search(api_client):
    for name in ["Ana", "banana-Ana", "Bob"]:
        _check_in(api_client, name)

    assert api_client.get("/api/students/search?q=").get_json() == []
    assert api_client.get("/api/students/search").get_json() == []
    names = [s["name"] for s in api_client.get("/api/students/search?q=ANA").get_json()]
    assert sorted(names) == ["Ana", "banana-Ana"]


def test_store_failure_is_generic_500(api_client, local_app, monkeypatch):
    store = local_app.extensions["kiosk_container"].attendance_store

    def broken():
        raise StorageError("Database operation failed")

    monkeypatch.setattr(store, "list_active_sessions", broken)

    res = api_client.get("/api/checked-in")

    assert res.status_code == 500
    assert res.get_json() == {"error": "Failed to get checked-in students"}
