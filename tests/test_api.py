from datetime import datetime

import pytest

from attendance_payroll.attendance import service as attendance_service_module
from attendance_payroll.main import create_app
from tests.factories import qr_for


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock(monkeypatch):
    clock = Clock(datetime(2024, 1, 15, 8, 30))
    monkeypatch.setattr(attendance_service_module, "now_local", clock)
    return clock


@pytest.fixture
def client(monkeypatch, workers, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(workers=workers)
    return app.test_client()


def test_scan_round_trip_and_denial(client, clock):
    r = client.post("/api/attendance/scan", json={"qr_payload": qr_for("WKR001")})
    assert r.status_code == 200
    assert r.get_json()["data"]["action"] == "clock_in"

    clock.now = datetime(2024, 1, 15, 17, 45)
    r = client.post("/api/attendance/scan", json={"qr_payload": qr_for("WKR001")})
    body = r.get_json()
    assert body["data"]["record"]["total_hours"] == 9.25
    assert body["data"]["record"]["overtime_hours"] == 1.25

    r = client.post("/api/attendance/scan", json={"qr_payload": qr_for("WKR001")})
    assert r.status_code == 409
    assert r.get_json() == {"success": False, "message": "already completed attendance for today"}


def test_malformed_qr_is_a_bad_request(client):
    r = client.post("/api/attendance/scan", json={"qr_payload": "garbage"})

    assert r.status_code == 400
    assert r.get_json()["success"] is False


def test_manual_entry_then_snapshot(client):
    r = client.post(
        "/api/attendance/manual",
        json={"workerId": "WKR002", "date": "2024-01-15", "status": "on_leave", "leaveType": "sick"},
    )
    assert r.status_code == 201

    r = client.get("/api/attendance/snapshot?date=2024-01-15")
    data = r.get_json()["data"]
    assert data["on_leave"] == 1
    assert data["absent"] == 2


def test_unknown_record_is_not_found(client):
    r = client.delete("/api/attendance/att-missing")
    assert r.status_code == 404


def test_payroll_run_reports_failures(client):
    client.post("/api/attendance/mark-all-present", json={"date": "2024-01-15"})

    r = client.post("/api/payroll/run", json={"start": "2024-01-01", "end": "2024-01-31"})
    data = r.get_json()["data"]

    assert r.status_code == 200
    assert {p["worker_id"] for p in data["succeeded"]} == {"WKR001", "WKR002", "WKR003"}
    assert data["failed"] == []

    daily = next(p for p in data["succeeded"] if p["worker_id"] == "WKR001")
    assert daily["gross_pay"] == 500.0
    assert daily["payment_status"] == "pending"


def test_summary_endpoint(client):
    client.post("/api/attendance/mark-all-present", json={"date": "2024-01-15", "worker_ids": ["WKR001"]})

    r = client.get("/api/attendance/summary/WKR001?start=2024-01-01&end=2024-01-31&type=monthly")
    data = r.get_json()["data"]

    assert data["present_days"] == 1
    assert data["total_hours"] == 8.0
    assert data["period"]["period_type"] == "monthly"


def test_worker_qr_payload(client):
    r = client.get("/api/workers/WKR001/qr-payload?project=Tower+B")
    assert r.status_code == 200
    assert '"workerId": "WKR001"' in r.get_json()["data"]["qr_payload"]


def test_worker_attendance_history(client):
    client.post("/api/attendance/mark-all-present", json={"date": "2024-01-15", "worker_ids": ["WKR002"]})

    r = client.get("/api/workers/WKR002/attendance?start=2024-01-01&end=2024-01-31")
    records = r.get_json()["data"]

    assert [rec["work_date"] for rec in records] == ["2024-01-15"]
    assert records[0]["clock_in"]["method"] == "manual"


def test_import_rejects_non_object_rows(client):
    r = client.post("/api/attendance/import", json={"punches": ["WKR001 08:30"]})

    assert r.status_code == 400
    assert r.get_json()["message"] == "each punch must be a JSON object"


def test_import_endpoint(client):
    r = client.post(
        "/api/attendance/import",
        json={"punches": [{"worker_id": "WKR001", "timestamp": "2024-01-15T08:30:00", "action": "clock_in"}]},
    )

    assert r.status_code == 200
    assert r.get_json()["data"]["imported"] == 1
