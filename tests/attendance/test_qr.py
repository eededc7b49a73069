import json
from datetime import datetime

import pytest

from attendance_payroll.attendance.qr import build_qr_payload, parse_qr_payload
from attendance_payroll.core.exceptions import ValidationError
from tests.factories import make_worker


def test_parse_payload_reads_worker_fields():
    payload = parse_qr_payload(
        '{"workerId": "WKR001", "employeeId": "EMP001", "name": "Rajesh Kumar", "department": "Construction"}'
    )
    assert payload.worker_id == "WKR001"
    assert payload.employee_id == "EMP001"
    assert payload.department == "Construction"


@pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", '{"name": "no id"}'])
def test_parse_payload_rejects_malformed_input(raw):
    with pytest.raises(ValidationError):
        parse_qr_payload(raw)


def test_build_payload_carries_worker_identity():
    worker = make_worker("WKR009", name="Asha")
    data = json.loads(build_qr_payload(worker, project_name="Residential Complex", now=datetime(2024, 1, 1, 7, 0)))

    assert data["workerId"] == "WKR009"
    assert data["project"] == "Residential Complex"
    assert data["version"] == "1.0"
    assert parse_qr_payload(json.dumps(data)).worker_id == "WKR009"
