"""Worker QR payload codec.

The QR code printed on a worker ID card carries a small JSON document:
{"workerId", "employeeId", "name", "department", "project",
 "employmentType", "timestamp", "version"}. Only workerId is mandatory when
scanning; the rest is informational.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from ..core.constants import QR_PAYLOAD_VERSION
from ..core.exceptions import ValidationError
from ..workers.model import Worker
from .model import ScanPayload


def parse_qr_payload(raw: str) -> ScanPayload:
    text = (raw or "").strip()
    if not text:
        raise ValidationError("QR payload is empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        raise ValidationError("QR payload is not valid JSON")

    if not isinstance(data, dict):
        raise ValidationError("QR payload must be a JSON object")

    worker_id = str(data.get("workerId") or "").strip()
    if not worker_id:
        raise ValidationError("QR payload has no workerId")

    return ScanPayload(
        worker_id=worker_id,
        employee_id=data.get("employeeId"),
        name=data.get("name"),
        department=data.get("department"),
        project=data.get("project"),
        employment_type=data.get("employmentType"),
        issued_at=data.get("timestamp"),
        version=data.get("version"),
    )


def build_qr_payload(worker: Worker, *, project_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now()
    return json.dumps(
        {
            "workerId": worker.worker_id,
            "employeeId": worker.employee_id,
            "name": worker.name,
            "department": worker.department,
            "project": project_name or "General",
            "employmentType": worker.employment_type,
            "timestamp": issued.isoformat(),
            "version": QR_PAYLOAD_VERSION,
        }
    )
