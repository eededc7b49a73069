from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.http import fail, json_body, ok, register_error_handlers
from ..common.validators import require_enum, require_non_empty
from ..core.enums import ScanAction
from ..core.exceptions import ValidationError
from ..container import Container
from .forms import ManualEntryForm, RecordPatch
from .service import PunchImport


def register(app: Flask, container: Container) -> None:
    register_error_handlers(app)
    service = container.attendance_service

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_attendance_scan")
    def api_attendance_scan():
        """QR scan: clock-in or clock-out, auto-detected when no action is given."""
        data = json_body()
        qr_code = require_non_empty(data.get("qr_payload") or data.get("qr_code"), "QR payload")
        result = service.scan(qr_code, data.get("action") or None, project_id=data.get("project_id"))
        if not result.allowed:
            return fail(result.reason, 409)
        return ok({"action": result.action, "record": result.record})

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="api_attendance_manual")
    def api_attendance_manual():
        record = service.record_manual_entry(ManualEntryForm.from_mapping(json_body()))
        return ok(record, 201)

    @app.route("/api/attendance/<record_id>", methods=["PATCH"], endpoint="api_attendance_edit")
    def api_attendance_edit(record_id: str):
        record = service.edit_record(record_id, RecordPatch.from_mapping(json_body()))
        return ok(record)

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    def api_attendance_delete(record_id: str):
        service.delete_record(record_id)
        return ok({"deleted": record_id})

    @app.route("/api/attendance/mark-all-present", methods=["POST"], endpoint="api_attendance_mark_all")
    def api_attendance_mark_all():
        data = json_body()
        work_date = parse_iso_date(require_non_empty(data.get("date"), "date"))
        roster = data.get("worker_ids")
        if roster is not None and not isinstance(roster, list):
            raise ValidationError("worker_ids must be a list")
        return ok(service.mark_all_present(work_date, roster))

    @app.route("/api/attendance/import", methods=["POST"], endpoint="api_attendance_import")
    def api_attendance_import():
        rows = json_body().get("punches")
        if not isinstance(rows, list):
            raise ValidationError("punches must be a list")
        if not all(isinstance(row, dict) for row in rows):
            raise ValidationError("each punch must be a JSON object")
        punches = [
            PunchImport(
                worker_id=require_non_empty(row.get("worker_id"), "worker"),
                timestamp=parse_iso_datetime(row.get("timestamp")),
                action=require_enum(ScanAction, row.get("action"), "action"),
                project_id=row.get("project_id"),
            )
            for row in rows
        ]
        return ok(service.import_punches(punches))

    @app.route("/api/workers/<worker_id>/attendance", methods=["GET"], endpoint="api_worker_attendance")
    def api_worker_attendance(worker_id: str):
        records = service.list_worker_records(
            worker_id,
            start_date=parse_iso_date(require_non_empty(request.args.get("start"), "start")),
            end_date=parse_iso_date(require_non_empty(request.args.get("end"), "end")),
        )
        return ok(records)

    @app.route("/api/workers/<worker_id>/qr-payload", methods=["GET"], endpoint="api_worker_qr_payload")
    def api_worker_qr_payload(worker_id: str):
        payload = service.qr_payload_for(worker_id, project_name=request.args.get("project"))
        return ok({"qr_payload": payload})
