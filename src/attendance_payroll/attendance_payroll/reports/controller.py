from __future__ import annotations

from flask import Flask, request

from ..attendance.model import AttendancePeriod
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import ok, register_error_handlers
from ..common.validators import require_enum, require_non_empty
from ..core.enums import PeriodType
from ..container import Container


def register(app: Flask, container: Container) -> None:
    register_error_handlers(app)
    reports = container.report_service

    @app.route("/api/attendance/snapshot", methods=["GET"], endpoint="api_attendance_snapshot")
    def api_attendance_snapshot():
        raw = request.args.get("date")
        day = parse_iso_date(raw) if raw else now_local().date()
        return ok(reports.daily_snapshot(day))

    @app.route("/api/attendance/summary/<worker_id>", methods=["GET"], endpoint="api_attendance_summary")
    def api_attendance_summary(worker_id: str):
        period = AttendancePeriod(
            start_date=parse_iso_date(require_non_empty(request.args.get("start"), "start")),
            end_date=parse_iso_date(require_non_empty(request.args.get("end"), "end")),
            period_type=require_enum(PeriodType, request.args.get("type", "custom"), "type"),
        )
        return ok(reports.period_summary(worker_id, period))
