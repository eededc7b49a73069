from __future__ import annotations

from flask import Flask

from ..attendance.model import AttendancePeriod
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import json_body, ok, register_error_handlers
from ..common.validators import require_enum, require_non_empty, require_non_negative
from ..core.enums import PeriodType
from ..core.exceptions import ValidationError
from ..container import Container


def _period_from(data: dict) -> AttendancePeriod:
    return AttendancePeriod(
        start_date=parse_iso_date(require_non_empty(data.get("start"), "start")),
        end_date=parse_iso_date(require_non_empty(data.get("end"), "end")),
        period_type=require_enum(PeriodType, data.get("type") or "monthly", "type"),
    )


def register(app: Flask, container: Container) -> None:
    register_error_handlers(app)
    payroll = container.payroll_service

    @app.route("/api/payroll/run", methods=["POST"], endpoint="api_payroll_run")
    def api_payroll_run():
        data = json_body()
        worker_ids = data.get("worker_ids")
        if worker_ids is None:
            worker_ids = [w.worker_id for w in container.workers_repo.list_active()]
        if not isinstance(worker_ids, list):
            raise ValidationError("worker_ids must be a list")
        return ok(payroll.run_payroll(worker_ids, _period_from(data)))

    @app.route("/api/payroll/<worker_id>/payments", methods=["POST"], endpoint="api_payroll_record_payment")
    def api_payroll_record_payment(worker_id: str):
        data = json_body()
        amount = require_non_negative(data.get("amount"), "amount")
        return ok(payroll.record_payment(worker_id, _period_from(data), amount))

    @app.route("/api/payroll/overdue", methods=["POST"], endpoint="api_payroll_overdue")
    def api_payroll_overdue():
        data = json_body()
        raw = data.get("today")
        today = parse_iso_date(raw) if raw else now_local().date()
        return ok(payroll.mark_overdue(today))
