from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import InvariantViolation, RecordNotFound, ValidationError
from .serialization import to_jsonable

log = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


def ok(payload, status: int = 200):
    return jsonify({"success": True, "data": to_jsonable(payload)}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to JSON responses once per app."""

    if app.extensions.get("attendance_payroll.errors"):
        return
    app.extensions["attendance_payroll.errors"] = True

    @app.errorhandler(RecordNotFound)
    def _not_found(e: RecordNotFound):
        return fail(str(e), 404)

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(InvariantViolation)
    def _invariant(e: InvariantViolation):
        log.error("invariant violation: %s", e)
        return fail("internal consistency error", 500)
