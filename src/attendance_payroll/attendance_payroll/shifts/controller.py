from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    # Called after shift assignments or schedules change outside this process.
    @app.route("/api/shifts/cache/invalidate", methods=["POST"], endpoint="shifts_invalidate")
    def shifts_invalidate():
        payload = request.get_json(silent=True) or {}
        employee_id = payload.get("employee_id")
        if employee_id is not None and (isinstance(employee_id, bool) or not isinstance(employee_id, int)):
            raise ValidationError("employee_id must be an integer", code="invalid_employee_id")

        container.shift_directory.invalidate(employee_id=employee_id)
        return jsonify({"invalidated": "all" if employee_id is None else employee_id})
