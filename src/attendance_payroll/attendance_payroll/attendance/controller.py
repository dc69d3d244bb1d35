from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..container import Container
from ..core.exceptions import ValidationError
from .model import CheckEvent

_CHECK_TYPES = {"check_in": True, "check_out": False}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:employee_id>/check", methods=["POST"], endpoint="attendance_check")
    def attendance_check(employee_id: int):
        payload = request.get_json(silent=True) or {}

        check_type = payload.get("type")
        if check_type not in _CHECK_TYPES:
            raise ValidationError("type must be 'check_in' or 'check_out'", code="invalid_check_type")

        instant = parse_iso_datetime(payload["at"]) if payload.get("at") else now_local()
        work_date = parse_iso_date(payload["work_date"]) if payload.get("work_date") else None

        result = container.attendance_service.apply_check_event(
            employee_id,
            CheckEvent(
                is_check_in=_CHECK_TYPES[check_type],
                is_overtime=bool(payload.get("is_overtime", False)),
                instant=instant,
                work_date=work_date,
            ),
        )
        return jsonify(
            {
                "status": result.status.to_dict(),
                "record": result.record.to_dict(),
                "time_entry": result.time_entry.to_dict() if result.time_entry else None,
            }
        )

    @app.route("/api/attendance/<int:employee_id>/<work_date>", methods=["GET"], endpoint="attendance_status")
    def attendance_status(employee_id: int, work_date: str):
        day = parse_iso_date(work_date)
        record = container.attendance_service.get_record(employee_id, day)
        return jsonify(
            {
                "display_status": container.attendance_service.get_display_status(employee_id, day),
                "record": record.to_dict() if record else None,
            }
        )
