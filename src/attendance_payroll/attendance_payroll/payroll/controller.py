from __future__ import annotations

from datetime import date
from typing import Tuple

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.enums import EmploymentType
from ..core.exceptions import ValidationError
from .model import EmployeeClassification
from .periods import current_pay_period, previous_pay_periods


def _period_from_args(container: Container) -> Tuple[date, date]:
    start, end = request.args.get("start"), request.args.get("end")
    if not start and not end:
        period = current_pay_period(now_local().date(), container.pay_period_start_day)
        return period.start, period.end
    if not start or not end:
        raise ValidationError("start and end must be given together", code="invalid_period")
    return parse_iso_date(start), parse_iso_date(end)


def _classification_from_args() -> EmployeeClassification:
    raw_type = (request.args.get("employment_type") or EmploymentType.FULLTIME.value).upper()
    try:
        employment_type = EmploymentType(raw_type)
    except ValueError:
        raise ValidationError(f"Unknown employment type: {raw_type!r}", code="invalid_employment_type") from None
    probation = (request.args.get("probation") or "").lower() in {"1", "true", "yes"}
    return EmployeeClassification(employment_type=employment_type, is_probation=probation)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/periods", methods=["GET"], endpoint="payroll_periods")
    def payroll_periods():
        count = request.args.get("count", default=6, type=int)
        periods = previous_pay_periods(max(count, 1), now_local().date(), container.pay_period_start_day)
        return jsonify(
            [
                {"value": p.value, "label": p.label, "start": p.start.isoformat(), "end": p.end.isoformat()}
                for p in periods
            ]
        )

    @app.route("/api/payroll/<int:employee_id>/aggregation", methods=["GET"], endpoint="payroll_aggregation")
    def payroll_aggregation(employee_id: int):
        start, end = _period_from_args(container)
        aggregation = container.payroll_service.aggregate_period(employee_id, start, end)
        return jsonify(aggregation.to_dict())

    @app.route("/api/payroll/<int:employee_id>/earnings", methods=["GET"], endpoint="payroll_earnings")
    def payroll_earnings(employee_id: int):
        start, end = _period_from_args(container)
        classification = _classification_from_args()

        hourly_rate = request.args.get("hourly_rate")
        rates = container.payroll_service.rates_for(classification, hourly_rate)
        aggregation = container.payroll_service.aggregate_period(employee_id, start, end)
        earnings = container.payroll_service.calculate_earnings(aggregation, classification, rates)
        return jsonify({"aggregation": aggregation.to_dict(), "earnings": earnings.to_dict()})
