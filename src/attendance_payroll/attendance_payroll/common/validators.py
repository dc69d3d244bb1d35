from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_period(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("Period end must not precede period start", code="invalid_period")
