from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from ..core.constants import PAY_PERIOD_START_DAY
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayPeriod:
    start: date
    end: date

    @property
    def label(self) -> str:
        return f"{self.start:%b %d} - {self.end:%b %d, %Y}"

    @property
    def value(self) -> str:
        return f"{self.start:%Y-%m}"


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def pay_period_starting(year: int, month: int, start_day: int = PAY_PERIOD_START_DAY) -> PayPeriod:
    """Period running from ``start_day`` of the given month to the day before it next month."""
    if not 1 <= start_day <= 28:
        raise ValidationError("Pay period start day must be between 1 and 28", code="invalid_period")
    start = date(year, month, start_day)
    next_year, next_month = _shift_month(year, month, 1)
    end = date(next_year, next_month, start_day) - timedelta(days=1)
    return PayPeriod(start=start, end=end)


def current_pay_period(today: date, start_day: int = PAY_PERIOD_START_DAY) -> PayPeriod:
    if today.day >= start_day:
        return pay_period_starting(today.year, today.month, start_day)
    year, month = _shift_month(today.year, today.month, -1)
    return pay_period_starting(year, month, start_day)


def previous_pay_periods(count: int, today: date, start_day: int = PAY_PERIOD_START_DAY) -> List[PayPeriod]:
    """The ``count`` most recent periods up to and including the current one, oldest first."""
    current = current_pay_period(today, start_day)
    periods = []
    for i in range(count):
        year, month = _shift_month(current.start.year, current.start.month, -i)
        periods.append(pay_period_starting(year, month, start_day))
    return list(reversed(periods))
