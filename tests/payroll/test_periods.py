from datetime import date

import pytest

from src.attendance_payroll.attendance_payroll.core.exceptions import ValidationError
from src.attendance_payroll.attendance_payroll.payroll.periods import (
    current_pay_period,
    pay_period_starting,
    previous_pay_periods,
)


@pytest.mark.parametrize(
    "today, start, end",
    [
        (date(2025, 3, 10), date(2025, 2, 26), date(2025, 3, 25)),
        (date(2025, 3, 25), date(2025, 2, 26), date(2025, 3, 25)),
        (date(2025, 3, 26), date(2025, 3, 26), date(2025, 4, 25)),
        (date(2025, 12, 31), date(2025, 12, 26), date(2026, 1, 25)),
        (date(2026, 1, 2), date(2025, 12, 26), date(2026, 1, 25)),
    ],
)
def test_current_pay_period(today, start, end):
    period = current_pay_period(today)

    assert (period.start, period.end) == (start, end)


def test_previous_pay_periods_oldest_first():
    periods = previous_pay_periods(3, date(2025, 1, 5))

    assert [p.start for p in periods] == [date(2024, 10, 26), date(2024, 11, 26), date(2024, 12, 26)]
    assert periods[-1].end == date(2025, 1, 25)
    assert periods[-1].value == "2024-12"


def test_start_day_must_exist_in_every_month():
    with pytest.raises(ValidationError):
        pay_period_starting(2025, 2, 30)
