from decimal import Decimal

import pytest

import config.testing as settings
from src.attendance_payroll.attendance_payroll.core.enums import EmploymentType, OvertimeCategory
from src.attendance_payroll.attendance_payroll.core.exceptions import ConfigurationError, ValidationError
from src.attendance_payroll.attendance_payroll.payroll.model import EmployeeClassification
from src.attendance_payroll.attendance_payroll.payroll.rates import (
    RateTable,
    hourly_rate_from_salary,
    rate_table_from_settings,
    rates_from_mapping,
)


def test_rate_table_from_settings():
    table = rate_table_from_settings(settings.PAYROLL_RATES)

    fulltime = table.get_payroll_rates(EmployeeClassification())
    parttime = table.get_payroll_rates(EmployeeClassification(employment_type=EmploymentType.PARTTIME))

    assert fulltime.regular_hourly_rate == Decimal("62.5")
    assert fulltime.multiplier(OvertimeCategory.WEEKEND_INSIDE_SHIFT) == Decimal("1.0")
    assert parttime.multiplier(OvertimeCategory.WEEKEND_INSIDE_SHIFT) == Decimal("2.0")
    assert parttime.meal_allowance_per_day == Decimal("30")
    assert len(fulltime.tax_brackets) == 4


def test_missing_classification_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        RateTable().get_payroll_rates(EmployeeClassification())
    assert exc.value.code == "missing_rates"


@pytest.mark.parametrize(
    "data",
    [
        {"overtime_multipliers": {}},
        {"regular_hourly_rate": "100"},
        {"regular_hourly_rate": "abc", "overtime_multipliers": {}},
        {"regular_hourly_rate": "100", "overtime_multipliers": {"NIGHT": "2"}},
        {
            "regular_hourly_rate": "100",
            "overtime_multipliers": {},
            "tax_brackets": [{"threshold": 30000, "rate": "0.1"}, {"threshold": 20000, "rate": "0.05"}],
        },
    ],
)
def test_broken_rate_settings_are_configuration_errors(data):
    with pytest.raises(ConfigurationError):
        rates_from_mapping(data)


def test_unknown_employment_type_key():
    with pytest.raises(ConfigurationError):
        rate_table_from_settings({"CONTRACTOR": settings.PAYROLL_RATES["FULLTIME"]})


def test_hourly_rate_from_salary():
    assert hourly_rate_from_salary(15000) == Decimal("62.5")
    assert hourly_rate_from_salary("400", "daily") == Decimal("50")
    with pytest.raises(ValidationError):
        hourly_rate_from_salary(1000, "weekly")


def test_with_hourly_rate_keeps_everything_else():
    rates = rates_from_mapping(settings.PAYROLL_RATES["FULLTIME"])
    overridden = rates.with_hourly_rate(80)

    assert overridden.regular_hourly_rate == Decimal("80")
    assert overridden.overtime_multipliers == rates.overtime_multipliers


@pytest.mark.parametrize("rate", [-5, "-0.01", "Infinity"])
def test_with_hourly_rate_rejects_invalid_override(rate):
    rates = rates_from_mapping(settings.PAYROLL_RATES["FULLTIME"])

    with pytest.raises(ValidationError) as exc:
        rates.with_hourly_rate(rate)

    assert exc.value.code == "invalid_hourly_rate"
