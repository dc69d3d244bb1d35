from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from ..common.money import to_decimal
from ..core.enums import EmploymentType, OvertimeCategory
from ..core.exceptions import ConfigurationError, ValidationError
from .model import EmployeeClassification, PayrollRates, TaxBracket

DEFAULT_TAX_BRACKETS = (
    {"threshold": 0, "rate": "0"},
    {"threshold": 20000, "rate": "0.05"},
    {"threshold": 30000, "rate": "0.10"},
    {"threshold": 50000, "rate": "0.15"},
)


def hourly_rate_from_salary(salary, salary_type: str = "monthly") -> Decimal:
    """Monthly salaries spread over 30 days of 8 hours; daily wages over 8 hours."""
    amount = to_decimal(salary, "salary")
    if salary_type == "monthly":
        return amount / 30 / 8
    if salary_type == "daily":
        return amount / 8
    raise ValidationError(f"Unknown salary type: {salary_type!r}", code="invalid_salary_type")


def rates_from_mapping(data: Mapping[str, Any]) -> PayrollRates:
    """Build :class:`PayrollRates` from a plain settings dict.

    Missing required keys are configuration errors, never silent zeros.
    """
    try:
        multipliers = {
            OvertimeCategory(k): to_decimal(v, f"overtime_multipliers.{k}")
            for k, v in data["overtime_multipliers"].items()
        }
        brackets = tuple(
            TaxBracket(threshold=to_decimal(b["threshold"]), rate=to_decimal(b["rate"]))
            for b in data.get("tax_brackets", DEFAULT_TAX_BRACKETS)
        )
        return PayrollRates(
            regular_hourly_rate=to_decimal(data["regular_hourly_rate"], "regular_hourly_rate"),
            overtime_multipliers=multipliers,
            holiday_multiplier=to_decimal(data.get("holiday_multiplier", 1)),
            standard_day_hours=to_decimal(data.get("standard_day_hours", 8)),
            allowances={k: to_decimal(v, k) for k, v in (data.get("allowances") or {}).items()},
            meal_allowance_per_day=to_decimal(data.get("meal_allowance_per_day", 0)),
            social_security_rate=to_decimal(data.get("social_security_rate", "0.05")),
            social_security_min_base=to_decimal(data.get("social_security_min_base", 1650)),
            social_security_max_base=to_decimal(data.get("social_security_max_base", 15000)),
            social_security_cap=to_decimal(data.get("social_security_cap", 750)),
            tax_brackets=brackets,
            other_deductions=to_decimal(data.get("other_deductions", 0)),
        )
    except KeyError as e:
        raise ConfigurationError(f"Missing payroll setting: {e.args[0]}") from None
    except ValidationError as e:
        raise ConfigurationError(str(e)) from None
    except ValueError as e:
        raise ConfigurationError(f"Invalid payroll setting: {e}") from None


class RateTable:
    """Payroll rates per employment type, built once and injected."""

    def __init__(self, rates: Optional[Dict[EmploymentType, PayrollRates]] = None):
        self._rates: Dict[EmploymentType, PayrollRates] = dict(rates or {})

    def get_payroll_rates(self, classification: EmployeeClassification) -> PayrollRates:
        rates = self._rates.get(classification.employment_type)
        if rates is None:
            raise ConfigurationError(
                f"No payroll rates configured for {classification.employment_type.value}",
                code="missing_rates",
            )
        return rates

    def set_rates(self, employment_type: EmploymentType, rates: PayrollRates) -> None:
        self._rates[employment_type] = rates


def rate_table_from_settings(settings_rates: Optional[Mapping[str, Mapping[str, Any]]]) -> RateTable:
    table = RateTable()
    for key, data in (settings_rates or {}).items():
        try:
            employment_type = EmploymentType(str(key).upper())
        except ValueError:
            raise ConfigurationError(f"Unknown employment type in PAYROLL_RATES: {key!r}") from None
        table.set_rates(employment_type, rates_from_mapping(data))
    return table
