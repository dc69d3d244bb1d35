from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Mapping, Tuple

from ..common.money import ZERO, quantize_money, to_decimal
from ..core.constants import SOCIAL_SECURITY_CAP, STANDARD_DAY_HOURS
from ..core.enums import EmploymentType, OvertimeCategory
from ..core.exceptions import ConfigurationError, ValidationError


def empty_overtime_hours() -> Dict[OvertimeCategory, float]:
    return {category: 0.0 for category in OvertimeCategory}


@dataclass(frozen=True)
class PayrollAggregation:
    """Hour and day totals of one employee over one pay period.

    Always derived from time entries and calendars; never a source of truth.
    """

    employee_id: int
    period_start: date
    period_end: date
    regular_hours: float = 0.0
    overtime_hours: Mapping[OvertimeCategory, float] = field(default_factory=empty_overtime_hours)
    days_present: int = 0
    days_absent: int = 0
    late_minutes: int = 0
    holidays: int = 0
    leave_days: int = 0
    skipped_entries: int = 0

    @property
    def total_overtime_hours(self) -> float:
        return sum(self.overtime_hours.values())

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "regular_hours": self.regular_hours,
            "overtime_hours": {c.value: h for c, h in self.overtime_hours.items()},
            "days_present": self.days_present,
            "days_absent": self.days_absent,
            "late_minutes": self.late_minutes,
            "holidays": self.holidays,
            "leave_days": self.leave_days,
            "skipped_entries": self.skipped_entries,
        }


@dataclass(frozen=True)
class EmployeeClassification:
    employment_type: EmploymentType = EmploymentType.FULLTIME
    is_probation: bool = False


@dataclass(frozen=True)
class TaxBracket:
    """Income above ``threshold`` (up to the next bracket) is taxed at ``rate``."""

    threshold: Decimal
    rate: Decimal


@dataclass(frozen=True)
class PayrollRates:
    regular_hourly_rate: Decimal
    overtime_multipliers: Mapping[OvertimeCategory, Decimal]
    holiday_multiplier: Decimal = Decimal("1")
    standard_day_hours: Decimal = Decimal(STANDARD_DAY_HOURS)
    allowances: Mapping[str, Decimal] = field(default_factory=dict)
    meal_allowance_per_day: Decimal = ZERO
    social_security_rate: Decimal = Decimal("0.05")
    social_security_min_base: Decimal = Decimal("1650")
    social_security_max_base: Decimal = Decimal("15000")
    social_security_cap: Decimal = SOCIAL_SECURITY_CAP
    tax_brackets: Tuple[TaxBracket, ...] = ()
    other_deductions: Decimal = ZERO

    def __post_init__(self):
        if self.regular_hourly_rate < ZERO:
            raise ConfigurationError("Hourly rate must not be negative")
        if self.social_security_min_base > self.social_security_max_base:
            raise ConfigurationError("Social security min base exceeds max base")
        thresholds = [b.threshold for b in self.tax_brackets]
        if thresholds != sorted(thresholds) or len(set(thresholds)) != len(thresholds):
            raise ConfigurationError("Tax brackets must have strictly increasing thresholds")

    def multiplier(self, category: OvertimeCategory) -> Decimal:
        try:
            return self.overtime_multipliers[category]
        except KeyError:
            raise ConfigurationError(f"No overtime multiplier configured for {category.value}") from None

    def with_hourly_rate(self, rate) -> "PayrollRates":
        """Override the hourly rate with a caller-supplied value."""
        value = to_decimal(rate, "hourly_rate")
        if not value.is_finite() or value < ZERO:
            raise ValidationError(
                f"hourly_rate must be a non-negative number, got {rate!r}", code="invalid_hourly_rate"
            )
        return replace(self, regular_hourly_rate=value)


@dataclass(frozen=True)
class Deductions:
    social_security: Decimal = ZERO
    tax: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.social_security + self.tax + self.other


@dataclass(frozen=True)
class PayrollEarnings:
    employee_id: int
    base_pay: Decimal
    overtime_pay: Mapping[OvertimeCategory, Decimal]
    holiday_pay: Decimal
    allowances: Mapping[str, Decimal]
    deductions: Deductions
    anomalies: Tuple[str, ...] = ()

    @property
    def total_overtime_pay(self) -> Decimal:
        return sum(self.overtime_pay.values(), ZERO)

    @property
    def total_allowances(self) -> Decimal:
        return sum(self.allowances.values(), ZERO)

    @property
    def gross_pay(self) -> Decimal:
        return self.base_pay + self.total_overtime_pay + self.holiday_pay + self.total_allowances

    @property
    def net_payable(self) -> Decimal:
        return self.gross_pay - self.deductions.total

    def to_dict(self) -> dict:
        """Display form: amounts are rounded here and only here."""
        return {
            "employee_id": self.employee_id,
            "base_pay": str(quantize_money(self.base_pay)),
            "overtime_pay": {c.value: str(quantize_money(v)) for c, v in self.overtime_pay.items()},
            "total_overtime_pay": str(quantize_money(self.total_overtime_pay)),
            "holiday_pay": str(quantize_money(self.holiday_pay)),
            "allowances": {k: str(quantize_money(v)) for k, v in self.allowances.items()},
            "total_allowances": str(quantize_money(self.total_allowances)),
            "gross_pay": str(quantize_money(self.gross_pay)),
            "deductions": {
                "social_security": str(quantize_money(self.deductions.social_security)),
                "tax": str(quantize_money(self.deductions.tax)),
                "other": str(quantize_money(self.deductions.other)),
                "total": str(quantize_money(self.deductions.total)),
            },
            "net_payable": str(quantize_money(self.net_payable)),
            "anomalies": list(self.anomalies),
        }


@dataclass(frozen=True)
class PayrollRequest:
    """One employee's entry in a batch run."""

    employee_id: int
    classification: EmployeeClassification
    period_start: date
    period_end: date
    hourly_rate: Decimal | None = None


@dataclass
class BatchResult:
    earnings: Dict[int, PayrollEarnings] = field(default_factory=dict)
    failures: Dict[int, str] = field(default_factory=dict)
    anomalies: List[int] = field(default_factory=list)
