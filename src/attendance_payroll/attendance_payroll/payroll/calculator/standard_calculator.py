from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from ...common.logger import get_logger
from ...common.money import ZERO, non_negative, to_decimal
from ...core.enums import OvertimeCategory
from ..model import Deductions, EmployeeClassification, PayrollAggregation, PayrollEarnings, PayrollRates
from ..tax import progressive_tax, social_security
from .base import PayrollCalculator

logger = get_logger(__name__)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule set.

    1. base = regular hours x hourly rate
    2. overtime per category = hours x rate x multiplier
    3. holiday pay = holidays x standard day hours x rate x holiday multiplier
    4. allowances = configured flat amounts (+ meal per present day)
    5. gross = base + overtime + holiday + allowances
    6. social security = clamp(gross, min, max) x rate, capped
    7. progressive tax on gross
    8. net = gross - deductions

    All steps run on Decimal without intermediate rounding.
    """

    def calculate(
        self,
        aggregation: PayrollAggregation,
        classification: EmployeeClassification,
        rates: PayrollRates,
    ) -> PayrollEarnings:
        rate = non_negative(rates.regular_hourly_rate)

        base_pay = self.base_pay(aggregation, rate)
        overtime_pay = self.overtime_pay(aggregation, rate, rates)
        holiday_pay = self.holiday_pay(aggregation, rate, rates)
        allowances = self.allowances(aggregation, rates)

        base_pay, overtime_pay, allowances = self.adjust(base_pay, overtime_pay, allowances)

        gross = base_pay + sum(overtime_pay.values(), ZERO) + holiday_pay + sum(allowances.values(), ZERO)
        deductions = Deductions(
            social_security=social_security(gross, rates),
            tax=progressive_tax(gross, rates.tax_brackets),
            other=non_negative(rates.other_deductions),
        )

        anomalies: List[str] = []
        if deductions.total > gross:
            anomalies.append("deductions_exceed_gross")
            logger.warning(
                "employee=%s deductions %s exceed gross %s", aggregation.employee_id, deductions.total, gross
            )

        return PayrollEarnings(
            employee_id=aggregation.employee_id,
            base_pay=base_pay,
            overtime_pay=overtime_pay,
            holiday_pay=holiday_pay,
            allowances=allowances,
            deductions=deductions,
            anomalies=tuple(anomalies),
        )

    def base_pay(self, aggregation: PayrollAggregation, rate: Decimal) -> Decimal:
        return non_negative(to_decimal(aggregation.regular_hours) * rate)

    def overtime_pay(
        self, aggregation: PayrollAggregation, rate: Decimal, rates: PayrollRates
    ) -> Dict[OvertimeCategory, Decimal]:
        pay: Dict[OvertimeCategory, Decimal] = {}
        for category in OvertimeCategory:
            hours = to_decimal(aggregation.overtime_hours.get(category, 0.0))
            if hours <= ZERO:
                pay[category] = ZERO
                continue
            pay[category] = non_negative(hours * rate * rates.multiplier(category))
        return pay

    def holiday_pay(self, aggregation: PayrollAggregation, rate: Decimal, rates: PayrollRates) -> Decimal:
        days = Decimal(max(aggregation.holidays, 0))
        return non_negative(days * rates.standard_day_hours * rate * rates.holiday_multiplier)

    def allowances(self, aggregation: PayrollAggregation, rates: PayrollRates) -> Dict[str, Decimal]:
        out = {name: non_negative(amount) for name, amount in rates.allowances.items()}
        if rates.meal_allowance_per_day > ZERO:
            out["meal"] = out.get("meal", ZERO) + rates.meal_allowance_per_day * Decimal(
                max(aggregation.days_present, 0)
            )
        return out

    def adjust(
        self,
        base_pay: Decimal,
        overtime_pay: Dict[OvertimeCategory, Decimal],
        allowances: Dict[str, Decimal],
    ):
        """Hook for subclasses that scale pay components before deductions."""
        return base_pay, overtime_pay, allowances
