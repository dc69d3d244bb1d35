from __future__ import annotations

from decimal import Decimal

from ...core.constants import PROBATION_PAY_FACTOR
from .standard_calculator import StandardPayrollCalculator


class ProbationPayrollCalculator(StandardPayrollCalculator):
    """Probation: base, overtime and allowances paid at a reduced factor.

    Deductions are computed on the reduced gross. Holiday pay is untouched.
    """

    def __init__(self, factor: Decimal = PROBATION_PAY_FACTOR):
        self._factor = factor

    def adjust(self, base_pay, overtime_pay, allowances):
        f = self._factor
        return (
            base_pay * f,
            {c: v * f for c, v in overtime_pay.items()},
            {k: v * f for k, v in allowances.items()},
        )
