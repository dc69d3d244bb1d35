from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import EmployeeClassification, PayrollAggregation, PayrollEarnings, PayrollRates


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        aggregation: PayrollAggregation,
        classification: EmployeeClassification,
        rates: PayrollRates,
    ) -> PayrollEarnings:
        raise NotImplementedError
