from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.logger import get_logger
from ..core.exceptions import DomainError
from .aggregator import PayrollAggregationService
from .calculator.base import PayrollCalculator
from .calculator.probation_calculator import ProbationPayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    BatchResult,
    EmployeeClassification,
    PayrollAggregation,
    PayrollEarnings,
    PayrollRates,
    PayrollRequest,
)
from .rates import RateTable

logger = get_logger(__name__)


class PayrollService:
    """Aggregation + earnings for single employees and batches.

    The calculator is picked per classification: probation employees go
    through :class:`ProbationPayrollCalculator`, everyone else through the
    standard one.
    """

    def __init__(
        self,
        aggregation: PayrollAggregationService,
        rate_table: RateTable,
        *,
        calculator: Optional[PayrollCalculator] = None,
        probation_calculator: Optional[PayrollCalculator] = None,
    ):
        self._aggregation = aggregation
        self._rate_table = rate_table
        self._calculator = calculator or StandardPayrollCalculator()
        self._probation_calculator = probation_calculator or ProbationPayrollCalculator()

    def aggregate_period(self, employee_id: int, period_start: date, period_end: date) -> PayrollAggregation:
        return self._aggregation.aggregate_period(employee_id, period_start, period_end)

    def rates_for(self, classification: EmployeeClassification, hourly_rate=None) -> PayrollRates:
        rates = self._rate_table.get_payroll_rates(classification)
        if hourly_rate is not None:
            rates = rates.with_hourly_rate(hourly_rate)
        return rates

    def calculate_earnings(
        self,
        aggregation: PayrollAggregation,
        classification: EmployeeClassification,
        rates: Optional[PayrollRates] = None,
    ) -> PayrollEarnings:
        if rates is None:
            rates = self.rates_for(classification)
        calculator = self._probation_calculator if classification.is_probation else self._calculator
        return calculator.calculate(aggregation, classification, rates)

    def calculate_batch(self, requests: Iterable[PayrollRequest]) -> BatchResult:
        """One failing employee never aborts the rest of the batch."""
        result = BatchResult()
        for req in requests:
            try:
                rates = self.rates_for(req.classification, req.hourly_rate)
                aggregation = self.aggregate_period(req.employee_id, req.period_start, req.period_end)
                earnings = self.calculate_earnings(aggregation, req.classification, rates)
            except DomainError as e:
                logger.exception("Payroll failed for employee=%s", req.employee_id)
                result.failures[req.employee_id] = e.code
                continue

            result.earnings[req.employee_id] = earnings
            if earnings.anomalies:
                result.anomalies.append(req.employee_id)

        logger.info(
            "Payroll batch done: %d ok, %d failed, %d flagged",
            len(result.earnings),
            len(result.failures),
            len(result.anomalies),
        )
        return result
