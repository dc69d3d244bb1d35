from __future__ import annotations

from dataclasses import dataclass, field

from .strategies.base import PeriodStrategy
from .strategies.overtime_strategy import OvertimePeriodStrategy
from .strategies.regular_strategy import RegularPeriodStrategy


@dataclass
class PeriodStrategyFactory:
    """Factory Pattern: choose the classification strategy for a period."""

    regular: PeriodStrategy = field(default_factory=RegularPeriodStrategy)
    overtime: PeriodStrategy = field(default_factory=OvertimePeriodStrategy)

    def for_event(self, *, is_overtime: bool) -> PeriodStrategy:
        return self.overtime if is_overtime else self.regular
