from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ...core.enums import CheckoutTiming
from ...shifts.model import ApprovedOvertimeWindow, ShiftWindow
from ...timewindow.model import CheckInTiming, TimeWindow
from ..model import AttendanceThresholds


@dataclass(frozen=True)
class PeriodContext:
    """Everything needed to classify one event of one period."""

    work_date: date
    shift: Optional[ShiftWindow] = None
    overtime: Optional[ApprovedOvertimeWindow] = None
    thresholds: AttendanceThresholds = field(default_factory=AttendanceThresholds)


@dataclass(frozen=True)
class CheckInDecision:
    window: TimeWindow
    timing: CheckInTiming


@dataclass(frozen=True)
class CheckOutDecision:
    window: TimeWindow
    timing: CheckoutTiming


class PeriodStrategy(ABC):
    """Strategy Pattern: how a period resolves its window and classifies events."""

    @abstractmethod
    def resolve_window(self, context: PeriodContext) -> TimeWindow:
        raise NotImplementedError

    @abstractmethod
    def decide_check_in(self, *, now: datetime, context: PeriodContext) -> CheckInDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_check_out(self, *, now: datetime, context: PeriodContext) -> CheckOutDecision:
        raise NotImplementedError
