from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_DAYS
from ..core.enums import OvertimeCategory, RequestStatus
from ..core.exceptions import ValidationError
from ..timewindow.calculator import resolve_window
from ..timewindow.model import TimeWindow


@dataclass(frozen=True)
class ShiftWindow:
    """Domain entity: an assigned shift with ``HH:mm`` boundaries.

    ``end_time`` earlier than ``start_time`` means the shift runs past midnight.
    ``work_days`` holds weekday indices (0=Mon ... 6=Sun).
    """

    shift_id: int
    shift_name: str
    start_time: str
    end_time: str
    work_days: FrozenSet[int] = field(default=DEFAULT_WORK_DAYS)
    break_minutes: int = DEFAULT_BREAK_MINUTES

    def __post_init__(self):
        parse_hhmm(self.start_time, "start_time")
        parse_hhmm(self.end_time, "end_time")
        if self.break_minutes < 0:
            raise ValidationError("break_minutes must be >= 0", code="negative_value")
        if any(d not in range(7) for d in self.work_days):
            raise ValidationError("work_days must be weekday indices 0-6", code="invalid_work_days")

    def is_work_day(self, day: date) -> bool:
        return day.weekday() in self.work_days

    def resolve(self, day: date) -> TimeWindow:
        return resolve_window(self.start_time, self.end_time, day)

    @property
    def is_overnight(self) -> bool:
        return parse_hhmm(self.end_time) < parse_hhmm(self.start_time)


@dataclass(frozen=True)
class ApprovedOvertimeWindow:
    """Overtime request for one employee on one date."""

    request_id: int
    employee_id: int
    work_date: date
    start_time: str
    end_time: str
    reason: str = ""
    status: RequestStatus = RequestStatus.APPROVED
    is_day_off_overtime: bool = False
    is_inside_shift_hours: bool = False

    def __post_init__(self):
        parse_hhmm(self.start_time, "start_time")
        parse_hhmm(self.end_time, "end_time")

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    @property
    def category(self) -> OvertimeCategory:
        if not self.is_day_off_overtime:
            return OvertimeCategory.WORKDAY
        if self.is_inside_shift_hours:
            return OvertimeCategory.WEEKEND_INSIDE_SHIFT
        return OvertimeCategory.HOLIDAY

    def resolve(self) -> TimeWindow:
        return resolve_window(self.start_time, self.end_time, self.work_date)

