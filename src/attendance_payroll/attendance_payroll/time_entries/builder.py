"""Turn a closed attendance period into a :class:`TimeEntry`.

Regular hours are the raw span minus the shift's break. Overtime hours are
clipped to the approved window: minutes worked past the window end are never
paid, a check-out past the very-late threshold only flags the entry for review.
"""

from __future__ import annotations

from datetime import datetime

from ..attendance.model import AttendanceRecord, AttendanceThresholds
from ..common.datetime_utils import minutes_between
from ..core.enums import CheckoutTiming, EntryType
from ..core.exceptions import ValidationError
from ..shifts.model import ApprovedOvertimeWindow
from ..timewindow.calculator import overlap_minutes, overtime_boundaries
from ..timewindow.model import TimeWindow
from .model import EntryHours, EntryTiming, TimeEntry


def regular_hours(check_in: datetime, check_out: datetime, break_minutes: int) -> float:
    """``(out - in) - break`` in hours, floored at zero."""
    worked = minutes_between(check_in, check_out) - int(break_minutes or 0)
    return max(worked, 0) / 60


def overtime_hours(check_in: datetime, check_out: datetime, window: TimeWindow) -> float:
    return overlap_minutes(check_in, check_out, window) / 60


def is_half_day_late(minutes_late: int, window: TimeWindow) -> bool:
    """Late by at least half of the window's length."""
    if window.duration_minutes <= 0:
        return False
    return minutes_late * 2 >= window.duration_minutes


def _require_span(check_in, check_out: datetime) -> None:
    if check_in is None:
        raise ValidationError("Cannot close a period without a check-in", code="missing_check_in")
    if check_out < check_in:
        raise ValidationError("Check-out precedes check-in", code="invalid_period")


def build_regular_entry(
    record: AttendanceRecord,
    check_out: datetime,
    window: TimeWindow,
    *,
    break_minutes: int,
    checkout_timing: CheckoutTiming,
) -> TimeEntry:
    check_in = record.regular_check_in
    _require_span(check_in, check_out)
    return TimeEntry(
        employee_id=record.employee_id,
        work_date=record.work_date,
        start_time=check_in,
        end_time=check_out,
        entry_type=EntryType.REGULAR,
        attendance_ref=record.attendance_ref,
        hours=EntryHours(regular=regular_hours(check_in, check_out, break_minutes), overtime=0.0),
        timing=EntryTiming(
            actual_minutes_late=record.late_minutes,
            is_half_day_late=is_half_day_late(record.late_minutes, window),
        ),
        needs_review=checkout_timing == CheckoutTiming.VERY_LATE,
    )


def build_overtime_entry(
    record: AttendanceRecord,
    check_out: datetime,
    overtime: ApprovedOvertimeWindow,
    *,
    thresholds: AttendanceThresholds = AttendanceThresholds(),
) -> TimeEntry:
    check_in = record.overtime_check_in
    _require_span(check_in, check_out)
    window = overtime.resolve()
    bounds = overtime_boundaries(window.start, window.end, thresholds.early_check_in, thresholds.very_late)
    return TimeEntry(
        employee_id=record.employee_id,
        work_date=record.work_date,
        start_time=check_in,
        end_time=check_out,
        entry_type=EntryType.OVERTIME,
        attendance_ref=record.attendance_ref,
        hours=EntryHours(regular=0.0, overtime=overtime_hours(check_in, check_out, window)),
        overtime_request_id=overtime.request_id,
        overtime_category=overtime.category,
        needs_review=check_out > bounds.late_check_out_window,
    )
