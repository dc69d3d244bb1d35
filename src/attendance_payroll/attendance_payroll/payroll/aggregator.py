"""Fold time entries of a pay period into a :class:`PayrollAggregation`.

``aggregate_entries`` is a pure function of its inputs: running it twice on the
same entries and calendars yields equal results. Entries that do not belong to
the requested employee/period are logged and left out instead of aborting the
whole period.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Set

from ..common.datetime_utils import iter_dates
from ..common.logger import get_logger
from ..common.validators import require_period
from ..core.enums import EntryType, OvertimeCategory
from ..leave.calendar import LeaveCalendar
from ..shifts.directory import ShiftDirectory
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from .model import PayrollAggregation, empty_overtime_hours

logger = get_logger(__name__)


def _is_consistent(entry: TimeEntry, employee_id: int, start: date, end: date) -> bool:
    if entry.employee_id != employee_id:
        logger.warning("Skipping entry %s: belongs to employee %s", entry.entry_id, entry.employee_id)
        return False
    if not start <= entry.work_date <= end:
        logger.warning("Skipping entry %s: %s outside %s..%s", entry.entry_id, entry.work_date, start, end)
        return False
    if entry.entry_type == EntryType.OVERTIME and entry.overtime_category is None:
        logger.warning("Skipping entry %s: overtime without category", entry.entry_id)
        return False
    if entry.hours.regular < 0 or entry.hours.overtime < 0:
        logger.warning("Skipping entry %s: negative hours", entry.entry_id)
        return False
    return True


def aggregate_entries(
    employee_id: int,
    period_start: date,
    period_end: date,
    entries: Iterable[TimeEntry],
    *,
    calendar: LeaveCalendar,
    shifts: ShiftDirectory,
) -> PayrollAggregation:
    require_period(period_start, period_end)

    regular_hours = 0.0
    overtime_hours: Dict[OvertimeCategory, float] = empty_overtime_hours()
    late_minutes = 0
    skipped = 0
    present: Set[date] = set()

    # Fixed order keeps float sums reproducible.
    for entry in sorted(entries, key=lambda e: (e.work_date, e.entry_id)):
        if not _is_consistent(entry, employee_id, period_start, period_end):
            skipped += 1
            continue
        regular_hours += entry.hours.regular
        if entry.overtime_category is not None:
            overtime_hours[entry.overtime_category] += entry.hours.overtime
        late_minutes += entry.timing.actual_minutes_late
        present.add(entry.work_date)

    days_absent = 0
    holidays = 0
    leave_days = 0
    for day in iter_dates(period_start, period_end):
        if calendar.is_holiday(day):
            holidays += 1
            continue
        shift = shifts.get_shift_window(employee_id, day)
        if shift is None or not shift.is_work_day(day):
            continue
        if calendar.get_approved_leave(employee_id, day) is not None:
            leave_days += 1
            continue
        if day not in present:
            days_absent += 1

    return PayrollAggregation(
        employee_id=employee_id,
        period_start=period_start,
        period_end=period_end,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        days_present=len(present),
        days_absent=days_absent,
        late_minutes=late_minutes,
        holidays=holidays,
        leave_days=leave_days,
        skipped_entries=skipped,
    )


class PayrollAggregationService:
    """Reads a period's entries and delegates to :func:`aggregate_entries`.

    Pass a fixed ``period_end`` snapshot when attendance for later days is
    still being written; the result is a pure recomputation every time.
    """

    def __init__(self, time_entries: TimeEntryRepository, calendar: LeaveCalendar, shifts: ShiftDirectory):
        self._time_entries = time_entries
        self._calendar = calendar
        self._shifts = shifts

    def aggregate_period(self, employee_id: int, period_start: date, period_end: date) -> PayrollAggregation:
        require_period(period_start, period_end)
        entries = self._time_entries.list_for_employee(employee_id, period_start, period_end)
        return aggregate_entries(
            employee_id,
            period_start,
            period_end,
            entries,
            calendar=self._calendar,
            shifts=self._shifts,
        )
