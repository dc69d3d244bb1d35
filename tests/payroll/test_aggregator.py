import logging
from datetime import date, datetime

import pytest

from src.attendance_payroll.attendance_payroll.core.enums import EntryType, OvertimeCategory
from src.attendance_payroll.attendance_payroll.core.exceptions import ValidationError
from src.attendance_payroll.attendance_payroll.leave.calendar import InMemoryLeaveCalendar
from src.attendance_payroll.attendance_payroll.leave.model import LeaveSpan
from src.attendance_payroll.attendance_payroll.payroll.aggregator import PayrollAggregationService, aggregate_entries
from src.attendance_payroll.attendance_payroll.shifts.directory import InMemoryShiftDirectory
from src.attendance_payroll.attendance_payroll.shifts.model import ShiftWindow
from src.attendance_payroll.attendance_payroll.time_entries.model import EntryHours, EntryTiming, TimeEntry
from src.attendance_payroll.attendance_payroll.time_entries.repository import InMemoryTimeEntryRepository

START = date(2025, 3, 3)  # Monday
END = date(2025, 3, 9)  # Sunday
MORNING = ShiftWindow(shift_id=1, shift_name="Morning", start_time="08:00", end_time="17:00")


def _regular(day: date, hours: float, late: int = 0, employee_id: int = 1) -> TimeEntry:
    return TimeEntry(
        employee_id=employee_id,
        work_date=day,
        start_time=datetime.combine(day, datetime.min.time()),
        end_time=None,
        entry_type=EntryType.REGULAR,
        attendance_ref=f"{employee_id}:{day.isoformat()}",
        hours=EntryHours(regular=hours),
        timing=EntryTiming(actual_minutes_late=late),
    )


def _overtime(day: date, hours: float, category: OvertimeCategory) -> TimeEntry:
    return TimeEntry(
        employee_id=1,
        work_date=day,
        start_time=datetime.combine(day, datetime.min.time()),
        end_time=None,
        entry_type=EntryType.OVERTIME,
        attendance_ref=f"1:{day.isoformat()}",
        hours=EntryHours(overtime=hours),
        overtime_request_id=1,
        overtime_category=category,
    )


def _week():
    return [
        _regular(date(2025, 3, 3), 8.0, late=5),
        _regular(date(2025, 3, 4), 8.0),
        _regular(date(2025, 3, 8), 7.5),
        _overtime(date(2025, 3, 8), 2.0, OvertimeCategory.WORKDAY),
        _overtime(date(2025, 3, 9), 3.0, OvertimeCategory.HOLIDAY),
    ]


def _calendar():
    return InMemoryLeaveCalendar(
        holidays={date(2025, 3, 5)},
        leaves=[LeaveSpan(employee_id=1, start_date=date(2025, 3, 6), end_date=date(2025, 3, 6))],
    )


def _shifts():
    return InMemoryShiftDirectory(default_shifts={1: MORNING})


def test_aggregate_week():
    agg = aggregate_entries(1, START, END, _week(), calendar=_calendar(), shifts=_shifts())

    assert agg.regular_hours == pytest.approx(23.5)
    assert agg.overtime_hours == {
        OvertimeCategory.WORKDAY: 2.0,
        OvertimeCategory.WEEKEND_INSIDE_SHIFT: 0.0,
        OvertimeCategory.HOLIDAY: 3.0,
    }
    assert agg.total_overtime_hours == pytest.approx(5.0)
    assert agg.days_present == 4
    assert agg.days_absent == 1  # Friday
    assert agg.holidays == 1
    assert agg.leave_days == 1
    assert agg.late_minutes == 5
    assert agg.skipped_entries == 0


def test_aggregation_is_idempotent_and_order_independent():
    calendar, shifts = _calendar(), _shifts()
    entries = _week()

    first = aggregate_entries(1, START, END, entries, calendar=calendar, shifts=shifts)
    second = aggregate_entries(1, START, END, entries, calendar=calendar, shifts=shifts)
    reversed_order = aggregate_entries(1, START, END, list(reversed(entries)), calendar=calendar, shifts=shifts)

    assert first == second == reversed_order


def test_inconsistent_entries_are_skipped_and_logged(caplog):
    entries = _week() + [
        _regular(date(2025, 3, 10), 8.0),
        _regular(date(2025, 3, 4), 8.0, employee_id=2),
        TimeEntry(
            employee_id=1,
            work_date=date(2025, 3, 7),
            start_time=datetime(2025, 3, 7, 18, 0),
            end_time=None,
            entry_type=EntryType.OVERTIME,
            attendance_ref="1:2025-03-07",
            hours=EntryHours(overtime=1.0),
        ),
    ]

    with caplog.at_level(logging.WARNING):
        agg = aggregate_entries(1, START, END, entries, calendar=_calendar(), shifts=_shifts())

    assert agg.skipped_entries == 3
    assert agg.regular_hours == pytest.approx(23.5)
    assert agg.days_absent == 1
    assert "Skipping entry" in caplog.text


def test_employee_without_shift_has_no_absences():
    agg = aggregate_entries(1, START, END, [], calendar=_calendar(), shifts=InMemoryShiftDirectory())

    assert agg.days_absent == 0
    assert agg.holidays == 1
    assert agg.days_present == 0


def test_holiday_on_a_day_off_is_counted():
    calendar = InMemoryLeaveCalendar(holidays={date(2025, 3, 5), date(2025, 3, 9)})

    agg = aggregate_entries(1, START, END, _week(), calendar=calendar, shifts=_shifts())

    assert agg.holidays == 2
    assert agg.days_present == 4
    assert agg.days_absent == 2  # Thursday and Friday


def test_reversed_period_is_rejected():
    with pytest.raises(ValidationError) as exc:
        aggregate_entries(1, END, START, [], calendar=_calendar(), shifts=_shifts())
    assert exc.value.code == "invalid_period"


def test_aggregation_service_reads_repository():
    repo = InMemoryTimeEntryRepository()
    for entry in _week():
        repo.add(entry)
    repo.add(_regular(date(2025, 3, 10), 8.0))

    service = PayrollAggregationService(repo, _calendar(), _shifts())
    agg = service.aggregate_period(1, START, END)

    assert agg == aggregate_entries(1, START, END, _week(), calendar=_calendar(), shifts=_shifts())
    assert agg.skipped_entries == 0
