from datetime import date, datetime, time, timedelta
from pathlib import Path

import mysql.connector
import pytest

from src.attendance_payroll.attendance_payroll.attendance.model import AttendanceCompositeStatus, AttendanceRecord
from src.attendance_payroll.attendance_payroll.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_payroll.attendance_payroll.core.enums import AttendanceState, CheckStatus, EntryType
from src.attendance_payroll.attendance_payroll.core.exceptions import ValidationError
from src.attendance_payroll.attendance_payroll.database.bootstrap import iter_sql_statements
from src.attendance_payroll.attendance_payroll.database.mysql_base import db_cursor, normalize_mysql_time
from src.attendance_payroll.attendance_payroll.leave.mysql_leave_calendar import MySQLLeaveCalendar
from src.attendance_payroll.attendance_payroll.shifts.mysql_shift_directory import MySQLShiftDirectory
from src.attendance_payroll.attendance_payroll.time_entries.model import EntryHours, TimeEntry
from src.attendance_payroll.attendance_payroll.time_entries.mysql_time_entry_repository import (
    MySQLTimeEntryRepository,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


class FakeCursor:
    def __init__(self, results, error=None):
        self._results = list(results)
        self._current = []
        self._error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        if self._error is not None:
            raise self._error
        self._current = self._results.pop(0) if self._results else []

    def fetchone(self):
        return self._current[0] if self._current else None

    def fetchall(self):
        return list(self._current)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, *results, error=None):
        self.cursor = FakeCursor(results, error=error)
        self.connection = FakeConnection(self.cursor)

    def connect(self):
        return self.connection


def test_db_cursor_commits_on_success():
    factory = FakeConnectionFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.connection.committed
    assert not factory.connection.rolled_back
    assert factory.cursor.closed and factory.connection.closed


def test_db_cursor_rolls_back_and_reraises():
    factory = FakeConnectionFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.connection.rolled_back
    assert not factory.connection.committed
    assert factory.connection.closed


@pytest.mark.parametrize(
    "value, expected",
    [
        (time(8, 30), time(8, 30)),
        (timedelta(hours=22, minutes=15), time(22, 15)),
        ("06:05:07", time(6, 5, 7)),
        ("06:05", time(6, 5)),
        (None, None),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_attendance_repository_round_trip_through_rows():
    row = {
        "employee_id": 1,
        "work_date": date(2025, 3, 3),
        "state": "INCOMPLETE",
        "check_status": "CHECKED_IN",
        "is_overtime": 0,
        "overtime_state": None,
        "regular_check_in": datetime(2025, 3, 3, 8, 5),
        "is_late_check_in": 1,
        "late_minutes": 5,
        "checkout_timing": None,
    }
    factory = FakeConnectionFactory([row])

    record = MySQLAttendanceRepository(factory).get(1, date(2025, 3, 3))

    assert record.status.check_status == CheckStatus.CHECKED_IN
    assert record.state == AttendanceState.INCOMPLETE
    assert record.is_late_check_in
    assert record.late_minutes == 5
    assert factory.cursor.executed[0][1] == (1, date(2025, 3, 3))


def test_attendance_repository_save_upserts():
    factory = FakeConnectionFactory()
    record = AttendanceRecord(
        employee_id=1,
        work_date=date(2025, 3, 3),
        status=AttendanceCompositeStatus(state=AttendanceState.INCOMPLETE, check_status=CheckStatus.CHECKED_IN),
        regular_check_in=datetime(2025, 3, 3, 8, 0),
    )

    MySQLAttendanceRepository(factory).save(record)

    sql, params = factory.cursor.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert len(params) == 16
    assert params[2:4] == ("INCOMPLETE", "CHECKED_IN")
    assert factory.connection.committed


def test_time_entry_duplicate_maps_to_domain_error():
    factory = FakeConnectionFactory(error=mysql.connector.IntegrityError(msg="Duplicate entry"))
    entry = TimeEntry(
        employee_id=1,
        work_date=date(2025, 3, 3),
        start_time=datetime(2025, 3, 3, 8, 0),
        end_time=datetime(2025, 3, 3, 17, 0),
        entry_type=EntryType.REGULAR,
        attendance_ref="1:2025-03-03",
        hours=EntryHours(regular=8.0),
    )

    with pytest.raises(ValidationError) as exc:
        MySQLTimeEntryRepository(factory).add(entry)

    assert exc.value.code == "duplicate_entry"
    assert factory.connection.rolled_back


def test_time_entry_remove_deletes_by_id():
    factory = FakeConnectionFactory()

    MySQLTimeEntryRepository(factory).remove("1:2025-03-03:REGULAR")

    sql, params = factory.cursor.executed[0]
    assert sql == "DELETE FROM time_entries WHERE entry_id=%s"
    assert params == ("1:2025-03-03:REGULAR",)
    assert factory.connection.committed


def test_time_entry_rows_are_parsed():
    row = {
        "employee_id": 1,
        "work_date": date(2025, 3, 3),
        "start_time": datetime(2025, 3, 3, 18, 0),
        "end_time": datetime(2025, 3, 3, 20, 0),
        "entry_type": "OVERTIME",
        "attendance_ref": "1:2025-03-03",
        "regular_hours": 0,
        "overtime_hours": 2.0,
        "actual_minutes_late": 0,
        "is_half_day_late": 0,
        "overtime_request_id": 4,
        "overtime_category": "WORKDAY",
        "needs_review": 0,
    }
    factory = FakeConnectionFactory([row])

    entries = MySQLTimeEntryRepository(factory).list_for_employee(1, date(2025, 3, 1), date(2025, 3, 31))

    assert len(entries) == 1
    assert entries[0].entry_id == "1:2025-03-03:OVERTIME"
    assert entries[0].hours.overtime == 2.0
    assert entries[0].overtime_request_id == 4


def test_shift_directory_falls_back_to_employee_default():
    default_row = {
        "shift_id": 2,
        "shift_name": "Night",
        "start_time": timedelta(hours=22),
        "end_time": timedelta(hours=6),
        "break_minutes": None,
        "work_days": "0,1,2,3,4",
    }
    factory = FakeConnectionFactory([], [default_row])

    shift = MySQLShiftDirectory(factory, default_break_minutes=45).get_shift_window(1, date(2025, 3, 3))

    assert shift.start_time == "22:00"
    assert shift.end_time == "06:00"
    assert shift.is_overnight
    assert shift.break_minutes == 45
    assert not shift.is_work_day(date(2025, 3, 8))
    assert len(factory.cursor.executed) == 2


def test_leave_calendar_queries():
    factory = FakeConnectionFactory([{"holiday_date": date(2025, 1, 1)}], [])
    calendar = MySQLLeaveCalendar(factory)

    assert calendar.is_holiday(date(2025, 1, 1))
    assert calendar.get_approved_leave(1, date(2025, 1, 2)) is None


def test_schema_statements_skip_database_selection():
    statements = list(iter_sql_statements(SCHEMA.read_text(encoding="utf-8")))

    assert statements
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert any("time_entries" in s for s in statements)
