from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import PeriodStrategyFactory
from .attendance.model import AttendanceThresholds
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository, InMemoryAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_BREAK_MINUTES, PAY_PERIOD_START_DAY
from .core.exceptions import ConfigurationError
from .database.connection import DBConfig, DatabaseConnection
from .leave.calendar import InMemoryLeaveCalendar, LeaveCalendar
from .leave.mysql_leave_calendar import MySQLLeaveCalendar
from .payroll.aggregator import PayrollAggregationService
from .payroll.rates import RateTable, rate_table_from_settings
from .payroll.service import PayrollService
from .shifts.directory import CachedShiftDirectory, InMemoryShiftDirectory, ShiftDirectory
from .shifts.mysql_shift_directory import MySQLShiftDirectory
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import InMemoryTimeEntryRepository, TimeEntryRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    time_entry_repo: TimeEntryRepository
    shift_source: ShiftDirectory
    shift_directory: CachedShiftDirectory
    calendar: LeaveCalendar
    rate_table: RateTable

    attendance_service: AttendanceService
    payroll_service: PayrollService

    pay_period_start_day: int = PAY_PERIOD_START_DAY


def build_container(settings: Any) -> Container:
    """Wire repositories and services from a settings module (or any object
    exposing the same attributes)."""
    storage = str(getattr(settings, "STORAGE", "memory")).lower()
    break_minutes = int(getattr(settings, "DEFAULT_BREAK_MINUTES", DEFAULT_BREAK_MINUTES))

    conn: Optional[DatabaseConnection] = None
    if storage == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
        time_entry_repo: TimeEntryRepository = MySQLTimeEntryRepository(conn)
        shift_source: ShiftDirectory = MySQLShiftDirectory(conn, default_break_minutes=break_minutes)
        calendar: LeaveCalendar = MySQLLeaveCalendar(conn)
    elif storage == "memory":
        attendance_repo = InMemoryAttendanceRepository()
        time_entry_repo = InMemoryTimeEntryRepository()
        shift_source = InMemoryShiftDirectory()
        calendar = InMemoryLeaveCalendar()
    else:
        raise ConfigurationError(f"Unknown STORAGE backend: {storage!r}")

    shift_directory = CachedShiftDirectory(shift_source)
    rate_table = rate_table_from_settings(getattr(settings, "PAYROLL_RATES", None))

    attendance_service = AttendanceService(
        attendance_repo,
        time_entry_repo,
        shift_directory,
        calendar,
        strategy_factory=PeriodStrategyFactory(),
        thresholds=AttendanceThresholds.from_mapping(getattr(settings, "ATTENDANCE_THRESHOLDS", None)),
    )
    payroll_service = PayrollService(
        PayrollAggregationService(time_entry_repo, calendar, shift_directory),
        rate_table,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        time_entry_repo=time_entry_repo,
        shift_source=shift_source,
        shift_directory=shift_directory,
        calendar=calendar,
        rate_table=rate_table,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        pay_period_start_day=int(getattr(settings, "PAY_PERIOD_START_DAY", PAY_PERIOD_START_DAY)),
    )
