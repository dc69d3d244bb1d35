from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..common.datetime_utils import format_hhmm
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_DAYS
from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import ApprovedOvertimeWindow, ShiftWindow


def _parse_work_days(value: Any) -> frozenset:
    if not value:
        return DEFAULT_WORK_DAYS
    return frozenset(int(p) for p in str(value).split(",") if p.strip())


def _row_to_shift(r: Dict[str, Any], default_break_minutes: int) -> ShiftWindow:
    break_minutes = r.get("break_minutes")
    return ShiftWindow(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=format_hhmm(normalize_mysql_time(r["start_time"])),
        end_time=format_hhmm(normalize_mysql_time(r["end_time"])),
        work_days=_parse_work_days(r.get("work_days")),
        break_minutes=int(default_break_minutes if break_minutes is None else break_minutes),
    )


class MySQLShiftDirectory:
    """Shift/overtime lookups backed by the ``shifts``, ``schedules`` and
    ``overtime_requests`` tables.

    A schedule row for (employee, date) wins over the employee's default shift.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, default_break_minutes: int = DEFAULT_BREAK_MINUTES):
        self._conn_factory = conn_factory
        self._default_break_minutes = default_break_minutes

    def get_shift_window(self, employee_id: int, work_date: date) -> Optional[ShiftWindow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.shift_id, s.shift_name, s.start_time, s.end_time, s.break_minutes, s.work_days
                FROM schedules sc
                JOIN shifts s ON s.shift_id = sc.shift_id
                WHERE sc.employee_id=%s AND sc.work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if r:
                return _row_to_shift(r, self._default_break_minutes)

            cur.execute(
                """
                SELECT s.shift_id, s.shift_name, s.start_time, s.end_time, s.break_minutes, s.work_days
                FROM employees e
                JOIN shifts s ON s.shift_id = e.shift_id
                WHERE e.employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_shift(r, self._default_break_minutes) if r else None

    def get_approved_overtime(self, employee_id: int, work_date: date) -> Optional[ApprovedOvertimeWindow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, work_date, start_time, end_time, reason, status,
                       is_day_off_overtime, is_inside_shift_hours
                FROM overtime_requests
                WHERE employee_id=%s AND work_date=%s AND status=%s
                ORDER BY request_id DESC
                LIMIT 1
                """,
                (int(employee_id), work_date, RequestStatus.APPROVED.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ApprovedOvertimeWindow(
                request_id=int(r["request_id"]),
                employee_id=int(r["employee_id"]),
                work_date=r["work_date"],
                start_time=format_hhmm(normalize_mysql_time(r["start_time"])),
                end_time=format_hhmm(normalize_mysql_time(r["end_time"])),
                reason=r.get("reason") or "",
                status=RequestStatus(r["status"]),
                is_day_off_overtime=bool(r.get("is_day_off_overtime")),
                is_inside_shift_hours=bool(r.get("is_inside_shift_hours")),
            )
