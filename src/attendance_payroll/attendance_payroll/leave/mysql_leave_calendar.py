from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import LeaveSpan


def _row_to_span(r: Dict[str, Any]) -> LeaveSpan:
    return LeaveSpan(
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=LeaveType(r["leave_type"]),
        status=RequestStatus(r["status"]),
    )


class MySQLLeaveCalendar:
    """Holidays from ``holidays``, approved leave from ``leave_requests``."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_holiday(self, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_date FROM holidays WHERE holiday_date=%s LIMIT 1", (day,))
            return fetchone(cur) is not None

    def get_approved_leave(self, employee_id: int, day: date) -> Optional[LeaveSpan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, start_date, end_date, leave_type, status
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND %s BETWEEN start_date AND end_date
                ORDER BY start_date ASC
                LIMIT 1
                """,
                (int(employee_id), RequestStatus.APPROVED.value, day),
            )
            r = fetchone(cur)
            return _row_to_span(r) if r else None
