from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceState, CheckoutTiming, CheckStatus, OvertimeState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceCompositeStatus, AttendanceRecord

_COLUMNS = """
    employee_id, work_date, state, check_status, is_overtime, overtime_state,
    regular_check_in, regular_check_out, overtime_check_in, overtime_check_out,
    is_late_check_in, is_early_check_in, is_late_check_out, is_very_late_check_out,
    late_minutes, checkout_timing
"""


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    overtime_state = r.get("overtime_state")
    checkout_timing = r.get("checkout_timing")
    return AttendanceRecord(
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceCompositeStatus(
            state=AttendanceState(r["state"]),
            check_status=CheckStatus(r["check_status"]),
            is_overtime=bool(r.get("is_overtime")),
            overtime_state=OvertimeState(overtime_state) if overtime_state else None,
        ),
        regular_check_in=r.get("regular_check_in"),
        regular_check_out=r.get("regular_check_out"),
        overtime_check_in=r.get("overtime_check_in"),
        overtime_check_out=r.get("overtime_check_out"),
        is_late_check_in=bool(r.get("is_late_check_in")),
        is_early_check_in=bool(r.get("is_early_check_in")),
        is_late_check_out=bool(r.get("is_late_check_out")),
        is_very_late_check_out=bool(r.get("is_very_late_check_out")),
        late_minutes=int(r.get("late_minutes") or 0),
        checkout_timing=CheckoutTiming(checkout_timing) if checkout_timing else None,
    )


class MySQLAttendanceRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def save(self, record: AttendanceRecord) -> None:
        s = record.status
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    state=VALUES(state), check_status=VALUES(check_status),
                    is_overtime=VALUES(is_overtime), overtime_state=VALUES(overtime_state),
                    regular_check_in=VALUES(regular_check_in), regular_check_out=VALUES(regular_check_out),
                    overtime_check_in=VALUES(overtime_check_in), overtime_check_out=VALUES(overtime_check_out),
                    is_late_check_in=VALUES(is_late_check_in), is_early_check_in=VALUES(is_early_check_in),
                    is_late_check_out=VALUES(is_late_check_out),
                    is_very_late_check_out=VALUES(is_very_late_check_out),
                    late_minutes=VALUES(late_minutes), checkout_timing=VALUES(checkout_timing)
                """,
                (
                    int(record.employee_id),
                    record.work_date,
                    s.state.value,
                    s.check_status.value,
                    int(s.is_overtime),
                    s.overtime_state.value if s.overtime_state else None,
                    record.regular_check_in,
                    record.regular_check_out,
                    record.overtime_check_in,
                    record.overtime_check_out,
                    int(record.is_late_check_in),
                    int(record.is_early_check_in),
                    int(record.is_late_check_out),
                    int(record.is_very_late_check_out),
                    int(record.late_minutes),
                    record.checkout_timing.value if record.checkout_timing else None,
                ),
            )

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start, end),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
