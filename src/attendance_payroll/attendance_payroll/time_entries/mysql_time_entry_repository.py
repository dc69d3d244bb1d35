from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Sequence

import mysql.connector

from ..core.enums import EntryType, OvertimeCategory
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import EntryHours, EntryTiming, TimeEntry


def _row_to_entry(r: Dict[str, Any]) -> TimeEntry:
    category = r.get("overtime_category")
    request_id = r.get("overtime_request_id")
    return TimeEntry(
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        entry_type=EntryType(r["entry_type"]),
        attendance_ref=r["attendance_ref"],
        hours=EntryHours(regular=float(r.get("regular_hours") or 0), overtime=float(r.get("overtime_hours") or 0)),
        timing=EntryTiming(
            actual_minutes_late=int(r.get("actual_minutes_late") or 0),
            is_half_day_late=bool(r.get("is_half_day_late")),
        ),
        overtime_request_id=int(request_id) if request_id is not None else None,
        overtime_category=OvertimeCategory(category) if category else None,
        needs_review=bool(r.get("needs_review")),
    )


class MySQLTimeEntryRepository:
    """``time_entries`` table store. ``entry_id`` is the primary key so a
    period can only ever be committed once."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, entry: TimeEntry) -> None:
        try:
            self._insert(entry)
        except mysql.connector.IntegrityError:
            raise ValidationError(f"Time entry {entry.entry_id} already exists", code="duplicate_entry") from None

    def _insert(self, entry: TimeEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(
                    entry_id, employee_id, work_date, start_time, end_time, entry_type, attendance_ref,
                    regular_hours, overtime_hours, actual_minutes_late, is_half_day_late,
                    overtime_request_id, overtime_category, needs_review
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.entry_id,
                    int(entry.employee_id),
                    entry.work_date,
                    entry.start_time,
                    entry.end_time,
                    entry.entry_type.value,
                    entry.attendance_ref,
                    entry.hours.regular,
                    entry.hours.overtime,
                    entry.timing.actual_minutes_late,
                    int(entry.timing.is_half_day_late),
                    entry.overtime_request_id,
                    entry.overtime_category.value if entry.overtime_category else None,
                    int(entry.needs_review),
                ),
            )

    def remove(self, entry_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (entry_id,))

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, start_time, end_time, entry_type, attendance_ref,
                       regular_hours, overtime_hours, actual_minutes_late, is_half_day_late,
                       overtime_request_id, overtime_category, needs_review
                FROM time_entries
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, start_time ASC
                """,
                (int(employee_id), start, end),
            )
            rows: List[Dict[str, Any]] = fetchall(cur)
            return [_row_to_entry(r) for r in rows]
