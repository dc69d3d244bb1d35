from __future__ import annotations

import threading
from datetime import date
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> None:
        """Insert or replace the record for (employee_id, work_date)."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError


class InMemoryAttendanceRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._by_employee_date: Dict[Tuple[int, date], AttendanceRecord] = {}

    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_employee_date.get((employee_id, work_date))

    def save(self, record: AttendanceRecord) -> None:
        with self._lock:
            self._by_employee_date[(record.employee_id, record.work_date)] = record

    def list_for_employee(self, employee_id: int, start: date, end: date) -> List[AttendanceRecord]:
        with self._lock:
            items = [
                r for (eid, d), r in self._by_employee_date.items() if eid == employee_id and start <= d <= end
            ]
        items.sort(key=lambda r: r.work_date)
        return items
