from __future__ import annotations

import threading
from datetime import date
from typing import Dict, List, Protocol, Sequence

from ..core.exceptions import ValidationError
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def add(self, entry: TimeEntry) -> None:
        raise NotImplementedError

    def remove(self, entry_id: str) -> None:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[TimeEntry]:
        raise NotImplementedError


class InMemoryTimeEntryRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, TimeEntry] = {}

    def add(self, entry: TimeEntry) -> None:
        with self._lock:
            if entry.entry_id in self._entries:
                raise ValidationError(f"Time entry {entry.entry_id} already exists", code="duplicate_entry")
            self._entries[entry.entry_id] = entry

    def remove(self, entry_id: str) -> None:
        with self._lock:
            self._entries.pop(entry_id, None)

    def list_for_employee(self, employee_id: int, start: date, end: date) -> List[TimeEntry]:
        with self._lock:
            items = [
                e for e in self._entries.values() if e.employee_id == employee_id and start <= e.work_date <= end
            ]
        items.sort(key=lambda e: (e.work_date, e.start_time))
        return items

    def all(self) -> List[TimeEntry]:
        with self._lock:
            return list(self._entries.values())
