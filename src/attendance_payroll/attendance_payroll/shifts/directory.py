from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Protocol, Tuple

from .model import ApprovedOvertimeWindow, ShiftWindow


class ShiftDirectory(Protocol):
    def get_shift_window(self, employee_id: int, work_date: date) -> Optional[ShiftWindow]:
        raise NotImplementedError

    def get_approved_overtime(self, employee_id: int, work_date: date) -> Optional[ApprovedOvertimeWindow]:
        raise NotImplementedError


@dataclass
class InMemoryShiftDirectory:
    """Default shift per employee plus per-date overrides (schedules)."""

    default_shifts: Dict[int, ShiftWindow] = field(default_factory=dict)
    scheduled: Dict[Tuple[int, date], ShiftWindow] = field(default_factory=dict)
    overtime: Dict[Tuple[int, date], ApprovedOvertimeWindow] = field(default_factory=dict)

    def get_shift_window(self, employee_id: int, work_date: date) -> Optional[ShiftWindow]:
        return self.scheduled.get((employee_id, work_date)) or self.default_shifts.get(employee_id)

    def get_approved_overtime(self, employee_id: int, work_date: date) -> Optional[ApprovedOvertimeWindow]:
        ot = self.overtime.get((employee_id, work_date))
        if ot is None or not ot.is_approved:
            return None
        return ot

    def add_overtime(self, overtime: ApprovedOvertimeWindow) -> None:
        self.overtime[(overtime.employee_id, overtime.work_date)] = overtime


DEFAULT_CACHE_ENTRIES = 4096


class CachedShiftDirectory:
    """Caches lookups of another directory.

    The cache belongs to this instance; callers construct it, inject it, and
    call ``invalidate`` when shift assignments change. Missing overtime is
    never cached, so an approval made after the first lookup is picked up by
    the next one. Each cache keeps at most ``max_entries`` keys and drops the
    oldest first.
    """

    def __init__(self, source: ShiftDirectory, *, max_entries: int = DEFAULT_CACHE_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._source = source
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._shifts: Dict[Tuple[int, date], Optional[ShiftWindow]] = {}
        self._overtime: Dict[Tuple[int, date], ApprovedOvertimeWindow] = {}

    def get_shift_window(self, employee_id: int, work_date: date) -> Optional[ShiftWindow]:
        key = (employee_id, work_date)
        with self._lock:
            if key in self._shifts:
                return self._shifts[key]
        value = self._source.get_shift_window(employee_id, work_date)
        self._store(self._shifts, key, value)
        return value

    def get_approved_overtime(self, employee_id: int, work_date: date) -> Optional[ApprovedOvertimeWindow]:
        key = (employee_id, work_date)
        with self._lock:
            if key in self._overtime:
                return self._overtime[key]
        value = self._source.get_approved_overtime(employee_id, work_date)
        if value is not None:
            self._store(self._overtime, key, value)
        return value

    def invalidate(self, employee_id: Optional[int] = None) -> None:
        with self._lock:
            if employee_id is None:
                self._shifts.clear()
                self._overtime.clear()
                return
            for cache in (self._shifts, self._overtime):
                for key in [k for k in cache if k[0] == employee_id]:
                    del cache[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._shifts) + len(self._overtime)

    def _store(self, cache: Dict, key: Tuple[int, date], value) -> None:
        with self._lock:
            cache[key] = value
            while len(cache) > self._max_entries:
                del cache[next(iter(cache))]
