from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class EmployeeLockRegistry:
    """One lock per employee so at most one transition per employee runs at a time."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def lock_for(self, employee_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        with self.lock_for(employee_id):
            yield
