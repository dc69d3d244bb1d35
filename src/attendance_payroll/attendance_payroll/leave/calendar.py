from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol, Set

from .model import LeaveSpan


class LeaveCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError

    def get_approved_leave(self, employee_id: int, day: date) -> Optional[LeaveSpan]:
        raise NotImplementedError


@dataclass
class InMemoryLeaveCalendar:
    holidays: Set[date] = field(default_factory=set)
    leaves: List[LeaveSpan] = field(default_factory=list)

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays

    def get_approved_leave(self, employee_id: int, day: date) -> Optional[LeaveSpan]:
        for span in self.leaves:
            if span.employee_id == employee_id and span.covers(day):
                return span
        return None
