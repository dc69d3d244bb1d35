from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import EntryType, OvertimeCategory


@dataclass(frozen=True)
class EntryHours:
    regular: float = 0.0
    overtime: float = 0.0


@dataclass(frozen=True)
class EntryTiming:
    actual_minutes_late: int = 0
    is_half_day_late: bool = False


@dataclass(frozen=True)
class TimeEntry:
    """Committed record of worked time for one closed period."""

    employee_id: int
    work_date: date
    start_time: datetime
    end_time: Optional[datetime]
    entry_type: EntryType
    attendance_ref: str
    hours: EntryHours = field(default_factory=EntryHours)
    timing: EntryTiming = field(default_factory=EntryTiming)
    overtime_request_id: Optional[int] = None
    overtime_category: Optional[OvertimeCategory] = None
    needs_review: bool = False

    @property
    def entry_id(self) -> str:
        return f"{self.attendance_ref}:{self.entry_type.value}"

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "entry_type": self.entry_type.value,
            "hours": {"regular": self.hours.regular, "overtime": self.hours.overtime},
            "timing": {
                "actual_minutes_late": self.timing.actual_minutes_late,
                "is_half_day_late": self.timing.is_half_day_late,
            },
            "overtime_request_id": self.overtime_request_id,
            "overtime_category": self.overtime_category.value if self.overtime_category else None,
            "needs_review": self.needs_review,
        }
