from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveSpan:
    """Leave request covering ``start_date``..``end_date`` inclusive."""

    employee_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType = LeaveType.ANNUAL
    status: RequestStatus = RequestStatus.APPROVED

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ValidationError("Leave end precedes its start", code="invalid_period")

    def covers(self, day: date) -> bool:
        return self.status == RequestStatus.APPROVED and self.start_date <= day <= self.end_date
