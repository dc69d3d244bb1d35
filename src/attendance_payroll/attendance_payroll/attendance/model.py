from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, TYPE_CHECKING

from ..core.constants import (
    EARLY_CHECK_IN_THRESHOLD_MINUTES,
    EARLY_CHECK_OUT_THRESHOLD_MINUTES,
    LATE_CHECK_IN_THRESHOLD_MINUTES,
    LATE_CHECK_OUT_THRESHOLD_MINUTES,
    VERY_LATE_THRESHOLD_MINUTES,
)
from ..core.enums import AttendanceState, CheckoutTiming, CheckStatus, OvertimeState
from ..core.exceptions import ValidationError

if TYPE_CHECKING:
    from ..time_entries.model import TimeEntry


_STATES_BY_CHECK_STATUS = {
    CheckStatus.PENDING: {
        AttendanceState.PENDING,
        AttendanceState.ABSENT,
        AttendanceState.HOLIDAY,
        AttendanceState.OFF,
    },
    CheckStatus.CHECKED_IN: {AttendanceState.INCOMPLETE, AttendanceState.OVERTIME},
    CheckStatus.CHECKED_OUT: {AttendanceState.PRESENT},
}

_CHECK_STATUS_BY_OVERTIME_STATE = {
    OvertimeState.NOT_STARTED: CheckStatus.PENDING,
    OvertimeState.IN_PROGRESS: CheckStatus.CHECKED_IN,
    OvertimeState.COMPLETED: CheckStatus.CHECKED_OUT,
}


@dataclass(frozen=True)
class AttendanceCompositeStatus:
    """Authoritative status of one period (regular or overtime).

    Only consistent combinations can be constructed: ``overtime_state`` is set
    exactly when ``is_overtime`` is, and ``state`` has to agree with
    ``check_status``.
    """

    state: AttendanceState = AttendanceState.PENDING
    check_status: CheckStatus = CheckStatus.PENDING
    is_overtime: bool = False
    overtime_state: Optional[OvertimeState] = None

    def __post_init__(self):
        if self.is_overtime and self.overtime_state is None:
            raise ValidationError("Overtime period requires an overtime state", code="invalid_status")
        if not self.is_overtime and self.overtime_state is not None:
            raise ValidationError("Overtime state is only defined for overtime periods", code="invalid_status")
        if self.state not in _STATES_BY_CHECK_STATUS[self.check_status]:
            raise ValidationError(
                f"State {self.state.value} is not valid with {self.check_status.value}", code="invalid_status"
            )
        if self.is_overtime and _CHECK_STATUS_BY_OVERTIME_STATE[self.overtime_state] != self.check_status:
            raise ValidationError(
                f"Overtime {self.overtime_state.value} is not valid with {self.check_status.value}",
                code="invalid_status",
            )
        if self.state == AttendanceState.OVERTIME and not self.is_overtime:
            raise ValidationError("OVERTIME state requires an overtime period", code="invalid_status")

    @classmethod
    def initial(cls) -> "AttendanceCompositeStatus":
        return cls()

    @classmethod
    def day_off(cls) -> "AttendanceCompositeStatus":
        return cls(state=AttendanceState.OFF)

    @classmethod
    def holiday(cls) -> "AttendanceCompositeStatus":
        return cls(state=AttendanceState.HOLIDAY)

    @property
    def is_terminal(self) -> bool:
        if self.check_status != CheckStatus.CHECKED_OUT:
            return False
        return not self.is_overtime or self.overtime_state == OvertimeState.COMPLETED

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "check_status": self.check_status.value,
            "is_overtime": self.is_overtime,
            "overtime_state": self.overtime_state.value if self.overtime_state else None,
        }


@dataclass(frozen=True)
class AttendanceThresholds:
    """Minute thresholds used to classify check events."""

    early_check_in: int = EARLY_CHECK_IN_THRESHOLD_MINUTES
    late_check_in: int = LATE_CHECK_IN_THRESHOLD_MINUTES
    early_check_out: int = EARLY_CHECK_OUT_THRESHOLD_MINUTES
    late_check_out: int = LATE_CHECK_OUT_THRESHOLD_MINUTES
    very_late: int = VERY_LATE_THRESHOLD_MINUTES

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AttendanceThresholds":
        data = data or {}
        defaults = cls()
        return cls(
            early_check_in=int(data.get("early_check_in", defaults.early_check_in)),
            late_check_in=int(data.get("late_check_in", defaults.late_check_in)),
            early_check_out=int(data.get("early_check_out", defaults.early_check_out)),
            late_check_out=int(data.get("late_check_out", defaults.late_check_out)),
            very_late=int(data.get("very_late", defaults.very_late)),
        )


@dataclass(frozen=True)
class CheckEvent:
    """A check-in or check-out request.

    ``work_date`` pins the day the event belongs to; when omitted the service
    derives it (an overnight check-out belongs to the previous day's period).
    """

    is_check_in: bool
    is_overtime: bool
    instant: datetime
    work_date: Optional[date] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one work date."""

    employee_id: int
    work_date: date
    status: AttendanceCompositeStatus = AttendanceCompositeStatus()
    regular_check_in: Optional[datetime] = None
    regular_check_out: Optional[datetime] = None
    overtime_check_in: Optional[datetime] = None
    overtime_check_out: Optional[datetime] = None
    is_late_check_in: bool = False
    is_early_check_in: bool = False
    is_late_check_out: bool = False
    is_very_late_check_out: bool = False
    late_minutes: int = 0
    checkout_timing: Optional[CheckoutTiming] = None

    @property
    def attendance_ref(self) -> str:
        return f"{self.employee_id}:{self.work_date.isoformat()}"

    @property
    def state(self) -> AttendanceState:
        return self.status.state

    @property
    def overtime_state(self) -> Optional[OvertimeState]:
        return self.status.overtime_state

    def to_dict(self) -> dict:
        def _iso(v: Optional[datetime]) -> Optional[str]:
            return v.isoformat() if v else None

        return {
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "status": self.status.to_dict(),
            "regular_check_in": _iso(self.regular_check_in),
            "regular_check_out": _iso(self.regular_check_out),
            "overtime_check_in": _iso(self.overtime_check_in),
            "overtime_check_out": _iso(self.overtime_check_out),
            "is_late_check_in": self.is_late_check_in,
            "is_early_check_in": self.is_early_check_in,
            "is_late_check_out": self.is_late_check_out,
            "is_very_late_check_out": self.is_very_late_check_out,
            "late_minutes": self.late_minutes,
            "checkout_timing": self.checkout_timing.value if self.checkout_timing else None,
        }


@dataclass(frozen=True)
class CheckResult:
    status: AttendanceCompositeStatus
    record: AttendanceRecord
    time_entry: Optional["TimeEntry"] = None
