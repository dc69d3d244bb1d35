"""Attendance period state machine.

Guards and transitions are pure functions over
:class:`AttendanceCompositeStatus`. An illegal transition raises
:class:`TransitionError` and the caller keeps its current status.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.enums import AttendanceState, CheckStatus, OvertimeState
from ..core.exceptions import TransitionError
from .model import AttendanceCompositeStatus, AttendanceRecord, CheckEvent


def can_check_in(current: AttendanceCompositeStatus) -> bool:
    return current.check_status != CheckStatus.CHECKED_IN


def can_check_out(current: AttendanceCompositeStatus) -> bool:
    return current.check_status == CheckStatus.CHECKED_IN


def can_transition_to_overtime(current: AttendanceCompositeStatus) -> bool:
    """Overtime may start only once the regular period is closed.

    Days without a regular period (OFF / HOLIDAY, nothing checked yet) have
    nothing to close, so day-off overtime can start straight away.
    """
    if current.is_overtime:
        return current.overtime_state == OvertimeState.NOT_STARTED
    if current.check_status == CheckStatus.CHECKED_OUT:
        return True
    return current.check_status == CheckStatus.PENDING and current.state in (
        AttendanceState.OFF,
        AttendanceState.HOLIDAY,
    )


def _check_in(current: AttendanceCompositeStatus, is_overtime: bool) -> AttendanceCompositeStatus:
    if not can_check_in(current):
        raise TransitionError("Already checked in", code="already_checked_in")

    if is_overtime:
        if current.is_overtime and current.overtime_state == OvertimeState.COMPLETED:
            raise TransitionError("Overtime already completed", code="overtime_already_completed")
        if not can_transition_to_overtime(current):
            raise TransitionError("Overtime requires prior checkout", code="overtime_requires_checkout")
        return AttendanceCompositeStatus(
            state=AttendanceState.OVERTIME,
            check_status=CheckStatus.CHECKED_IN,
            is_overtime=True,
            overtime_state=OvertimeState.IN_PROGRESS,
        )

    if current.check_status == CheckStatus.CHECKED_OUT:
        raise TransitionError("Already checked out", code="already_checked_out")
    return AttendanceCompositeStatus(state=AttendanceState.INCOMPLETE, check_status=CheckStatus.CHECKED_IN)


def _check_out(current: AttendanceCompositeStatus) -> AttendanceCompositeStatus:
    if current.check_status == CheckStatus.CHECKED_OUT:
        raise TransitionError("Already checked out", code="already_checked_out")
    if not can_check_out(current):
        raise TransitionError("Not checked in", code="not_checked_in")

    # The open period decides whether overtime completes.
    return AttendanceCompositeStatus(
        state=AttendanceState.PRESENT,
        check_status=CheckStatus.CHECKED_OUT,
        is_overtime=current.is_overtime,
        overtime_state=OvertimeState.COMPLETED if current.is_overtime else current.overtime_state,
    )


def apply_transition(
    current: AttendanceCompositeStatus,
    *,
    is_check_in: bool,
    is_overtime: bool,
) -> AttendanceCompositeStatus:
    if is_check_in:
        return _check_in(current, is_overtime)
    return _check_out(current)


def apply_check_event(
    current: AttendanceCompositeStatus,
    event: CheckEvent,
) -> Tuple[AttendanceCompositeStatus, Optional[TransitionError]]:
    """Non-raising variant: returns the unchanged status plus the error on failure."""
    try:
        return apply_transition(current, is_check_in=event.is_check_in, is_overtime=event.is_overtime), None
    except TransitionError as e:
        return current, e


def display_status(record: AttendanceRecord, is_holiday: bool = False) -> str:
    """Human readable label for reports. Never used for control flow."""
    if is_holiday or record.state == AttendanceState.HOLIDAY:
        return "holiday"
    if record.state == AttendanceState.OFF:
        return "day-off"

    details = []
    if record.is_late_check_in:
        details.append("late-check-in")
    if record.is_early_check_in:
        details.append("early-check-in")
    if record.is_late_check_out:
        details.append("late-check-out")
    if record.overtime_state == OvertimeState.IN_PROGRESS:
        details.append("overtime")

    return "-".join(details) if details else "on-time"
