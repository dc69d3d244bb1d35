"""Time-window calculator.

Pure functions that turn ``HH:mm`` boundaries into concrete instants for a
reference date and classify check events against them. Nothing here touches
I/O or module state, so the same functions serve live validation and payroll
reconstruction over historical dates.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import minutes_between, parse_hhmm
from ..core.constants import (
    EARLY_CHECK_IN_THRESHOLD_MINUTES,
    EARLY_CHECK_OUT_THRESHOLD_MINUTES,
    LATE_CHECK_IN_THRESHOLD_MINUTES,
    LATE_CHECK_OUT_THRESHOLD_MINUTES,
    VERY_LATE_THRESHOLD_MINUTES,
)
from ..core.enums import CheckoutTiming
from .model import CheckInTiming, CheckoutBoundaries, OvertimeBoundaries, TimeWindow

END_OF_DAY = time(23, 59, 59)


def resolve_window(
    start: Optional[str],
    end: Optional[str],
    reference_date: date,
    *,
    allow_open_end: bool = False,
) -> TimeWindow:
    """Resolve ``HH:mm`` boundaries against ``reference_date``.

    If the end precedes the start the window is overnight and the end moves to
    the next calendar day. Equal boundaries give a zero-length window.

    A missing end is an input error unless ``allow_open_end`` is set, in which
    case it defaults to 23:59:59 of the reference date. That default exists for
    advisory checks only (e.g. "is the employee inside some window right now")
    and must not be used for pay.
    """
    start_t = parse_hhmm(start, "start_time")
    if end is None and allow_open_end:
        end_t = END_OF_DAY
    else:
        end_t = parse_hhmm(end, "end_time")

    start_dt = datetime.combine(reference_date, start_t)
    end_dt = datetime.combine(reference_date, end_t)
    if end_dt < start_dt:
        end_dt += timedelta(days=1)
    return TimeWindow(start=start_dt, end=end_dt)


def is_outside_window(instant: datetime, window: TimeWindow) -> bool:
    return instant < window.start or instant > window.end


def is_within_overtime_window(instant: datetime, window: TimeWindow) -> bool:
    return not is_outside_window(instant, window)


def checkout_boundaries(
    shift_end: datetime,
    early_threshold_min: int = EARLY_CHECK_OUT_THRESHOLD_MINUTES,
    late_threshold_min: int = LATE_CHECK_OUT_THRESHOLD_MINUTES,
    very_late_threshold_min: int = VERY_LATE_THRESHOLD_MINUTES,
) -> CheckoutBoundaries:
    return CheckoutBoundaries(
        early_checkout_start=shift_end - timedelta(minutes=early_threshold_min),
        regular_checkout_end=shift_end + timedelta(minutes=late_threshold_min),
        very_late_threshold=shift_end + timedelta(minutes=very_late_threshold_min),
    )


def overtime_boundaries(
    ot_start: datetime,
    ot_end: datetime,
    early_threshold_min: int = EARLY_CHECK_IN_THRESHOLD_MINUTES,
    late_threshold_min: int = LATE_CHECK_OUT_THRESHOLD_MINUTES,
) -> OvertimeBoundaries:
    return OvertimeBoundaries(
        early_check_in_window=ot_start - timedelta(minutes=early_threshold_min),
        late_check_out_window=ot_end + timedelta(minutes=late_threshold_min),
    )


def classify_check_in(
    instant: datetime,
    window: TimeWindow,
    *,
    late_threshold_min: int = LATE_CHECK_IN_THRESHOLD_MINUTES,
    early_threshold_min: int = EARLY_CHECK_IN_THRESHOLD_MINUTES,
) -> CheckInTiming:
    """Lateness is counted from the window start; the threshold only marks grace."""
    delta = minutes_between(window.start, instant)
    minutes_late = max(delta, 0)
    minutes_early = max(-delta, 0)
    return CheckInTiming(
        is_late=minutes_late > 0,
        is_early=minutes_early > 0,
        minutes_late=minutes_late,
        minutes_early=minutes_early,
        within_grace=minutes_late <= late_threshold_min,
        is_too_early=minutes_early > early_threshold_min,
    )


def classify_check_out(instant: datetime, boundaries: CheckoutBoundaries) -> CheckoutTiming:
    if instant < boundaries.early_checkout_start:
        return CheckoutTiming.EARLY
    if instant <= boundaries.regular_checkout_end:
        return CheckoutTiming.ON_TIME
    if instant <= boundaries.very_late_threshold:
        return CheckoutTiming.LATE
    return CheckoutTiming.VERY_LATE


def overlap_minutes(start: datetime, end: datetime, window: TimeWindow) -> int:
    """Minutes of ``[start, end]`` that fall inside ``window`` (never negative)."""
    lo = max(start, window.start)
    hi = min(end, window.end)
    if hi <= lo:
        return 0
    return minutes_between(lo, hi)
