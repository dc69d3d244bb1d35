from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeWindow:
    """Concrete start/end instants resolved from ``HH:mm`` boundaries."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)

    @property
    def is_overnight(self) -> bool:
        return self.end.date() > self.start.date()


@dataclass(frozen=True)
class CheckoutBoundaries:
    early_checkout_start: datetime
    regular_checkout_end: datetime
    very_late_threshold: datetime


@dataclass(frozen=True)
class OvertimeBoundaries:
    early_check_in_window: datetime
    late_check_out_window: datetime


@dataclass(frozen=True)
class CheckInTiming:
    """Lateness/earliness of one check-in relative to its window start."""

    is_late: bool
    is_early: bool
    minutes_late: int
    minutes_early: int
    within_grace: bool
    is_too_early: bool = False
