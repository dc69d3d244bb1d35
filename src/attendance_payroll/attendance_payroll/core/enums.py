from __future__ import annotations

from enum import Enum


class AttendanceState(str, Enum):
    """Overall state of one work period."""

    PENDING = "PENDING"
    INCOMPLETE = "INCOMPLETE"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    OVERTIME = "OVERTIME"
    HOLIDAY = "HOLIDAY"
    OFF = "OFF"


class CheckStatus(str, Enum):
    PENDING = "PENDING"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class OvertimeState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class EntryType(str, Enum):
    REGULAR = "REGULAR"
    OVERTIME = "OVERTIME"


class CheckoutTiming(str, Enum):
    """Classification of a check-out against the checkout boundaries."""

    EARLY = "EARLY"
    ON_TIME = "ON_TIME"
    LATE = "LATE"
    VERY_LATE = "VERY_LATE"


class OvertimeCategory(str, Enum):
    """Pay category of overtime hours (each has its own multiplier)."""

    WORKDAY = "WORKDAY"
    WEEKEND_INSIDE_SHIFT = "WEEKEND_INSIDE_SHIFT"
    HOLIDAY = "HOLIDAY"


class EmploymentType(str, Enum):
    FULLTIME = "FULLTIME"
    PARTTIME = "PARTTIME"


class RequestStatus(str, Enum):
    """Approval state of overtime / leave requests."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    SICK = "SICK"
    ANNUAL = "ANNUAL"
    BUSINESS = "BUSINESS"
    UNPAID = "UNPAID"
