"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

EARLY_CHECK_IN_THRESHOLD_MINUTES = 29
LATE_CHECK_IN_THRESHOLD_MINUTES = 5
EARLY_CHECK_OUT_THRESHOLD_MINUTES = 5
LATE_CHECK_OUT_THRESHOLD_MINUTES = 15
VERY_LATE_THRESHOLD_MINUTES = 30

DEFAULT_BREAK_MINUTES = 60
DEFAULT_WORK_DAYS = frozenset({0, 1, 2, 3, 4, 5})

STANDARD_DAY_HOURS = 8
PAY_PERIOD_START_DAY = 26

PROBATION_PAY_FACTOR = Decimal("0.8")
SOCIAL_SECURITY_CAP = Decimal("750")
MONEY_QUANTUM = Decimal("0.01")
