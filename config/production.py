import os

from .defaults import (  # noqa: F401
    ATTENDANCE_THRESHOLDS,
    DEFAULT_BREAK_MINUTES,
    PAY_PERIOD_START_DAY,
    PAYROLL_RATES,
    db_config_from_env,
)

DB_CONFIG = db_config_from_env()

STORAGE = os.getenv("STORAGE", "mysql")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
