from .defaults import (  # noqa: F401
    ATTENDANCE_THRESHOLDS,
    DEFAULT_BREAK_MINUTES,
    PAY_PERIOD_START_DAY,
    PAYROLL_RATES,
    db_config_from_env,
)

DB_CONFIG = db_config_from_env()

STORAGE = "memory"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
