import os

from .defaults import (  # noqa: F401
    ATTENDANCE_THRESHOLDS,
    DEFAULT_BREAK_MINUTES,
    PAY_PERIOD_START_DAY,
    PAYROLL_RATES,
    db_config_from_env,
)

DB_CONFIG = db_config_from_env()

# "memory" keeps everything in-process; "mysql" uses DB_CONFIG
STORAGE = os.getenv("STORAGE", "memory")

DEBUG = True

# If enabled (and STORAGE=mysql), database/schema.sql is applied on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
