"""Settings shared by every environment module."""

import os

ATTENDANCE_THRESHOLDS = {
    "early_check_in": 29,
    "late_check_in": 5,
    "early_check_out": 5,
    "late_check_out": 15,
    "very_late": 30,
}

DEFAULT_BREAK_MINUTES = 60
PAY_PERIOD_START_DAY = 26

_TAX_BRACKETS = [
    {"threshold": 0, "rate": "0"},
    {"threshold": 20000, "rate": "0.05"},
    {"threshold": 30000, "rate": "0.10"},
    {"threshold": 50000, "rate": "0.15"},
]

# Keyed by employment type. Amounts are strings so they land in Decimal exactly.
PAYROLL_RATES = {
    "FULLTIME": {
        # 15000 monthly / 30 days / 8 hours
        "regular_hourly_rate": "62.5",
        "overtime_multipliers": {"WORKDAY": "1.5", "WEEKEND_INSIDE_SHIFT": "1.0", "HOLIDAY": "3.0"},
        "holiday_multiplier": "1",
        "allowances": {},
        "meal_allowance_per_day": "0",
        "social_security_rate": "0.05",
        "social_security_min_base": "1650",
        "social_security_max_base": "15000",
        "social_security_cap": "750",
        "tax_brackets": _TAX_BRACKETS,
    },
    "PARTTIME": {
        "regular_hourly_rate": "50",
        "overtime_multipliers": {"WORKDAY": "1.5", "WEEKEND_INSIDE_SHIFT": "2.0", "HOLIDAY": "3.0"},
        "holiday_multiplier": "1",
        "allowances": {},
        "meal_allowance_per_day": "30",
        "social_security_rate": "0.05",
        "social_security_min_base": "1650",
        "social_security_max_base": "15000",
        "social_security_cap": "750",
        "tax_brackets": _TAX_BRACKETS,
    },
}


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "attendance_payroll"),
    }
