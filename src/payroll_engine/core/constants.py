"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_MAX_WORKERS = 4

# Overtime on weekends and public holidays is paid double; not part of a policy version.
NON_WORKING_DAY_OVERTIME_MULTIPLIER = 2

MEAL_WEEKDAY_CUTOFF = time(19, 0)
WEEKEND_MEAL_SHORT_HOURS = (5, 10)
WEEKEND_MEAL_LONG_HOURS = (10, 20)

PREMIUM_STREAK_DAYS = 6

# Rate table shown by the settings page before anything was saved.
DEFAULT_POLICY_VALUES = {
    "premium_production": 20000,
    "premium_staff": 15000,
    "meal_production_weekday": 15000,
    "meal_production_weekend_short": 20000,
    "meal_production_weekend_long": 25000,
    "meal_staff_weekday": 15000,
    "meal_staff_weekend_short": 20000,
    "meal_staff_weekend_long": 25000,
    "overtime_rate_production": 30000,
    "overtime_rate_staff": 40000,
}

LABEL_BASE_PAY = "Gaji Pokok"
LABEL_OVERTIME = "Upah Lembur"
LABEL_MEAL = "Uang Makan"
LABEL_PREMIUM = "Premi Kehadiran"
