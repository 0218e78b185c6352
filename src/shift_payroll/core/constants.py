"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60

MIN_SHIFT_MINUTES = 60
MAX_SHIFT_MINUTES = MINUTES_PER_DAY

# Shift-linked check-ins are accepted up to this many minutes after start.
CHECK_IN_LATE_WINDOW_MINUTES = 4 * 60

# Attendance without a shift is measured against a fixed working day.
LEGACY_STANDARD_HOURS = Decimal("8")

DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_EARLY_CHECK_IN_MINUTES = 30
DEFAULT_MIN_WORKING_HOURS = Decimal("8")
DEFAULT_MAX_WORKING_HOURS = Decimal("8")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_SHIFT_COLOR = "#3B82F6"

DEFAULT_NORMAL_HOURS_PER_DAY = Decimal("7")
DEFAULT_NORMAL_HOURS_PER_MONTH = Decimal("173")
DEFAULT_OVERTIME_RATE_1 = Decimal("1.5")
DEFAULT_OVERTIME_RATE_2 = Decimal("2.0")
DEFAULT_OVERTIME_RATE_WEEKEND_1 = Decimal("2.0")
DEFAULT_OVERTIME_RATE_WEEKEND_2 = Decimal("3.0")
DEFAULT_OVERTIME_RATE_WEEKEND_3 = Decimal("4.0")
MAX_HOURS_PER_DAY = Decimal("24")
MAX_HOURS_PER_MONTH = Decimal("744")  # 31 days * 24 hours
MAX_DAILY_OVERTIME_HOURS = 3
MAX_WEEKLY_OVERTIME_HOURS = 14
WORKING_DAYS_PER_WEEK = 6
DEFAULT_WORK_DAYS_PER_MONTH = 25

# Weekend tier thresholds, in overtime hours for the day.
WEEKEND_TIER_1_MAX_HOURS = Decimal("8")
WEEKEND_TIER_2_MAX_HOURS = Decimal("9")
# Weekday overtime: this many hours at tier 1, the rest at tier 2.
WEEKDAY_TIER_1_HOURS = Decimal("1")

MAX_PERIOD_DAYS = 31
MAX_FUTURE_MONTHS = 6

MONEY_PLACES = Decimal("0.01")
