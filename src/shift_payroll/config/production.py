import os

LEGACY_STANDARD_HOURS = os.getenv("LEGACY_STANDARD_HOURS", "8")

NORMAL_WORK_HOURS_PER_DAY = os.getenv("NORMAL_WORK_HOURS_PER_DAY", "7")
NORMAL_WORK_HOURS_PER_MONTH = os.getenv("NORMAL_WORK_HOURS_PER_MONTH", "173")

DEBUG = bool(int(os.getenv("DEBUG", "0")))
