LEGACY_STANDARD_HOURS = "8"

NORMAL_WORK_HOURS_PER_DAY = "7"
NORMAL_WORK_HOURS_PER_MONTH = "173"

DEBUG = False
TESTING = True
