"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

REGULAR_MINUTES_PER_DAY = 480
NIGHT_DIFF_START_HOUR = 22
NIGHT_DIFF_END_HOUR = 6

OVERTIME_MULTIPLIER = Decimal("1.25")
NIGHT_DIFF_MULTIPLIER = Decimal("0.10")

WORK_DAYS_PER_MONTH = 22
WORK_HOURS_PER_DAY = 8

FIRST_HALF_LAST_DAY = 15

MINOR_UNITS_PER_MAJOR = 100

DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0
DEFAULT_LIST_LIMIT = 200
