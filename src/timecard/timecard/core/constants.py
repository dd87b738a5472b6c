"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from fractions import Fraction

MINUTES_PER_DAY = 24 * 60

# Night window 22:00 -> 05:00 next morning, minutes since midnight of the span start.
NIGHT_START_MINUTE = 22 * 60
NIGHT_END_MINUTE = MINUTES_PER_DAY + 5 * 60

# 8 hours of worked time per day; everything above is overtime.
OVERTIME_THRESHOLD_MINUTES = 8 * 60

OVERTIME_PREMIUM_RATE = Fraction(1, 4)
NIGHT_PREMIUM_RATE = Fraction(1, 4)

DEFAULT_SESSION_DAYS = 7
DEFAULT_HOURLY_WAGE = 1000
DEFAULT_CLOSING_DATE = 31
TEXT_FIELD_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 6
