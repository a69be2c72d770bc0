"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60
SECONDS_PER_HOUR = 3600

PLANNED_HOURS_PRECISION = 2
DEFAULT_HISTORY_LIMIT = 100
NO_VALUE = "-"
