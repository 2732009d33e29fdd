"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"

# Auto-closure: stored clock-out vs. the instant used for the hours figure.
DAY_END_CLOCK_OUT = time(23, 59)
DAY_END_ELAPSED = time(23, 59, 59)

HOURS_PRECISION = 2
DEFAULT_RECENT_ACTIVITY_LIMIT = 5
DEFAULT_HISTORY_DAYS = 30
DEFAULT_USER_ID = "default"

# Day-of-week index the week starts on (0 = Sunday).
WEEK_START_INDEX = 0

IN_PROGRESS_LABEL = "In Progress"
