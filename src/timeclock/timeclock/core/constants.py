"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import datetime

# A known period boundary, local time.
PAY_PERIOD_ANCHOR = datetime(2025, 1, 5, 0, 0, 0)
PAY_PERIOD_DAYS = 14

MS_PER_SECOND = 1_000
MS_PER_HOUR = 3_600_000

PUNCH_TIME_FORMAT = "%a %I:%M %p"
PUNCH_FILE_SUFFIX = "-punches.json"

DEFAULT_SESSION_DAYS = 7
