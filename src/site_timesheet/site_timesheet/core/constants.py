"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_START_TIME = "07:00"
DEFAULT_LUNCH_DURATION = "00:30"
DEFAULT_END_TIME = "16:30"

CLOCK_STEP_MINUTES = 15
DURATION_STEP_MINUTES = 5

DEFAULT_WORKER_ROLE = "Robotník"

UNKNOWN_SITE_LABEL = "Neznáma stavba"
UNKNOWN_WORKER_LABEL = "Neznámy"
UNKNOWN_HISTORY_WORKER_LABEL = "Neznámy pracovník"

ALL_FILTER = "all"

EXPORT_FILE_PREFIX = "MION_Report"
EXPORT_SHEET_NAME = "Výkaz Práce"
