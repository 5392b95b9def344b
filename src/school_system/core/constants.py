"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EXCUSED_CREDIT = 0.5
DEFAULT_PASSING_PERCENT = 50.0
ATTENDANCE_ISSUE_ABSENCE_THRESHOLD = 3
ATTENDANCE_EXPORT_LIMIT = 1000
DEFAULT_SESSION_DAYS = 7
