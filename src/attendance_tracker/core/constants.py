"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_LIMIT = 10
DEFAULT_CLASS_DURATION_MINUTES = 60
EXCELLENT_PERCENTAGE = 90.0
GOOD_PERCENTAGE = 75.0

MIN_SEMESTER = 1
MAX_SEMESTER = 8

MIN_CONFIDENCE = 0.0
MAX_CONFIDENCE = 1.0

# Collection names in the document store.
USERS_COLLECTION = "users"
SUBJECTS_COLLECTION = "subjects"
SESSIONS_COLLECTION = "attendance_sessions"
ATTENDANCE_COLLECTION = "attendances"
TIMETABLES_COLLECTION = "timetables"
