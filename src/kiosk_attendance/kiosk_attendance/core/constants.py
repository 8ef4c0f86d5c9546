"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_VISITOR_LIMIT = 50

MIN_RATING = 1
MAX_RATING = 5

DEFAULT_POLL_INTERVAL_SECONDS = 5
DEFAULT_API_TIMEOUT_SECONDS = 10.0

# Browser-local backend key space.
KEY_STUDENTS = "twss_students_v1"
KEY_CHECKINS = "twss_checkins_v1"
KEY_NEXT_STUDENT_ID = "twss_next_student_id_v1"
KEY_NEXT_CHECKIN_ID = "twss_next_checkin_id_v1"

RATING_LABELS = {
    1: "Not Helpful",
    2: "Slightly Helpful",
    3: "Moderately Helpful",
    4: "Very Helpful",
    5: "Extremely Helpful",
}

# Largest id SQLite can bind (signed 64-bit INTEGER).
MAX_RECORD_ID = 2**63 - 1

# Generic failure messages shown when persistence breaks.
ERROR_CHECK_IN = "Failed to check in student"
ERROR_CHECK_OUT = "Failed to check out student"
ERROR_CHECKED_IN = "Failed to get checked-in students"
ERROR_SEARCH = "Failed to search students"
ERROR_STUDENTS = "Failed to get students"
