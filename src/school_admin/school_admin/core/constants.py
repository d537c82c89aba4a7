"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

OWNER_COLUMN = "user_email"

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_RECENT_LIMIT = 5
DASHBOARD_ATTENDANCE_DAYS = 30
DEFAULT_FEE_DUE_DAYS = 7
DEFAULT_MAX_STUDENTS = 30

SUCCESS_BANNER_MS = 3000

# Pass rate / percentages over an empty set are reported as this value everywhere.
EMPTY_RATE = 0.0

PHOTO_BUCKET = "photos"
PHOTO_MAX_BYTES = 2 * 1024 * 1024
PHOTO_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
}

PASSWORD_MIN_LENGTH = 6
# Refresh the access token this many seconds before it expires.
SESSION_REFRESH_MARGIN = 60

SUBJECTS = (
    "Mathematics",
    "English",
    "Science",
    "History",
    "Geography",
    "Physics",
    "Chemistry",
    "Biology",
    "Computer Science",
    "Physical Education",
    "Art",
    "Music",
    "Literature",
    "Social Studies",
    "Economics",
)

FEE_TYPES = (
    "Tuition Fee",
    "Lab Fee",
    "Library Fee",
    "Sports Fee",
    "Transport Fee",
    "Examination Fee",
    "Activity Fee",
    "Uniform Fee",
    "Books Fee",
    "Other",
)
