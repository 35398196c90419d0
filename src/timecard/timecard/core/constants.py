"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_PER_WEEK = 7

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0

# Error payload markers used by the record store when its database is down.
STORE_UNAVAILABLE_CODE = "STORE_UNAVAILABLE"
STORE_UNAVAILABLE_MARKER = "record store unavailable"

MIN_REVIEW_SCORE = 1
MAX_REVIEW_SCORE = 5
