"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_CAPACITY = 1000
DEFAULT_CAPACITY = 100
UNLIMITED_CAPACITY = 0

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

DEFAULT_POPULARITY_LIMIT = 10
DEFAULT_TOP_ACTIVE_LIMIT = 3

MAX_COMMENT_LENGTH = 500
MIN_RATING = 1
MAX_RATING = 5

NEW_STUDENT_SENTINEL = "new"

ADMIN_TOKEN_HEADER = "X-Admin-Token"
