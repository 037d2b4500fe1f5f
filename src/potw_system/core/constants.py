"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOP_RESULTS = 3
DEFAULT_ALLOWED_EMAIL_DOMAIN = "usehorizon.ai"
MIN_WEEK_NUMBER = 1
MAX_WEEK_NUMBER = 53
MIN_PASSWORD_LENGTH = 6
UNKNOWN_USER_NAME = "Unknown"

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_MAX_WAIT_SECONDS = 4.0
DEFAULT_COOLDOWN_SECONDS = 30.0
