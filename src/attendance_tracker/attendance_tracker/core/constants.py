"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

GOOD_THRESHOLD = 75
AVERAGE_THRESHOLD = 65

SUCCESS_NOTICE_MS = 3000

DEFAULT_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7
DEFAULT_HTTP_TIMEOUT = 10.0
MIN_PASSWORD_LENGTH = 6

CHART_COLORS = {
    "good": "#4CAF50",
    "average": "#FFC107",
    "poor": "#F44336",
}
