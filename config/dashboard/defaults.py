"""Global default values for the dashboard feed and registration form."""

from __future__ import annotations

import os

# Feed defaults
RECENT_ACTIVITY_LIMIT = int(os.getenv("DASHBOARD_RECENT_LIMIT", "10"))
MAX_ACTIVITY_LIMIT = 50

# Display defaults
FALLBACK_DISPLAY_NAME = "there"
EMPTY_FEED_MESSAGE = "No activities yet. Click the + button to get started!"

# The "+" button on the dashboard records this activity
DEFAULT_QUICK_ADD_TYPE = "task_added"
DEFAULT_QUICK_ADD_TITLE = "New task created"

# Registration
MIN_PASSWORD_LENGTH = 6

__all__ = [
    "RECENT_ACTIVITY_LIMIT",
    "MAX_ACTIVITY_LIMIT",
    "FALLBACK_DISPLAY_NAME",
    "EMPTY_FEED_MESSAGE",
    "DEFAULT_QUICK_ADD_TYPE",
    "DEFAULT_QUICK_ADD_TITLE",
    "MIN_PASSWORD_LENGTH",
]
