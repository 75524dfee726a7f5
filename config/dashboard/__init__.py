"""Dashboard feed and registration configuration."""

from __future__ import annotations

from .defaults import (
    DEFAULT_QUICK_ADD_TITLE,
    DEFAULT_QUICK_ADD_TYPE,
    EMPTY_FEED_MESSAGE,
    FALLBACK_DISPLAY_NAME,
    MAX_ACTIVITY_LIMIT,
    MIN_PASSWORD_LENGTH,
    RECENT_ACTIVITY_LIMIT,
)

__all__ = [
    "DEFAULT_QUICK_ADD_TITLE",
    "DEFAULT_QUICK_ADD_TYPE",
    "EMPTY_FEED_MESSAGE",
    "FALLBACK_DISPLAY_NAME",
    "MAX_ACTIVITY_LIMIT",
    "MIN_PASSWORD_LENGTH",
    "RECENT_ACTIVITY_LIMIT",
]
