"""Time helpers for the activity feed."""

from __future__ import annotations

from datetime import UTC, datetime

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive timestamps (SQLite drops tzinfo) are taken to already be UTC.
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_relative_age(created_at: datetime, now: datetime | None = None) -> str:
    """Render how long ago ``created_at`` happened as a coarse label.

    Buckets floor the elapsed seconds: under a minute is "Just now", then
    whole minutes, hours and days. Timestamps in the future (clock skew)
    also render as "Just now".
    """

    reference = ensure_utc(now) if now is not None else datetime.now(UTC)
    seconds = int((reference - ensure_utc(created_at)).total_seconds())

    if seconds < _MINUTE:
        return "Just now"
    if seconds < _HOUR:
        return f"{seconds // _MINUTE} minutes ago"
    if seconds < _DAY:
        return f"{seconds // _HOUR} hours ago"
    return f"{seconds // _DAY} days ago"


__all__ = ["ensure_utc", "format_relative_age"]
