"""Turn aggregated dashboard state into the serialisable view."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from config.dashboard import EMPTY_FEED_MESSAGE, FALLBACK_DISPLAY_NAME

from .schemas import ActivityItem, ActivityKind, ActivityRecord, DashboardStats, DashboardView, ProfileRecord
from .utils import ensure_utc, format_relative_age

_ICONS = {
    ActivityKind.TASK_ADDED: "plus-circle",
    ActivityKind.TASK_COMPLETED: "check",
    ActivityKind.OTHER: "check-circle",
}


def icon_for(kind: ActivityKind) -> str:
    return _ICONS.get(kind, _ICONS[ActivityKind.OTHER])


def greeting_name(profile: ProfileRecord | None) -> str:
    """Profile name, or the neutral fallback when missing or blank."""
    if profile is None or not profile.full_name.strip():
        return FALLBACK_DISPLAY_NAME
    return profile.full_name


def present_activity(record: ActivityRecord, now: datetime | None = None) -> ActivityItem:
    kind = record.kind
    return ActivityItem(
        id=record.id,
        kind=kind.value,
        activity_type=record.activity_type,
        icon=icon_for(kind),
        title=record.title,
        description=record.description,
        created_at=ensure_utc(record.created_at),
        age_label=format_relative_age(record.created_at, now),
    )


def build_dashboard_view(
    *,
    profile: ProfileRecord | None,
    activities: Iterable[ActivityRecord],
    stats: DashboardStats,
    email: Optional[str] = None,
    loading: bool = False,
    last_error: Optional[str] = None,
    now: datetime | None = None,
) -> DashboardView:
    items = [present_activity(record, now) for record in activities]
    return DashboardView(
        greeting_name=greeting_name(profile),
        email=profile.email if profile is not None else email,
        stats=stats.model_copy(),
        activities=items,
        empty_message=None if items else EMPTY_FEED_MESSAGE,
        loading=loading,
        last_error=last_error,
    )


__all__ = ["build_dashboard_view", "greeting_name", "icon_for", "present_activity"]
