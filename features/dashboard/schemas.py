"""Pydantic schemas for the dashboard feature."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.dashboard import DEFAULT_QUICK_ADD_TITLE, DEFAULT_QUICK_ADD_TYPE


class ActivityKind(str, Enum):
    """Activity tags the dashboard knows how to count and render."""

    TASK_ADDED = "task_added"
    TASK_COMPLETED = "task_completed"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str | None) -> "ActivityKind":
        """Map a stored ``activity_type`` to a kind; unknown tags become ``OTHER``."""
        if tag == cls.TASK_ADDED.value:
            return cls.TASK_ADDED
        if tag == cls.TASK_COMPLETED.value:
            return cls.TASK_COMPLETED
        return cls.OTHER


class ProfileRecord(BaseModel):
    """Profile row as read from the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    full_name: str
    email: str
    created_at: datetime
    updated_at: datetime


class ActivityRecord(BaseModel):
    """Activity row as read from the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    user_id: str
    activity_type: str
    title: str
    description: Optional[str] = None
    created_at: datetime

    @property
    def kind(self) -> ActivityKind:
        return ActivityKind.from_tag(self.activity_type)


class DashboardStats(BaseModel):
    """Derived counters; never stored."""

    active: int = 0
    completed: int = 0


class ActivitySnapshot(BaseModel):
    """Recent feed and both counters read from one transaction."""

    activities: list[ActivityRecord] = Field(default_factory=list)
    stats: DashboardStats = Field(default_factory=DashboardStats)


class ActivityItem(BaseModel):
    """One rendered row of the activity feed."""

    id: str
    kind: str
    activity_type: str
    icon: str
    title: str
    description: Optional[str] = None
    created_at: datetime
    age_label: str


class DashboardView(BaseModel):
    """Serialisable dashboard state handed to clients."""

    greeting_name: str
    email: Optional[str] = None
    stats: DashboardStats = Field(default_factory=DashboardStats)
    activities: list[ActivityItem] = Field(default_factory=list)
    empty_message: Optional[str] = None
    loading: bool = False
    last_error: Optional[str] = None


class CreateActivityRequest(BaseModel):
    """Body of ``POST /dashboard/activities``; defaults match the quick-add button."""

    activity_type: str = Field(default=DEFAULT_QUICK_ADD_TYPE, min_length=1)
    title: str = Field(default=DEFAULT_QUICK_ADD_TITLE, min_length=1)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class UpdateProfileRequest(BaseModel):
    """Body of ``PATCH /dashboard/profile``."""

    full_name: str = Field(..., min_length=1, max_length=200)

    @field_validator("full_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value


__all__ = [
    "ActivityItem",
    "ActivityKind",
    "ActivityRecord",
    "ActivitySnapshot",
    "CreateActivityRequest",
    "DashboardStats",
    "DashboardView",
    "ProfileRecord",
    "UpdateProfileRequest",
]
