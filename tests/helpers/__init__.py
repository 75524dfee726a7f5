"""Shared builders for dashboard tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from features.dashboard.db_models import Activity, Profile
from features.dashboard.schemas import ActivityRecord, ProfileRecord
from infrastructure.db import AsyncSessionFactory


def new_id() -> str:
    return str(uuid4())


async def seed_profile(factory: AsyncSessionFactory, *, full_name: str = "Ada Lovelace", **overrides) -> str:
    user_id = overrides.pop("id", None) or new_id()
    email = overrides.pop("email", f"{user_id[:8]}@example.com")
    async with factory() as session:
        session.add(Profile(id=user_id, full_name=full_name, email=email, **overrides))
        await session.commit()
    return user_id


async def seed_activity(
    factory: AsyncSessionFactory,
    user_id: str,
    *,
    activity_type: str = "task_added",
    title: str = "Task",
    age: timedelta = timedelta(minutes=5),
    description: str | None = None,
    created_at: datetime | None = None,
) -> str:
    activity_id = new_id()
    async with factory() as session:
        session.add(
            Activity(
                id=activity_id,
                user_id=user_id,
                activity_type=activity_type,
                title=title,
                description=description,
                created_at=created_at or datetime.now(UTC) - age,
            )
        )
        await session.commit()
    return activity_id


def make_profile(user_id: str | None = None, full_name: str = "Ada Lovelace") -> ProfileRecord:
    now = datetime.now(UTC)
    return ProfileRecord(
        id=user_id or new_id(),
        full_name=full_name,
        email="ada@example.com",
        created_at=now,
        updated_at=now,
    )


def make_activity(
    user_id: str,
    *,
    activity_type: str = "task_added",
    title: str = "Task",
    age: timedelta = timedelta(minutes=5),
) -> ActivityRecord:
    return ActivityRecord(
        id=new_id(),
        user_id=user_id,
        activity_type=activity_type,
        title=title,
        created_at=datetime.now(UTC) - age,
    )
