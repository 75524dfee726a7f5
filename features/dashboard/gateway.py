"""Data access for the ``profiles`` and ``activities`` tables.

Every method opens its own session through :func:`session_scope`, so calls
can run concurrently (``asyncio.gather``) without sharing an ``AsyncSession``.
Nothing is cached: each call is a fresh round trip to the store.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.dashboard import RECENT_ACTIVITY_LIMIT
from core.exceptions import StoreError, ValidationError
from infrastructure.db import AsyncSessionFactory, session_scope

from .db_models import Activity, Profile
from .schemas import ActivityKind, ActivityRecord, ActivitySnapshot, DashboardStats, ProfileRecord
from .utils import ensure_utc

logger = logging.getLogger(__name__)


def _activity_filter(user_id: str, activity_type: str | None = None) -> list:
    """Equality filters shared by the feed and the counters."""
    conditions = [Activity.user_id == user_id]
    if activity_type is not None:
        conditions.append(Activity.activity_type == activity_type)
    return conditions


class DashboardGateway:
    """Typed wrapper over the dashboard tables."""

    def __init__(self, session_factory: AsyncSessionFactory):
        self._session_factory = session_factory

    async def fetch_profile(self, user_id: str) -> Optional[ProfileRecord]:
        """Return the profile for ``user_id`` or ``None`` when no row exists."""
        async with session_scope(self._session_factory) as session:
            try:
                profile = await session.get(Profile, user_id)
            except SQLAlchemyError as exc:
                logger.error("Failed to fetch profile %s: %s", user_id, exc)
                raise StoreError("Failed to fetch profile", operation="fetch_profile") from exc
            return ProfileRecord.model_validate(profile) if profile else None

    async def fetch_recent_activities(
        self, user_id: str, limit: int = RECENT_ACTIVITY_LIMIT
    ) -> list[ActivityRecord]:
        """Return up to ``limit`` activities, newest first."""
        _check_limit(limit)
        async with session_scope(self._session_factory) as session:
            return await self._select_recent(session, user_id, limit)

    async def count_activities(self, user_id: str, activity_type: str) -> int:
        """Count ``activity_type`` rows for ``user_id`` without fetching them."""
        async with session_scope(self._session_factory) as session:
            return await self._count(session, user_id, activity_type)

    async def fetch_activity_snapshot(
        self, user_id: str, limit: int = RECENT_ACTIVITY_LIMIT
    ) -> ActivitySnapshot:
        """Read the recent feed and both counters inside one transaction."""
        _check_limit(limit)
        async with session_scope(self._session_factory) as session:
            await _begin_snapshot(session)
            activities = await self._select_recent(session, user_id, limit)
            active = await self._count(session, user_id, ActivityKind.TASK_ADDED.value)
            completed = await self._count(session, user_id, ActivityKind.TASK_COMPLETED.value)

        return ActivitySnapshot(
            activities=activities,
            stats=DashboardStats(active=active, completed=completed),
        )

    async def insert_activity(
        self,
        user_id: str,
        activity_type: str,
        title: str,
        description: str | None = None,
    ) -> None:
        """Append an activity; the store assigns ``id`` and ``created_at``."""
        async with session_scope(self._session_factory) as session:
            session.add(
                Activity(
                    user_id=user_id,
                    activity_type=activity_type,
                    title=title,
                    description=description,
                )
            )
            try:
                await session.flush()
            except SQLAlchemyError as exc:
                logger.error("Failed to insert %s activity for %s: %s", activity_type, user_id, exc)
                raise StoreError("Failed to record activity", operation="insert_activity") from exc

        logger.info("Recorded %s activity for user %s", activity_type, user_id)

    async def update_profile_name(self, user_id: str, full_name: str) -> Optional[ProfileRecord]:
        """Rename a profile. ``updated_at`` never moves backwards."""
        async with session_scope(self._session_factory) as session:
            try:
                profile = await session.get(Profile, user_id)
                if profile is None:
                    return None
                now = datetime.now(UTC)
                previous = ensure_utc(profile.updated_at) if profile.updated_at else now
                profile.full_name = full_name
                profile.updated_at = max(now, previous)
                await session.flush()
            except SQLAlchemyError as exc:
                logger.error("Failed to update profile %s: %s", user_id, exc)
                raise StoreError("Failed to update profile", operation="update_profile_name") from exc
            return ProfileRecord.model_validate(profile)

    @staticmethod
    async def _select_recent(session: AsyncSession, user_id: str, limit: int) -> list[ActivityRecord]:
        query = (
            select(Activity)
            .where(*_activity_filter(user_id))
            .order_by(Activity.created_at.desc(), Activity.id.desc())
            .limit(limit)
        )
        try:
            result = await session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch activities for %s: %s", user_id, exc)
            raise StoreError("Failed to fetch activities", operation="fetch_recent_activities") from exc
        return [ActivityRecord.model_validate(row) for row in result.scalars().all()]

    @staticmethod
    async def _count(session: AsyncSession, user_id: str, activity_type: str) -> int:
        query = select(func.count()).select_from(Activity).where(*_activity_filter(user_id, activity_type))
        try:
            result = await session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Failed to count %s activities for %s: %s", activity_type, user_id, exc)
            raise StoreError("Failed to count activities", operation="count_activities") from exc
        return int(result.scalar_one())


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")


async def _begin_snapshot(session: AsyncSession) -> None:
    """Pin the transaction to one snapshot where the backend supports it."""
    bind = session.bind
    if bind is not None and bind.dialect.name == "postgresql":
        await session.connection(execution_options={"isolation_level": "REPEATABLE READ"})


__all__ = ["DashboardGateway"]
