"""Activity feed aggregation and the refresh policy around mutations.

The aggregator owns the dashboard state for one identity: profile, recent
activities and the two counters. Reads that fail are absorbed into safe
defaults so the view always renders; mutations are followed by a full
refetch of the feed and counters, never a local splice.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from config.dashboard import DEFAULT_QUICK_ADD_TITLE, DEFAULT_QUICK_ADD_TYPE, RECENT_ACTIVITY_LIMIT
from core.exceptions import ServiceError, StoreError
from features.auth.session_store import Identity, SessionStore

from .gateway import DashboardGateway
from .presenters import build_dashboard_view
from .schemas import ActivityRecord, ActivitySnapshot, DashboardStats, DashboardView, ProfileRecord

logger = logging.getLogger(__name__)


class ActivityFeedAggregator:
    """Derive the dashboard state for the current identity."""

    def __init__(self, gateway: DashboardGateway, *, limit: int = RECENT_ACTIVITY_LIMIT):
        self._gateway = gateway
        self._limit = limit
        self._generation = 0
        self._identity: Optional[Identity] = None

        self.profile: Optional[ProfileRecord] = None
        self.activities: list[ActivityRecord] = []
        self.stats = DashboardStats()
        self.loading = False
        self.submitting = False
        self.last_error: Optional[str] = None

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    async def attach(self, store: SessionStore) -> Callable[[], None]:
        """Follow ``store``: load on sign-in, reset on sign-out.

        Loads immediately when the store already holds an identity. Returns the
        unsubscribe callable from the store.
        """
        unsubscribe = store.on_change(self._on_identity_change)
        current = store.current()
        if current is not None:
            await self.load(current)
        return unsubscribe

    async def _on_identity_change(self, identity: Optional[Identity]) -> None:
        if identity is None:
            self.reset()
        else:
            await self.load(identity)

    def reset(self) -> None:
        """Drop all state; any in-flight load is discarded when it returns."""
        self._generation += 1
        self._identity = None
        self.profile = None
        self.activities = []
        self.stats = DashboardStats()
        self.loading = False
        self.submitting = False
        self.last_error = None

    async def load(self, identity: Identity) -> bool:
        """Fetch profile and activity snapshot concurrently.

        Returns ``False`` when the result was superseded by a newer load or a
        sign-out and therefore discarded.
        """
        self._generation += 1
        generation = self._generation
        self._identity = identity
        self.loading = True

        profile, snapshot = await asyncio.gather(
            self._profile_or_default(identity.id),
            self._snapshot_or_default(identity.id),
        )

        if generation != self._generation:
            logger.debug("Discarding superseded dashboard load for %s", identity.id)
            return False

        self.profile = profile
        self._apply_snapshot(snapshot)
        self.loading = False
        return True

    async def refresh(self) -> bool:
        """Re-read the feed and counters; the profile is left as is."""
        identity = self._require_identity()
        generation = self._generation

        snapshot = await self._snapshot_or_default(identity.id)
        if generation != self._generation:
            logger.debug("Discarding superseded dashboard refresh for %s", identity.id)
            return False

        self._apply_snapshot(snapshot)
        return True

    async def record_activity(
        self,
        activity_type: str = DEFAULT_QUICK_ADD_TYPE,
        title: str = DEFAULT_QUICK_ADD_TITLE,
        description: str | None = None,
    ) -> bool:
        """Insert an activity and refetch. Returns ``False`` if the insert failed.

        A failed insert leaves the current feed untouched and records a
        message in :attr:`last_error`.
        """
        identity = self._require_identity()
        self.submitting = True
        try:
            await self._gateway.insert_activity(identity.id, activity_type, title, description)
        except StoreError as exc:
            logger.warning("Recording activity for %s failed: %s", identity.id, exc)
            self.last_error = str(exc)
            return False
        finally:
            self.submitting = False

        self.last_error = None
        await self.refresh()
        return True

    def view(self, now: datetime | None = None) -> DashboardView:
        return build_dashboard_view(
            profile=self.profile,
            activities=self.activities,
            stats=self.stats,
            email=self._identity.email if self._identity else None,
            loading=self.loading,
            last_error=self.last_error,
            now=now,
        )

    def _require_identity(self) -> Identity:
        if self._identity is None:
            raise ServiceError("No identity is loaded on the dashboard")
        return self._identity

    def _apply_snapshot(self, snapshot: ActivitySnapshot) -> None:
        self.activities = list(snapshot.activities)
        self.stats = snapshot.stats

    async def _profile_or_default(self, user_id: str) -> Optional[ProfileRecord]:
        try:
            return await self._gateway.fetch_profile(user_id)
        except ServiceError as exc:
            logger.warning("Profile fetch failed for %s, using defaults: %s", user_id, exc)
            return None

    async def _snapshot_or_default(self, user_id: str) -> ActivitySnapshot:
        try:
            return await self._gateway.fetch_activity_snapshot(user_id, self._limit)
        except ServiceError as exc:
            logger.warning("Activity fetch failed for %s, using defaults: %s", user_id, exc)
            return ActivitySnapshot()


__all__ = ["ActivityFeedAggregator"]
