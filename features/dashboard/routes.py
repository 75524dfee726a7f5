"""Dashboard endpoints: the full view, the feed, the counters and mutations."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from config.dashboard import MAX_ACTIVITY_LIMIT, RECENT_ACTIVITY_LIMIT
from core.auth import AuthContext, require_auth_context
from core.exceptions import NotFoundError, StoreError, ValidationError
from core.pydantic_schemas import ok as api_ok
from features.auth.session_store import Identity

from .aggregator import ActivityFeedAggregator
from .dependencies import get_dashboard_aggregator, get_dashboard_gateway
from .gateway import DashboardGateway
from .presenters import present_activity
from .responses import not_found_response, store_error_response, validation_error_response
from .schemas import ActivityKind, CreateActivityRequest, DashboardStats, UpdateProfileRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


def _identity(auth: AuthContext) -> Identity:
    return Identity(id=auth["user_id"], email=auth.get("email"))


async def _count_or_zero(gateway: DashboardGateway, user_id: str, activity_type: str) -> tuple[int, bool]:
    """A failed count reads as zero; the flag says whether the store answered."""
    try:
        return await gateway.count_activities(user_id, activity_type), True
    except StoreError as exc:
        logger.warning("Counting %s for %s failed: %s", activity_type, user_id, exc)
        return 0, False


@router.get("")
async def get_dashboard(
    auth: AuthContext = Depends(require_auth_context),
    aggregator: ActivityFeedAggregator = Depends(get_dashboard_aggregator),
) -> dict:
    """Profile greeting, counters and recent activity in one payload."""
    await aggregator.load(_identity(auth))
    return api_ok("Dashboard loaded", data=aggregator.view().model_dump(mode="json"))


@router.get("/activities")
async def list_activities(
    limit: int = Query(RECENT_ACTIVITY_LIMIT, ge=1, le=MAX_ACTIVITY_LIMIT),
    auth: AuthContext = Depends(require_auth_context),
    gateway: DashboardGateway = Depends(get_dashboard_gateway),
):
    try:
        records = await gateway.fetch_recent_activities(auth["user_id"], limit)
    except ValidationError as exc:
        return validation_error_response(exc)
    except StoreError as exc:
        logger.warning("Serving an empty feed for %s: %s", auth["user_id"], exc)
        return api_ok(
            "Activities unavailable",
            data={"activities": []},
            meta={"limit": limit, "count": 0, "degraded": True},
        )

    items = [present_activity(record).model_dump(mode="json") for record in records]
    return api_ok(
        "Activities retrieved",
        data={"activities": items},
        meta={"limit": limit, "count": len(items)},
    )


@router.get("/stats")
async def get_stats(
    auth: AuthContext = Depends(require_auth_context),
    gateway: DashboardGateway = Depends(get_dashboard_gateway),
):
    user_id = auth["user_id"]
    (active, active_ok), (completed, completed_ok) = await asyncio.gather(
        _count_or_zero(gateway, user_id, ActivityKind.TASK_ADDED.value),
        _count_or_zero(gateway, user_id, ActivityKind.TASK_COMPLETED.value),
    )

    stats = DashboardStats(active=active, completed=completed)
    meta = None if active_ok and completed_ok else {"degraded": True}
    return api_ok("Stats retrieved", data=stats.model_dump(), meta=meta)


@router.post("/activities")
async def create_activity(
    body: CreateActivityRequest,
    auth: AuthContext = Depends(require_auth_context),
    aggregator: ActivityFeedAggregator = Depends(get_dashboard_aggregator),
):
    """Record an activity and answer with the refetched dashboard."""
    await aggregator.load(_identity(auth))

    recorded = await aggregator.record_activity(body.activity_type, body.title, body.description)
    if not recorded:
        exc = StoreError(aggregator.last_error or "Failed to record activity", operation="insert_activity")
        return store_error_response(exc, view=aggregator.view())

    return api_ok("Activity recorded", data=aggregator.view().model_dump(mode="json"))


@router.patch("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    auth: AuthContext = Depends(require_auth_context),
    gateway: DashboardGateway = Depends(get_dashboard_gateway),
):
    user_id = auth["user_id"]
    try:
        profile = await gateway.update_profile_name(user_id, body.full_name)
    except StoreError as exc:
        return store_error_response(exc)

    if profile is None:
        return not_found_response(NotFoundError("Profile not found", resource="profile"))

    logger.info("Profile name updated for %s", user_id)
    return api_ok("Profile updated", data=profile.model_dump(mode="json"))


__all__ = ["router"]
