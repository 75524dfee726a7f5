"""FastAPI dependencies for the dashboard feature."""

from __future__ import annotations

import logging

from fastapi import Depends

from core.config import settings
from core.exceptions import ConfigurationError
from infrastructure.db import AsyncSessionFactory, require_dashboard_session_factory

from .aggregator import ActivityFeedAggregator
from .gateway import DashboardGateway

logger = logging.getLogger(__name__)

_gateway: DashboardGateway | None = None


def get_dashboard_gateway() -> DashboardGateway:
    """Return the process-wide gateway bound to the dashboard session factory."""
    global _gateway

    if _gateway is None:
        try:
            factory: AsyncSessionFactory = require_dashboard_session_factory()
        except ConfigurationError as exc:
            logger.error("DASHBOARD_DB_URL is missing; cannot create dashboard gateway")
            raise ConfigurationError(
                "DASHBOARD_DB_URL must be configured before accessing dashboard data",
                key="DASHBOARD_DB_URL",
            ) from exc

        logger.debug("Initialising dashboard gateway")
        _gateway = DashboardGateway(factory)

    return _gateway


def get_dashboard_aggregator(
    gateway: DashboardGateway = Depends(get_dashboard_gateway),
) -> ActivityFeedAggregator:
    """Fresh aggregator per request; state never leaks between users."""
    return ActivityFeedAggregator(gateway, limit=settings.recent_activity_limit)


__all__ = ["get_dashboard_aggregator", "get_dashboard_gateway"]
