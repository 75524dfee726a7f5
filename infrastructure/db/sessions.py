"""Session management for the dashboard table store."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from config.database.defaults import ECHO, MAX_OVERFLOW, POOL_RECYCLE, POOL_SIZE
from config.database.urls import DASHBOARD_DB_URL as CONFIG_DASHBOARD_DB_URL
from core.exceptions import ConfigurationError, StoreError
from infrastructure.db.engines import (
    AsyncSessionFactory,
    create_store_engine,
    get_session_factory,
)

logger = logging.getLogger(__name__)

# Lazy-loaded engine and session factory - initialized on first use
dashboard_engine: Optional[AsyncEngine] = None
dashboard_session_factory: Optional[AsyncSessionFactory] = None


@asynccontextmanager
async def session_scope(factory: AsyncSessionFactory) -> AsyncIterator[AsyncSession]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        await session.commit()
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        # asyncpg surfaces connect failures as plain OSError/TimeoutError
        await session.rollback()
        raise StoreError("Database operation failed", operation="transaction") from exc
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


def require_dashboard_session_factory() -> AsyncSessionFactory:
    """Return the dashboard session factory or raise a configuration error."""
    global dashboard_engine, dashboard_session_factory

    if dashboard_session_factory is None:
        url = CONFIG_DASHBOARD_DB_URL
        if not url:
            raise ConfigurationError(
                "DASHBOARD_DB_URL is not configured; set it before requesting sessions",
                key="DASHBOARD_DB_URL",
            )

        dashboard_engine = create_store_engine(
            url,
            echo=ECHO,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_recycle=POOL_RECYCLE,
        )
        dashboard_session_factory = get_session_factory(dashboard_engine)
        logger.info("Dashboard session factory initialised")

    return dashboard_session_factory


async def dispose_engine() -> None:
    """Dispose the dashboard engine if it was initialised.

    Useful for application shutdown and tests to avoid event-loop warnings.
    """
    global dashboard_engine, dashboard_session_factory

    if dashboard_engine is None:
        return

    try:
        await dashboard_engine.dispose()
    except Exception:  # pragma: no cover - best-effort cleanup
        logger.warning("Failed to dispose dashboard engine", exc_info=True)
    finally:
        dashboard_engine = None
        dashboard_session_factory = None


__all__ = [
    "dispose_engine",
    "require_dashboard_session_factory",
    "session_scope",
]
