"""Test configuration helpers."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Explicitly opt-in to the async plugins we rely on. Some execution environments
# disable plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD``.
pytest_plugins = ("anyio", "pytest_asyncio")

# Ensure the repository root is importable so ``import core`` and the other
# absolute imports succeed when tests run from arbitrary working directories.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SUPABASE_JWT_SECRET", "test-secret")
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("NODE_ENV", "test")

from infrastructure.db import get_session_factory, prepare_database  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Default AnyIO backend used when tests do not override the fixture."""

    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def suppress_asyncio_debug_logging() -> None:
    """Prevent asyncio debug logs from writing to closed pytest capture streams."""

    logger = logging.getLogger("asyncio")
    if logger.getEffectiveLevel() < logging.INFO:
        logger.setLevel(logging.INFO)


@pytest.fixture(scope="session")
def auth_token_secret() -> str:
    """Return the JWT secret configured for tests."""

    return os.environ["SUPABASE_JWT_SECRET"]


@pytest.fixture()
def auth_token_factory(auth_token_secret: str) -> Callable[..., str]:
    """Factory producing signed access tokens shaped like the provider's."""

    def _factory(
        *,
        user_id: str = "6f1c1a5e-0d4c-4c7e-9a52-6a4ab1d0f001",
        email: str = "user@example.com",
        audience: str = "authenticated",
        expires_delta: timedelta | None = timedelta(hours=1),
        extra_claims: Dict[str, Any] | None = None,
    ) -> str:
        payload: Dict[str, Any] = {"sub": user_id, "email": email, "aud": audience}
        if extra_claims:
            payload.update(extra_claims)
        if expires_delta is not None:
            payload["exp"] = datetime.now(timezone.utc) + expires_delta
        return jwt.encode(payload, auth_token_secret, algorithm="HS256")

    return _factory


@pytest.fixture()
def auth_token(auth_token_factory: Callable[..., str]) -> str:
    """Return a default signed JWT for convenience."""

    return auth_token_factory()


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite store with the dashboard tables created."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    # Register the ORM models on the shared metadata before creating tables
    import features.dashboard.db_models  # noqa: F401

    await prepare_database(engine)
    yield get_session_factory(engine)
    await engine.dispose()
