"""Database infrastructure helpers."""

from __future__ import annotations

from .base import Base, metadata, prepare_database
from .engines import (
    AsyncSessionFactory,
    create_store_engine,
    get_session_factory,
)
from .sessions import (
    dispose_engine,
    require_dashboard_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "metadata",
    "prepare_database",
    "AsyncSessionFactory",
    "create_store_engine",
    "get_session_factory",
    "dispose_engine",
    "require_dashboard_session_factory",
    "session_scope",
]
