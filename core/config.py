"""Minimal environment variable loading and settings dataclass.

All domain-specific configuration lives in config/ subdirectories.

This module only handles:
1. Environment detection (delegates to config.environment)
2. Feature toggles (minimal set)
3. Settings dataclass for dependency injection

For domain-specific config, import from config/ subdirectories:
- Auth provider: config.supabase
- Dashboard feed / registration: config.dashboard
- Database: config.database
"""

from __future__ import annotations

from dataclasses import dataclass

from config import dashboard, supabase

# Re-export environment helpers
from config.environment import (
    get_node_env,
    ENVIRONMENT,
    IS_DEVELOPMENT,
    IS_PRODUCTION,
    IS_TEST,
)


@dataclass(frozen=True)
class Settings:
    """Dependency injection wrapper for cross-cutting settings."""

    environment: str = ENVIRONMENT
    supabase_url: str = supabase.SUPABASE_URL
    supabase_anon_key: str = supabase.SUPABASE_ANON_KEY
    auth_http_timeout: float = supabase.AUTH_HTTP_TIMEOUT
    recent_activity_limit: int = dashboard.RECENT_ACTIVITY_LIMIT


settings = Settings()

__all__ = [
    # Environment
    "get_node_env",
    "ENVIRONMENT",
    "IS_DEVELOPMENT",
    "IS_PRODUCTION",
    "IS_TEST",
    # Settings
    "Settings",
    "settings",
]
