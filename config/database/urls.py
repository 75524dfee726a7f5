"""Database URL configuration.

The dashboard tables live in the hosted Supabase PostgreSQL database.

Environment Variables:
    - DASHBOARD_DB_URL: Override entire URL (takes precedence)
    - SUPABASE_DB_HOST: Supabase database host
    - SUPABASE_DB_PASS: Supabase database password
    - SUPABASE_DB_USER: Supabase username (default: postgres)
    - SUPABASE_DB_PORT: Supabase port (default: 5432)
    - SUPABASE_DB_NAME: Database name (default: postgres)
    - DASHBOARD_DB_SCHEMA: Schema holding profiles/activities (default: public)
"""

from __future__ import annotations

import os

from core.utils.config_helpers import build_postgresql_url

# Supports multiple naming conventions for flexibility
SUPABASE_DB_HOST = os.getenv("SUPABASE_HOST") or os.getenv("SUPABASE_DB_HOST", "")
SUPABASE_DB_PASS = os.getenv("SUPABASE_DB_PASSWORD") or os.getenv("SUPABASE_DB_PASS", "")
SUPABASE_DB_USER = os.getenv("SUPABASE_DB_USER", "postgres")
SUPABASE_DB_PORT = int(os.getenv("SUPABASE_DB_PORT", "5432"))
SUPABASE_DB_NAME = os.getenv("SUPABASE_DB_NAME", "postgres")
DASHBOARD_DB_SCHEMA = os.getenv("DASHBOARD_DB_SCHEMA", "public")


def _build_default_url() -> str:
    """Build the Supabase PostgreSQL URL from discrete credentials."""
    if not SUPABASE_DB_HOST or not SUPABASE_DB_PASS:
        # Return empty - will fail later with clear error
        return ""

    schema = DASHBOARD_DB_SCHEMA if DASHBOARD_DB_SCHEMA != "public" else None
    return build_postgresql_url(
        SUPABASE_DB_USER,
        SUPABASE_DB_PASS,
        SUPABASE_DB_HOST,
        SUPABASE_DB_NAME,
        schema=schema,
        port=SUPABASE_DB_PORT,
    )


def _get_url(env_var: str) -> str:
    """Get database URL from environment or build default."""
    override = os.getenv(env_var)
    if override:
        return override
    return _build_default_url()


DASHBOARD_DB_URL = _get_url("DASHBOARD_DB_URL")

__all__ = [
    "SUPABASE_DB_HOST",
    "SUPABASE_DB_PASS",
    "SUPABASE_DB_USER",
    "SUPABASE_DB_PORT",
    "SUPABASE_DB_NAME",
    "DASHBOARD_DB_SCHEMA",
    "DASHBOARD_DB_URL",
]
