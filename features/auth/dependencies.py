"""FastAPI dependencies for the auth feature."""

from __future__ import annotations

from core.config import settings

from .provider import SupabaseAuthClient


def get_auth_client() -> SupabaseAuthClient:
    """Auth provider client built from the configured Supabase project."""
    return SupabaseAuthClient(
        base_url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        timeout=settings.auth_http_timeout,
    )


__all__ = ["get_auth_client"]
