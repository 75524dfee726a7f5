"""Hosted auth provider (Supabase) configuration."""

from __future__ import annotations

from .defaults import (
    AUTH_HTTP_TIMEOUT,
    SUPABASE_ANON_KEY,
    SUPABASE_JWT_AUDIENCE,
    SUPABASE_JWT_SECRET,
    SUPABASE_URL,
)

__all__ = [
    "AUTH_HTTP_TIMEOUT",
    "SUPABASE_ANON_KEY",
    "SUPABASE_JWT_AUDIENCE",
    "SUPABASE_JWT_SECRET",
    "SUPABASE_URL",
]
