"""Supabase Auth endpoint and token settings.

Environment Variables:
    - SUPABASE_URL: Project URL, e.g. https://<ref>.supabase.co
    - SUPABASE_ANON_KEY: Public anon key sent as the ``apikey`` header
    - SUPABASE_JWT_SECRET: HS256 secret used to verify access tokens
    - SUPABASE_JWT_AUDIENCE: Expected ``aud`` claim (default: authenticated)
    - AUTH_HTTP_TIMEOUT: Seconds before an auth request is abandoned
"""

from __future__ import annotations

import os

SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "")
SUPABASE_JWT_AUDIENCE = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")
AUTH_HTTP_TIMEOUT = float(os.getenv("AUTH_HTTP_TIMEOUT", "10.0"))

__all__ = [
    "AUTH_HTTP_TIMEOUT",
    "SUPABASE_ANON_KEY",
    "SUPABASE_JWT_AUDIENCE",
    "SUPABASE_JWT_SECRET",
    "SUPABASE_URL",
]
