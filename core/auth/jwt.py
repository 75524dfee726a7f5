"""Centralised verification of access tokens issued by the auth provider."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Annotated, Any, Dict, TypedDict

from fastapi import Header
from jose import ExpiredSignatureError, JWTError, jwt
from starlette import status

from core.utils.env import get_env


class AuthContext(TypedDict, total=False):
    """Context extracted from a validated authentication token."""

    user_id: str
    email: str | None
    token: str
    payload: Dict[str, Any]


@dataclass(slots=True)
class AuthenticationError(Exception):
    """Raised when a bearer token is missing or cannot be verified."""

    message: str
    reason: str
    code: int = status.HTTP_401_UNAUTHORIZED

    def __str__(self) -> str:  # pragma: no cover - dataclass repr fallback
        return self.message


@lru_cache(maxsize=1)
def _get_secret() -> str:
    secret = get_env("SUPABASE_JWT_SECRET")
    if not secret:
        raise AuthenticationError("Authentication secret is not configured", reason="configuration")
    return secret


def _get_audience() -> str:
    return get_env("SUPABASE_JWT_AUDIENCE", default="authenticated") or "authenticated"


def create_auth_token(
    user_id: str,
    email: str | None = None,
    expires_delta: timedelta = timedelta(hours=1),
) -> str:
    """Create an access token shaped like the ones the auth provider issues.

    Intended for local development and tests; production tokens come from
    the provider's sign-up and sign-in endpoints.

    Args:
        user_id: Identity id (stored as ``sub``)
        email: Optional email to include in token
        expires_delta: Token validity period (default 1 hour)

    Returns:
        Encoded JWT token string
    """
    secret = _get_secret()
    expire = datetime.now(timezone.utc) + expires_delta
    payload: Dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "aud": _get_audience(),
        "role": "authenticated",
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None

    parts = authorization.strip().split()
    if not parts:
        return None

    if parts[0].lower() == "bearer":
        return parts[1] if len(parts) > 1 else None

    if len(parts) == 1:
        return parts[0]

    return parts[-1]


def authenticate_bearer_token(*, authorization: str | None = None) -> AuthContext:
    """Validate a bearer token sourced from the ``Authorization`` header."""

    token = _extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError("Missing authentication token", reason="token_missing")

    secret = _get_secret()

    try:
        payload: Dict[str, Any] = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=_get_audience(),
        )
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Authentication token has expired", reason="token_expired") from exc
    except JWTError as exc:
        raise AuthenticationError("Invalid authentication token", reason="token_invalid") from exc

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Authentication token missing subject", reason="token_invalid")

    context: AuthContext = {
        "user_id": str(user_id),
        "email": payload.get("email"),
        "token": token,
        "payload": payload,
    }
    return context


def require_auth_context(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthContext:
    """FastAPI dependency returning the authentication context."""

    return authenticate_bearer_token(authorization=authorization)


__all__ = [
    "AuthContext",
    "AuthenticationError",
    "authenticate_bearer_token",
    "create_auth_token",
    "require_auth_context",
]
