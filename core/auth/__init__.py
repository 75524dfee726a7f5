"""Authentication helpers and dependencies."""

from .jwt import (
    AuthContext,
    AuthenticationError,
    authenticate_bearer_token,
    create_auth_token,
    require_auth_context,
)

__all__ = [
    "AuthContext",
    "AuthenticationError",
    "authenticate_bearer_token",
    "create_auth_token",
    "require_auth_context",
]
