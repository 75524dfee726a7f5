"""Utilities for formatting structured HTTP error responses."""

from __future__ import annotations

from typing import Any, Dict

from core.exceptions import (
    AuthError,
    ConfigurationError,
    StoreError,
    ValidationError,
)


def _build_error_payload(
    *,
    error: str,
    message: str,
    context: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": error, "message": message}
    if context:
        payload["context"] = context
    return payload


def format_validation_error(exc: ValidationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ValidationError`."""

    context = {"field": exc.field} if getattr(exc, "field", None) else None
    return _build_error_payload(
        error="validation_error",
        message=str(exc),
        context=context,
    )


def format_configuration_error(exc: ConfigurationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ConfigurationError`."""

    context = {"key": exc.key} if getattr(exc, "key", None) else None
    return _build_error_payload(
        error="configuration_error",
        message=str(exc),
        context=context,
    )


def format_auth_error(exc: AuthError) -> Dict[str, Any]:
    """Return a standard payload for :class:`AuthError`.

    The provider message is kept verbatim so forms can display it as-is.
    """

    context = {"provider_status": exc.status_code} if getattr(exc, "status_code", None) else None
    return _build_error_payload(
        error="auth_error",
        message=str(exc),
        context=context,
    )


def format_store_error(exc: StoreError) -> Dict[str, Any]:
    """Return a standard payload for :class:`StoreError`."""

    context = {"operation": exc.operation} if getattr(exc, "operation", None) else None
    return _build_error_payload(
        error="store_error",
        message=str(exc),
        context=context,
    )


__all__ = [
    "format_auth_error",
    "format_configuration_error",
    "format_store_error",
    "format_validation_error",
]
