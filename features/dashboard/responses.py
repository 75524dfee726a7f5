"""Error envelopes for dashboard endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from core.exceptions import NotFoundError, StoreError, ValidationError
from core.http.errors import format_store_error, format_validation_error
from core.pydantic_schemas import error_response

from .schemas import DashboardView

logger = logging.getLogger(__name__)


def validation_error_response(exc: ValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        data=format_validation_error(exc),
    )


def not_found_response(exc: NotFoundError) -> JSONResponse:
    data = {"resource": exc.resource} if exc.resource else None
    return error_response(status.HTTP_404_NOT_FOUND, str(exc), data=data)


def store_error_response(exc: StoreError, *, view: DashboardView | None = None) -> JSONResponse:
    """Return a 502 envelope; ``view`` carries the dashboard as it stood before the failure."""

    logger.error("Table store error in dashboard route: %s", exc)
    data: dict[str, Any] = format_store_error(exc)
    if view is not None:
        data["dashboard"] = view.model_dump(mode="json")
    return error_response(status.HTTP_502_BAD_GATEWAY, str(exc), data=data)


__all__ = ["not_found_response", "store_error_response", "validation_error_response"]
