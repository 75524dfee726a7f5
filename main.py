"""Account Dashboard Backend - Main Application Entry Point
This is the FastAPI application factory for the account dashboard service.
Architecture Overview:
    - Registration and sign-in delegate to the hosted auth provider (Supabase Auth)
    - Profiles and activities live in the hosted PostgreSQL store
    - Feature-based modular architecture (see features/ directory)
Entry Points:
    - /health - Health check endpoint
    - /api/v1/auth/* - Registration, sign-in, sign-out
    - /api/v1/dashboard/* - Dashboard view, activity feed, counters, profile
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.auth import AuthenticationError
from core.exceptions import ConfigurationError
from core.http.errors import format_configuration_error
from core.logging import setup_logging
from core.observability import register_http_request_logging
from core.pydantic_schemas import error as api_error
from core.utils.env import is_production
from features.auth.routes import router as auth_router
from features.dashboard.routes import router as dashboard_router
from infrastructure.db import dispose_engine

setup_logging()

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events."""
    yield
    logger.info("Application shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Application factory returning a configured FastAPI instance."""

    app = FastAPI(
        title="Account Dashboard Backend",
        description="Registration, sign-in and activity dashboard over Supabase",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    if is_production():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Any localhost port in dev (Vite/React dev servers)
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        """Return a structured 401 envelope for bearer token failures."""

        payload = api_error(
            code=exc.code,
            message=exc.message,
            data={"reason": exc.reason} if exc.reason else None,
        )
        return JSONResponse(
            status_code=exc.code,
            content=payload,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        """Return a structured API envelope for configuration errors."""

        logger.error("Configuration error on %s: %s", request.url.path, exc)
        payload = api_error(
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc),
            data=format_configuration_error(exc),
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Wrap FastAPI's request validation failures in the API envelope."""

        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
            for error in exc.errors()
        ]
        logger.debug("Request validation failed on %s: %s", request.url.path, errors)
        payload = api_error(
            code=422,
            message="Request validation failed",
            data={"errors": errors},
        )
        return JSONResponse(status_code=422, content=payload)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": APP_VERSION}

    register_http_request_logging(app)

    app.include_router(auth_router)
    app.include_router(dashboard_router)

    logger.info("Application created with auth and dashboard routers")
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
