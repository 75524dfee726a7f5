"""Registration, sign-in and sign-out endpoints.

Successful registration and sign-in go through a per-request
:class:`SessionStore` with a dashboard aggregator attached, so the response
already carries the freshly loaded dashboard.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.auth import AuthContext, require_auth_context
from core.exceptions import AuthError, ValidationError
from core.http.errors import format_auth_error, format_validation_error
from core.pydantic_schemas import error_response, ok as api_ok
from features.dashboard.aggregator import ActivityFeedAggregator
from features.dashboard.dependencies import get_dashboard_aggregator

from .dependencies import get_auth_client
from .provider import SupabaseAuthClient
from .registration import RegistrationFlow
from .schemas import AuthResult, LoginRequest, RegisterRequest
from .session_store import Identity, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _auth_error_response(exc: AuthError) -> JSONResponse:
    code = exc.status_code if exc.status_code and exc.status_code >= 400 else status.HTTP_400_BAD_REQUEST
    return error_response(code, exc.message, data=format_auth_error(exc))


def _signed_in_payload(identity: Identity, aggregator: ActivityFeedAggregator) -> dict:
    data = AuthResult.from_identity(identity).model_dump(mode="json")
    data["dashboard"] = aggregator.view().model_dump(mode="json")
    return data


@router.post("/register")
async def register(
    body: RegisterRequest,
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    aggregator: ActivityFeedAggregator = Depends(get_dashboard_aggregator),
):
    """Create an identity and return it together with its initial dashboard."""
    store = SessionStore()
    await aggregator.attach(store)
    flow = RegistrationFlow(auth_client, store)

    outcome = await flow.submit(body.to_form())
    if not outcome.success:
        message = outcome.error or "Registration failed"
        if outcome.field is not None:
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                message,
                data=format_validation_error(ValidationError(message, field=outcome.field)),
            )
        return _auth_error_response(AuthError(message, status_code=outcome.provider_status))

    return api_ok("Registration successful", data=_signed_in_payload(outcome.identity, aggregator))


@router.post("/login")
async def login(
    body: LoginRequest,
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    aggregator: ActivityFeedAggregator = Depends(get_dashboard_aggregator),
):
    store = SessionStore()
    await aggregator.attach(store)

    try:
        identity = await auth_client.sign_in(str(body.email), body.password)
    except AuthError as exc:
        return _auth_error_response(exc)

    await store.sign_in(identity)
    return api_ok("Signed in", data=_signed_in_payload(identity, aggregator))


@router.post("/logout")
async def logout(
    auth: AuthContext = Depends(require_auth_context),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
):
    try:
        await auth_client.sign_out(auth["token"])
    except AuthError as exc:
        return _auth_error_response(exc)

    logger.info("User %s signed out", auth["user_id"])
    return api_ok("Signed out")


__all__ = ["router"]
