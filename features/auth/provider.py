"""Client for the hosted auth provider (Supabase Auth REST API)."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from config.supabase import AUTH_HTTP_TIMEOUT, SUPABASE_ANON_KEY, SUPABASE_URL
from core.exceptions import AuthError, ConfigurationError

from .session_store import AuthSession, Identity

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Unable to reach the authentication service"
_ERROR_FIELDS = ("msg", "error_description", "message", "error")


def _error_message(response: httpx.Response) -> str:
    """Pick the provider's human readable message out of an error body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        for field in _ERROR_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value:
                return value
    return f"Authentication request failed ({response.status_code})"


def _identity_from_payload(payload: Mapping[str, Any]) -> Identity:
    """Build an identity from a token response or a bare user object.

    Sign-up with email confirmation enabled returns the user without tokens.
    """
    user = payload.get("user") if isinstance(payload.get("user"), Mapping) else payload
    user_id = user.get("id")
    if not user_id:
        raise AuthError("Authentication response did not include a user")

    session: Optional[AuthSession] = None
    access_token = payload.get("access_token")
    if access_token:
        session = AuthSession(
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
            token_type=payload.get("token_type") or "bearer",
            expires_in=payload.get("expires_in"),
        )
    return Identity(id=str(user_id), email=user.get("email"), session=session)


class SupabaseAuthClient:
    """Thin async wrapper over the provider's sign-up, sign-in and sign-out calls."""

    def __init__(
        self,
        *,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        timeout: float = AUTH_HTTP_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        if not base_url and client is None:
            raise ConfigurationError("SUPABASE_URL must be configured for authentication", key="SUPABASE_URL")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    async def sign_up(self, email: str, password: str, full_name: str) -> Identity:
        payload = await self._post(
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )
        identity = _identity_from_payload(payload)
        logger.info("Registered user %s (session issued: %s)", identity.id, identity.session is not None)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        payload = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        identity = _identity_from_payload(payload)
        logger.info("Signed in user %s", identity.id)
        return identity

    async def sign_out(self, access_token: str) -> None:
        await self._post("/auth/v1/logout", access_token=access_token)
        logger.info("Signed out session")

    async def _post(
        self,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        headers = {"apikey": self._api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        url = f"{self._base_url}{path}"
        try:
            if self._client is not None:
                response = await self._client.post(url, json=json, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, json=json, params=params, headers=headers)
        except httpx.RequestError as exc:
            logger.error("Auth provider request to %s failed: %s", path, exc)
            raise AuthError(UNREACHABLE_MESSAGE, original_error=exc) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("Auth provider rejected %s (%s): %s", path, response.status_code, message)
            raise AuthError(message, status_code=response.status_code)

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as exc:
            raise AuthError("Authentication service returned an invalid response") from exc
        return body if isinstance(body, dict) else {}


__all__ = ["SupabaseAuthClient", "UNREACHABLE_MESSAGE"]
