"""Holder for the currently authenticated identity.

The store is an explicit object handed to whoever needs it; there is no
module-level instance. Identity values are immutable and swapped whole, so a
dependent only ever sees the previous identity or the new one.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by the auth provider."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None


@dataclass(frozen=True)
class Identity:
    """Authenticated user as known to the auth provider."""

    id: str
    email: Optional[str] = None
    session: Optional[AuthSession] = None


ChangeHandler = Callable[[Optional[Identity]], Union[None, Awaitable[None]]]


class SessionStore:
    """Current identity plus change notification."""

    def __init__(self, identity: Identity | None = None):
        self._identity = identity
        self._handlers: list[ChangeHandler] = []
        self._lock = asyncio.Lock()

    def current(self) -> Identity | None:
        return self._identity

    def on_change(self, handler: ChangeHandler) -> Callable[[], None]:
        """Register ``handler``; returns a callable that unregisters it."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    async def sign_in(self, identity: Identity) -> None:
        await self._replace(identity)

    async def sign_out(self) -> None:
        await self._replace(None)

    async def _replace(self, identity: Identity | None) -> None:
        # Handlers run under the lock so notifications never interleave;
        # they must not call sign_in/sign_out themselves.
        async with self._lock:
            self._identity = identity
            logger.debug("Session identity changed to %s", identity.id if identity else None)
            for handler in list(self._handlers):
                try:
                    result = handler(identity)
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    logger.exception("Session change handler %r failed", handler)


__all__ = ["AuthSession", "ChangeHandler", "Identity", "SessionStore"]
