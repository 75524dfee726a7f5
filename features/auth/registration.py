"""Registration form validation and submission state machine.

Validation is local and runs before any network call; the first failing rule
wins. Provider errors are surfaced verbatim. The flow never writes a profile
row itself; that is done provider-side when the user is created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from config.dashboard import MIN_PASSWORD_LENGTH
from core.exceptions import AuthError, ValidationError

from .session_store import Identity, SessionStore

logger = logging.getLogger(__name__)

PASSWORD_MISMATCH = "Passwords do not match"
TERMS_NOT_ACCEPTED = "Please agree to the terms and privacy policy"
ALREADY_SUBMITTING = "Registration is already in progress"


def password_too_short(min_length: int) -> str:
    return f"Password must be at least {min_length} characters"


class SignUpClient(Protocol):
    async def sign_up(self, email: str, password: str, full_name: str) -> Identity: ...


class RegistrationState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistrationForm:
    full_name: str
    email: str
    password: str
    confirm_password: str
    agreed_to_terms: bool = False


@dataclass(frozen=True)
class RegistrationOutcome:
    success: bool
    identity: Optional[Identity] = None
    error: Optional[str] = None
    field: Optional[str] = None
    provider_status: Optional[int] = None


def validate_registration(form: RegistrationForm, *, min_length: int = MIN_PASSWORD_LENGTH) -> None:
    """Raise :class:`ValidationError` for the first rule ``form`` breaks."""

    if form.password != form.confirm_password:
        raise ValidationError(PASSWORD_MISMATCH, field="confirm_password")
    if len(form.password) < min_length:
        raise ValidationError(password_too_short(min_length), field="password")
    if not form.agreed_to_terms:
        raise ValidationError(TERMS_NOT_ACCEPTED, field="agreed_to_terms")


TransitionListener = Callable[[RegistrationState], None]


class RegistrationFlow:
    """Drive one registration form from input to a signed-in identity."""

    def __init__(
        self,
        auth: SignUpClient,
        session_store: SessionStore,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
        on_transition: TransitionListener | None = None,
    ):
        self._auth = auth
        self._session_store = session_store
        self._min_password_length = min_password_length
        self._on_transition = on_transition
        self.state = RegistrationState.IDLE
        self.error: Optional[str] = None

    def _transition(self, state: RegistrationState) -> None:
        self.state = state
        if self._on_transition is not None:
            self._on_transition(state)

    def _fail(
        self, message: str, *, field: str | None = None, provider_status: int | None = None
    ) -> RegistrationOutcome:
        self.error = message
        self._transition(RegistrationState.FAILED)
        self._transition(RegistrationState.IDLE)
        return RegistrationOutcome(
            success=False, error=message, field=field, provider_status=provider_status
        )

    async def submit(self, form: RegistrationForm) -> RegistrationOutcome:
        if self.state in (RegistrationState.VALIDATING, RegistrationState.SUBMITTING):
            logger.debug("Rejected registration submit while %s", self.state.value)
            return RegistrationOutcome(success=False, error=ALREADY_SUBMITTING)

        self.error = None
        self._transition(RegistrationState.VALIDATING)
        try:
            validate_registration(form, min_length=self._min_password_length)
        except ValidationError as exc:
            return self._fail(exc.message, field=exc.field)

        self._transition(RegistrationState.SUBMITTING)
        try:
            identity = await self._auth.sign_up(form.email, form.password, form.full_name)
        except AuthError as exc:
            logger.info("Registration rejected by auth provider: %s", exc.message)
            return self._fail(exc.message, provider_status=exc.status_code)

        await self._session_store.sign_in(identity)
        self._transition(RegistrationState.SUCCESS)
        return RegistrationOutcome(success=True, identity=identity)


__all__ = [
    "ALREADY_SUBMITTING",
    "PASSWORD_MISMATCH",
    "TERMS_NOT_ACCEPTED",
    "RegistrationFlow",
    "RegistrationForm",
    "RegistrationOutcome",
    "RegistrationState",
    "SignUpClient",
    "password_too_short",
    "validate_registration",
]
