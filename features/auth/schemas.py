"""Pydantic schemas for the auth endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .registration import RegistrationForm
from .session_store import Identity


class RegisterRequest(BaseModel):
    """Registration form. Password rules are checked by the registration flow."""

    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str
    confirm_password: str
    agreed_to_terms: bool = False

    def to_form(self) -> RegistrationForm:
        return RegistrationForm(
            full_name=self.full_name,
            email=str(self.email),
            password=self.password,
            confirm_password=self.confirm_password,
            agreed_to_terms=self.agreed_to_terms,
        )


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionPayload(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None


class UserPayload(BaseModel):
    id: str
    email: Optional[str] = None


class AuthResult(BaseModel):
    """Identity, tokens (absent while email confirmation is pending) and the dashboard."""

    user: UserPayload
    session: Optional[SessionPayload] = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "AuthResult":
        session = None
        if identity.session is not None:
            session = SessionPayload(
                access_token=identity.session.access_token,
                refresh_token=identity.session.refresh_token,
                token_type=identity.session.token_type,
                expires_in=identity.session.expires_in,
            )
        return cls(user=UserPayload(id=identity.id, email=identity.email), session=session)


__all__ = ["AuthResult", "LoginRequest", "RegisterRequest", "SessionPayload", "UserPayload"]
