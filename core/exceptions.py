"""Custom Exception Hierarchy for the Account Dashboard backend
This module defines a typed exception hierarchy that enables precise error
handling and structured error responses across the application.

Exception Handling Flow:
    1. Service layer raises typed exception
    2. Route or FastAPI exception handler catches it (see main.py)
    3. Handler converts to structured JSON response
    4. Client receives error envelope with code, message, and context

User-facing taxonomy:
    - ValidationError: local, pre-network form checks (registration)
    - AuthError: the hosted auth provider rejected the request
    - StoreError: the hosted table store failed (transport or constraint)
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service layer errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Raised when a requested resource cannot be located."""

    def __init__(self, message: str, resource: str | None = None):
        self.message = message
        self.resource = resource
        super().__init__(self.message)


class AuthError(ServiceError):
    """Raised when the auth provider rejects credentials or a registration.

    ``message`` is human readable and is surfaced to the user verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None, original_error: Exception | None = None):
        self.message = message
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class StoreError(ServiceError):
    """Raised when a query or insert against the table store fails."""

    def __init__(self, message: str, operation: str | None = None):
        self.message = message
        self.operation = operation
        super().__init__(self.message)
