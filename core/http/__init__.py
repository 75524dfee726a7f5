"""HTTP helpers shared by feature routers."""

from .errors import (
    format_auth_error,
    format_configuration_error,
    format_store_error,
    format_validation_error,
)

__all__ = [
    "format_auth_error",
    "format_configuration_error",
    "format_store_error",
    "format_validation_error",
]
