"""Public pydantic schema exports for FastAPI interfaces."""

from .api_envelope import ApiResponse, api_response, error, error_response, ok

__all__ = ["ApiResponse", "api_response", "error", "error_response", "ok"]
