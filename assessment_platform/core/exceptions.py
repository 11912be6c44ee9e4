"""
Application error taxonomy.

Every error raised by the store, the access gate or the route handlers derives
from AppError. The error handlers in assessment_platform.middleware.error_handler turn them
into a uniform ``{"error": "..."}`` JSON body with the matching status code.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Something went wrong!"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body = {"error": self.message}
        body.update(self.extra)
        return body


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthRequired(AppError):
    """Raised when an assessment secret is missing or does not match."""

    status_code = 401
    default_message = "Secret required"

    def __init__(self, message: Optional[str] = None, missing: bool = True):
        super().__init__(message, requiresSecret=True)
        self.missing = missing


class StorageError(AppError):
    status_code = 500
    default_message = "Storage failure"
