"""
Application error types.

Services raise these at the point a rule is broken; the handlers registered
in stocktake.main turn them into the JSON error envelope with the matching
HTTP status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when a business rule rejects the operation."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class NotFoundError(AppError):
    """Raised when a referenced product, warehouse, count or user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class AuthenticationError(AppError):
    """Raised when credentials are missing, invalid or expired."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class AuthorizationError(AppError):
    """Raised when the caller's role or warehouse scope forbids the action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"
