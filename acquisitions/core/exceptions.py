"""
Domain exceptions for the API.

Every failure the API knows how to report is one of the classes below.
Each carries a fixed HTTP status and a default message; the exception
handlers in ``acquisitions.api.errors`` turn them into responses.
Anything that is not an ``AppError`` is treated as an internal error.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.message = message or self.message
        self.context = context
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    message = "Validation error"

    def __init__(self, details: Optional[list[str]] = None, **context: Any):
        super().__init__(**context)
        self.details = details or []


class AlreadyExistsError(AppError):
    """A user with this email is already registered."""

    status_code = 409
    message = "Email already in use"


class InvalidCredentialsError(AppError):
    """Unknown email or wrong password. The two cases are never distinguished."""

    status_code = 401
    message = "Invalid email or password"


class UnauthenticatedError(AppError):
    """No actor could be derived from the request."""

    status_code = 401
    message = "Authentication required"


class InvalidTokenError(UnauthenticatedError):
    """Session token failed signature, expiry or claim checks."""

    message = "Invalid or expired token"


class ForbiddenError(AppError):
    """The actor is authenticated but lacks the required privilege."""

    status_code = 403
    message = "Forbidden"


class NotFoundError(AppError):
    """No user matches the requested id."""

    status_code = 404
    message = "User not found"


class UnknownError(AppError):
    """Unclassified failure."""


class HashingError(UnknownError):
    message = "Failed to hash password"


class TokenSigningError(UnknownError):
    message = "Failed to sign token"
