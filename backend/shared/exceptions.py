"""
Base exception classes for the ChurchContent backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code (see api/errors.py),
so choosing the right base is what decides the client-visible response.
"""

from typing import Optional, Any


class AppError(Exception):
    """
    Base exception for all ChurchContent errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            **self.details,
        }


class NotFoundError(AppError):
    """Resource not found."""

    pass


class ValidationError(AppError):
    """Input validation failed."""

    pass


class AuthenticationError(AppError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AppError):
    """Authorization failed (acting on another user's resource)."""

    pass


class QuotaExceededError(AppError):
    """A business-rule quota was exhausted."""

    pass


class RateLimitError(AppError):
    """Too many requests in the current window."""

    pass


class ExternalServiceError(AppError):
    """
    Error communicating with an external service.

    The message is safe to show to clients; provider detail belongs in
    the server log only.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service

    def to_dict(self) -> dict[str, Any]:
        # Service name and provider detail stay server-side
        return {"error": self.message, "code": self.code}
