"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class MissingTokenError(AuthenticationError):
    """Raised when no usable credentials are provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class IdentityMismatchError(AuthorizationError):
    """Raised when a request names a user other than the caller."""

    def __init__(self, message: str = "User ID mismatch"):
        super().__init__(message, code="IDENTITY_MISMATCH")
