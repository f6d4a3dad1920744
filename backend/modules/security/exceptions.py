"""
Security module exceptions.
"""

from shared.exceptions import RateLimitError, ValidationError


class RateLimitExceededError(RateLimitError):
    """Raised when a client has used up its window for a limit class."""

    def __init__(self, retry_after: int, reset_at: float):
        super().__init__(
            "Too many requests. Please try again later.",
            code="RATE_LIMITED",
            details={"retryAfter": retry_after},
        )
        self.retry_after = retry_after
        self.reset_at = reset_at


class RequestValidationError(ValidationError):
    """Raised when a request payload fails schema validation."""

    def __init__(self, errors: list[str]):
        super().__init__(
            "Invalid request data",
            code="INVALID_REQUEST",
            details={"details": errors},
        )
        self.errors = errors
