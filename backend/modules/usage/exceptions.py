"""
Usage tracking module exceptions.
"""

from shared.exceptions import AppError, QuotaExceededError


class UsageLimitReachedError(QuotaExceededError):
    """Raised when a free-tier user has used up their lifetime generations."""

    def __init__(self, total_usage: int, limit: int):
        super().__init__(
            f"You have reached your limit of {limit} total creations. "
            "Upgrade to Premium for unlimited access!",
            code="USAGE_LIMIT_REACHED",
            details={"totalUsage": total_usage, "limitReached": True},
        )
        self.total_usage = total_usage
        self.limit = limit


class UsageLookupError(AppError):
    """
    Raised when usage cannot be read.

    Generation is refused rather than allowed when the count is unknown.
    """

    def __init__(self, user_id: str):
        super().__init__(
            "Unable to verify usage limits. Please try again.",
            code="USAGE_LOOKUP_FAILED",
        )
        self.user_id = user_id
