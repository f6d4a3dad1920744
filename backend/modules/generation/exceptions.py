"""
Generation module exceptions.
"""

from shared.exceptions import ExternalServiceError


class GenerationFailedError(ExternalServiceError):
    """
    Raised when the LLM provider fails, times out, or returns nothing usable.

    The client only sees a generic retry message; the cause is logged.
    """

    def __init__(self, message: str = "Failed to generate content. Please try again."):
        super().__init__(message, service="openai", code="GENERATION_FAILED")
