"""Feedback module interface."""

from typing import Protocol, runtime_checkable

from .models import Feedback


@runtime_checkable
class IFeedbackService(Protocol):
    """Destination for feedback submissions."""

    async def submit(self, feedback: Feedback) -> None:
        """Record a submission. Raises on failure."""
        ...
