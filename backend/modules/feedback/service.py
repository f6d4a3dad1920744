"""
Feedback service implementation.

No mail transport is configured, so submissions are written to the server
log where operators pick them up.
"""

import logging

from .interfaces import IFeedbackService
from .models import Feedback, FeedbackType

logger = logging.getLogger(__name__)


class FeedbackService(IFeedbackService):
    """Records feedback in the application log."""

    async def submit(self, feedback: Feedback) -> None:
        level = logging.WARNING if feedback.type == FeedbackType.COMPLAINT else logging.INFO
        logger.log(
            level,
            "%s from %s <%s> (user %s): %s\n%s",
            feedback.type.value.upper(),
            feedback.name,
            feedback.email,
            feedback.user_id or "anonymous",
            feedback.subject,
            feedback.message,
        )
