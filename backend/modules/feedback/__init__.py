"""
Feedback module.

Accepts feedback and complaints from visitors and signed-in users.

Public API:
- FeedbackService: Records a submission in the server log
- Feedback, FeedbackType: The submission shape
"""

from .interfaces import IFeedbackService
from .models import Feedback, FeedbackType
from .service import FeedbackService

__all__ = [
    "Feedback",
    "FeedbackService",
    "FeedbackType",
    "IFeedbackService",
]
