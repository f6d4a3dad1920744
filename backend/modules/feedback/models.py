"""Feedback module data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FeedbackType(str, Enum):
    FEEDBACK = "feedback"
    COMPLAINT = "complaint"


class Feedback(BaseModel):
    """One validated feedback submission."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., description="Reply-to address")
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)
    type: FeedbackType
    user_id: Optional[str] = Field(None, description="Submitter, when signed in")
