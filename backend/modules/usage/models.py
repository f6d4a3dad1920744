"""
Usage tracking module data models.

These models define the data structures used by the usage module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

UNLIMITED = "unlimited"


class ContentType(str, Enum):
    """Kinds of generated content that count against the free tier."""

    SERMON = "sermon"
    STUDY = "study"


class UsageRecord(BaseModel):
    """
    One successful generation, one row of ``user_usage``.

    Written only after the LLM call succeeded.
    """

    id: Optional[str] = Field(None, description="Record ID (set after save)")
    user_id: str = Field(..., description="User ID")
    content_type: ContentType = Field(..., description="What was generated")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the generation completed",
    )


class Entitlement(BaseModel):
    """
    Whether a user may generate, and how much free-tier quota is used.

    The free tier is a lifetime cap; it never resets.
    """

    unlimited: bool = Field(..., description="Active subscription (no cap)")
    usage_count: int = Field(default=0, ge=0, description="Lifetime generations")
    limit: int = Field(..., ge=0, description="Free-tier lifetime cap")

    @property
    def limit_reached(self) -> bool:
        return not self.unlimited and self.usage_count >= self.limit

    @property
    def remaining(self) -> Union[int, str]:
        if self.unlimited:
            return UNLIMITED
        return max(0, self.limit - self.usage_count)

    def to_response(self) -> dict:
        """Client view of the entitlement."""
        return {
            "hasActiveSubscription": self.unlimited,
            "totalUsage": UNLIMITED if self.unlimited else self.usage_count,
            "remainingCreations": self.remaining,
            "limit": None if self.unlimited else self.limit,
            "limitReached": self.limit_reached,
        }
