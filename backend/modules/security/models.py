"""
Security module data models.

Rate-limit configuration and results, plus the validation result returned
by the schema validator.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class LimitClass(str, Enum):
    """Rate-limit classes, one budget per class and client."""

    PUBLIC = "public"                # Unauthenticated endpoints
    AUTHENTICATED = "authenticated"  # Cheap authenticated reads
    GENERATION = "generation"        # Paid LLM generation
    REGENERATION = "regeneration"    # Paid LLM section rewrites
    SAVE = "save"                    # Library writes
    CHECKOUT = "checkout"            # Stripe session creation


class RateLimitConfig(BaseModel):
    """Request cap and window length for one limit class."""

    requests: int = Field(..., gt=0, description="Requests allowed per window")
    window_seconds: int = Field(..., gt=0, description="Window length in seconds")

    model_config = {"frozen": True}


DEFAULT_RATE_LIMITS: dict[str, RateLimitConfig] = {
    LimitClass.PUBLIC.value: RateLimitConfig(requests=100, window_seconds=15 * 60),
    LimitClass.AUTHENTICATED.value: RateLimitConfig(requests=200, window_seconds=15 * 60),
    LimitClass.GENERATION.value: RateLimitConfig(requests=10, window_seconds=60 * 60),
    LimitClass.REGENERATION.value: RateLimitConfig(requests=20, window_seconds=60 * 60),
    LimitClass.SAVE.value: RateLimitConfig(requests=50, window_seconds=15 * 60),
    LimitClass.CHECKOUT.value: RateLimitConfig(requests=5, window_seconds=15 * 60),
}


class RateLimitWindow(BaseModel):
    """Current state of one (client, limit class) window."""

    remaining: int = Field(..., ge=0, description="Requests left in this window")
    reset_at: float = Field(..., description="Window end (epoch seconds)")


class RateLimitResult(BaseModel):
    """Outcome of a rate-limit check."""

    allowed: bool = Field(..., description="Whether the request may proceed")
    limit: Optional[int] = Field(None, description="Cap for the class (None = unlimited)")
    remaining: Optional[int] = Field(None, description="Requests left in the window")
    reset_at: Optional[float] = Field(None, description="Window end (epoch seconds)")
    retry_after: int = Field(default=0, description="Seconds until retry (denied only)")


class ValidationResult(BaseModel):
    """Result of validating a payload against a schema."""

    valid: bool = Field(..., description="True when no violations were found")
    errors: list[str] = Field(default_factory=list, description="All violations")
    data: Optional[dict[str, Any]] = Field(
        None,
        description="Sanitized schema-declared fields (None if the body was unusable)",
    )
