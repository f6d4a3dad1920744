"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Resolved from the bearer token by the auth provider on every request
    and handed to route handlers through the security context. Never
    persisted by this service.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="User's email address")
    role: str = Field(default="user", description="User role")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    display_name: Optional[str] = Field(None, description="Display name from user metadata")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
