"""
Authentication module data models.

The authenticated user model itself lives in shared.models because every
module receives it; this module only adds the provider-side shapes.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class ProviderUser(BaseModel):
    """
    User record as returned by the Supabase Auth ``get_user`` call.

    Only the fields this service reads are declared.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: Optional[str] = Field(None, description="User's email")
    role: Optional[str] = Field(None, description="Auth role claim")
    email_confirmed_at: Optional[datetime] = Field(None, description="Email confirmation time")
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}

    def to_authenticated_user(self) -> AuthenticatedUser:
        """Map the provider record to the request-scoped user model."""
        return AuthenticatedUser(
            id=self.id,
            email=self.email or "",
            role=self.role if self.role and self.role != "authenticated" else "user",
            email_verified=self.email_confirmed_at is not None,
            display_name=self.user_metadata.get("full_name") or self.user_metadata.get("name"),
        )


class UserInfoResponse(BaseModel):
    """Response for the current-user endpoint."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email")
    role: str = Field(..., description="User role")
    email_verified: bool = Field(..., description="Whether email is verified")
    display_name: Optional[str] = Field(None, description="Display name")

    @classmethod
    def from_user(cls, user: AuthenticatedUser) -> "UserInfoResponse":
        return cls(**user.model_dump())
