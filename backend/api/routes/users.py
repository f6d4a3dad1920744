"""
User-related endpoints.
"""

from typing import Any

from fastapi import APIRouter

from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.auth.models import UserInfoResponse
from modules.security.models import LimitClass

router = APIRouter()


@router.api_route("/me", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.AUTHENTICATED, allowed_methods=("GET",))
async def get_current_user_profile(ctx: SecurityContext) -> dict[str, Any]:
    """
    Get the current user's identity.

    Requires authentication.
    """
    return UserInfoResponse.from_user(ctx.require_user()).model_dump()
