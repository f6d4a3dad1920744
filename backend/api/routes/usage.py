"""
Usage endpoint.

Reports the caller's entitlement so the client can show remaining free
creations before the user tries to generate.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_usage_service
from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.security.models import LimitClass
from modules.usage.interfaces import IUsageService

router = APIRouter()


@router.api_route("/usage", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.AUTHENTICATED, allowed_methods=("GET",))
async def get_usage(
    ctx: SecurityContext,
    service: IUsageService = Depends(get_usage_service),
) -> dict[str, Any]:
    """
    Get the caller's entitlement.

    Requires authentication.
    """
    entitlement = await service.get_entitlement(ctx.require_user().id)
    return entitlement.to_response()
