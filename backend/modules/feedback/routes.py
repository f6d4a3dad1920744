"""
Feedback endpoint.

Open to anonymous visitors; a bearer token, when sent, only ties the
submission to the user and moves rate limiting from IP to user.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_feedback_service
from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.security.models import LimitClass
from modules.security.schemas import FEEDBACK_SCHEMA

from .interfaces import IFeedbackService
from .models import Feedback

router = APIRouter()


@router.api_route("/send-feedback", methods=ROUTE_METHODS)
@with_security(require_auth=False, limit_class=LimitClass.PUBLIC, schema=FEEDBACK_SCHEMA)
async def send_feedback(
    ctx: SecurityContext,
    service: IFeedbackService = Depends(get_feedback_service),
) -> dict[str, Any]:
    """Submit feedback or a complaint."""
    feedback = Feedback.model_validate({
        **ctx.data,
        "user_id": ctx.user.id if ctx.user else None,
    })
    await service.submit(feedback)
    return {"success": True, "message": "Feedback received"}
