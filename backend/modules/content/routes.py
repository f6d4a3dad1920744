"""
Content library endpoint.

One path serves the whole library: POST saves, PUT updates, DELETE removes
(``?id=``) and GET lists, each validated against its own schema.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_content_service
from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.security.models import LimitClass
from modules.security.schemas import (
    DELETE_CONTENT_SCHEMA,
    LIST_CONTENT_SCHEMA,
    SAVE_CONTENT_SCHEMA,
    UPDATE_CONTENT_SCHEMA,
)
from modules.usage.models import ContentType

from .interfaces import IContentService
from .models import ContentCreate, ContentUpdate

router = APIRouter()


def _structured(data: dict[str, Any]) -> Optional[Any]:
    # The validator has already checked that the string parses
    raw = data.get("structured_data")
    return json.loads(raw) if raw else None


@router.api_route("/save-content", methods=ROUTE_METHODS)
@with_security(
    limit_class=LimitClass.SAVE,
    allowed_methods=("POST", "PUT", "DELETE", "GET"),
    method_schemas={
        "POST": SAVE_CONTENT_SCHEMA,
        "PUT": UPDATE_CONTENT_SCHEMA,
        "DELETE": DELETE_CONTENT_SCHEMA,
        "GET": LIST_CONTENT_SCHEMA,
    },
)
async def save_content(
    ctx: SecurityContext,
    service: IContentService = Depends(get_content_service),
) -> dict[str, Any]:
    """Manage the caller's saved sermons and studies."""
    user = ctx.require_user()
    data = ctx.data

    if ctx.method == "POST":
        saved = await service.save(
            user.id,
            ContentCreate(
                title=data["title"],
                content=data["content"],
                content_type=ContentType(data["content_type"]),
                topic=data.get("topic") or "",
                bible_verse=data.get("bible_verse") or "",
                style=data.get("style") or "",
                structured_data=_structured(data),
            ),
        )
        return {"success": True, "message": "Content saved to library", "data": saved}

    if ctx.method == "PUT":
        fields = {key: value for key, value in data.items() if key != "id"}
        if "structured_data" in fields:
            fields["structured_data"] = _structured(data)
        updated = await service.update(user.id, data["id"], ContentUpdate(**fields))
        return {"success": True, "message": "Content updated", "data": updated}

    if ctx.method == "DELETE":
        await service.delete(user.id, data["id"])
        return {"success": True, "message": "Content deleted"}

    content_type = data.get("content_type")
    rows = await service.list(user.id, ContentType(content_type) if content_type else None)
    return {"success": True, "data": rows}
