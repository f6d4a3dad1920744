"""
Generation endpoints.

``/generate`` creates a sermon or Bible study and ``/generate-outline`` a timed
study outline, both against the caller's quota. ``/regenerate-section``
rewrites one section of an existing sermon and ``/rewrite-content`` restyles
a whole document; neither is metered.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_orchestrator
from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.security.models import LimitClass
from modules.security.schemas import (
    GENERATION_SCHEMA,
    OUTLINE_SCHEMA,
    REGENERATE_SECTION_SCHEMA,
    REWRITE_SCHEMA,
)

from .models import GenerateRequest, OutlineRequest, RegenerateSectionRequest, RewriteRequest
from .orchestrator import GenerationOrchestrator

router = APIRouter()


@router.api_route("/generate", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.GENERATION, schema=GENERATION_SCHEMA)
async def generate(
    ctx: SecurityContext,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """
    Generate a sermon or Bible study.

    Free users are limited to a lifetime number of creations; subscribers
    are unlimited.
    """
    request = GenerateRequest.model_validate(ctx.data)
    outcome = await orchestrator.generate(ctx.require_user(), request)
    return outcome.to_response()


@router.api_route("/regenerate-section", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.REGENERATION, schema=REGENERATE_SECTION_SCHEMA)
async def regenerate_section(
    ctx: SecurityContext,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Regenerate one section of a sermon and return the full document."""
    request = RegenerateSectionRequest.model_validate(ctx.data)
    result = await orchestrator.regenerate_section(request)
    return {
        "success": True,
        "content": result.content,
        "usage": result.usage.model_dump() if result.usage else None,
    }


@router.api_route("/generate-outline", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.GENERATION, schema=OUTLINE_SCHEMA)
async def generate_outline(
    ctx: SecurityContext,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Generate a Bible-study outline; counts as a study creation."""
    request = OutlineRequest.model_validate(ctx.data)
    outcome = await orchestrator.generate_outline(ctx.require_user(), request)
    return outcome.to_response()


@router.api_route("/rewrite-content", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.REGENERATION, schema=REWRITE_SCHEMA)
async def rewrite_content(
    ctx: SecurityContext,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Rewrite a sermon or study in a new style."""
    request = RewriteRequest.model_validate(ctx.data)
    result = await orchestrator.rewrite(request)
    return {
        "success": True,
        "content": result.content,
        "usage": result.usage.model_dump() if result.usage else None,
    }
