"""
Generation orchestrator.

Sequences a metered request (a generation or an outline): entitlement
check, LLM call, usage write.
Each step waits for the previous one; nothing runs in parallel because each
decision depends on the one before it.

The entitlement check and the usage write are not atomic. Two concurrent
requests from a user at ``limit - 1`` can both pass the check; the free tier
may then be exceeded by the number of concurrent requests.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedUser

from modules.usage.exceptions import UsageLimitReachedError
from modules.usage.interfaces import IUsageService
from modules.usage.models import ContentType

from .exceptions import GenerationFailedError
from .llm import LLMGenerator
from .models import (
    GenerateRequest,
    GenerationOutcome,
    GenerationResult,
    OutlineRequest,
    RegenerableSection,
    RegenerateSectionRequest,
    RewriteRequest,
    SermonSections,
)
from .prompts import (
    PromptSpec,
    outline_prompt,
    rewrite_prompt,
    section_prompt,
    sermon_prompt,
    study_prompt,
)
from .sermon_parser import (
    parse_points_block,
    parse_sermon_sections,
    reconstruct_markdown,
    replace_section,
)

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    Runs generation, outline, rewrite and partial regeneration requests.

    Args:
        usage: Usage/entitlement service
        generator: LLM completion wrapper
    """

    def __init__(self, usage: IUsageService, generator: LLMGenerator):
        self._usage = usage
        self._generator = generator

    async def generate(self, user: AuthenticatedUser, request: GenerateRequest) -> GenerationOutcome:
        """
        Generate a sermon or study for a user, enforcing the free tier.

        Raises:
            UsageLimitReachedError: Free tier used up (before any LLM call)
            UsageLookupError: Usage could not be read
            GenerationFailedError: The LLM call failed (no usage recorded)
        """
        if request.mode == ContentType.SERMON:
            brief = sermon_prompt(request.input, request.sermon_options)
        else:
            brief = study_prompt(request.input)
        return await self._metered(user, request.mode, brief)

    async def generate_outline(self, user: AuthenticatedUser, request: OutlineRequest) -> GenerationOutcome:
        """
        Generate a timed Bible-study outline. Counts against the free tier as a study.

        Raises:
            Same as generate()
        """
        brief = outline_prompt(request.topic, request.target_audience, request.duration)
        return await self._metered(user, ContentType.STUDY, brief)

    async def rewrite(self, request: RewriteRequest) -> GenerationResult:
        """Restyle existing content. Does not consume quota."""
        brief = rewrite_prompt(request.original_content, request.new_style, request.instructions)
        return await self._generator.complete(brief.system, brief.prompt, brief.max_tokens)

    async def _metered(
        self,
        user: AuthenticatedUser,
        content_type: ContentType,
        brief: PromptSpec,
    ) -> GenerationOutcome:
        entitlement = await self._usage.get_entitlement(user.id)
        if entitlement.limit_reached:
            logger.info(
                "User %s reached the free limit (%d/%d)",
                user.id, entitlement.usage_count, entitlement.limit,
            )
            raise UsageLimitReachedError(entitlement.usage_count, entitlement.limit)

        logger.info("Generating %s for user %s", content_type.value, user.id)
        result = await self._generator.complete(brief.system, brief.prompt, brief.max_tokens)

        # Only a successful generation counts; recording is best effort
        await self._usage.record_usage(user.id, content_type)

        if entitlement.unlimited:
            return GenerationOutcome.unlimited(result)

        total = entitlement.usage_count + 1
        return GenerationOutcome(
            result=result,
            has_active_subscription=False,
            total_usage=total,
            remaining_creations=max(0, entitlement.limit - total),
        )

    async def regenerate_section(self, request: RegenerateSectionRequest) -> GenerationResult:
        """
        Regenerate one section of a sermon and return the whole document.

        Falls back to regenerating the full sermon when the original does
        not parse or the requested section is empty. Does not consume quota.

        Raises:
            GenerationFailedError: The LLM call failed or its reply was unusable
        """
        sections = parse_sermon_sections(request.original_sermon)
        section = request.section

        if section == RegenerableSection.FULL or not self._has_section(sections, section):
            if section != RegenerableSection.FULL:
                logger.info("Section %s not found in original; regenerating full sermon", section.value)
            return await self._regenerate_full(request, sections)

        brief = section_prompt(section, sections, request.original_inputs, request.additional_note)
        reply = await self._generator.complete(brief.system, brief.prompt, brief.max_tokens)

        if section in (RegenerableSection.POINTS, RegenerableSection.ILLUSTRATIONS):
            points = parse_points_block(reply.content)
            if not points:
                logger.error("Regenerated points block contained no points")
                raise GenerationFailedError()
            updated = replace_section(sections, "points", points)
        else:
            text = _strip_headings(reply.content)
            if not text:
                logger.error("Regenerated %s section was empty", section.value)
                raise GenerationFailedError()
            updated = replace_section(sections, section.value, text)

        return GenerationResult(content=reconstruct_markdown(updated), usage=reply.usage)

    async def _regenerate_full(
        self,
        request: RegenerateSectionRequest,
        sections: Optional[SermonSections],
    ) -> GenerationResult:
        inputs = request.original_inputs
        topic = inputs.topic or (sections.title if sections else "") or "the original sermon's theme"
        brief = sermon_prompt(topic, inputs, verse=inputs.verse, note=request.additional_note)
        return await self._generator.complete(brief.system, brief.prompt, brief.max_tokens)

    @staticmethod
    def _has_section(sections: Optional[SermonSections], section: RegenerableSection) -> bool:
        if sections is None or sections.is_empty():
            return False
        if section in (RegenerableSection.POINTS, RegenerableSection.ILLUSTRATIONS):
            return bool(sections.points)
        if section == RegenerableSection.FULL:
            return True
        return bool(getattr(sections, section.value))


def _strip_headings(text: str) -> str:
    """Drop markdown heading lines the model may add to a single-section reply."""
    lines = [line for line in text.splitlines() if not line.lstrip().startswith("#")]
    return "\n".join(lines).strip()
