"""
Generation module.

Sermon and Bible-study generation through the LLM provider, gated by the
caller's entitlement. Also regenerates single sermon sections and restyles
finished content without touching the quota.

Public API:
- GenerationOrchestrator: Entitlement check, LLM call, usage write
- LLMGenerator: Timeout-bounded chat completion
- parse_sermon_sections / reconstruct_markdown: Sermon section round trip
- GenerationFailedError: Any provider failure
"""

from .exceptions import GenerationFailedError
from .llm import LLMGenerator
from .models import (
    ContentType,
    GenerateRequest,
    GenerationOutcome,
    GenerationResult,
    OriginalInputs,
    OutlineRequest,
    RegenerableSection,
    RegenerateSectionRequest,
    RewriteRequest,
    SermonOptions,
    SermonPoint,
    SermonSections,
    TokenUsage,
)
from .orchestrator import GenerationOrchestrator
from .sermon_parser import (
    parse_points_block,
    parse_sermon_sections,
    reconstruct_markdown,
    replace_section,
)

__all__ = [
    "ContentType",
    "GenerateRequest",
    "GenerationFailedError",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "GenerationResult",
    "LLMGenerator",
    "OriginalInputs",
    "OutlineRequest",
    "RegenerableSection",
    "RegenerateSectionRequest",
    "RewriteRequest",
    "SermonOptions",
    "SermonPoint",
    "SermonSections",
    "TokenUsage",
    "parse_points_block",
    "parse_sermon_sections",
    "reconstruct_markdown",
    "replace_section",
]
