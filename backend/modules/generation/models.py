"""
Generation module data models.

Request and result shapes for content generation and partial
regeneration, plus the transient section structure of a sermon.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from modules.usage.models import UNLIMITED, ContentType


class Audience(str, Enum):
    YOUTH = "youth"
    ADULTS = "adults"
    MIXED = "mixed"


class TeachingStyle(str, Enum):
    NARRATIVE = "narrative"
    EXPOSITORY = "expository"
    TEACHING = "teaching"


class CulturalContext(str, Enum):
    GLOBAL = "global"
    AFRICAN = "african"
    NIGERIAN = "nigerian"


class Tone(str, Enum):
    ENCOURAGING = "encouraging"
    CORRECTIVE = "corrective"
    PROPHETIC = "prophetic"


class SermonLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class RegenerableSection(str, Enum):
    """Parts of a sermon that can be rewritten on their own."""

    INTRODUCTION = "introduction"
    ILLUSTRATIONS = "illustrations"
    APPLICATION = "application"
    POINTS = "points"
    FULL = "full"


class SermonOptions(BaseModel):
    """Optional knobs for sermon generation. Field names follow the client's JSON."""

    model_config = ConfigDict(populate_by_name=True)

    audience: Optional[Audience] = None
    teaching_style: Optional[TeachingStyle] = Field(None, alias="teachingStyle")
    cultural_context: Optional[CulturalContext] = Field(None, alias="culturalContext")
    tone: Optional[Tone] = None
    length: Optional[SermonLength] = None


class GenerateRequest(BaseModel):
    """A validated generation request."""

    model_config = ConfigDict(populate_by_name=True)

    input: str = Field(..., min_length=1, max_length=2000, description="Topic or passage")
    mode: ContentType = Field(..., description="Sermon or Bible study")
    sermon_options: SermonOptions = Field(
        default_factory=SermonOptions,
        alias="sermonOptions",
    )


class OriginalInputs(SermonOptions):
    """The inputs the original sermon was generated from."""

    topic: Optional[str] = None
    verse: Optional[str] = None


class RegenerateSectionRequest(BaseModel):
    """A validated partial-regeneration request."""

    model_config = ConfigDict(populate_by_name=True)

    section: RegenerableSection
    original_sermon: str = Field(..., alias="originalSermon")
    original_inputs: OriginalInputs = Field(default_factory=OriginalInputs, alias="originalInputs")
    additional_note: str = Field(default="", alias="additionalNote")


class OutlineRequest(BaseModel):
    """A validated Bible-study outline request."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(..., min_length=1, max_length=2000, description="Study topic")
    target_audience: str = Field(default="adults", alias="targetAudience", max_length=100)
    duration: str = Field(default="45 minutes", max_length=50)


class RewriteRequest(BaseModel):
    """A validated request to restyle existing content."""

    model_config = ConfigDict(populate_by_name=True)

    original_content: str = Field(..., min_length=1, alias="originalContent")
    new_style: str = Field(default="more engaging", alias="newStyle", max_length=100)
    instructions: str = Field(default="", max_length=1000)


class TokenUsage(BaseModel):
    """Token counts reported by the LLM provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class GenerationResult(BaseModel):
    """Text returned by one completion (or one regeneration)."""

    content: str = Field(..., description="Generated markdown")
    usage: Optional[TokenUsage] = Field(None, description="Provider token usage")


class GenerationOutcome(BaseModel):
    """A successful generation together with the caller's updated quota."""

    result: GenerationResult
    has_active_subscription: bool
    total_usage: Union[int, str] = Field(..., description="Count after this generation, or 'unlimited'")
    remaining_creations: Union[int, str] = Field(..., description="Free generations left, or 'unlimited'")

    @classmethod
    def unlimited(cls, result: GenerationResult) -> "GenerationOutcome":
        return cls(
            result=result,
            has_active_subscription=True,
            total_usage=UNLIMITED,
            remaining_creations=UNLIMITED,
        )

    def to_response(self) -> dict:
        return {
            "success": True,
            "content": self.result.content,
            "usage": self.result.usage.model_dump() if self.result.usage else None,
            "hasActiveSubscription": self.has_active_subscription,
            "totalUsage": self.total_usage,
            "remainingCreations": self.remaining_creations,
        }


class SermonPoint(BaseModel):
    """One numbered point of the SERMON POINTS section."""

    title: str = ""
    content: str = ""


class SermonSections(BaseModel):
    """
    A sermon document split into its canonical sections.

    Exists only while a regeneration request is being served; the markdown
    string is the record.
    """

    title: str = ""
    primary_scripture: str = ""
    introduction: str = ""
    biblical_context: str = ""
    exegetical_insights: str = ""
    points: list[SermonPoint] = Field(default_factory=list)
    application: str = ""
    conclusion: str = ""
    closing_prayer: str = ""

    def is_empty(self) -> bool:
        """True when no section (other than the title) was recognized."""
        return not any(
            getattr(self, name) for name in SECTION_ORDER if name != "title"
        )


# Canonical document order
SECTION_ORDER = (
    "title",
    "primary_scripture",
    "introduction",
    "biblical_context",
    "exegetical_insights",
    "points",
    "application",
    "conclusion",
    "closing_prayer",
)

SECTION_HEADINGS = {
    "primary_scripture": "PRIMARY SCRIPTURE",
    "introduction": "INTRODUCTION",
    "biblical_context": "BIBLICAL CONTEXT",
    "exegetical_insights": "EXEGETICAL INSIGHTS",
    "points": "SERMON POINTS",
    "application": "PRACTICAL APPLICATION",
    "conclusion": "CONCLUSION",
    "closing_prayer": "CLOSING PRAYER",
}
