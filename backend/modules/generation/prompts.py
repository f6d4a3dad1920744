"""
Prompt builders for every LLM call the API makes.

Each builder returns a PromptSpec: the system message, the user message,
and the completion budget. Sermon prompts ask for the heading structure
that sermon_parser understands, so generated sermons can later be
regenerated section by section.
"""

from dataclasses import dataclass
from typing import Optional

from .models import (
    SECTION_HEADINGS,
    OriginalInputs,
    RegenerableSection,
    SermonLength,
    SermonOptions,
    SermonSections,
)


@dataclass(frozen=True)
class PromptSpec:
    system: str
    prompt: str
    max_tokens: int


SERMON_MAX_TOKENS = {
    SermonLength.SHORT: 800,
    SermonLength.MEDIUM: 1200,
    SermonLength.LONG: 1800,
}
LENGTH_DESCRIPTIONS = {
    SermonLength.SHORT: "10-12 minute sermon",
    SermonLength.MEDIUM: "15-18 minute sermon",
    SermonLength.LONG: "20-25 minute sermon",
}
STUDY_MAX_TOKENS = 1500
OUTLINE_MAX_TOKENS = 1500
REWRITE_MAX_TOKENS = 2000
SECTION_MAX_TOKENS = 1000
POINTS_MAX_TOKENS = 1400

PASTOR_SYSTEM = (
    "You are an experienced, caring pastor. Your sermons connect Biblical truth "
    "with everyday life in warm, plain language, balancing compassion with "
    "bold truth. Avoid unexplained theological jargon."
)

STUDY_SYSTEM = (
    "You are a skilled Bible study leader. Your outlines are interactive and "
    "discussion-heavy, connect Scripture to modern life, and end with practical "
    "takeaways for the week."
)

EDITOR_SYSTEM = (
    "You are a skilled editor who helps pastors refine their sermons and Bible "
    "studies. Keep every Biblical reference and the core message intact while "
    "improving clarity, flow and connection with the audience, in the author's "
    "own voice."
)

# Named rewrite styles; any other style string is passed through as the goal
REWRITE_STYLES = {
    "more engaging": (
        "Make this content more engaging and relatable while keeping its spiritual "
        "depth. Add stories, questions or examples that draw readers in."
    ),
    "more conversational": (
        "Rewrite this in a warm, conversational tone, as if speaking directly to "
        "someone you care about."
    ),
    "more practical": (
        "Focus on practical applications and concrete ways to live out these "
        "Biblical principles."
    ),
    "more encouraging": "Emphasize hope, encouragement and God's love throughout.",
    "simpler language": (
        "Simplify the language and concepts while keeping the spiritual message, "
        "so it is accessible to every audience."
    ),
}

SERMON_STRUCTURE = "\n".join(
    ["Format the sermon in markdown with exactly this structure:", "# <Sermon title>"]
    + [f"## {heading}" for heading in SECTION_HEADINGS.values()]
    + ["Under SERMON POINTS, write 2-4 points headed '### Point N: <title>'."]
)


def _describe_options(options: SermonOptions) -> list[str]:
    lines = []
    if options.audience:
        lines.append(f"- Audience: {options.audience.value}")
    if options.teaching_style:
        lines.append(f"- Teaching style: {options.teaching_style.value}")
    if options.cultural_context:
        lines.append(f"- Cultural context: {options.cultural_context.value}")
    if options.tone:
        lines.append(f"- Tone: {options.tone.value}")
    return lines


def sermon_prompt(
    topic: str,
    options: SermonOptions,
    verse: Optional[str] = None,
    note: str = "",
) -> PromptSpec:
    """Prompt for a complete sermon."""
    length = options.length or SermonLength.MEDIUM
    details = [f"- Topic: {topic}"]
    details.append(f"- Scripture: {verse}" if verse else "- Scripture: choose fitting passages")
    details.append(f"- Target length: {LENGTH_DESCRIPTIONS[length]}")
    details.extend(_describe_options(options))

    parts = ["Write a sermon.", "", "SERMON DETAILS:", *details, "", SERMON_STRUCTURE]
    if note:
        parts.extend(["", f"Additional guidance: {note}"])

    return PromptSpec(PASTOR_SYSTEM, "\n".join(parts), SERMON_MAX_TOKENS[length])


def study_prompt(topic: str, audience: str = "adults", duration: str = "60 minutes") -> PromptSpec:
    """Prompt for a Bible-study outline."""
    prompt = "\n".join([
        "Create a Bible study outline.",
        "",
        f"Topic: {topic}",
        f"Target audience: {audience}",
        f"Duration: {duration}",
        "",
        "Include: welcome and opening prayer, scripture exploration with key verses "
        "and context, 5-6 discussion questions, practical application, personal "
        "reflection, a weekly challenge, and a closing prayer.",
    ])
    return PromptSpec(STUDY_SYSTEM, prompt, STUDY_MAX_TOKENS)


def outline_prompt(topic: str, audience: str = "adults", duration: str = "45 minutes") -> PromptSpec:
    """Prompt for a timed, discussion-led Bible-study outline."""
    audience = audience or "adults"
    duration = duration or "45 minutes"
    prompt = "\n".join([
        "Create a comprehensive Bible study outline.",
        "",
        "STUDY DETAILS:",
        f"Topic: {topic}",
        f"Target audience: {audience}",
        f"Duration: {duration}",
        "",
        "Structure the outline with these timed sections:",
        f"1. Welcome & Opening (5 minutes): check-in, opening prayer, an icebreaker about {topic}",
        "2. Scripture Exploration (15-20 minutes): 3-4 key verses, background in simple terms, key themes",
        "3. Discussion Questions (15-20 minutes): 5-6 questions connecting Scripture to real life",
        "4. Practical Application (10 minutes): 3 takeaways and ways to apply them this week",
        "5. Personal Reflection (5 minutes): reflection questions and journaling prompts",
        "6. Weekly Challenge (2 minutes): one action step and an accountability suggestion",
        "7. Closing (3-5 minutes): prayer requests, group prayer, a preview of next week",
        "",
        f"Make the outline warm, engaging and practical for {audience}, and cite specific Bible verses.",
    ])
    return PromptSpec(STUDY_SYSTEM, prompt, OUTLINE_MAX_TOKENS)


def rewrite_prompt(content: str, style: str = "more engaging", instructions: str = "") -> PromptSpec:
    """
    Prompt for restyling a finished sermon or study.

    ``style`` is looked up in REWRITE_STYLES; an unknown style is used
    verbatim as the rewrite goal.
    """
    style = style or "more engaging"
    goal = REWRITE_STYLES.get(style.lower(), style)
    parts = [f"Rewrite the following content with this goal: {goal}"]
    if instructions:
        parts.extend(["", f"Additional instructions: {instructions}"])
    parts.extend([
        "",
        "ORIGINAL CONTENT:",
        content,
        "",
        "Keep all Biblical references and core messages. Keep a similar length and "
        "structure, and make it sound natural and human.",
    ])
    return PromptSpec(EDITOR_SYSTEM, "\n".join(parts), REWRITE_MAX_TOKENS)


def _sermon_context(sections: SermonSections) -> str:
    lines = []
    if sections.title:
        lines.append(f"Sermon title: {sections.title}")
    if sections.primary_scripture:
        lines.append(f"Primary scripture: {sections.primary_scripture}")
    if sections.points:
        lines.append("Points: " + "; ".join(point.title for point in sections.points if point.title))
    return "\n".join(lines)


def section_prompt(
    section: RegenerableSection,
    sections: SermonSections,
    inputs: OriginalInputs,
    note: str = "",
) -> PromptSpec:
    """
    Prompt for rewriting one section of an existing sermon.

    ``illustrations`` and ``points`` both rewrite the SERMON POINTS block;
    the reply must be a points block that parse_points_block understands.
    """
    context = _sermon_context(sections)
    topic = inputs.topic or sections.title

    if section in (RegenerableSection.POINTS, RegenerableSection.ILLUSTRATIONS):
        focus = (
            "Keep the point titles and teaching, but replace every illustration with "
            "fresh, relatable stories and examples."
            if section == RegenerableSection.ILLUSTRATIONS
            else "Write new sermon points that develop the same scripture and topic."
        )
        instructions = [
            focus,
            "Reply with only this markdown block:",
            f"## {SECTION_HEADINGS['points']}",
            "### Point 1: <title>",
            "<content>",
            "(2-4 points)",
        ]
        current = "\n\n".join(
            f"### {point.title}\n{point.content}" for point in sections.points
        )
        max_tokens = POINTS_MAX_TOKENS
    else:
        field = section.value
        instructions = [
            f"Rewrite the {SECTION_HEADINGS[field]} section of this sermon.",
            "Reply with only the new section text, without a heading.",
        ]
        current = getattr(sections, field)
        max_tokens = SECTION_MAX_TOKENS

    parts = [*instructions, "", context, f"Topic: {topic}"]
    parts.extend(_describe_options(inputs))
    parts.extend(["", "Current version:", current])
    if note:
        parts.extend(["", f"Additional guidance: {note}"])

    return PromptSpec(PASTOR_SYSTEM, "\n".join(parts), max_tokens)
