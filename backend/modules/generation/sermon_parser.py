"""
Sermon section parser and reconstructor.

Generated sermons are markdown documents with a fixed heading structure:

    # Title
    ## PRIMARY SCRIPTURE
    ## INTRODUCTION
    ## BIBLICAL CONTEXT
    ## EXEGETICAL INSIGHTS
    ## SERMON POINTS
    ### Point 1: ...
    ## PRACTICAL APPLICATION
    ## CONCLUSION
    ## CLOSING PRAYER

``parse_sermon_sections`` splits such a document into SermonSections so a
single section can be regenerated, and ``reconstruct_markdown`` puts it back
together in canonical order. Parsing is lenient: a missing or misspelled
heading leaves its section empty instead of failing.

The parser is a small state machine. ``tokenize`` turns each line into a
tagged LineEvent; ``_SectionMachine`` consumes events and decides what they
mean in its current state.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

from .models import SECTION_HEADINGS, SECTION_ORDER, SermonPoint, SermonSections


class LineKind(str, Enum):
    """What a single markdown line looks like, before context is applied."""

    TITLE = "title"      # "# Heading"
    SECTION = "section"  # "## KNOWN SECTION"
    POINT = "point"      # "### Point N: ..." or "### IV. ..."
    HEADING = "heading"  # Any other heading
    TEXT = "text"
    BLANK = "blank"


@dataclass(frozen=True)
class LineEvent:
    kind: LineKind
    text: str
    section: Optional[str] = None  # SermonSections field for SECTION events


class _State(str, Enum):
    PREAMBLE = "preamble"  # Before the first section heading
    SECTION = "section"    # Inside a plain text section
    POINTS = "points"      # Inside SERMON POINTS, before the first point
    POINT = "point"        # Inside a single point


# Optional "1." numbering and trailing colon are tolerated on section headings.
# PRAYER must end the heading so "## PRAYER POINTS" stays inside the sermon body.
_SECTION_PATTERNS: tuple[tuple[str, re.Pattern], ...] = tuple(
    (field, re.compile(rf"^##\s+(?:\d+[.)]\s*)?(?:{pattern})\b\s*:?\s*", re.IGNORECASE))
    for field, pattern in (
        ("primary_scripture", r"(?:PRIMARY\s+)?SCRIPTURES?"),
        ("introduction", r"INTRODUCTION"),
        ("biblical_context", r"BIBLICAL\s+CONTEXT"),
        ("exegetical_insights", r"EXEGETICAL\s+INSIGHTS?"),
        ("points", r"(?:SERMON|MAIN)\s+POINTS?"),
        ("application", r"(?:PRACTICAL\s+)?APPLICATIONS?"),
        ("conclusion", r"CONCLUSION"),
        ("closing_prayer", r"(?:CLOSING\s+)?PRAYER(?=\s*:?\s*$)"),
    )
)
# Roman numerals are matched case-sensitively so "### Civil." is not a point
_POINT = re.compile(r"^###\s+(?:(?i:Point)\s+\d+\s*[:.)\-]?|[IVXLC]+[.)])\s*(?P<title>.*)$")
_TITLE = re.compile(r"^#\s+(?P<title>.+)$")
_HEADING = re.compile(r"^#{1,6}\s+")


def tokenize(markdown: str) -> Iterator[LineEvent]:
    """Classify each line of a markdown document."""
    for raw in markdown.splitlines():
        line = raw.strip()
        if not line:
            yield LineEvent(LineKind.BLANK, "")
            continue

        match = _TITLE.match(line)
        if match:
            yield LineEvent(LineKind.TITLE, match.group("title").strip())
            continue

        for field, pattern in _SECTION_PATTERNS:
            if pattern.match(line):
                yield LineEvent(LineKind.SECTION, line, section=field)
                break
        else:
            match = _POINT.match(line)
            if match:
                yield LineEvent(LineKind.POINT, match.group("title").strip())
            elif _HEADING.match(line):
                yield LineEvent(LineKind.HEADING, line)
            else:
                yield LineEvent(LineKind.TEXT, line)


class _SectionMachine:
    """Consumes LineEvents and fills a SermonSections."""

    def __init__(self) -> None:
        self.sections = SermonSections()
        self.state = _State.PREAMBLE
        self.current: Optional[str] = None
        self.point_title = ""
        self.buffer: list[str] = []

    def feed(self, event: LineEvent) -> None:
        if event.kind == LineKind.TITLE:
            if self.state == _State.PREAMBLE and not self.sections.title:
                self.sections.title = event.text
        elif event.kind == LineKind.SECTION:
            self._flush()
            self.current = event.section
            self.state = _State.POINTS if event.section == "points" else _State.SECTION
        elif event.kind == LineKind.POINT:
            if self.state in (_State.POINTS, _State.POINT):
                self._flush()
                self.point_title = event.text
                self.state = _State.POINT
        elif event.kind == LineKind.TEXT:
            if self.state != _State.PREAMBLE:
                self.buffer.append(event.text)
        # BLANK and unrecognized HEADING lines carry no content

    def finish(self) -> SermonSections:
        self._flush()
        return self.sections

    def _flush(self) -> None:
        text = "\n".join(self.buffer).strip()
        self.buffer = []

        if self.state == _State.POINT:
            self.sections.points.append(SermonPoint(title=self.point_title, content=text))
            self.point_title = ""
        elif self.state == _State.SECTION and text and self.current:
            # A repeated heading extends its section rather than replacing it
            existing = getattr(self.sections, self.current)
            setattr(self.sections, self.current, f"{existing}\n{text}" if existing else text)
        # Text between "## SERMON POINTS" and the first point is dropped


def parse_sermon_sections(markdown: Any) -> Optional[SermonSections]:
    """
    Split a sermon document into its sections.

    Returns:
        SermonSections (possibly with every section empty), or None for
        non-string or blank input
    """
    if not isinstance(markdown, str) or not markdown.strip():
        return None

    machine = _SectionMachine()
    for event in tokenize(markdown):
        machine.feed(event)
    return machine.finish()


def parse_points_block(markdown: str) -> list[SermonPoint]:
    """
    Parse a standalone SERMON POINTS block, with or without its heading.

    Used for regenerated points, where the model may omit the ``##`` line.
    """
    if not isinstance(markdown, str) or not markdown.strip():
        return []

    events = list(tokenize(markdown))
    if not any(event.kind == LineKind.SECTION for event in events):
        events.insert(0, LineEvent(LineKind.SECTION, "", section="points"))

    machine = _SectionMachine()
    for event in events:
        machine.feed(event)
    return machine.finish().points


def reconstruct_markdown(sections: Optional[SermonSections]) -> str:
    """
    Render sections back to markdown in canonical order.

    Empty sections are omitted and points are renumbered from 1.
    """
    if sections is None:
        return ""

    blocks: list[str] = []
    for field in SECTION_ORDER:
        if field == "title":
            if sections.title:
                blocks.append(f"# {sections.title}")
        elif field == "points":
            if sections.points:
                blocks.append(f"## {SECTION_HEADINGS['points']}")
                for number, point in enumerate(sections.points, start=1):
                    heading = f"### Point {number}: {point.title}".rstrip()
                    blocks.append(f"{heading}\n{point.content}" if point.content else heading)
        else:
            text = getattr(sections, field)
            if text:
                blocks.append(f"## {SECTION_HEADINGS[field]}\n{text}")

    return "\n\n".join(blocks).strip()


def replace_section(sections: SermonSections, name: str, value: Any) -> SermonSections:
    """
    Return a copy of ``sections`` with one section replaced.

    Raises:
        ValueError: If ``name`` is not a section
    """
    if name not in SECTION_ORDER:
        raise ValueError(f"Unknown sermon section: {name}")

    if name == "points":
        value = [SermonPoint.model_validate(point) for point in value]
    else:
        value = str(value).strip()
    return sections.model_copy(update={name: value}, deep=True)
