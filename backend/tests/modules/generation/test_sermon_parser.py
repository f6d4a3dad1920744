"""Tests for the sermon section parser and reconstructor."""

import re

import pytest

from modules.generation.models import SermonPoint, SermonSections
from modules.generation.sermon_parser import (
    LineKind,
    parse_points_block,
    parse_sermon_sections,
    reconstruct_markdown,
    replace_section,
    tokenize,
)
from tests.conftest import SAMPLE_SERMON


def normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class TestTokenize:
    def test_classifies_lines(self):
        kinds = [event.kind for event in tokenize("# T\n\n## INTRODUCTION\n### Point 1: A\ntext\n#### Aside")]
        assert kinds == [
            LineKind.TITLE,
            LineKind.BLANK,
            LineKind.SECTION,
            LineKind.POINT,
            LineKind.TEXT,
            LineKind.HEADING,
        ]

    def test_section_events_name_their_field(self):
        event = next(tokenize("## Practical Application"))
        assert event.section == "application"

    def test_roman_numeral_point(self):
        event = next(tokenize("### II. Grace Transforms"))
        assert event.kind == LineKind.POINT
        assert event.text == "Grace Transforms"

    def test_prayer_heading_must_stand_alone(self):
        assert next(tokenize("## PRAYER POINTS")).kind == LineKind.HEADING
        assert next(tokenize("## Closing Prayer:")).section == "closing_prayer"
        assert next(tokenize("## PRAYER")).section == "closing_prayer"

    def test_roman_numerals_are_case_sensitive(self):
        assert next(tokenize("### Civil.")).kind == LineKind.HEADING
        assert next(tokenize("### iv. Lowercase")).kind == LineKind.HEADING
        assert next(tokenize("### point 2: Still a point")).kind == LineKind.POINT


class TestParseSermonSections:
    def test_parses_every_section(self):
        sections = parse_sermon_sections(SAMPLE_SERMON)
        assert sections.title == "Walking in Grace"
        assert sections.primary_scripture == "Ephesians 2:8-9"
        assert sections.introduction == "Grace meets us where we are."
        assert sections.biblical_context == "Paul writes to a church in Ephesus."
        assert sections.exegetical_insights.startswith("The Greek word")
        assert sections.application == "Extend grace to someone this week."
        assert sections.conclusion == "Grace is the beginning and the end."
        assert sections.closing_prayer.endswith("Amen.")

    def test_parses_points(self):
        sections = parse_sermon_sections(SAMPLE_SERMON)
        assert sections.points == [
            SermonPoint(title="Grace Is a Gift", content="We cannot earn it."),
            SermonPoint(title="Grace Transforms", content="It changes how we live."),
        ]

    def test_missing_closing_prayer_is_empty(self):
        doc = SAMPLE_SERMON.split("## CLOSING PRAYER")[0]
        sections = parse_sermon_sections(doc)
        assert sections.closing_prayer == ""
        assert sections.conclusion == "Grace is the beginning and the end."

    def test_headings_are_case_insensitive(self):
        sections = parse_sermon_sections("# T\n## introduction:\nHello\n## 7. Conclusion\nBye")
        assert sections.introduction == "Hello"
        assert sections.conclusion == "Bye"

    def test_unrecognized_headings_leave_sections_empty(self):
        sections = parse_sermon_sections("# T\n## OPENING THOUGHTS\nSomething")
        assert sections.title == "T"
        assert sections.is_empty()

    def test_multiline_section_content(self):
        sections = parse_sermon_sections("## INTRODUCTION\nLine one\n\nLine two")
        assert sections.introduction == "Line one\nLine two"

    def test_only_first_title_is_kept(self):
        sections = parse_sermon_sections("# First\n# Second\n## INTRODUCTION\nHi\n# Third")
        assert sections.title == "First"

    def test_point_outside_points_section_is_ignored(self):
        sections = parse_sermon_sections("## INTRODUCTION\n### Point 1: Stray\nText")
        assert sections.points == []
        assert sections.introduction == "Text"

    def test_prayer_points_heading_stays_in_conclusion(self):
        sections = parse_sermon_sections("## CONCLUSION\nBye\n## PRAYER POINTS\nPray for the city")
        assert sections.closing_prayer == ""
        assert sections.conclusion == "Bye\nPray for the city"

    def test_word_heading_is_not_a_roman_point(self):
        sections = parse_sermon_sections("## SERMON POINTS\n### I. Grace\nA\n### Civil.\nB")
        assert sections.points == [SermonPoint(title="Grace", content="A\nB")]

    @pytest.mark.parametrize("value", [None, "", "   \n ", 42])
    def test_blank_or_non_string_input(self, value):
        assert parse_sermon_sections(value) is None


class TestReconstruct:
    def test_round_trip_preserves_content(self):
        sections = parse_sermon_sections(SAMPLE_SERMON)
        assert normalize(reconstruct_markdown(sections)) == normalize(SAMPLE_SERMON)

    def test_round_trip_is_stable(self):
        once = reconstruct_markdown(parse_sermon_sections(SAMPLE_SERMON))
        twice = reconstruct_markdown(parse_sermon_sections(once))
        assert once == twice

    def test_omits_empty_sections(self):
        doc = reconstruct_markdown(SermonSections(title="T", conclusion="End"))
        assert doc == "# T\n\n## CONCLUSION\nEnd"

    def test_canonical_order(self):
        doc = reconstruct_markdown(SermonSections(conclusion="C", introduction="I"))
        assert doc.index("INTRODUCTION") < doc.index("CONCLUSION")

    def test_renumbers_points(self):
        doc = reconstruct_markdown(SermonSections(points=[SermonPoint(title="A"), SermonPoint(title="B")]))
        assert "### Point 1: A" in doc
        assert "### Point 2: B" in doc

    def test_none(self):
        assert reconstruct_markdown(None) == ""


class TestParsePointsBlock:
    def test_with_heading(self):
        points = parse_points_block("## SERMON POINTS\n### Point 1: New\nFresh content")
        assert points == [SermonPoint(title="New", content="Fresh content")]

    def test_without_heading(self):
        points = parse_points_block("### Point 1: A\nOne\n### Point 2: B\nTwo")
        assert [point.title for point in points] == ["A", "B"]

    def test_no_points(self):
        assert parse_points_block("Just prose, no headings.") == []
        assert parse_points_block("") == []


class TestReplaceSection:
    def test_replaces_text_section(self):
        sections = parse_sermon_sections(SAMPLE_SERMON)
        updated = replace_section(sections, "introduction", "  A new opening.  ")
        assert updated.introduction == "A new opening."
        assert updated.conclusion == sections.conclusion
        assert sections.introduction == "Grace meets us where we are."

    def test_replaces_points(self):
        sections = parse_sermon_sections(SAMPLE_SERMON)
        updated = replace_section(sections, "points", [{"title": "Only", "content": "One"}])
        assert updated.points == [SermonPoint(title="Only", content="One")]
        assert len(sections.points) == 2

    def test_unknown_section(self):
        with pytest.raises(ValueError):
            replace_section(SermonSections(), "sermon_notes", "x")
