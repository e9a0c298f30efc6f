"""Unit tests for font-size heading classification."""

import pytest

from pdfwhisper.contexts.analysis.data_structures import HeadingLevel, OutlineItem
from pdfwhisper.contexts.analysis.headings import (
    classify_page_headings,
    cluster_by_font_size,
    finalize_outline,
    is_heading_text,
)
from pdfwhisper.contexts.analysis.settings import HeadingRules
from pdfwhisper.contexts.decoding.decoder import TextSpan


@pytest.mark.unit
def test_single_heading_over_body_text():
    """Large title becomes H1; body text with a period is excluded."""
    spans = [TextSpan("Introduction", 18, 1), TextSpan("This is body text.", 10, 1)]

    result = classify_page_headings(spans, 1)

    assert result == [OutlineItem(level=HeadingLevel.H1, text="Introduction", page=1)]
    assert result[0].to_dict() == {"level": "H1", "text": "Introduction", "page": 1}


@pytest.mark.unit
def test_levels_follow_font_size_order():
    spans = [
        TextSpan("Subsection Detail", 12, 2),
        TextSpan("Annual Report", 24, 2),
        TextSpan("Section Heading", 14, 2),
        TextSpan("Chapter One", 18, 2),
        TextSpan("Running Footer", 9, 2),
    ]

    result = classify_page_headings(spans, 2)

    assert [(item.level, item.text) for item in result] == [
        (HeadingLevel.H1, "Annual Report"),
        (HeadingLevel.H2, "Chapter One"),
        (HeadingLevel.H3, "Section Heading"),
        (HeadingLevel.H3, "Subsection Detail"),
    ]
    assert all(item.page == 2 for item in result)


@pytest.mark.unit
def test_max_levels_limits_clusters():
    spans = [TextSpan("Alpha Title", 20, 1), TextSpan("Beta Title", 16, 1), TextSpan("Gamma Title", 12, 1)]

    result = classify_page_headings(spans, 1, HeadingRules(max_levels=2))

    assert [item.text for item in result] == ["Alpha Title", "Beta Title"]


@pytest.mark.unit
def test_cluster_by_font_size_rounds_and_skips_blanks():
    spans = [
        TextSpan("  Heading  ", 17.6, 1),
        TextSpan("Another", 18.4, 1),
        TextSpan("   ", 18, 1),
        TextSpan("Zero height", 0.0, 1),
        TextSpan("Half", 12.5, 1),
    ]

    clusters = cluster_by_font_size(spans)

    assert clusters == {18: ["Heading", "Another"], 13: ["Half"]}


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("Introduction", True),
        ("Methods and Materials", True),
        ("lowercase start", False),
        ("1 Numbered", False),
        ("Abc", False),
        ("Abcd", True),
        ("A" * 99, True),
        ("A" * 100, False),
        ("Fig. 1 Overview", False),
    ],
)
def test_is_heading_text_default_rules(text, expected):
    assert is_heading_text(text, HeadingRules()) is expected


@pytest.mark.unit
def test_periods_allowed_when_rule_disabled():
    rules = HeadingRules(reject_periods=False)
    assert is_heading_text("Fig. 1 Overview", rules)


@pytest.mark.unit
def test_finalize_outline_dedupes_and_sorts_by_page():
    candidates = [
        OutlineItem(HeadingLevel.H1, "Results", 3),
        OutlineItem(HeadingLevel.H2, "Overview", 1),
        OutlineItem(HeadingLevel.H3, "Results", 3),
        OutlineItem(HeadingLevel.H1, "Results", 1),
        OutlineItem(HeadingLevel.H2, "Scope", 1),
    ]

    result = finalize_outline(candidates)

    assert result == [
        OutlineItem(HeadingLevel.H2, "Overview", 1),
        OutlineItem(HeadingLevel.H1, "Results", 1),
        OutlineItem(HeadingLevel.H2, "Scope", 1),
        OutlineItem(HeadingLevel.H1, "Results", 3),
    ]


@pytest.mark.unit
def test_heading_level_helpers():
    assert HeadingLevel.for_cluster_index(0) is HeadingLevel.H1
    assert HeadingLevel.for_cluster_index(1) is HeadingLevel.H2
    assert HeadingLevel.for_cluster_index(5) is HeadingLevel.H3
    assert [level.rank for level in HeadingLevel] == [1, 2, 3]
