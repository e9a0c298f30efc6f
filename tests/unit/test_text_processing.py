"""Unit tests for text splitting and rounding helpers."""

import pytest

from pdfwhisper.utils.text_processing import (
    round_half_up,
    split_paragraphs,
    split_sentences,
    truncate_display,
)


@pytest.mark.unit
def test_split_sentences_on_terminator_runs():
    assert split_sentences("One. Two! Three") == ["One", " Two", " Three"]
    assert split_sentences("Wait?! Really...") == ["Wait", " Really", ""]


@pytest.mark.unit
def test_split_paragraphs_on_blank_lines():
    assert split_paragraphs("First block.\n\nSecond block.") == ["First block.", "Second block."]
    assert split_paragraphs("First block\n   \n\nSecond") == ["First block", "Second"]


@pytest.mark.unit
def test_split_paragraphs_on_period_and_long_whitespace():
    assert split_paragraphs("End of one.    Start of two") == ["End of one", "Start of two"]
    assert split_paragraphs("Short gap.  Same paragraph") == ["Short gap.  Same paragraph"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (17.6, 18), (0.0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.unit
def test_truncate_display():
    assert truncate_display("short", 10) == "short"
    assert truncate_display("this is a very long string", 10) == "this is..."
