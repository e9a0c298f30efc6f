"""Unit tests for pdfplumber word-to-run conversion."""

import pytest

from pdfwhisper.utils.pdf_processing import (
    PARAGRAPH_RUN_TEXT,
    cluster_by_y_tolerance,
    merge_line_runs,
    words_to_runs,
)


def word(text, x0, top, size=10.0):
    return {"text": text, "x0": x0, "top": top, "bottom": top + size, "size": size}


@pytest.mark.unit
def test_cluster_by_y_tolerance_groups_lines():
    words = [
        word("world", 60, 101),
        word("Hello", 10, 100),
        word("Next", 10, 120),
    ]

    lines = cluster_by_y_tolerance(words)

    assert [[w["text"] for w in line] for line in lines] == [["Hello", "world"], ["Next"]]


@pytest.mark.unit
def test_cluster_by_y_tolerance_empty():
    assert cluster_by_y_tolerance([]) == []


@pytest.mark.unit
def test_merge_line_runs_splits_on_size_change():
    line = [
        word("Overview", 10, 100, size=14.0),
        word("Revenue", 80, 101, size=10.2),
        word("grew", 130, 101, size=9.8),
    ]

    runs = merge_line_runs(line)

    assert [(r["text"], r["size"]) for r in runs] == [("Overview", 14.0), ("Revenue grew", 10.2)]


@pytest.mark.unit
def test_merge_line_runs_falls_back_to_box_height():
    line = [{"text": "Boxed", "x0": 0, "top": 50.0, "bottom": 62.0}]
    assert merge_line_runs(line)[0]["size"] == 12.0


@pytest.mark.unit
def test_words_to_runs_inserts_paragraph_marker():
    words = [
        word("Title", 10, 50, size=18.0),
        word("First", 10, 72),
        word("line", 50, 72),
        word("Second", 10, 84),
        word("Far", 10, 130),
    ]

    runs = words_to_runs(words)

    assert runs == [
        {"text": "Title", "height": 18.0},
        {"text": "First line", "height": 10.0},
        {"text": "Second", "height": 10.0},
        {"text": PARAGRAPH_RUN_TEXT, "height": 0.0},
        {"text": "Far", "height": 10.0},
    ]


@pytest.mark.unit
def test_words_to_runs_empty_page():
    assert words_to_runs([]) == []
