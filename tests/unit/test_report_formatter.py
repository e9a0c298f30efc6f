"""Unit tests for console report tables."""

import pytest

from pdfwhisper.utils.report_formatter import Column, TableFormatter


@pytest.mark.unit
def test_column_formatting():
    col = Column("Rank", 6, ">")
    assert col.format_header() == "  Rank"
    assert col.format_value(7) == "     7"
    assert Column("Section", 10).format_value("A very long section title") == "A very ..."


@pytest.mark.unit
def test_table_render():
    table = TableFormatter([Column("Doc", 8), Column("Rank", 4, ">")], total_width=20)
    table.add_section_header("RESULTS").add_table_header()
    table.add_row(["a.pdf", 9]).add_summary("1 section(s)")

    assert table.render().splitlines() == [
        "=" * 20,
        "RESULTS",
        "=" * 20,
        "Doc      Rank",
        "-" * 20,
        "a.pdf       9",
        "",
        "1 section(s)",
    ]


@pytest.mark.unit
def test_add_row_rejects_wrong_value_count():
    table = TableFormatter([Column("Doc", 8), Column("Rank", 4)])
    with pytest.raises(ValueError, match="Expected 2 values, got 1"):
        table.add_row(["a.pdf"])
