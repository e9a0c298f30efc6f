"""Unit tests for CLI file handling helpers."""

import json
from pathlib import Path

import pytest

from pdfwhisper.contexts.decoding import ExtractedSpansSource, PdfPlumberSource
from pdfwhisper.utils.file_io import (
    build_sources,
    outline_output_paths,
    safe_stem,
    validate_input_files,
    write_json,
)


@pytest.mark.unit
def test_validate_input_files_accepts_pdf_and_json():
    paths = [Path("a.pdf"), Path("b.PDF"), Path("c.json")]
    assert validate_input_files(paths, min_files=3, max_files=10) == paths


@pytest.mark.unit
def test_validate_input_files_rejects_other_types():
    with pytest.raises(ValueError, match="Unsupported file type: notes.txt"):
        validate_input_files([Path("a.pdf"), Path("notes.txt")])


@pytest.mark.unit
def test_validate_input_files_count_bounds():
    with pytest.raises(ValueError, match="At least 3"):
        validate_input_files([Path("a.pdf"), Path("b.pdf")], min_files=3)

    with pytest.raises(ValueError, match="Maximum 10"):
        validate_input_files([Path(f"{i}.pdf") for i in range(11)], min_files=3, max_files=10)


@pytest.mark.unit
def test_build_sources(tmp_path):
    extracted = tmp_path / "spans.json"
    extracted.write_text(json.dumps({"name": "spans.pdf", "pages": []}), encoding="utf-8")

    sources = build_sources([tmp_path / "report.pdf", extracted])

    assert isinstance(sources[0], PdfPlumberSource)
    assert sources[0].name == "report.pdf"
    assert isinstance(sources[1], ExtractedSpansSource)
    assert sources[1].name == "spans.json"


@pytest.mark.unit
def test_build_sources_does_not_read_json(tmp_path):
    malformed = tmp_path / "broken.json"
    malformed.write_text("{not json", encoding="utf-8")

    sources = build_sources([malformed])

    assert sources[0].name == "broken.json"


@pytest.mark.unit
def test_outline_output_paths_unique_for_repeated_titles(tmp_path):
    paths = outline_output_paths(tmp_path, ["Untitled", "Untitled", "Report", "untitled"])

    assert [p.name for p in paths] == [
        "Untitled_outline.json",
        "Untitled_2_outline.json",
        "Report_outline.json",
        "untitled_3_outline.json",
    ]
    assert all(p.parent == tmp_path for p in paths)


@pytest.mark.unit
def test_outline_output_paths_suffix_skips_taken_names(tmp_path):
    paths = outline_output_paths(tmp_path, ["Report", "Report_2", "Report"])

    assert [p.name for p in paths] == [
        "Report_outline.json",
        "Report_2_outline.json",
        "Report_3_outline.json",
    ]


@pytest.mark.unit
def test_same_title_outlines_written_to_separate_files(tmp_path):
    outlines = [{"title": "Untitled", "outline": []}, {"title": "Untitled", "outline": [1]}]

    for data, path in zip(outlines, outline_output_paths(tmp_path, ["Untitled", "Untitled"])):
        write_json(data, path)

    written = sorted(p.name for p in tmp_path.iterdir())
    assert written == ["Untitled_2_outline.json", "Untitled_outline.json"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, stem",
    [
        ("Q3 Report: Revenue/Costs", "Q3_Report_Revenue_Costs"),
        ("annual-review", "annual-review"),
        ("...", "document"),
    ],
)
def test_safe_stem(title, stem):
    assert safe_stem(title) == stem


@pytest.mark.unit
def test_write_json_creates_parents(tmp_path):
    output = write_json({"title": "Résumé"}, tmp_path / "nested" / "out.json")

    assert output.exists()
    assert json.loads(output.read_text(encoding="utf-8")) == {"title": "Résumé"}
    assert "Résumé" in output.read_text(encoding="utf-8")
