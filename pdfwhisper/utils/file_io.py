"""
File handling for the command-line tools.

Validates input files, wraps them as DocumentSources and writes JSON results.
Inputs are PDFs, or JSON files of already-extracted spans (see
InMemoryDocument.from_dict for the shape). Nothing is read until a source is
opened by the analysis.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pdfwhisper.contexts.decoding import DocumentSource, ExtractedSpansSource, PdfPlumberSource

SUPPORTED_SUFFIXES = (".pdf", ".json")

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]+')


def validate_input_files(
    paths: Sequence[Path],
    min_files: int = 1,
    max_files: Optional[int] = None,
) -> List[Path]:
    """
    Check file count and type before any analysis starts.

    Args:
        paths: Candidate input files
        min_files: Fewest files accepted
        max_files: Most files accepted (None = unlimited)

    Returns:
        The paths, unchanged, in input order

    Raises:
        ValueError: If a file has an unsupported suffix or the count is out of range
    """
    unsupported = [p.name for p in paths if p.suffix.lower() not in SUPPORTED_SUFFIXES]
    if unsupported:
        raise ValueError(
            f"Unsupported file type: {', '.join(unsupported)}. "
            f"Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    if len(paths) < min_files:
        raise ValueError(f"At least {min_files} file(s) required, got {len(paths)}")
    if max_files is not None and len(paths) > max_files:
        raise ValueError(f"Maximum {max_files} file(s) allowed, got {len(paths)}")

    return list(paths)


def build_sources(paths: Sequence[Path]) -> List[DocumentSource]:
    """DocumentSource per path: pdfplumber for PDFs, lazily parsed spans for JSON."""
    sources: List[DocumentSource] = []
    for path in paths:
        if path.suffix.lower() == ".json":
            sources.append(ExtractedSpansSource(path))
        else:
            sources.append(PdfPlumberSource(path))
    return sources


def safe_stem(title: str) -> str:
    """
    Filesystem-safe stem derived from a document title.

    Example:
        >>> safe_stem("Q3 Report: Revenue/Costs")
        'Q3_Report_Revenue_Costs'
    """
    stem = _UNSAFE_FILENAME_CHARS.sub("_", title).strip("._")
    return stem or "document"


def outline_output_paths(output_dir: Path, titles: Sequence[str]) -> List[Path]:
    """
    One <title>_outline.json path per title, unique within the batch.

    Repeated titles get a numeric suffix in input order, so no outline in a
    batch overwrites another.

    Example:
        >>> [p.name for p in outline_output_paths(Path("."), ["Report", "Report"])]
        ['Report_outline.json', 'Report_2_outline.json']
    """
    paths: List[Path] = []
    taken = set()
    for title in titles:
        stem = safe_stem(title)
        candidate, counter = stem, 1
        while candidate.lower() in taken:
            counter += 1
            candidate = f"{stem}_{counter}"
        taken.add(candidate.lower())
        paths.append(output_dir / f"{candidate}_outline.json")
    return paths


def write_json(data: Dict[str, Any], output_path: Path) -> Path:
    """Write a result dict as pretty-printed UTF-8 JSON, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return output_path
