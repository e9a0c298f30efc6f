"""
PDF processing utilities for turning pdfplumber words into text runs.

Helper functions:
    metadata_title: Document-level Title entry, if any.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
    merge_line_runs: Join same-size neighbouring words on a line into runs.
    words_to_runs: Full word list -> ordered text runs for one page.
"""

from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from PyPDF2 import PdfReader

from pdfwhisper.utils.text_processing import round_half_up

PARAGRAPH_RUN_TEXT = "\n\n"


def metadata_title(pdf: Union[Path, BinaryIO]) -> Optional[str]:
    """
    Read the document Title from the PDF info dictionary.

    Returns None when the entry is missing or blank. Parse errors propagate so
    the caller can decide whether a missing title matters.
    """
    reader = PdfReader(pdf if not isinstance(pdf, Path) else str(pdf))
    metadata = reader.metadata
    if metadata is None or not metadata.title:
        return None
    title = str(metadata.title).strip()
    return title or None


def cluster_by_y_tolerance(words: List[dict], tolerance: float = 3.0) -> List[List[dict]]:
    """
    Group words into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    Words within a line are ordered left to right.
    """
    if not words:
        return []

    sorted_words = sorted(words, key=lambda w: (w["top"], w["x0"]))

    lines = []
    current_line = [sorted_words[0]]
    current_y = sorted_words[0]["top"]

    for word in sorted_words[1:]:
        if abs(word["top"] - current_y) <= tolerance:
            current_line.append(word)
        else:
            lines.append(sorted(current_line, key=lambda w: w["x0"]))
            current_line = [word]
            current_y = word["top"]

    lines.append(sorted(current_line, key=lambda w: w["x0"]))
    return lines


def merge_line_runs(line: List[dict]) -> List[dict]:
    """
    Merge consecutive words sharing a rounded font size into text runs.

    Returns dicts with "text", "size", "top" and "bottom", one per run, in
    reading order. A size change starts a new run, which is what lets a bold
    run-in heading stay separate from the body text that follows it.
    """
    runs: List[dict] = []
    for word in line:
        size = float(word.get("size") or (word["bottom"] - word["top"]))
        if runs and round_half_up(runs[-1]["size"]) == round_half_up(size):
            runs[-1]["text"] += " " + word["text"]
            runs[-1]["bottom"] = max(runs[-1]["bottom"], word["bottom"])
        else:
            runs.append(
                {"text": word["text"], "size": size, "top": word["top"], "bottom": word["bottom"]}
            )
    return runs


def words_to_runs(
    words: List[dict],
    y_tolerance: float = 3.0,
    paragraph_gap_factor: float = 1.5,
) -> List[dict]:
    """
    Convert pdfplumber words (extracted with extra_attrs=["size"]) to text runs.

    A paragraph marker run ("\\n\\n", height 0) is inserted between lines whose
    vertical gap exceeds paragraph_gap_factor times the previous line's height.

    Args:
        words: Word dicts with text, x0, top, bottom and size keys
        y_tolerance: Max Y-distance (points) to group words as same line
        paragraph_gap_factor: Gap-to-line-height ratio that marks a paragraph break

    Returns:
        Ordered list of {"text", "height"} dicts
    """
    output: List[dict] = []
    previous_bottom = None
    previous_height = None

    for line in cluster_by_y_tolerance(words, tolerance=y_tolerance):
        runs = merge_line_runs(line)
        top = min(run["top"] for run in runs)
        bottom = max(run["bottom"] for run in runs)

        if previous_bottom is not None and previous_height:
            gap = top - previous_bottom
            if gap > previous_height * paragraph_gap_factor:
                output.append({"text": PARAGRAPH_RUN_TEXT, "height": 0.0})

        for run in runs:
            output.append({"text": run["text"], "height": run["size"]})

        previous_bottom = bottom
        previous_height = bottom - top

    return output
