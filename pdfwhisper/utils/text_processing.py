"""
Text processing utilities for linearized PDF page text.

PDF text extraction loses document markup, so the helpers here rely on
punctuation and whitespace only.
"""

import math
import re
from typing import List

# Sentence terminators; a run like "?!" or "..." counts as one break
SENTENCE_BREAK = re.compile(r"[.!?]+")

# Blank line, or a period followed by a long whitespace run
PARAGRAPH_BREAK = re.compile(r"\n\s*\n|\.\s{3,}")


def split_sentences(text: str) -> List[str]:
    """
    Split text on sentence terminators.

    Fragments are returned untrimmed and may be empty; callers apply their own
    length gates.

    Example:
        >>> split_sentences("One. Two! Three")
        ['One', ' Two', ' Three']
    """
    return SENTENCE_BREAK.split(text)


def split_paragraphs(text: str) -> List[str]:
    """
    Split page text on paragraph-break proxies.

    Example:
        >>> split_paragraphs("First block.\\n\\nSecond block.")
        ['First block.', 'Second block.']
    """
    return PARAGRAPH_BREAK.split(text)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(2.5) == 2); font heights and
    rank scaling need 2.5 -> 3.
    """
    return math.floor(value + 0.5)


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
