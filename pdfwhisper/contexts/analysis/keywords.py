"""
Keyword extraction for persona and job-to-be-done descriptions.

Deliberately simple: whitespace tokens, a closed English stop-word list and
non-word stripping. Frequency is preserved (duplicates kept); the relevance
scorer collapses to distinct keywords itself.
"""

import re
from typing import List

# Articles, conjunctions, prepositions, auxiliary and modal verbs
STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "is", "are", "was", "were", "be", "been", "being", "have",
        "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "may", "might", "must", "can", "shall",
    }
)

MIN_KEYWORD_LENGTH = 3

_NON_WORD = re.compile(r"[^\w]")


def extract_keywords(text: str) -> List[str]:
    """
    Tokenize free text into keyword strings.

    The caller lower-cases the text. Filtering order matters: the stop-word
    check runs on the raw token, before punctuation is stripped.

    Args:
        text: Persona or job description (lower-cased)

    Returns:
        Keywords in input order, duplicates included

    Example:
        >>> extract_keywords("analyze revenue trends, and revenue growth")
        ['analyze', 'revenue', 'trends', 'revenue', 'growth']
    """
    keywords = []
    for token in text.split():
        if len(token) < MIN_KEYWORD_LENGTH or token in STOP_WORDS:
            continue
        stripped = _NON_WORD.sub("", token)
        if len(stripped) >= MIN_KEYWORD_LENGTH:
            keywords.append(stripped)
    return keywords
