"""
Font-size heading classification.

PDFs carry no heading markup, so rendered glyph height is the signal: spans on
a page are clustered by rounded height, the largest clusters become H1, H2 and
H3 (every cluster past the second is H3), and text-shape filters drop cluster
members that read like prose.
"""

from typing import Dict, Iterable, List, Optional

from pdfwhisper.contexts.analysis.data_structures import HeadingLevel, OutlineItem
from pdfwhisper.contexts.analysis.settings import HeadingRules
from pdfwhisper.contexts.decoding.decoder import TextSpan
from pdfwhisper.utils.text_processing import round_half_up

# Rounded height -> span texts at that height, in page order (one page only)
FontSizeClusters = Dict[int, List[str]]


def cluster_by_font_size(spans: Iterable[TextSpan]) -> FontSizeClusters:
    """
    Group a page's span texts by rounded height.

    Blank spans and spans without a height are dropped; texts are trimmed.
    """
    clusters: FontSizeClusters = {}
    for span in spans:
        text = span.text.strip()
        if not text or not span.height:
            continue
        clusters.setdefault(round_half_up(span.height), []).append(text)
    return clusters


def is_heading_text(text: str, rules: HeadingRules) -> bool:
    """
    Check whether trimmed span text has the shape of a heading.

    Length strictly inside (min_length, max_length), first character an
    uppercase letter, and (when reject_periods) no period anywhere.
    """
    if not rules.min_length < len(text) < rules.max_length:
        return False
    if not text[0].isupper():
        return False
    if rules.reject_periods and "." in text:
        return False
    return True


def classify_page_headings(
    spans: Iterable[TextSpan],
    page_number: int,
    rules: Optional[HeadingRules] = None,
) -> List[OutlineItem]:
    """
    Heading candidates for one page, before cross-page deduplication.

    Args:
        spans: The page's spans in reading order
        page_number: 1-based page number stamped on each candidate
        rules: HeadingRules (defaults used if None)

    Returns:
        Candidates ordered by level (largest font first), then page order

    Example:
        >>> spans = [TextSpan("Introduction", 18, 1), TextSpan("This is body text.", 10, 1)]
        >>> classify_page_headings(spans, 1)
        [OutlineItem(level=<HeadingLevel.H1: 'H1'>, text='Introduction', page=1)]
    """
    rules = rules or HeadingRules()
    clusters = cluster_by_font_size(spans)
    largest_first = sorted(clusters, reverse=True)[: rules.max_levels]

    candidates = []
    for index, height in enumerate(largest_first):
        level = HeadingLevel.for_cluster_index(index)
        for text in clusters[height]:
            if is_heading_text(text, rules):
                candidates.append(OutlineItem(level=level, text=text, page=page_number))
    return candidates


def finalize_outline(candidates: Iterable[OutlineItem]) -> List[OutlineItem]:
    """
    Deduplicate by (text, page) keeping the first occurrence, then sort by page.

    The sort is stable, so items on the same page keep discovery order.
    """
    seen = set()
    unique = []
    for item in candidates:
        key = (item.text, item.page)
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return sorted(unique, key=lambda item: item.page)
