"""
Section segmentation of linearized page text.

Paragraph boundaries are guessed from blank lines or a period followed by a
long whitespace run. A short first sentence becomes the paragraph title. When
no paragraph survives, the page falls back to fixed-size sentence chunks.
"""

from typing import List, Optional

from pdfwhisper.contexts.analysis.data_structures import Section
from pdfwhisper.contexts.analysis.settings import SegmentationRules
from pdfwhisper.utils.text_processing import split_paragraphs, split_sentences


def _paragraph_section(paragraph: str, index: int, rules: SegmentationRules) -> Section:
    sentences = split_sentences(paragraph)
    first_sentence = sentences[0].strip()

    if len(sentences) > 1 and rules.min_title_length < len(first_sentence) < rules.max_title_length:
        body = ". ".join(sentences[1:]).strip()
        return Section(title=first_sentence, text=body)

    return Section(title=f"Paragraph {index + 1}", text=paragraph)


def chunk_size_for(sentence_count: int, rules: SegmentationRules) -> int:
    """Sentences per fallback chunk: count // divisor, clamped to the configured bounds."""
    return max(rules.min_chunk_size, min(rules.max_chunk_size, sentence_count // rules.chunk_divisor))


def _sentence_chunks(text: str, rules: SegmentationRules) -> List[Section]:
    sentences = [s.strip() for s in split_sentences(text) if len(s.strip()) > rules.min_sentence_length]
    if not sentences:
        return []

    size = chunk_size_for(len(sentences), rules)
    return [
        Section(title=f"Section {number}", text=". ".join(sentences[start : start + size]) + ".")
        for number, start in enumerate(range(0, len(sentences), size), start=1)
    ]


def segment_page(text: str, rules: Optional[SegmentationRules] = None) -> List[Section]:
    """
    Split one page's text into titled sections.

    Args:
        text: Linearized page text
        rules: SegmentationRules (defaults used if None)

    Returns:
        Sections in page order. Paragraph titles are the paragraph's first
        sentence when it is short and more sentences follow, else "Paragraph N"
        (N counts surviving paragraphs). Fallback chunks are titled "Section N".

    Example:
        >>> segment_page("Market Overview. Revenue grew strongly in every region this year.")
        [Section(title='Market Overview', text='Revenue grew strongly in every region this year.')]
    """
    rules = rules or SegmentationRules()

    paragraphs = [
        p.strip() for p in split_paragraphs(text) if len(p.strip()) > rules.min_paragraph_length
    ]
    sections = [_paragraph_section(p, index, rules) for index, p in enumerate(paragraphs)]

    if sections:
        return sections
    return _sentence_chunks(text, rules)
