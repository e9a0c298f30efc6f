"""
Decoding Context

Responsibilities:
- Defines the decoder boundary used by the analysis context
- Opens PDFs (pdfplumber/PyPDF2) and reports per-page text spans with glyph height
- Wraps already-extracted spans as in-memory documents

Owns: PDF byte access, span extraction, metadata title lookup
Never: Classifies headings or scores relevance
"""

from pdfwhisper.contexts.decoding.decoder import DocumentDecoder, DocumentSource, TextSpan
from pdfwhisper.contexts.decoding.in_memory import ExtractedSpansSource, InMemoryDocument
from pdfwhisper.contexts.decoding.pdfplumber_decoder import PdfPlumberDecoder, PdfPlumberSource

__all__ = [
    # Boundary types
    "TextSpan",
    "DocumentDecoder",
    "DocumentSource",
    # Implementations
    "ExtractedSpansSource",
    "InMemoryDocument",
    "PdfPlumberDecoder",
    "PdfPlumberSource",
]
