"""
PDF Whisper Connect - outline extraction and persona-driven section ranking

Turns per-page text spans extracted from PDFs into two artifacts: a heading
outline (H1/H2/H3 with page numbers) and a ranked selection of sections and
excerpts relevant to a persona and their job-to-be-done.

Architecture:
- Decoding Context: PDF decoder boundary (text spans, page access, metadata)
- Analysis Context: Heading classification, relevance scoring, segmentation
  and the aggregation pipeline behind the two entry points
"""

__version__ = "0.1.0"
