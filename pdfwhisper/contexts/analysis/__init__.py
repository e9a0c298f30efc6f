"""
Analysis Context

Responsibilities:
- Classifies heading candidates from font-size clusters
- Extracts keywords and scores text relevance for a persona and job-to-be-done
- Segments page text into titled sections
- Aggregates, deduplicates, sorts and caps results across pages and documents

Owns: Heuristic thresholds (settings/presets), result structures, the two entry points
Never: Reads PDF bytes or renders results
"""

from pdfwhisper.contexts.analysis.data_structures import (
    AnalysisMetadata,
    ExtractedSection,
    HeadingLevel,
    OutlineItem,
    PDFOutline,
    PersonaAnalysis,
    Section,
    SubSectionAnalysis,
)
from pdfwhisper.contexts.analysis.exceptions import (
    AnalysisConfigError,
    AnalysisError,
    AnalysisInProgressError,
    DocumentAnalysisError,
    PDFProcessingError,
)
from pdfwhisper.contexts.analysis.pipeline import (
    analyze_for_persona,
    extract_outline,
    extract_outlines,
)
from pdfwhisper.contexts.analysis.processing_state import ProcessingState
from pdfwhisper.contexts.analysis.relevance import RelevanceScorer, score_relevance
from pdfwhisper.contexts.analysis.settings import AnalysisSettings, load_settings

__all__ = [
    # Entry points
    "extract_outline",
    "extract_outlines",
    "analyze_for_persona",
    "ProcessingState",
    # Configuration
    "AnalysisSettings",
    "load_settings",
    # Scoring
    "RelevanceScorer",
    "score_relevance",
    # Result structures
    "HeadingLevel",
    "OutlineItem",
    "PDFOutline",
    "Section",
    "ExtractedSection",
    "SubSectionAnalysis",
    "AnalysisMetadata",
    "PersonaAnalysis",
    # Errors
    "AnalysisError",
    "AnalysisConfigError",
    "AnalysisInProgressError",
    "DocumentAnalysisError",
    "PDFProcessingError",
]
