"""
Value types produced by the analysis pipeline.

All result types are frozen dataclasses: built once per analysis call and
handed to the presentation layer. to_dict() emits the camelCase JSON shape the
presentation layer downloads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class HeadingLevel(str, Enum):
    """Outline heading levels, ordered H1 (largest type) to H3."""

    H1 = "H1"
    H2 = "H2"
    H3 = "H3"

    @property
    def rank(self) -> int:
        """Numeric level (1 for H1) for ordering comparisons."""
        return int(self.value[1:])

    @classmethod
    def for_cluster_index(cls, index: int) -> "HeadingLevel":
        """Level for the index-th largest font-size cluster (0 = largest)."""
        if index == 0:
            return cls.H1
        if index == 1:
            return cls.H2
        return cls.H3


@dataclass(frozen=True)
class OutlineItem:
    """One heading candidate in a document outline."""

    level: HeadingLevel
    text: str
    page: int

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level.value, "text": self.text, "page": self.page}


@dataclass(frozen=True)
class PDFOutline:
    """
    Inferred outline of one document.

    Attributes:
        title: Metadata title, else filename without extension
        outline: Heading candidates, unique by (text, page), sorted by page
    """

    title: str
    outline: Tuple[OutlineItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "outline": [item.to_dict() for item in self.outline]}


@dataclass(frozen=True)
class Section:
    """A segmented piece of page text with a best-effort title."""

    title: str
    text: str


@dataclass(frozen=True)
class ExtractedSection:
    """
    A section whose relevance score cleared the section threshold.

    Attributes:
        document: Source filename
        page_number: 1-based page number
        section_title: Segmenter title or positional fallback
        importance_rank: Relevance score scaled to 0-10
    """

    document: str
    page_number: int
    section_title: str
    importance_rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": self.document,
            "pageNumber": self.page_number,
            "sectionTitle": self.section_title,
            "importanceRank": self.importance_rank,
        }


@dataclass(frozen=True)
class SubSectionAnalysis:
    """Refined excerpt: top relevant sentences of a qualifying section."""

    document: str
    refined_text: str
    page_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": self.document,
            "refinedText": self.refined_text,
            "pageNumber": self.page_number,
        }


@dataclass(frozen=True)
class AnalysisMetadata:
    """Inputs of a persona analysis run."""

    documents: Tuple[str, ...]
    persona: str
    job_to_be_done: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documents": list(self.documents),
            "persona": self.persona,
            "jobToBeDone": self.job_to_be_done,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PersonaAnalysis:
    """
    Result of one persona analysis run.

    Attributes:
        metadata: Documents, persona, job and timestamp
        extracted_sections: Sorted by importance_rank descending, capped
        sub_section_analysis: Sorted by excerpt relevance descending, capped
    """

    metadata: AnalysisMetadata
    extracted_sections: Tuple[ExtractedSection, ...] = ()
    sub_section_analysis: Tuple[SubSectionAnalysis, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "extractedSections": [s.to_dict() for s in self.extracted_sections],
            "subSectionAnalysis": [s.to_dict() for s in self.sub_section_analysis],
        }


@dataclass
class PageFindings:
    """
    Per-page output of the persona path, before pooling.

    excerpts pairs each SubSectionAnalysis with its best sentence score so the
    pooled list can be ordered by relevance.
    """

    sections: List[ExtractedSection] = field(default_factory=list)
    excerpts: List[Tuple[float, SubSectionAnalysis]] = field(default_factory=list)
