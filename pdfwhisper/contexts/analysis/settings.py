"""
Analysis Settings and Preset Resolution

Every heuristic threshold used by the analysis pipeline (page caps, heading
length band, score cutoffs, result caps, scoring weights) is a named field of
the dataclasses below. Presets in analysis_presets.yaml override the defaults;
callers may override individual fields on top.

Examples:
    # Default preset (ANALYSIS_PRESET env variable, else "enhanced")
    >>> settings = load_settings()

    # Named preset with a dotted override
    >>> settings = load_settings("basic", overrides=["ranking.max_sections=5"])
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from pdfwhisper.contexts.analysis.exceptions import AnalysisConfigError

load_dotenv()
DEFAULT_PRESETS_PATH = Path(__file__).parent / "analysis_presets.yaml"
ANALYSIS_PRESETS_PATH = Path(os.getenv("ANALYSIS_PRESETS_PATH", str(DEFAULT_PRESETS_PATH)))
DEFAULT_PRESET = os.getenv("ANALYSIS_PRESET", "enhanced")


@dataclass
class HeadingRules:
    """
    Font-size clustering rules for heading detection.

    Attributes:
        max_levels: Number of largest font-size clusters promoted to headings
        min_length: Exclusive lower bound on heading text length
        max_length: Exclusive upper bound on heading text length
        reject_periods: Drop candidates containing a period (prose, not a heading)
    """

    max_levels: int = 4
    min_length: int = 3
    max_length: int = 100
    reject_periods: bool = True


@dataclass
class SegmentationRules:
    """
    Paragraph and sentence-chunk rules for splitting page text into sections.

    Length bounds are exclusive. Chunk size for the sentence fallback is
    sentence_count // chunk_divisor, clamped to [min_chunk_size, max_chunk_size].
    """

    min_paragraph_length: int = 50
    min_title_length: int = 10
    max_title_length: int = 80
    min_sentence_length: int = 30
    min_chunk_size: int = 3
    max_chunk_size: int = 8
    chunk_divisor: int = 4


@dataclass
class RankingRules:
    """
    Qualification thresholds and result caps for persona ranking.

    Attributes:
        section_threshold: Section score must exceed this to be extracted
        sentence_threshold: Sentence score must exceed this to enter an excerpt
        sentences_per_excerpt: Top sentences joined into one refined excerpt
        max_sections: Cap on extractedSections
        max_subsections: Cap on subSectionAnalysis
        min_page_text_length: Pages with less text contribute nothing
    """

    section_threshold: float = 0.2
    sentence_threshold: float = 0.3
    sentences_per_excerpt: int = 2
    max_sections: int = 15
    max_subsections: int = 20
    min_page_text_length: int = 50


@dataclass
class ScoringWeights:
    """
    Weights for the keyword relevance score.

    Job keywords outweigh persona keywords; the task is the primary signal.
    """

    persona_weight: float = 0.8
    job_weight: float = 1.2
    context_window: int = 100
    context_increment: float = 0.05
    context_cap: float = 0.3
    job_context_multiplier: float = 1.2
    professional_term_bonus: float = 0.1


@dataclass
class AnalysisSettings:
    """
    Complete configuration for one analysis run.

    Attributes:
        preset: Name of the preset these settings were built from
        outline_max_pages: Pages scanned per document for outlines
        persona_max_pages: Pages scanned per document for persona ranking
        max_documents: Documents scanned for persona ranking (None = all)
        concurrent: Fan out documents/pages as concurrent tasks
        max_concurrency: Upper bound on in-flight tasks per fan-out level
    """

    preset: str = "enhanced"
    outline_max_pages: int = 50
    persona_max_pages: int = 15
    max_documents: Optional[int] = None
    concurrent: bool = True
    max_concurrency: int = 8
    headings: HeadingRules = field(default_factory=HeadingRules)
    segmentation: SegmentationRules = field(default_factory=SegmentationRules)
    ranking: RankingRules = field(default_factory=RankingRules)
    weights: ScoringWeights = field(default_factory=ScoringWeights)


def load_analysis_presets(config_path: Path = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the presets YAML file.

    Args:
        config_path: Optional path to presets file (defaults to ANALYSIS_PRESETS_PATH)

    Returns:
        Dict mapping preset name to its (possibly empty) override mapping
    """
    if config_path is None:
        config_path = ANALYSIS_PRESETS_PATH

    raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    return {name: (overrides or {}) for name, overrides in raw.items()}


def _validate(settings: AnalysisSettings) -> None:
    """Reject settings that would make the pipeline misbehave rather than just tune it."""
    problems = []

    if settings.outline_max_pages < 1 or settings.persona_max_pages < 1:
        problems.append("page caps must be at least 1")
    if settings.max_documents is not None and settings.max_documents < 1:
        problems.append("max_documents must be at least 1 or null")
    if settings.max_concurrency < 1:
        problems.append("max_concurrency must be at least 1")
    if settings.headings.max_levels < 1:
        problems.append("headings.max_levels must be at least 1")
    if settings.headings.min_length >= settings.headings.max_length:
        problems.append("headings.min_length must be below headings.max_length")

    seg = settings.segmentation
    if not 1 <= seg.min_chunk_size <= seg.max_chunk_size:
        problems.append("segmentation chunk sizes must satisfy 1 <= min <= max")
    if seg.chunk_divisor < 1:
        problems.append("segmentation.chunk_divisor must be at least 1")

    ranking = settings.ranking
    for name in ("section_threshold", "sentence_threshold"):
        if not 0.0 <= getattr(ranking, name) <= 1.0:
            problems.append(f"ranking.{name} must be within [0, 1]")
    if ranking.sentences_per_excerpt < 1:
        problems.append("ranking.sentences_per_excerpt must be at least 1")
    if ranking.max_sections < 0 or ranking.max_subsections < 0:
        problems.append("ranking caps must not be negative")

    if problems:
        raise AnalysisConfigError(
            f"Invalid settings for preset '{settings.preset}': " + "; ".join(problems)
        )


def load_settings(
    preset: Optional[str] = None,
    overrides: Union[Dict[str, Any], List[str], None] = None,
    config_path: Path = None,
) -> AnalysisSettings:
    """
    Build AnalysisSettings from defaults, a named preset and optional overrides.

    Later layers override earlier ones: dataclass defaults, then preset, then
    overrides.

    Args:
        preset: Preset name (defaults to ANALYSIS_PRESET env variable, else "enhanced")
        overrides: Nested dict ({"ranking": {"max_sections": 5}}) or dotted
                   strings (["ranking.max_sections=5"])
        config_path: Optional path to presets file (defaults to ANALYSIS_PRESETS_PATH)

    Returns:
        Validated AnalysisSettings

    Raises:
        ValueError: If preset not found
        AnalysisConfigError: If a key is unknown or a value is invalid
    """
    presets = load_analysis_presets(config_path)
    name = preset or DEFAULT_PRESET

    if name not in presets:
        available = list(presets.keys())
        raise ValueError(f"Preset '{name}' not found. Available presets: {available}")

    try:
        if isinstance(overrides, list):
            override_cfg = OmegaConf.from_dotlist(overrides)
        else:
            override_cfg = OmegaConf.create(overrides or {})

        merged = OmegaConf.merge(
            OmegaConf.structured(AnalysisSettings),
            presets[name],
            {"preset": name},
            override_cfg,
        )
        settings = OmegaConf.to_object(merged)
    except OmegaConfBaseException as exc:
        raise AnalysisConfigError(f"Invalid settings for preset '{name}': {exc}") from exc

    _validate(settings)
    return settings
