"""
Aggregation and ranking pipeline behind the two analysis entry points.

Outline path:
    pages -> classify_page_headings -> dedupe (text, page) -> sort by page

Persona path:
    documents -> pages -> segment_page -> score sections and sentences
    -> pool across documents -> sort by rank -> cap

Failure policy: a page that cannot be read is skipped, a document that cannot
be opened is skipped (persona path only), and the run fails with a domain
error only when no unit succeeded. Per-page and per-document work may run as
concurrent tasks; results are joined in submission order and every ordering
decision happens in the final sort, never in task completion order.
"""

import time
from contextlib import nullcontext
from functools import partial
from itertools import chain
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from pdfwhisper.contexts.analysis.data_structures import (
    AnalysisMetadata,
    ExtractedSection,
    OutlineItem,
    PageFindings,
    PDFOutline,
    PersonaAnalysis,
    SubSectionAnalysis,
)
from pdfwhisper.contexts.analysis.exceptions import (
    AnalysisError,
    DocumentAnalysisError,
    PDFProcessingError,
)
from pdfwhisper.contexts.analysis.headings import classify_page_headings, finalize_outline
from pdfwhisper.contexts.analysis.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_analysis_result,
    log_analysis_start,
    log_skipped_document,
    log_skipped_page,
)
from pdfwhisper.contexts.analysis.processing_state import ProcessingState
from pdfwhisper.contexts.analysis.relevance import RelevanceScorer, to_importance_rank
from pdfwhisper.contexts.analysis.segmenter import segment_page
from pdfwhisper.contexts.analysis.settings import AnalysisSettings, RankingRules, load_settings
from pdfwhisper.contexts.decoding.decoder import DocumentDecoder, DocumentSource, TextSpan
from pdfwhisper.utils.concurrency import run_all
from pdfwhisper.utils.text_processing import split_sentences
from pdfwhisper.utils.timestamp import now_exact


def _claim(state: Optional[ProcessingState], operation: str):
    return state.claim(operation) if state is not None else nullcontext()


async def _read_page_spans(
    decoder: DocumentDecoder, document: str, page_number: int
) -> Optional[List[TextSpan]]:
    """Spans for one page, or None (logged) when the decoder fails on it."""
    try:
        page = await decoder.get_page(page_number)
        return await decoder.get_text_spans(page)
    except Exception as exc:
        log_skipped_page(document, page_number, exc)
        return None


# =============================================================================
# OUTLINE PATH
# =============================================================================


async def _document_title(decoder: DocumentDecoder, document: str) -> str:
    """Metadata title when present and non-blank, else filename without extension."""
    title = Path(document).stem
    try:
        metadata_title = await decoder.get_metadata_title()
    except Exception as exc:
        _log_warning(f"Could not read metadata title of {document}: {exc}")
        return title

    if metadata_title and metadata_title.strip():
        return metadata_title.strip()
    return title


async def _page_headings(
    decoder: DocumentDecoder, document: str, page_number: int, settings: AnalysisSettings
) -> Optional[List[OutlineItem]]:
    spans = await _read_page_spans(decoder, document, page_number)
    if spans is None:
        return None
    return classify_page_headings(spans, page_number, settings.headings)


async def _build_outline(source: DocumentSource, settings: AnalysisSettings) -> PDFOutline:
    try:
        decoder = await source.open()
    except Exception as exc:
        raise PDFProcessingError(document=source.name, original_error=exc) from exc

    async with decoder:
        title = await _document_title(decoder, source.name)
        page_total = await decoder.get_page_count()
        scanned = min(page_total, settings.outline_max_pages)
        _log_debug(f"{source.name}: scanning {scanned} of {page_total} page(s) for headings")

        per_page = await run_all(
            [
                partial(_page_headings, decoder, source.name, number, settings)
                for number in range(1, scanned + 1)
            ],
            concurrent=settings.concurrent,
            limit=settings.max_concurrency,
        )

    read_pages = [candidates for candidates in per_page if candidates is not None]
    if not read_pages:
        raise PDFProcessingError(document=source.name)

    outline = finalize_outline(chain.from_iterable(read_pages))
    return PDFOutline(title=title, outline=tuple(outline))


async def extract_outline(
    source: DocumentSource,
    *,
    settings: Optional[AnalysisSettings] = None,
    state: Optional[ProcessingState] = None,
) -> PDFOutline:
    """
    Extract a heading outline from one document.

    Args:
        source: Document to open
        settings: AnalysisSettings (default preset if None)
        state: Caller-owned ProcessingState; claimed for the whole call

    Returns:
        PDFOutline with headings unique by (text, page), sorted by page

    Raises:
        PDFProcessingError: Document cannot be opened or no page could be read
        AnalysisInProgressError: state is already claimed
    """
    settings = settings or load_settings()

    with _claim(state, "outline"):
        start_time = time.time()
        log_analysis_start("outline extraction", [source.name], settings.preset)

        try:
            outline = await _build_outline(source, settings)
        except AnalysisError as exc:
            _log_error(f"Outline extraction failed for {source.name}: {exc.message}")
            raise
        except Exception as exc:
            _log_error(f"Outline extraction failed for {source.name}: {exc}")
            raise PDFProcessingError(document=source.name, original_error=exc) from exc

        log_analysis_result(
            "Outline extraction",
            f"{len(outline.outline)} heading(s) in '{outline.title}'",
            time.time() - start_time,
        )
        return outline


async def extract_outlines(
    sources: Sequence[DocumentSource],
    *,
    settings: Optional[AnalysisSettings] = None,
    state: Optional[ProcessingState] = None,
) -> List[PDFOutline]:
    """
    Extract outlines from several documents under a single claim.

    Any document failing is fatal for the whole batch.

    Returns:
        One PDFOutline per source, in input order
    """
    settings = settings or load_settings()
    sources = list(sources)

    with _claim(state, "outline"):
        start_time = time.time()
        log_analysis_start("outline extraction", [s.name for s in sources], settings.preset)

        try:
            outlines = await run_all(
                [partial(_build_outline, source, settings) for source in sources],
                concurrent=settings.concurrent,
                limit=settings.max_concurrency,
            )
        except AnalysisError as exc:
            _log_error(f"Outline extraction failed: {exc.message}")
            raise
        except Exception as exc:
            _log_error(f"Outline extraction failed: {exc}")
            raise PDFProcessingError(original_error=exc) from exc

        log_analysis_result(
            "Outline extraction", f"{len(outlines)} document(s)", time.time() - start_time
        )
        return outlines


# =============================================================================
# PERSONA PATH
# =============================================================================


def refine_excerpt(
    text: str, scorer: RelevanceScorer, settings: AnalysisSettings
) -> Optional[Tuple[float, str]]:
    """
    Join the most relevant sentences of a section into one excerpt.

    Sentences longer than min_sentence_length whose score exceeds
    sentence_threshold are ranked by score (ties keep text order); the top
    sentences_per_excerpt are joined with ". " and closed with a period.

    Returns:
        (best sentence score, excerpt) or None when no sentence qualifies
    """
    ranking = settings.ranking
    sentences = [
        s.strip()
        for s in split_sentences(text)
        if len(s.strip()) > settings.segmentation.min_sentence_length
    ]

    relevant = [(scorer.score(s), s) for s in sentences]
    relevant = [item for item in relevant if item[0] > ranking.sentence_threshold]
    relevant.sort(key=lambda item: item[0], reverse=True)
    top = relevant[: ranking.sentences_per_excerpt]

    if not top:
        return None
    return top[0][0], ". ".join(sentence for _, sentence in top) + "."


def rank_page_sections(
    document: str,
    page_number: int,
    page_text: str,
    scorer: RelevanceScorer,
    settings: AnalysisSettings,
) -> PageFindings:
    """
    Score one page's sections and refine the qualifying ones.

    A section qualifies when its score exceeds section_threshold; a qualifying
    section also yields an excerpt when any of its sentences qualifies.
    """
    findings = PageFindings()

    for index, section in enumerate(segment_page(page_text, settings.segmentation)):
        score = scorer.score(section.text)
        if score <= settings.ranking.section_threshold:
            continue

        findings.sections.append(
            ExtractedSection(
                document=document,
                page_number=page_number,
                section_title=section.title or f"Section {index + 1}",
                importance_rank=to_importance_rank(score),
            )
        )

        excerpt = refine_excerpt(section.text, scorer, settings)
        if excerpt is not None:
            best_score, refined_text = excerpt
            findings.excerpts.append(
                (
                    best_score,
                    SubSectionAnalysis(
                        document=document, refined_text=refined_text, page_number=page_number
                    ),
                )
            )

    return findings


def pool_findings(
    findings: Iterable[PageFindings], ranking: RankingRules
) -> Tuple[List[ExtractedSection], List[SubSectionAnalysis]]:
    """
    Merge per-page findings, sort globally and apply the result caps.

    Sections sort by importance_rank descending, excerpts by best sentence
    score descending; both sorts are stable so ties keep discovery order.
    """
    findings = list(findings)
    sections = [section for page in findings for section in page.sections]
    excerpts = [excerpt for page in findings for excerpt in page.excerpts]

    sections.sort(key=lambda section: section.importance_rank, reverse=True)
    excerpts.sort(key=lambda item: item[0], reverse=True)

    return (
        sections[: ranking.max_sections],
        [excerpt for _, excerpt in excerpts[: ranking.max_subsections]],
    )


async def _page_findings(
    decoder: DocumentDecoder,
    document: str,
    page_number: int,
    scorer: RelevanceScorer,
    settings: AnalysisSettings,
) -> Optional[PageFindings]:
    spans = await _read_page_spans(decoder, document, page_number)
    if spans is None:
        return None

    page_text = " ".join(span.text for span in spans).strip()
    if len(page_text) < settings.ranking.min_page_text_length:
        return PageFindings()

    return rank_page_sections(document, page_number, page_text, scorer, settings)


async def _document_findings(
    source: DocumentSource, scorer: RelevanceScorer, settings: AnalysisSettings
) -> Optional[List[PageFindings]]:
    """Findings for every readable page of one document, or None if it is unusable."""
    try:
        decoder = await source.open()
    except Exception as exc:
        log_skipped_document(source.name, exc)
        return None

    try:
        async with decoder:
            page_total = await decoder.get_page_count()
            scanned = min(page_total, settings.persona_max_pages)
            _log_debug(f"{source.name}: scanning {scanned} of {page_total} page(s)")

            per_page = await run_all(
                [
                    partial(_page_findings, decoder, source.name, number, scorer, settings)
                    for number in range(1, scanned + 1)
                ],
                concurrent=settings.concurrent,
                limit=settings.max_concurrency,
            )
    except Exception as exc:
        log_skipped_document(source.name, exc)
        return None

    read_pages = [page for page in per_page if page is not None]
    if not read_pages:
        _log_warning(f"Skipping document {source.name}: no readable pages")
        return None
    return read_pages


async def analyze_for_persona(
    sources: Sequence[DocumentSource],
    persona: str,
    job_to_be_done: str,
    *,
    settings: Optional[AnalysisSettings] = None,
    state: Optional[ProcessingState] = None,
) -> PersonaAnalysis:
    """
    Rank sections and excerpts across documents for a persona and their task.

    Args:
        sources: Documents to analyze (only the first max_documents are scanned)
        persona: Reader role/expertise description
        job_to_be_done: Task description, weighted above the persona
        settings: AnalysisSettings (default preset if None)
        state: Caller-owned ProcessingState; claimed for the whole call

    Returns:
        PersonaAnalysis; empty section/excerpt lists when nothing qualifies

    Raises:
        DocumentAnalysisError: No documents given, or none could be read
        AnalysisInProgressError: state is already claimed
    """
    settings = settings or load_settings()
    sources = list(sources)

    with _claim(state, "persona"):
        start_time = time.time()

        if settings.max_documents is not None and len(sources) > settings.max_documents:
            _log_info(f"Scanning first {settings.max_documents} of {len(sources)} documents")
            sources = sources[: settings.max_documents]

        log_analysis_start("persona analysis", [s.name for s in sources], settings.preset)

        if not sources:
            _log_error("Persona analysis failed: no documents provided")
            raise DocumentAnalysisError()

        scorer = RelevanceScorer(persona, job_to_be_done, weights=settings.weights)
        _log_debug(f"Persona keywords: {scorer.persona_keywords}")
        _log_debug(f"Job keywords: {scorer.job_keywords}")

        try:
            per_document = await run_all(
                [partial(_document_findings, source, scorer, settings) for source in sources],
                concurrent=settings.concurrent,
                limit=settings.max_concurrency,
            )
        except Exception as exc:
            _log_error(f"Persona analysis failed: {exc}")
            raise DocumentAnalysisError(original_error=exc) from exc

        usable = [pages for pages in per_document if pages is not None]
        if not usable:
            _log_error("Persona analysis failed: no document could be read")
            raise DocumentAnalysisError()

        sections, excerpts = pool_findings(chain.from_iterable(usable), settings.ranking)

        analysis = PersonaAnalysis(
            metadata=AnalysisMetadata(
                documents=tuple(source.name for source in sources),
                persona=persona,
                job_to_be_done=job_to_be_done,
                timestamp=now_exact(),
            ),
            extracted_sections=tuple(sections),
            sub_section_analysis=tuple(excerpts),
        )

        log_analysis_result(
            "Persona analysis",
            f"{len(sections)} section(s), {len(excerpts)} excerpt(s) "
            f"from {len(usable)}/{len(sources)} document(s)",
            time.time() - start_time,
        )
        return analysis
