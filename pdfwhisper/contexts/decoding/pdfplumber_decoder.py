"""
pdfplumber-backed decoder.

Text spans come from pdfplumber word extraction (with font size), the document
title from the PDF info dictionary via PyPDF2. pdfplumber objects are not
thread-safe, so every blocking call for one document goes through a single
asyncio.Lock and runs in a worker thread; the event loop thread keeps the
analysis computation while a page is being decoded.
"""

import asyncio
import io
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import pdfplumber

from pdfwhisper.contexts.decoding.decoder import DocumentDecoder, DocumentSource, TextSpan
from pdfwhisper.contexts.decoding.logger import _log_debug, _log_warning
from pdfwhisper.utils.pdf_processing import metadata_title, words_to_runs


class PdfPlumberDecoder(DocumentDecoder):
    """
    Decoder over an opened pdfplumber document.

    Args:
        pdf: Opened pdfplumber.PDF
        raw: Path or bytes the PDF was opened from (re-read for metadata)
        y_tolerance: Max Y-distance (points) to group words as same line
        paragraph_gap_factor: Gap-to-line-height ratio that marks a paragraph break
    """

    def __init__(
        self,
        pdf: "pdfplumber.PDF",
        raw: Union[Path, bytes],
        y_tolerance: float = 3.0,
        paragraph_gap_factor: float = 1.5,
    ):
        self._pdf = pdf
        self._raw = raw
        self.y_tolerance = y_tolerance
        self.paragraph_gap_factor = paragraph_gap_factor
        self._lock = asyncio.Lock()

    async def _run(self, func: Callable, *args) -> Any:
        async with self._lock:
            return await asyncio.to_thread(func, *args)

    async def get_page_count(self) -> int:
        return await self._run(lambda: len(self._pdf.pages))

    async def get_page(self, page_number: int) -> Any:
        def load():
            pages = self._pdf.pages
            if not 1 <= page_number <= len(pages):
                raise IndexError(f"Page {page_number} out of range (1-{len(pages)})")
            return pages[page_number - 1]

        return await self._run(load)

    async def get_text_spans(self, page: Any) -> List[TextSpan]:
        def extract():
            words = page.extract_words(extra_attrs=["size"])
            if not words:
                _log_warning(f"Page {page.page_number}: no extractable text (image-only page?)")
            runs = words_to_runs(
                words,
                y_tolerance=self.y_tolerance,
                paragraph_gap_factor=self.paragraph_gap_factor,
            )
            page.close()
            return [
                TextSpan(text=run["text"], height=run["height"], page=page.page_number)
                for run in runs
            ]

        return await self._run(extract)

    async def get_metadata_title(self) -> Optional[str]:
        raw = self._raw if isinstance(self._raw, Path) else io.BytesIO(self._raw)
        return await self._run(metadata_title, raw)

    async def close(self) -> None:
        await self._run(self._pdf.close)


class PdfPlumberSource(DocumentSource):
    """
    PDF on disk or in memory, opened lazily with pdfplumber.

    Errors (missing file, corrupt bytes) surface from open(), not from the
    constructor, so one unreadable file can be skipped by the caller.

    Example:
        >>> source = PdfPlumberSource(Path("report.pdf"))
        >>> async with await source.open() as decoder:
        ...     count = await decoder.get_page_count()
    """

    def __init__(self, pdf_path: Union[str, Path], name: Optional[str] = None):
        self.pdf_path = Path(pdf_path)
        self.name = name or self.pdf_path.name
        self._data: Optional[bytes] = None

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> "PdfPlumberSource":
        """Source over an in-memory PDF buffer (e.g., an upload)."""
        source = cls(Path(name), name=name)
        source._data = data
        return source

    async def open(self) -> PdfPlumberDecoder:
        if self._data is not None:
            raw = self._data
            pdf = await asyncio.to_thread(pdfplumber.open, io.BytesIO(raw))
        else:
            if not self.pdf_path.exists():
                raise FileNotFoundError(f"PDF not found: {self.pdf_path}")
            raw = self.pdf_path
            pdf = await asyncio.to_thread(pdfplumber.open, self.pdf_path)

        _log_debug(f"Opened {self.name}")
        return PdfPlumberDecoder(pdf, raw)
