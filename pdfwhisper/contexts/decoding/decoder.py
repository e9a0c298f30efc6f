"""
Decoder boundary for the analysis engine.

The analysis context never reads PDF bytes. It talks to a DocumentSource
(something that can be opened) and the DocumentDecoder it yields (page count,
page handles, text spans, metadata title). All decoder calls are coroutines so
page reads from independent documents can overlap.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class TextSpan:
    """
    One glyph run as reported by the decoder.

    Attributes:
        text: Run content (may be whitespace only)
        height: Rendered glyph height, used as a font size proxy
        page: 1-based page number
    """

    text: str
    height: float
    page: int


class DocumentDecoder(ABC):
    """
    Read access to one opened document.

    Supports `async with` so the underlying file handle is released even when a
    page read fails.
    """

    @abstractmethod
    async def get_page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    async def get_page(self, page_number: int) -> Any:
        """Opaque page handle for a 1-based page number."""

    @abstractmethod
    async def get_text_spans(self, page: Any) -> List[TextSpan]:
        """Ordered text spans for a page handle returned by get_page()."""

    @abstractmethod
    async def get_metadata_title(self) -> Optional[str]:
        """Document-level title, or None when absent."""

    async def close(self) -> None:
        """Release decoder resources. Default is a no-op."""

    async def __aenter__(self) -> "DocumentDecoder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class DocumentSource(ABC):
    """
    A named document that can be opened for decoding.

    Attributes:
        name: Filename shown in results (e.g., "report.pdf")
    """

    name: str

    @abstractmethod
    async def open(self) -> DocumentDecoder:
        """Open the document; raises when the bytes cannot be decoded."""
