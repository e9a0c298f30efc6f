"""
In-memory documents built from already-extracted text spans.

Used when another tool has done the PDF decoding (spans serialized as JSON) and
as the decoder stand-in throughout the test suite.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pdfwhisper.contexts.decoding.decoder import DocumentDecoder, DocumentSource, TextSpan


class InMemoryDocument(DocumentSource, DocumentDecoder):
    """
    Document whose pages are lists of TextSpans held in memory.

    Acts as its own source and decoder; open() returns self.

    Attributes:
        name: Filename shown in results
        pages: One span list per page (index 0 is page 1)
        title: Metadata title, if any
    """

    def __init__(
        self,
        name: str,
        pages: Sequence[Sequence[TextSpan]],
        title: Optional[str] = None,
    ):
        self.name = name
        self.pages = [list(page) for page in pages]
        self.title = title

    @classmethod
    def from_texts(
        cls,
        name: str,
        page_texts: Sequence[str],
        height: float = 10.0,
        title: Optional[str] = None,
    ) -> "InMemoryDocument":
        """One body-size span per page, for documents known only as plain text."""
        pages = [
            [TextSpan(text=text, height=height, page=number)]
            for number, text in enumerate(page_texts, start=1)
        ]
        return cls(name, pages, title=title)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryDocument":
        """
        Build from a JSON-style dict.

        Expected shape:
            {"name": "doc.pdf", "title": "Optional",
             "pages": [[{"text": "Intro", "height": 18}, ...], ...]}
        """
        pages: List[List[TextSpan]] = []
        for number, raw_page in enumerate(data.get("pages", []), start=1):
            pages.append(
                [
                    TextSpan(text=span["text"], height=float(span.get("height", 0)), page=number)
                    for span in raw_page
                ]
            )
        return cls(data["name"], pages, title=data.get("title"))

    @classmethod
    def from_json_file(cls, path: Path) -> "InMemoryDocument":
        """Load a document previously serialized in the from_dict() shape."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    async def open(self) -> "InMemoryDocument":
        return self

    async def get_page_count(self) -> int:
        return len(self.pages)

    async def get_page(self, page_number: int) -> int:
        if not 1 <= page_number <= len(self.pages):
            raise IndexError(f"Page {page_number} out of range (1-{len(self.pages)})")
        return page_number

    async def get_text_spans(self, page: int) -> List[TextSpan]:
        return list(self.pages[page - 1])

    async def get_metadata_title(self) -> Optional[str]:
        return self.title


class ExtractedSpansSource(DocumentSource):
    """
    JSON file of extracted spans, parsed only when opened.

    Until open() succeeds the source is named after the file; afterwards it
    takes the document name recorded in the JSON. Unreadable or malformed
    files fail in open(), where the pipeline skips or reports them.

    Example:
        >>> source = ExtractedSpansSource(Path("report.json"))
        >>> document = await source.open()
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name

    async def open(self) -> InMemoryDocument:
        document = await asyncio.to_thread(InMemoryDocument.from_json_file, self.path)
        self.name = document.name
        return document
