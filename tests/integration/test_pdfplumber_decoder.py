"""
Integration tests for the pdfplumber decoder.
Tests: PDF bytes -> pdfplumber words -> text spans -> outline.
"""

import asyncio

import pytest

from pdfwhisper.contexts.analysis import PDFProcessingError, extract_outline
from pdfwhisper.contexts.decoding import PdfPlumberSource


def build_pdf(pages, title=None):
    """
    Assemble a minimal single-font PDF.

    Args:
        pages: One list per page of (text, font_size, baseline_y) lines
        title: Optional Title entry for the info dictionary
    """
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        None,  # page tree, filled in once page object numbers are known
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    page_refs = []
    for lines in pages:
        content = b"".join(
            f"BT /F1 {size} Tf 72 {y} Td ({text}) Tj ET\n".encode("latin-1")
            for text, size, y in lines
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"endstream")
        content_ref = len(objects)
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % content_ref
        )
        page_refs.append(len(objects))

    kids = b" ".join(b"%d 0 R" % ref for ref in page_refs)
    objects[1] = b"<< /Type /Pages /Kids [%s] /Count %d >>" % (kids, len(page_refs))

    info_ref = None
    if title is not None:
        objects.append(b"<< /Title (%s) >>" % title.encode("latin-1"))
        info_ref = len(objects)

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset

    trailer = b"<< /Size %d /Root 1 0 R" % (len(objects) + 1)
    if info_ref is not None:
        trailer += b" /Info %d 0 R" % info_ref
    out += b"trailer\n" + trailer + b" >>\nstartxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


REPORT_PAGES = [
    [("Quarterly Report", 20, 720), ("Revenue grew in every region.", 10, 690)],
    [("Regional Detail", 20, 720), ("Costs stayed flat this quarter.", 10, 690)],
]


@pytest.fixture
def report_pdf(tmp_path):
    path = tmp_path / "q3-report.pdf"
    path.write_bytes(build_pdf(REPORT_PAGES, title="Annual Review"))
    return path


@pytest.mark.integration
def test_decoder_reads_pages_and_spans(report_pdf):
    async def read():
        async with await PdfPlumberSource(report_pdf).open() as decoder:
            count = await decoder.get_page_count()
            spans = await decoder.get_text_spans(await decoder.get_page(1))
            title = await decoder.get_metadata_title()
        return count, spans, title

    count, spans, title = asyncio.run(read())

    assert count == 2
    assert title == "Annual Review"
    texts = [span.text for span in spans if span.text.strip()]
    assert texts == ["Quarterly Report", "Revenue grew in every region."]
    heights = {span.text: round(span.height) for span in spans if span.text.strip()}
    assert heights == {"Quarterly Report": 20, "Revenue grew in every region.": 10}
    assert all(span.page == 1 for span in spans)


@pytest.mark.integration
def test_outline_from_pdf_file(report_pdf):
    outline = asyncio.run(extract_outline(PdfPlumberSource(report_pdf)))

    assert outline.to_dict() == {
        "title": "Annual Review",
        "outline": [
            {"level": "H1", "text": "Quarterly Report", "page": 1},
            {"level": "H1", "text": "Regional Detail", "page": 2},
        ],
    }


@pytest.mark.integration
def test_outline_from_bytes_without_title():
    data = build_pdf(REPORT_PAGES)

    outline = asyncio.run(extract_outline(PdfPlumberSource.from_bytes("upload.pdf", data)))

    assert outline.title == "upload"
    assert [item.text for item in outline.outline] == ["Quarterly Report", "Regional Detail"]


@pytest.mark.integration
def test_get_page_out_of_range(report_pdf):
    async def read():
        async with await PdfPlumberSource(report_pdf).open() as decoder:
            await decoder.get_page(3)

    with pytest.raises(IndexError):
        asyncio.run(read())


@pytest.mark.integration
def test_missing_file_fails(tmp_path):
    with pytest.raises(PDFProcessingError) as exc_info:
        asyncio.run(extract_outline(PdfPlumberSource(tmp_path / "missing.pdf")))

    assert isinstance(exc_info.value.original_error, FileNotFoundError)


@pytest.mark.integration
def test_corrupt_bytes_fail():
    source = PdfPlumberSource.from_bytes("junk.pdf", b"this is not a pdf")

    with pytest.raises(PDFProcessingError):
        asyncio.run(extract_outline(source))
