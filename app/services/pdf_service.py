import asyncio
import math
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from app.core.exceptions import PdfExtractionError, UnsupportedFileType

PDF_MIME_TYPE = "application/pdf"
# Rough number of extracted characters on a typical resume page
CHARS_PER_PAGE = 3000


@dataclass
class ExtractedPdf:
    text: str
    page_count: int


def estimate_page_count(text: str) -> int:
    """Estimate pages from form-feed page breaks, else from text length."""
    form_feeds = text.count("\f")
    if form_feeds > 0:
        return form_feeds + 1
    return max(1, math.ceil(len(text) / CHARS_PER_PAGE))


def extract_text_from_pdf(pdf_content: bytes) -> str:
    """
    Extract text from a PDF file, pages separated by form feeds.
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        raise PdfExtractionError() from e
    # strip per page so the \f separators survive
    return "\f".join(page.strip() for page in pages)


def extract_pdf(pdf_content: bytes, content_type: str) -> ExtractedPdf:
    """Extract text and an estimated page count from an uploaded PDF.

    Only application/pdf is accepted; anything else raises UnsupportedFileType.
    """
    if content_type != PDF_MIME_TYPE:
        raise UnsupportedFileType("Only PDF files are supported.")
    text = extract_text_from_pdf(pdf_content)
    return ExtractedPdf(text=text, page_count=estimate_page_count(text))


async def extract_pdf_file(path: Path, content_type: str) -> ExtractedPdf:
    """Read and extract a stored upload off the event loop."""
    return await asyncio.to_thread(lambda: extract_pdf(path.read_bytes(), content_type))
