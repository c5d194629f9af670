"""PDF text extraction using pypdf.

Reads uploaded PDF bytes and returns the document text page by page,
plus whatever standard metadata the file carries.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PAGE_SEPARATOR = "\n\n"

_METADATA_FIELDS = {
    "/Title": "title",
    "/Author": "author",
    "/Subject": "subject",
    "/Creator": "creator",
    "/Producer": "producer",
    "/CreationDate": "creation_date",
    "/ModDate": "modification_date",
}


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Text of all pages in page order, separated by blank lines.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)


class PDFParseError(Exception):
    """Raised when a file cannot be read as a PDF."""


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Reject empty, oversized, or non-PDF input before handing it to pypdf.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    metadata: dict[str, str] = {}

    try:
        info = reader.metadata
        if info:
            for key, name in _METADATA_FIELDS.items():
                value = info.get(key)
                if value:
                    metadata[name] = str(value)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return metadata


def _page_texts(reader: PdfReader) -> list[str]:
    texts: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            continue
        if page_text and page_text.strip():
            texts.append(page_text.strip())
    return texts


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata. The text
        may be empty for scanned or image-only documents.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    text = PAGE_SEPARATOR.join(_page_texts(reader))
    if not text:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=pages,
        metadata=_extract_metadata(reader),
    )


def extract_text(file_content: bytes) -> str:
    """Return only the text of a PDF.

    Raises:
        PDFParseError: Same conditions as :func:`parse_pdf`.
    """
    return parse_pdf(file_content).text
