"""PDF parsing utilities for document processing.

Responsibilities:
    - PDF text extraction with pypdf
    - Upload validation (size, header)
    - Metadata extraction (title, author, pages)

Emptiness of the extracted text is left to the caller to judge.
"""

from pdf_insight.parsing.pdf_parser import PDFContent, PDFParseError, extract_text, parse_pdf

__all__ = ["PDFContent", "PDFParseError", "extract_text", "parse_pdf"]
