"""PDF conversion endpoint.

Stateless counterpart of the upload screen: validates the upload, extracts
its text, and returns the Markdown rendering. No chat session is opened and
nothing is kept after the response.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from pdf_insight.agent.service import AgentService, FormattingError, get_agent_service
from pdf_insight.models.schemas import PDFConvertResponse
from pdf_insight.parsing.pdf_parser import MAX_FILE_SIZE, PDFParseError, parse_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/convert", tags=["convert"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Raises:
        HTTPException: 400 if the name is missing or the extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


@router.post("/pdf", response_model=PDFConvertResponse)
async def convert_pdf(
    file: UploadFile,
    agent_service: Annotated[AgentService, Depends(get_agent_service)],
) -> PDFConvertResponse:
    """Convert an uploaded PDF into Markdown.

    Args:
        file: The uploaded PDF file (multipart/form-data).
        agent_service: Service performing the Markdown conversion.

    Returns:
        PDFConvertResponse with filename, page count, and Markdown.

    Raises:
        400: Invalid file (not PDF, empty, corrupt, no extractable text).
        413: File exceeds 10MB limit.
        502: The formatting model failed.
    """
    filename = _validate_file_extension(file.filename)
    content = await _read_and_validate_size(file)

    try:
        pdf_content = await run_in_threadpool(parse_pdf, content)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    if not pdf_content.text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not extract text from the PDF",
        )

    try:
        markdown = await agent_service.convert_to_markdown(pdf_content.text)
    except FormattingError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    logger.info(f"Converted PDF: {filename} ({pdf_content.pages} pages)")
    return PDFConvertResponse(
        filename=filename,
        pages=pdf_content.pages,
        markdown=markdown,
    )
