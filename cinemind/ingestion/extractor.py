"""
Upload-to-text extraction for script files (plain text, PDF, DOCX).
"""
import io
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

PDF_TYPES = {".pdf", "application/pdf"}
DOCX_TYPES = {".docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"}


class ExtractionError(Exception):
    """An uploaded file could not be turned into text."""


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _extract_pdf(data: bytes) -> str:
    import fitz  # PyMuPDF

    pages = []
    with fitz.open(stream=data, filetype="pdf") as doc:
        for page in doc:
            pages.append(page.get_text("text").strip())
    return "\n\n".join(page for page in pages if page)


def _extract_docx(data: bytes) -> str:
    import docx

    document = docx.Document(io.BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(filename: str, data: bytes, mime_type: Optional[str] = None) -> str:
    """Extract plain text from an uploaded file.

    Args:
        filename: Original file name, used for its extension
        data: Raw file bytes
        mime_type: Optional MIME type reported by the uploader

    Returns:
        The extracted text

    Raises:
        ExtractionError: If a PDF or DOCX file cannot be read
    """
    extension = os.path.splitext(filename or "")[1].lower()
    kinds = {extension, (mime_type or "").lower()}

    try:
        if kinds & PDF_TYPES:
            logger.info(f"Extracting PDF text from {filename}")
            return _extract_pdf(data)
        if kinds & DOCX_TYPES:
            logger.info(f"Extracting DOCX text from {filename}")
            return _extract_docx(data)
    except Exception as e:
        logger.error(f"Failed to extract text from {filename}: {str(e)}", exc_info=True)
        raise ExtractionError(f"Could not read {filename}: {str(e)}") from e

    # Plain text and anything unrecognized
    return _decode_text(data)
