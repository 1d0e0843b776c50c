"""Extract raw text from uploaded CV files (PDF, DOCX, TXT). In-memory only."""

from io import BytesIO
from typing import List

import pdfplumber
from docx import Document

from cv_screener.config import SUPPORTED_EXTENSIONS
from cv_screener.exceptions import ExtractionFailed, UnsupportedFormat
from cv_screener.utils.logger import get_logger

logger = get_logger(__name__)


def get_file_extension(file_name: str) -> str:
    """Lowercase extension without the dot; empty string if there is none."""
    name = (file_name or "").strip().lower()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1]


def is_supported_file(file_name: str) -> bool:
    return get_file_extension(file_name) in SUPPORTED_EXTENSIONS


def _page_text(page, page_number: int) -> str:
    """Layout text of one page, falling back to its raw character runs."""
    try:
        return page.extract_text() or ""
    except Exception as e:
        logger.warning("Page %s text extraction failed (%s); using raw character runs", page_number, e)
    try:
        return "".join(ch.get("text", "") for ch in page.chars)
    except Exception as e:
        logger.warning("Page %s unreadable, skipped: %s", page_number, e)
        return ""


def _extract_pdf(file_bytes: bytes) -> str:
    """Extract text from PDF using pdfplumber; one bad page never fails the document."""
    with pdfplumber.open(BytesIO(file_bytes)) as pdf:
        parts: List[str] = []
        for number, page in enumerate(pdf.pages, 1):
            parts.append(_page_text(page, number))
        return "\n".join(parts)


def _extract_docx(file_bytes: bytes) -> str:
    """Extract text from DOCX using python-docx (paragraphs, then table cells)."""
    doc = Document(BytesIO(file_bytes))
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n\n".join(parts)


def extract_text(file_bytes: bytes, file_name: str) -> str:
    """
    Extract plain text from an uploaded CV file, dispatching on its extension.
    Raises UnsupportedFormat for unknown extensions and ExtractionFailed (with the
    original exception chained) when the decoder fails. The text is returned as-is.
    """
    extension = get_file_extension(file_name)
    if extension not in SUPPORTED_EXTENSIONS:
        logger.warning("Unsupported file type: %s", file_name)
        raise UnsupportedFormat(file_name, extension)

    try:
        if extension == "pdf":
            return _extract_pdf(file_bytes)
        if extension in ("docx", "doc"):
            return _extract_docx(file_bytes)
        return file_bytes.decode("utf-8")
    except Exception as e:
        logger.error("Text extraction failed for %s: %s", file_name, e)
        raise ExtractionFailed(file_name, e) from e
