"""
Text extraction for assignment descriptions and grading criteria.

Descriptions and criteria are usually PDFs; plain text and Markdown
files are read as-is.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pypdf
from pypdf.errors import PyPdfError

from ..utils.logging import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}


class ParseError(Exception):
    """Error during document parsing."""

    pass


@dataclass
class TextExtractionResult:
    """Result of text extraction from a document."""

    text: str
    file_path: Path
    page_count: int = 0
    warnings: list[str] = field(default_factory=list)


def extract_text_from_pdf(file_path: Path) -> TextExtractionResult:
    """
    Extract text from a PDF document with pypdf.

    Pages that yield no text are skipped; the rest are joined by blank
    lines.

    Args:
        file_path: Path to the PDF file

    Returns:
        TextExtractionResult with the extracted text

    Raises:
        ParseError: If the file is missing or not a readable PDF
    """
    if not file_path.is_file():
        raise ParseError(f"File not found: {file_path}")

    logger.info(f"Extracting text from PDF: {file_path}")
    warnings = []

    try:
        reader = pypdf.PdfReader(file_path)
        text_parts = []
        for i, page in enumerate(reader.pages, 1):
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text.strip())
            else:
                warnings.append(f"No text on page {i}")
    except (PyPdfError, OSError, ValueError) as e:
        raise ParseError(f"Failed to parse PDF {file_path}: {e}") from e

    if not text_parts:
        warnings.append("No text could be extracted from PDF (may be scanned/image-based)")

    for warning in warnings:
        logger.warning(f"{file_path.name}: {warning}")

    return TextExtractionResult(
        text="\n\n".join(text_parts),
        file_path=file_path,
        page_count=len(reader.pages),
        warnings=warnings,
    )


def load_document_text(file_path: Path) -> str:
    """
    Load the text of an assignment description or criteria document.

    Args:
        file_path: PDF, ``.txt`` or ``.md`` file

    Returns:
        Document text

    Raises:
        ParseError: If the file is missing or cannot be decoded
    """
    if file_path.suffix.lower() in TEXT_SUFFIXES:
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file_path}: {e}") from e

    return extract_text_from_pdf(file_path).text
