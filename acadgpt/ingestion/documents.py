"""
Document ingestion - turns an uploaded file into plain text.

PDFs go through pymupdf, images go through OCR, anything else becomes
the "unsupported" sentinel text.
"""

import logging
from enum import Enum
from pathlib import Path

from acadgpt.config import IMAGE_EXTENSIONS, PDF_EXTENSIONS, UNSUPPORTED_DOCUMENT_TEXT
from acadgpt.ingestion.ocr import OcrEngine
from acadgpt.ingestion.pdf_parser import PDFParser

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


def detect_format(filename: str) -> DocumentFormat:
    """Classify an upload by its file extension (case-insensitive)."""
    extension = Path(filename).suffix.lower()
    if extension in PDF_EXTENSIONS:
        return DocumentFormat.PDF
    if extension in IMAGE_EXTENSIONS:
        return DocumentFormat.IMAGE
    return DocumentFormat.UNSUPPORTED


def extract_document_text(
    data: bytes,
    fmt: DocumentFormat,
    filename: str = "upload",
    pdf_parser: PDFParser | None = None,
    ocr: OcrEngine | None = None,
) -> str:
    """
    Extract plain text from an uploaded document.

    Args:
        data: Raw file bytes
        fmt: Format tag from detect_format()
        filename: Original file name (for logs and page metadata)
        pdf_parser: Parser override; defaults to an uncleaned parser
        ocr: OCR engine override

    Returns:
        The extracted text, or UNSUPPORTED_DOCUMENT_TEXT

    Raises:
        DocumentExtractionError: If the PDF or image cannot be read
    """
    if fmt is DocumentFormat.PDF:
        parser = pdf_parser or PDFParser(clean_text=False)
        text = parser.parse_bytes(data, filename).full_text
    elif fmt is DocumentFormat.IMAGE:
        logger.info("Extracting text from image %s", filename)
        text = (ocr or OcrEngine()).image_to_text(data)
        logger.debug("OCR text preview: %s...", text[:500])
    else:
        return UNSUPPORTED_DOCUMENT_TEXT

    logger.info("Extracted %d characters from %s (%s)", len(text), filename, fmt.value)
    return text
