"""
Ingestion module - Turns PDFs and images into plain text.

This module is responsible for:
1. Extracting text from PDF files (textbooks and uploads)
2. Running OCR over uploaded images
3. Routing an upload to the right extractor by its format
"""

from .pdf_parser import PDFParser, extract_text_from_pdf
from .ocr import OcrEngine
from .documents import DocumentFormat, detect_format, extract_document_text

__all__ = [
    "PDFParser",
    "extract_text_from_pdf",
    "OcrEngine",
    "DocumentFormat",
    "detect_format",
    "extract_document_text",
]
