"""
PDF Parser - Extracts text from PDF files.

This module handles the extraction of text content from PDF files, both
textbooks stored in the library folder and documents uploaded by students.
It uses pymupdf (fitz).

Key Concepts:
- PDFs store text in a structured way (pages, blocks, lines)
- Uploaded marksheets are parsed without cleaning so numeric tokens
  survive exactly as printed
- We preserve page boundaries for better metadata
"""

import re
from dataclasses import dataclass
from pathlib import Path

import fitz  # pymupdf - the library is called 'fitz' historically

from acadgpt.errors import DocumentExtractionError


@dataclass
class PageContent:
    """
    Represents the content of a single PDF page.

    Attributes:
        page_number: 1-indexed page number
        text: Extracted text content
        source_file: Name of the source PDF file
    """
    page_number: int
    text: str
    source_file: str


@dataclass
class DocumentContent:
    """
    Represents the full content of a PDF document.

    Attributes:
        filename: Name of the PDF file
        total_pages: Total number of pages
        pages: List of PageContent objects
        full_text: All text concatenated
    """
    filename: str
    total_pages: int
    pages: list[PageContent]
    full_text: str


class PDFParser:
    """
    Parses PDF files and extracts text content.

    Example:
        parser = PDFParser()
        content = parser.parse_pdf("library/OS.pdf")
        print(content.full_text)

        raw = PDFParser(clean_text=False)
        content = raw.parse_bytes(upload_bytes, "marksheet.pdf")
    """

    def __init__(self, clean_text: bool = True):
        """
        Initialize the PDF parser.

        Args:
            clean_text: If True, apply text cleaning (remove extra whitespace, etc.)
        """
        self.clean_text = clean_text

    def _clean_extracted_text(self, text: str) -> str:
        """
        Clean extracted text by removing common artifacts.

        This handles issues like:
        - Multiple consecutive newlines
        - Extra whitespace
        - Lines that are only a page number

        Args:
            text: Raw extracted text

        Returns:
            Cleaned text
        """
        if not self.clean_text:
            return text

        text = re.sub(r'\n{3,}', '\n\n', text)
        text = re.sub(r' {2,}', ' ', text)

        lines = text.split('\n')
        cleaned_lines = [
            line for line in lines
            if not (line.strip().isdigit() and len(line.strip()) < 4)
        ]
        text = '\n'.join(cleaned_lines)

        return text.strip()

    def _read_document(self, doc: fitz.Document, filename: str) -> DocumentContent:
        pages = []
        all_text = []
        total_pages = len(doc)  # Save before closing!

        try:
            for page_num in range(total_pages):
                text = doc[page_num].get_text()
                cleaned = self._clean_extracted_text(text)

                if cleaned.strip():  # Only add non-empty pages
                    pages.append(PageContent(
                        page_number=page_num + 1,  # 1-indexed
                        text=cleaned,
                        source_file=filename,
                    ))
                    all_text.append(cleaned)
        finally:
            doc.close()

        separator = '\n\n' if self.clean_text else '\n'
        return DocumentContent(
            filename=filename,
            total_pages=total_pages,
            pages=pages,
            full_text=separator.join(all_text),
        )

    def parse_pdf(self, pdf_path: str | Path) -> DocumentContent:
        """
        Parse a single PDF file and extract all text.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            DocumentContent with all extracted text and metadata

        Raises:
            FileNotFoundError: If the PDF file doesn't exist
            DocumentExtractionError: If the PDF cannot be parsed
        """
        pdf_path = Path(pdf_path)

        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        try:
            doc = fitz.open(pdf_path)
        except Exception as e:
            raise DocumentExtractionError(f"Failed to open PDF {pdf_path}: {e}") from e

        return self._read_document(doc, pdf_path.name)

    def parse_bytes(self, data: bytes, filename: str = "upload.pdf") -> DocumentContent:
        """
        Parse a PDF held in memory (e.g. an HTTP upload).

        Args:
            data: Raw PDF bytes
            filename: Name used for page metadata

        Returns:
            DocumentContent with all extracted text and metadata

        Raises:
            DocumentExtractionError: If the bytes are not a readable PDF
        """
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentExtractionError(f"Failed to open PDF {filename}: {e}") from e

        return self._read_document(doc, filename)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def extract_text_from_pdf(pdf_path: str | Path, clean: bool = True) -> str:
    """
    Simple function to extract all text from a PDF.

    Args:
        pdf_path: Path to the PDF file
        clean: Whether to clean the extracted text

    Returns:
        Extracted text as a string
    """
    parser = PDFParser(clean_text=clean)
    content = parser.parse_pdf(pdf_path)
    return content.full_text
