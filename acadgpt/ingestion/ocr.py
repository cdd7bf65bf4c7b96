"""
OCR - Extracts text from images of marksheets and notes.

Uses Tesseract through pytesseract. The tesseract binary must be installed
on the host; pytesseract only drives it.
"""

import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from acadgpt.config import OCR_LANGUAGE
from acadgpt.errors import DocumentExtractionError


class OcrEngine:
    """
    Turns image bytes into plain text.

    Example:
        engine = OcrEngine()
        text = engine.image_to_text(png_bytes)
    """

    def __init__(self, language: str | None = None):
        self.language = language or OCR_LANGUAGE

    def image_to_text(self, data: bytes) -> str:
        """
        Run OCR over an encoded image (PNG, JPEG).

        Raises:
            DocumentExtractionError: If the image cannot be decoded or
                Tesseract fails.
        """
        try:
            with Image.open(io.BytesIO(data)) as image:
                return pytesseract.image_to_string(image, lang=self.language)
        # TesseractNotFoundError is an OSError, so it must be caught first
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise DocumentExtractionError(f"OCR failed: {e}") from e
        except (UnidentifiedImageError, OSError) as e:
            raise DocumentExtractionError(f"Cannot read image: {e}") from e
