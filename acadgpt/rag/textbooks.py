"""
Textbooks - Per-subject textbook text loaded from the library folder.

Each subject in the TEXTBOOKS manifest maps to one PDF. The whole book is
kept in memory as plain text; the evidence builder later takes a fixed-size
excerpt of it.
"""

import logging
from pathlib import Path

from acadgpt.config import LIBRARY_DIR, TEXTBOOKS
from acadgpt.ingestion.pdf_parser import PDFParser

logger = logging.getLogger(__name__)


class TextbookLibrary:
    """
    Subject -> textbook text.

    Subjects whose PDF is missing or unreadable stay in the library with
    empty text, so status() can report them as not loaded.

    Example:
        books = TextbookLibrary()
        books.load()
        if books.has_content("DBMS"):
            text = books.get("DBMS")
    """

    def __init__(
        self,
        library_dir: str | Path | None = None,
        manifest: dict[str, str] | None = None,
        parser: PDFParser | None = None,
    ):
        self.library_dir = Path(library_dir) if library_dir is not None else LIBRARY_DIR
        self.manifest = dict(manifest if manifest is not None else TEXTBOOKS)
        self.parser = parser or PDFParser()
        self._texts: dict[str, str] = {subject: "" for subject in self.manifest}

    def load(self) -> list[str]:
        """
        Parse every manifest PDF found in the library folder.

        Returns:
            Subjects that now have content
        """
        logger.info("Loading textbooks from %s", self.library_dir)

        for subject, file_name in self.manifest.items():
            path = self.library_dir / file_name
            if not path.exists():
                logger.warning("%s not found in library folder", file_name)
                continue
            try:
                text = self.parser.parse_pdf(path).full_text
            except Exception:
                logger.exception("Error loading %s", file_name)
                continue
            self._texts[subject] = text
            logger.info("Loaded %s (%d characters)", subject, len(text))

        loaded = self.loaded_subjects()
        logger.info("Loaded subjects: %s", loaded)
        return loaded

    def get(self, subject: str | None) -> str:
        if not subject:
            return ""
        return self._texts.get(subject, "")

    def has_content(self, subject: str | None) -> bool:
        return len(self.get(subject)) > 0

    @property
    def subjects(self) -> list[str]:
        return list(self._texts)

    def loaded_subjects(self) -> list[str]:
        return [subject for subject, text in self._texts.items() if text]

    def status(self) -> dict[str, dict]:
        return {
            subject: {"loaded": len(text) > 0, "length": len(text)}
            for subject, text in self._texts.items()
        }
