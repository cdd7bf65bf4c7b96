"""
Library - Directory-backed index of downloadable files.

The index is an immutable snapshot. Every scan() builds a fresh tuple of
FileEntry objects and swaps it in whole; nothing is mutated in place.
The snapshot is shared process-wide without locking.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from acadgpt.config import ALLOWED_EXTENSIONS, LIBRARY_DIR
from acadgpt.errors import PathTraversalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """
    A single file in the library folder.

    Attributes:
        name: File name, unique within the library
        size: Size in bytes
        extension: Lowercase extension including the dot (".pdf")
    """
    name: str
    size: int
    extension: str

    @property
    def stem(self) -> str:
        """File name without its last extension."""
        return Path(self.name).stem

    @property
    def size_kb(self) -> str:
        """Size in kilobytes with two decimals, e.g. "1.00"."""
        return f"{self.size / 1024:.2f}"

    def to_dict(self) -> dict:
        return {"name": self.name, "size": self.size, "extension": self.extension}


class Library:
    """
    Indexes the library folder and resolves download paths inside it.

    Example:
        library = Library()
        for entry in library.scan():
            print(entry.name, entry.size_kb)

        path = library.resolve("OS.pdf")
    """

    def __init__(
        self,
        root: str | Path | None = None,
        allowed_extensions: tuple[str, ...] | None = None,
    ):
        self.root = Path(root) if root is not None else LIBRARY_DIR
        self.allowed_extensions = tuple(
            ext.lower() for ext in (allowed_extensions or ALLOWED_EXTENSIONS)
        )
        self._files: tuple[FileEntry, ...] = ()

    @property
    def files(self) -> tuple[FileEntry, ...]:
        """The snapshot taken by the most recent scan()."""
        return self._files

    def names(self) -> list[str]:
        return [entry.name for entry in self._files]

    def scan(self) -> tuple[FileEntry, ...]:
        """
        Re-read the library folder and replace the snapshot.

        Creates the folder (and returns an empty index) if it does not exist.
        """
        if not self.root.exists():
            self.root.mkdir(parents=True)
            logger.info("Created library folder at %s", self.root)
            self._files = ()
            return self._files

        entries = []
        for path in sorted(self.root.iterdir(), key=lambda p: p.name):
            extension = path.suffix.lower()
            if extension not in self.allowed_extensions or not path.is_file():
                continue
            entries.append(FileEntry(
                name=path.name,
                size=path.stat().st_size,
                extension=extension,
            ))

        self._files = tuple(entries)
        logger.debug("Available files in library: %s", ", ".join(self.names()))
        return self._files

    def resolve(self, name: str) -> Path:
        """
        Resolve a file name to an absolute path inside the library folder.

        Raises:
            PathTraversalError: If the name is empty, contains a NUL byte, or
                resolves to the library folder itself or anywhere outside it.
        """
        if not name or "\x00" in name:
            raise PathTraversalError(f"Refusing to resolve {name!r}")
        root = self.root.resolve()
        candidate = (root / name).resolve()
        if candidate == root or root not in candidate.parents:
            raise PathTraversalError(f"Refusing to resolve {name!r} outside {root}")
        return candidate

    def download_path(self, name: str) -> Path | None:
        """
        Path of an existing file for download, or None if it does not exist.

        Raises:
            PathTraversalError: See resolve().
        """
        path = self.resolve(name)
        return path if path.is_file() else None
