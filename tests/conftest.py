"""Shared fixtures for the AcadGPT test suite."""

from pathlib import Path

import fitz
import openpyxl
import pytest
from fastapi.testclient import TestClient

from acadgpt.errors import GenerationError
from acadgpt.rag.assistant import AcademicAssistant
from acadgpt.rag.session import DocumentContextStore
from acadgpt.rag.textbooks import TextbookLibrary
from acadgpt.records.library import Library

PUBLIC_URL = "http://acadgpt.test"

OS_TEXTBOOK_TEXT = (
    "Process scheduling decides which process runs next on the CPU.\n"
    "Round robin gives each process a fixed time quantum.\n"
    "Paging divides memory into fixed-size frames."
)

# Two subjects: 4 credits @ 8.50 = 34, 3 credits @ 9.00 = 27
MARKSHEET_TEXT = (
    "STATEMENT OF GRADES  Reg No 21BCE1234\n"
    "CS2001 Operating Systems 48.5034\n"
    "CS2002 Computer Networks 39.0027\n"
    "Issued 2024 Page 1"
)

# ---------------------------------------------------------------------------
# File builders
# ---------------------------------------------------------------------------


def make_pdf_bytes(text: str) -> bytes:
    """A one-page PDF containing text."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text, fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


def make_workbook(path: Path, header: list[str], rows: list[list], extra_sheet: str | None = None) -> Path:
    """Write an .xlsx whose first sheet holds header + rows."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Sheet1"
    sheet.append(header)
    for row in rows:
        sheet.append(row)
    if extra_sheet:
        workbook.create_sheet(extra_sheet).append(["untouched"])
    workbook.save(path)
    return path


# ---------------------------------------------------------------------------
# Fake generator that never touches Ollama
# ---------------------------------------------------------------------------


class FakeGenerator:
    """Generator that records prompts and returns canned text."""

    def __init__(self, reply: str = "Process scheduling picks the next process. See https://example.com/os."):
        self.model = "fake-model"
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[dict] = []

    def complete(self, system: str, prompt: str) -> str:
        self.calls.append({"system": system, "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.reply

    def check_available(self) -> bool:
        return True

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["prompt"]

    def fail_with(self, message: str = "connection refused"):
        self.error = GenerationError(message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def library_dir(tmp_path) -> Path:
    """
    A populated library folder:
        OS.pdf            - Operating Systems textbook
        Lab Manual.pdf    - 1024 bytes of filler
        marksheet.xlsx    - RollNo / CGPA / Name
        assignment.xlsx   - regno / submitted
        tool.exe          - not an allowed extension
    """
    root = tmp_path / "library"
    root.mkdir()
    (root / "OS.pdf").write_bytes(make_pdf_bytes(OS_TEXTBOOK_TEXT))
    (root / "Lab Manual.pdf").write_bytes(b"x" * 1024)
    (root / "tool.exe").write_bytes(b"MZ")
    make_workbook(
        root / "marksheet.xlsx",
        ["RollNo", "Name", "CGPA"],
        [[101, "Asha", 8.9], ["A17", None, 7.25]],
    )
    make_workbook(
        root / "assignment.xlsx",
        ["regno", "name", "submitted"],
        [["21BCE1234", "Asha", "false"], ["21BCE9999", "Ravi", "false"]],
    )
    return root


@pytest.fixture()
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def assistant(library_dir, fake_generator) -> AcademicAssistant:
    """Assistant over the temp library with the OS textbook loaded and a fake LLM."""
    library = Library(library_dir)
    library.scan()
    textbooks = TextbookLibrary(library_dir, manifest={"Operating Systems": "OS.pdf", "DBMS": "DBMS.pdf"})
    textbooks.load()
    return AcademicAssistant(
        library=library,
        textbooks=textbooks,
        generator=fake_generator,
        contexts=DocumentContextStore(shared=True),
        public_base_url=PUBLIC_URL,
    )


@pytest.fixture()
def test_client(assistant):
    """
    TestClient over the FastAPI app with the fake assistant.

    No Ollama, Tesseract or real library folder is touched.
    """
    from acadgpt.interfaces.web_app import create_app

    app = create_app(assistant)
    yield TestClient(app)
