"""Tests for the end-to-end question pipeline (no Ollama needed)."""

import pytest

from acadgpt.config import (
    NO_SUBJECTS_MESSAGE,
    SUBMISSION_NOT_FOUND_MESSAGE,
    SUBMISSION_OK_MESSAGE,
    UNSUPPORTED_DOCUMENT_TEXT,
    UPLOAD_FIRST_MESSAGE,
)
from acadgpt.errors import GenerationError
from acadgpt.ingestion.documents import DocumentFormat
from acadgpt.rag.assistant import AcademicAssistant, Answer, download_locator
from acadgpt.rag.session import DocumentContextStore
from acadgpt.records.workbook import WorkbookTable

from conftest import MARKSHEET_TEXT, PUBLIC_URL, make_pdf_bytes


# ── Registration numbers ─────────────────────────────────────────────────────


class TestRegistration:
    def test_marks_assignment_submitted(self, assistant, library_dir, fake_generator):
        result = assistant.answer("My reg no is 21BCE1234, submit my assignment")
        assert result.answer == SUBMISSION_OK_MESSAGE
        assert fake_generator.calls == []

        rows = WorkbookTable(library_dir / "assignment.xlsx").read_rows()
        assert rows[0]["submitted"] == "true"

    def test_beats_file_keywords(self, assistant, library_dir):
        result = assistant.answer("download file for reg 21BCE9999")
        assert result.answer == SUBMISSION_OK_MESSAGE
        assert result.file_available is None

        rows = WorkbookTable(library_dir / "assignment.xlsx").read_rows()
        assert rows[1]["submitted"] == "true"

    def test_unknown_number(self, assistant):
        result = assistant.answer("regno: 99XYZ0000")
        assert result.answer == SUBMISSION_NOT_FOUND_MESSAGE

    def test_number_typed_right_after_keyword(self, assistant, library_dir, fake_generator):
        result = assistant.answer("regno21BCE1234")
        assert result.answer == SUBMISSION_OK_MESSAGE
        assert fake_generator.calls == []
        assert WorkbookTable(library_dir / "assignment.xlsx").read_rows()[0]["submitted"] == "true"


# ── File requests ────────────────────────────────────────────────────────────


class TestFileRequests:
    def test_specific_file(self, assistant, fake_generator):
        result = assistant.answer("please download OS.pdf")
        assert result.file_available is True
        assert result.file_name == "OS.pdf"
        assert result.download_url == f"{PUBLIC_URL}/download/OS.pdf"
        assert fake_generator.calls == []

    def test_file_name_with_space_is_encoded(self, assistant):
        result = assistant.answer("download the lab manual")
        assert result.file_name == "Lab Manual.pdf"
        assert result.download_url == f"{PUBLIC_URL}/download/Lab%20Manual.pdf"

    def test_listing(self, assistant):
        result = assistant.answer("list available files")
        assert result.file_available is None
        assert "📄 OS.pdf" in result.answer
        assert "📄 Lab Manual.pdf (1.00 KB)" in result.answer
        assert "tool.exe" not in result.answer

    def test_new_file_seen_without_restart(self, assistant, library_dir):
        (library_dir / "CN.pdf").write_bytes(b"%PDF")
        result = assistant.answer("download CN.pdf")
        assert result.file_name == "CN.pdf"

    def test_unmatched_request_falls_through_to_llm(self, assistant, fake_generator):
        result = assistant.answer("download something nice")
        assert result.file_available is None
        assert len(fake_generator.calls) == 1

    def test_download_locator_default_base(self):
        assert download_locator("a b.pdf", "http://host:5000/").endswith("/download/a%20b.pdf")


# ── SGPA ─────────────────────────────────────────────────────────────────────


class TestSgpa:
    def test_needs_upload_first(self, assistant):
        assert assistant.answer("What is my SGPA?").answer == UPLOAD_FIRST_MESSAGE

    def test_computed_from_uploaded_pdf(self, assistant, fake_generator):
        fmt = assistant.ingest_document(make_pdf_bytes(MARKSHEET_TEXT), "marksheet.pdf")
        assert fmt is DocumentFormat.PDF

        result = assistant.answer("calculate my gpa")
        assert result.answer.startswith("Your SGPA is 8.71")
        assert "(2 subjects detected)" in result.answer
        assert "SGPA = 61 / 7 = 8.71" in result.answer
        assert fake_generator.calls == []

    def test_cgpa_question_goes_to_calculator(self, assistant, fake_generator):
        assistant.ingest_document(make_pdf_bytes(MARKSHEET_TEXT), "marksheet.pdf")
        result = assistant.answer("What is my CGPA?")
        assert result.answer.startswith("Your SGPA is 8.71")
        assert fake_generator.calls == []

    def test_no_subjects(self, assistant):
        assistant.ingest_document(make_pdf_bytes("nothing numeric here"), "notes.pdf")
        assert assistant.answer("sgpa please").answer == NO_SUBJECTS_MESSAGE

    def test_unsupported_upload_becomes_sentinel_context(self, assistant):
        fmt = assistant.ingest_document(b"PK\x03\x04", "notes.docx")
        assert fmt is DocumentFormat.UNSUPPORTED
        assert assistant.contexts.get() == UNSUPPORTED_DOCUMENT_TEXT
        assert assistant.answer("my sgpa?").answer == NO_SUBJECTS_MESSAGE


# ── Generation path ──────────────────────────────────────────────────────────


class TestGeneration:
    def test_roll_number_found_note_in_prompt(self, assistant, fake_generator):
        assistant.answer("Show the record of roll no 101")
        assert (
            "CRITICAL DATA FOUND: The student with Roll No 101 has a CGPA of 8.9. Name: Asha."
            in fake_generator.last_prompt
        )

    def test_roll_number_missing_note_in_prompt(self, assistant, fake_generator):
        assistant.answer("marks for rollno: 555")
        assert "User asked for Roll No 555, but it was not found" in fake_generator.last_prompt

    def test_prompt_lists_library_files(self, assistant, fake_generator):
        assistant.answer("Explain deadlocks")
        assert "AVAILABLE FILES IN LIBRARY: Lab Manual.pdf, OS.pdf" in fake_generator.last_prompt
        assert "OS.pdf" in fake_generator.calls[-1]["system"]

    def test_uploaded_document_in_evidence(self, assistant, fake_generator):
        assistant.ingest_document(make_pdf_bytes(MARKSHEET_TEXT), "marksheet.pdf")
        assistant.answer("Which subjects did I take?")
        assert "UPLOADED DOCUMENT CONTENT" in fake_generator.last_prompt
        assert "48.5034" in fake_generator.last_prompt

    def test_urls_are_stripped(self, assistant):
        result = assistant.answer("Explain deadlocks")
        assert "https://" not in result.answer
        assert result.answer.startswith("Process scheduling picks the next process.")

    def test_generation_error_propagates(self, assistant, fake_generator):
        fake_generator.fail_with("ollama down")
        with pytest.raises(GenerationError):
            assistant.answer("Explain deadlocks")


class TestTextbookGrounding:
    def test_textbook_excerpt_in_prompt(self, assistant, fake_generator):
        assistant.answer("Explain round robin scheduling", subject="Operating Systems")
        assert "TEXTBOOK CONTENT (Operating Systems)" in fake_generator.last_prompt
        assert "time quantum" in fake_generator.last_prompt

    def test_grounded_answer_kept(self, assistant):
        result = assistant.answer("Explain round robin scheduling", subject="Operating Systems")
        assert result.answer.startswith("Process scheduling picks the next process.")

    def test_ungrounded_answer_replaced(self, assistant):
        result = assistant.answer("Explain photosynthesis in plants", subject="Operating Systems")
        assert "not available in the uploaded textbook for Operating Systems" in result.answer

    def test_subject_without_textbook_is_not_checked(self, assistant, fake_generator):
        result = assistant.answer("Explain photosynthesis in plants", subject="DBMS")
        assert "TEXTBOOK CONTENT" not in fake_generator.last_prompt
        assert result.answer.startswith("Process scheduling")

    def test_custom_verifier_is_used(self, assistant):
        class AlwaysRefuse:
            def verify(self, answer, question, excerpt, subject):
                from acadgpt.rag.grounding import GroundingVerdict
                return GroundingVerdict(answer=f"nope ({subject})", overridden=True)

        assistant.verifier = AlwaysRefuse()
        result = assistant.answer("Explain round robin", subject="Operating Systems")
        assert result.answer == "nope (Operating Systems)"


# ── Sessions ─────────────────────────────────────────────────────────────────


class TestSessions:
    def test_isolated_sessions(self, assistant, fake_generator):
        isolated = AcademicAssistant(
            library=assistant.library,
            textbooks=assistant.textbooks,
            generator=fake_generator,
            contexts=DocumentContextStore(shared=False),
            public_base_url=PUBLIC_URL,
        )
        isolated.ingest_document(make_pdf_bytes(MARKSHEET_TEXT), "marksheet.pdf", session_id="alice")

        assert isolated.answer("my sgpa", session_id="alice").answer.startswith("Your SGPA is 8.71")
        assert isolated.answer("my sgpa", session_id="bob").answer == UPLOAD_FIRST_MESSAGE

    def test_shared_context_visible_to_everyone(self, assistant):
        assistant.ingest_document(make_pdf_bytes(MARKSHEET_TEXT), "marksheet.pdf", session_id="alice")
        assert assistant.answer("my sgpa", session_id="bob").answer.startswith("Your SGPA is 8.71")


class TestAnswerPayload:
    def test_drops_empty_fields(self):
        assert Answer(answer="hi").to_payload() == {"answer": "hi"}

    def test_file_fields_camel_case(self):
        payload = Answer("x", True, "OS.pdf", "http://h/download/OS.pdf").to_payload()
        assert payload == {
            "answer": "x",
            "fileAvailable": True,
            "fileName": "OS.pdf",
            "downloadUrl": "http://h/download/OS.pdf",
        }
