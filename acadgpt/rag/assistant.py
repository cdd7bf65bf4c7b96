"""
Assistant - Answers one student question end to end.

Flow for answer():

    question
       |
       v
    intent rules (first answer wins)
       1. registration number -> SubmissionLedger
       2. file request        -> Library (specific file / listing)
       3. SGPA question       -> uploaded document -> grading.sgpa
       |
       v  (no rule answered)
    roll-number note -> evidence bundle -> Generator -> GroundingVerifier
       |
       v
    Answer (URLs stripped)

Document uploads replace the text held in the DocumentContextStore.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from acadgpt.config import (
    ASSIGNMENT_FILENAME,
    LIBRARY_DIR,
    MARKSHEET_FILENAME,
    NO_SUBJECTS_MESSAGE,
    PUBLIC_BASE_URL,
    UPLOAD_FIRST_MESSAGE,
)
from acadgpt.errors import NoSubjectsDetectedError
from acadgpt.grading.sgpa import compute_sgpa, extract_subject_records, format_sgpa_report
from acadgpt.ingestion.documents import DocumentFormat, detect_format, extract_document_text
from acadgpt.rag.evidence import EvidenceBundle, build_evidence, roll_number_note
from acadgpt.rag.generator import Generator, build_question_prompt, build_system_prompt
from acadgpt.rag.grounding import GroundingVerifier, KeywordGroundingVerifier, strip_urls
from acadgpt.rag.intents import (
    IntentRule,
    dispatch,
    is_metric_query,
    match_file_request,
    match_registration_number,
    match_roll_number,
    wants_file,
)
from acadgpt.rag.session import DocumentContextStore
from acadgpt.rag.textbooks import TextbookLibrary
from acadgpt.records.grades import GradeBook
from acadgpt.records.library import Library
from acadgpt.records.submissions import SubmissionLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Question:
    text: str
    subject: str | None = None
    session_id: str | None = None


@dataclass(frozen=True)
class Answer:
    """
    What the assistant says back.

    Attributes:
        answer: Answer text
        file_available: True when a specific library file was matched
        file_name: Name of the matched file
        download_url: Where the matched file can be downloaded
    """
    answer: str
    file_available: bool | None = None
    file_name: str | None = None
    download_url: str | None = None

    def to_payload(self) -> dict:
        payload = {
            "answer": self.answer,
            "fileAvailable": self.file_available,
            "fileName": self.file_name,
            "downloadUrl": self.download_url,
        }
        return {key: value for key, value in payload.items() if value is not None}


def download_locator(file_name: str, base_url: str = PUBLIC_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/download/{quote(file_name, safe='')}"


class AcademicAssistant:
    """
    The full question-answering pipeline.

    Example:
        assistant = build_assistant()
        assistant.ingest_document(pdf_bytes, "marksheet.pdf")
        print(assistant.answer("What is my SGPA?").answer)
    """

    def __init__(
        self,
        library: Library,
        textbooks: TextbookLibrary,
        generator: Generator,
        grade_book: GradeBook | None = None,
        submissions: SubmissionLedger | None = None,
        contexts: DocumentContextStore | None = None,
        verifier: GroundingVerifier | None = None,
        public_base_url: str = PUBLIC_BASE_URL,
    ):
        self.library = library
        self.textbooks = textbooks
        self.generator = generator
        self.grade_book = grade_book or GradeBook(library.root / MARKSHEET_FILENAME)
        self.submissions = submissions or SubmissionLedger(library.root / ASSIGNMENT_FILENAME)
        self.contexts = contexts or DocumentContextStore()
        self.verifier = verifier or KeywordGroundingVerifier()
        self.public_base_url = public_base_url

        self.rules: list[IntentRule[Answer]] = [
            IntentRule("registration", match_registration_number, self._handle_registration),
            IntentRule("file_request", wants_file, self._handle_file_request),
            IntentRule("sgpa", is_metric_query, self._handle_sgpa),
        ]

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def ingest_document(
        self, data: bytes, filename: str, session_id: str | None = None
    ) -> DocumentFormat:
        """
        Extract text from an upload and make it the session's document context.

        Raises:
            DocumentExtractionError: If the PDF or image cannot be read. The
                previous context is kept in that case.
        """
        fmt = detect_format(filename)
        text = extract_document_text(data, fmt, filename=filename)
        self.contexts.set(session_id, text)
        return fmt

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    def answer(
        self, question: str, subject: str | None = None, session_id: str | None = None
    ) -> Answer:
        """
        Answer a question.

        Raises:
            GenerationError: If the question reaches the LLM and the call fails.
        """
        request = Question(text=question, subject=subject, session_id=session_id)

        result = dispatch(self.rules, question, request)
        if result is not None:
            return result.answer

        return self._generate(request)

    def _handle_registration(self, request: Question, registration_number: str) -> Answer:
        result = self.submissions.mark_submitted(registration_number)
        return Answer(answer=result.message)

    def _handle_file_request(self, request: Question, _match) -> Answer | None:
        files = self.library.scan()
        file_request = match_file_request(request.text, files)
        if file_request is None:
            return None
        if file_request.kind == "specific":
            return Answer(
                answer=file_request.message,
                file_available=True,
                file_name=file_request.file.name,
                download_url=download_locator(file_request.file.name, self.public_base_url),
            )
        return Answer(answer=file_request.message)

    def _handle_sgpa(self, request: Question, _match) -> Answer:
        document_text = self.contexts.get(request.session_id)
        if not document_text:
            return Answer(answer=UPLOAD_FIRST_MESSAGE)

        records = extract_subject_records(document_text)
        try:
            metric = compute_sgpa(records)
        except NoSubjectsDetectedError:
            return Answer(answer=NO_SUBJECTS_MESSAGE)

        return Answer(answer=format_sgpa_report(metric, len(records)))

    def build_evidence(self, request: Question) -> EvidenceBundle:
        roll_note = None
        roll_number = match_roll_number(request.text)
        if roll_number:
            roll_note = roll_number_note(roll_number, self.grade_book.lookup(roll_number))

        self.library.scan()
        return build_evidence(
            file_names=self.library.names(),
            roll_note=roll_note,
            document_text=self.contexts.get(request.session_id),
            subject=request.subject,
            textbook_text=self.textbooks.get(request.subject),
        )

    def _generate(self, request: Question) -> Answer:
        evidence = self.build_evidence(request)

        text = self.generator.complete(
            system=build_system_prompt(request.subject, self.library.names()),
            prompt=build_question_prompt(evidence.render(), request.text, request.subject),
        )

        if evidence.has_textbook:
            verdict = self.verifier.verify(
                text, request.text, evidence.textbook_excerpt, evidence.subject
            )
            text = verdict.answer

        return Answer(answer=strip_urls(text))


def build_assistant(
    library_dir: str | Path | None = None,
    generator: Generator | None = None,
    load_textbooks: bool = True,
) -> AcademicAssistant:
    """
    Create an assistant wired to the configured library folder and Ollama.

    Scans the library, loads the textbooks and warns if Ollama is not ready.
    """
    library_dir = Path(library_dir) if library_dir is not None else LIBRARY_DIR
    library = Library(library_dir)
    library.scan()

    textbooks = TextbookLibrary(library_dir)
    if load_textbooks:
        textbooks.load()

    if generator is None:
        generator = Generator()
        generator.check_available()

    return AcademicAssistant(library=library, textbooks=textbooks, generator=generator)
