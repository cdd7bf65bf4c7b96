"""
Configuration settings for the AcadGPT assistant.

All tunable values live here. Deployment-specific values (paths, model,
public URL) can be overridden from the environment or a local .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Base directory (where this project lives)
BASE_DIR = Path(__file__).parent.parent

# Library folder: downloadable files, spreadsheets and textbook PDFs
LIBRARY_DIR = Path(os.getenv("ACADGPT_LIBRARY_DIR", str(BASE_DIR / "library")))

# Spreadsheets inside the library folder
MARKSHEET_FILENAME = "marksheet.xlsx"
ASSIGNMENT_FILENAME = "assignment.xlsx"

# =============================================================================
# LIBRARY CONFIGURATION
# =============================================================================

# Only these file types are listed and offered for download
ALLOWED_EXTENSIONS = (
    ".pdf", ".doc", ".docx", ".xlsx", ".xls", ".txt", ".jpg", ".jpeg", ".png",
)

# =============================================================================
# SPREADSHEET COLUMNS
# =============================================================================

MARKSHEET_ROLL_COLUMN = "RollNo"
MARKSHEET_CGPA_COLUMN = "CGPA"
MARKSHEET_NAME_COLUMN = "Name"

ASSIGNMENT_REGNO_COLUMN = "regno"
ASSIGNMENT_SUBMITTED_COLUMN = "submitted"

# Stored as a string, not a boolean cell
SUBMITTED_FLAG = "true"

# =============================================================================
# TEXTBOOKS
# =============================================================================

# Subject name -> PDF file name in the library folder
TEXTBOOKS: dict[str, str] = {
    "Operating Systems": "OS.pdf",
    "DBMS": "DBMS.pdf",
    "Computer Networks": "CN.pdf",
    "AI": "AI.pdf",
}

# =============================================================================
# EVIDENCE CONFIGURATION
# =============================================================================

# Character caps per evidence section
DOCUMENT_CONTEXT_CAP = 8000
TEXTBOOK_CONTEXT_CAP = 15000

# =============================================================================
# DOCUMENT CONTEXT
# =============================================================================

# When True every requester shares one uploaded-document slot (last upload wins).
# Set ACADGPT_SHARED_CONTEXT=false to key the slot by the X-Session-Id header.
SHARE_DOCUMENT_CONTEXT = _env_flag("ACADGPT_SHARED_CONTEXT", True)
DEFAULT_SESSION_ID = "default"

# Per-session slots kept in memory; the least recently used one is dropped past this
MAX_DOCUMENT_SESSIONS = int(os.getenv("ACADGPT_MAX_SESSIONS", "256"))

# =============================================================================
# DOCUMENT INGESTION
# =============================================================================

PDF_EXTENSIONS = (".pdf",)
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")
OCR_LANGUAGE = "eng"
UNSUPPORTED_DOCUMENT_TEXT = "Unsupported file type."

# =============================================================================
# OLLAMA CONFIGURATION
# =============================================================================

OLLAMA_MODEL = os.getenv("ACADGPT_OLLAMA_MODEL", "llama3.1")
OLLAMA_BASE_URL = os.getenv("OLLAMA_HOST", "http://localhost:11434")

# Low temperature keeps answers close to the supplied evidence
GENERATION_TEMPERATURE = 0.1

# =============================================================================
# WEB CONFIGURATION
# =============================================================================

PUBLIC_BASE_URL = os.getenv("ACADGPT_PUBLIC_URL", "http://localhost:5000").rstrip("/")
SERVER_HOST = "0.0.0.0"
SERVER_PORT = 5000

# =============================================================================
# INTENT VOCABULARY
# =============================================================================

FILE_REQUEST_KEYWORDS = (
    "download",
    "download pdf",
    "download file",
    "open file",
    "send file",
    "get pdf",
    "give pdf",
    "show files",
    "list files",
    "available files",
)

FILE_LISTING_KEYWORDS = ("list", "available", "all files", "what files", "show me")

# Substring match: "gpa", "sgpa", "cgpa" and "GPA's" all count
METRIC_TERMS = ("gpa",)

# =============================================================================
# GROUNDING
# =============================================================================

# Answers containing any of these are already refusals and are kept as-is
REFUSAL_MARKERS = (
    "not available in the uploaded textbook",
    "not found in",
    "apologize",
)

# Question words longer than this count as significant
GROUNDING_MIN_WORD_LENGTH = 4
GROUNDING_MAX_KEYWORDS = 5

# =============================================================================
# USER-FACING MESSAGES
# =============================================================================

UPLOAD_FIRST_MESSAGE = "Please upload your marksheet PDF first."
NO_SUBJECTS_MESSAGE = "Could not detect subjects in uploaded PDF."
SERVER_ERROR_MESSAGE = "Server error. Please try again."
UPLOAD_OK_MESSAGE = "File processed successfully!"
UPLOAD_ERROR_MESSAGE = "Error processing file."

SUBMISSION_OK_MESSAGE = "✅ Assignment submitted successfully!"
SUBMISSION_SHEET_MISSING_MESSAGE = f"{ASSIGNMENT_FILENAME} not found in library folder."
SUBMISSION_NOT_FOUND_MESSAGE = "Register number not found."
SUBMISSION_ERROR_MESSAGE = "Error updating Excel file."

NO_FILES_MESSAGE = "No files are currently available in the library folder."

# =============================================================================
# LLM PROMPT TEMPLATES
# =============================================================================

NOT_IN_TEXTBOOK_TEMPLATE = (
    "I apologize, but the information you're looking for is not available in the "
    "uploaded textbook for {subject}. Please try uploading a different textbook or "
    "consult your course materials."
)

SYSTEM_PROMPT_TEMPLATE = """You are an academic assistant with access to files.

CRITICAL INSTRUCTION - INFORMATION AVAILABILITY CHECK:
1. If the user asks a question about a specific subject and textbook content is provided, you MUST ONLY answer if the information is explicitly present in that textbook content.
2. If the information is NOT found in the provided textbook content, you MUST respond with: "{refusal}"
3. Do NOT generate answers based on general knowledge or external information when textbook content is provided.
4. Only use your general knowledge if NO textbook content is provided AND NO uploaded document content is present.
5. If uploaded document content is present, prioritize answering from that content.

Important capabilities:
1. You can see all files in the library folder: {files}
2. If a user asks for a specific file, only confirm it is available. Do NOT print any URLs. The frontend will handle the download button.
3. If users ask "what files are available" or similar, list all files in the library
4. Use uploaded document content if present
5. Use textbook content if present, but ONLY if the information exists in that content
6. Use Excel data if CRITICAL DATA FOUND is present

REMEMBER: When textbook content is provided, you MUST verify the information exists in that content before answering. If it doesn't exist, politely inform the user it's not available in their textbook.

Never say you cannot see files - you have access to the library folder.
Be professional and encouraging."""

QUESTION_PROMPT_TEMPLATE = """CONTEXT:
{context}

QUESTION: {question}

IMPORTANT: If this is about {subject} and the answer is not in the provided textbook content, please inform me that the information is not available in my textbook."""

SGPA_REPORT_TEMPLATE = """Your SGPA is {sgpa}

Calculation ({subjects} subjects detected):
Total Credit Points = {credit_points}
Total Credits = {credits}
SGPA = {credit_points} / {credits} = {sgpa}"""
