"""
Intents - Keyword and regex detectors for what a question is asking for.

Each detector is a plain function over the question text so it can be
tested on its own. The assistant strings them together as an ordered rule
chain: the first rule whose predicate matches and whose handler produces
an answer wins.

Precedence (highest first):
1. registration number -> mark assignment submitted
2. file request        -> send one file, or list them all
3. SGPA question       -> compute from the uploaded marksheet
Roll-number mentions never answer directly; they only add evidence.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, NamedTuple, TypeVar

from acadgpt.config import (
    FILE_LISTING_KEYWORDS,
    FILE_REQUEST_KEYWORDS,
    METRIC_TERMS,
    NO_FILES_MESSAGE,
)
from acadgpt.records.library import FileEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REGISTRATION_PATTERN = re.compile(
    r"\b(?:registration|register|reg)"
    r"(?:\s*(?:number|no)(?:\b\.?|(?=\d))|(?=\d)|\b)"
    r"\s*(?:is\b|:|=)?\s*(\w+)",
    re.IGNORECASE,
)

_ROLL_PATTERN = re.compile(
    r"\broll(?:\s*(?:number|no)(?:\b\.?|(?=\d))|(?=\d)|\b)"
    r"\s*(?:is\b|[:=])?\s*(\w+)",
    re.IGNORECASE,
)


# =============================================================================
# DETECTORS
# =============================================================================

def match_registration_number(question: str) -> str | None:
    """
    Registration number mentioned in the question, if any.

    Accepts "reg 21BCE1", "regno: 21BCE1", "register number is 21BCE1",
    "registration no = 21BCE1" and similar.
    """
    match = _REGISTRATION_PATTERN.search(question)
    return match.group(1) if match else None


def match_roll_number(question: str) -> str | None:
    """Roll number mentioned in the question ("roll no 42", "rollno: A17"), if any."""
    match = _ROLL_PATTERN.search(question)
    return match.group(1) if match else None


def wants_file(question: str) -> bool:
    """True if the question asks to download, open, send or list files."""
    lowered = question.lower()
    return any(keyword in lowered for keyword in FILE_REQUEST_KEYWORDS)


def is_metric_query(question: str) -> bool:
    """True if the question mentions a GPA term anywhere ("sgpa", "cgpa", "GPA's")."""
    lowered = question.lower()
    return any(term in lowered for term in METRIC_TERMS)


@dataclass(frozen=True)
class FileRequest:
    """
    Outcome of a file request.

    Attributes:
        kind: "specific" for a single matched file, "list" for a listing
        message: Text to show the user
        file: The matched file for "specific" requests
    """
    kind: str
    message: str
    file: FileEntry | None = None


def format_file_listing(files: tuple[FileEntry, ...] | list[FileEntry]) -> str:
    if not files:
        return NO_FILES_MESSAGE
    lines = "\n".join(f"📄 {entry.name} ({entry.size_kb} KB)" for entry in files)
    return (
        f"Here are the files available in the library:\n\n{lines}\n\n"
        "You can ask me to download any of these files."
    )


def match_file_request(
    question: str,
    files: tuple[FileEntry, ...] | list[FileEntry],
) -> FileRequest | None:
    """
    Work out which file (or listing) a file-request question wants.

    A file matches when its name, with or without the extension, appears
    anywhere in the question; the first match in index order wins. Without
    a specific match, listing words ("list", "available", "show me", ...)
    produce a listing. Otherwise there is no file answer.
    """
    lowered = question.lower()

    for entry in files:
        name = entry.name.lower()
        if entry.stem.lower() in lowered or name in lowered:
            return FileRequest(
                kind="specific",
                message=f"Here is the requested file: {entry.name}",
                file=entry,
            )

    if any(keyword in lowered for keyword in FILE_LISTING_KEYWORDS):
        return FileRequest(kind="list", message=format_file_listing(files))

    return None


# =============================================================================
# RULE CHAIN
# =============================================================================

@dataclass(frozen=True)
class IntentRule(Generic[T]):
    """
    One link in the intent chain.

    Attributes:
        name: Rule name for logs
        predicate: question -> match (anything truthy fires the rule)
        handler: (request, match) -> answer, or None to fall through
    """
    name: str
    predicate: Callable[[str], Any]
    handler: Callable[[Any, Any], T | None]


class Dispatch(NamedTuple):
    rule: str
    answer: Any


def dispatch(rules: list[IntentRule], question: str, request: Any = None) -> Dispatch | None:
    """
    Run rules in order and return the first answer produced.

    Args:
        rules: Ordered rule chain
        question: Question text the predicates look at
        request: Passed to handlers unchanged (defaults to the question)
    """
    for rule in rules:
        match = rule.predicate(question)
        if not match:
            continue
        answer = rule.handler(question if request is None else request, match)
        if answer is not None:
            logger.debug("Intent %s answered the question", rule.name)
            return Dispatch(rule.name, answer)
    return None
