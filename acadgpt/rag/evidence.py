"""
Evidence - Builds the bounded context string sent to the LLM.

Sections always appear in this order, each only when it has content:

    AVAILABLE FILES IN LIBRARY   (always)
    roll-number note             (when the question named a roll number)
    UPLOADED DOCUMENT CONTENT    (first DOCUMENT_CONTEXT_CAP chars)
    TEXTBOOK CONTENT (subject)   (first TEXTBOOK_CONTEXT_CAP chars)

The bundle is rebuilt for every question and never cached.
"""

from dataclasses import dataclass, field

from acadgpt.config import DOCUMENT_CONTEXT_CAP, TEXTBOOK_CONTEXT_CAP
from acadgpt.records.grades import GradeRecord


@dataclass(frozen=True)
class EvidenceSection:
    """A labeled block of evidence. An empty label renders the body alone."""
    label: str
    body: str

    def render(self) -> str:
        if not self.label:
            return self.body
        if self.label.endswith(":"):
            return f"{self.label} {self.body}"
        return f"{self.label}:\n{self.body}"


@dataclass
class EvidenceBundle:
    """
    Ordered evidence sections plus the textbook excerpt they contain.

    Attributes:
        sections: Sections in prompt order
        subject: Subject whose textbook was included, if any
        textbook_excerpt: The truncated textbook text ("" if not included)
    """
    sections: list[EvidenceSection] = field(default_factory=list)
    subject: str | None = None
    textbook_excerpt: str = ""

    @property
    def has_textbook(self) -> bool:
        return bool(self.textbook_excerpt)

    def render(self) -> str:
        return "\n\n".join(section.render() for section in self.sections)


def roll_number_note(roll_number: str, record: GradeRecord | None) -> str:
    """Evidence note for a roll-number lookup, found or not."""
    if record is None:
        return (
            f"SYSTEM NOTE: User asked for Roll No {roll_number}, "
            "but it was not found in the marksheet."
        )
    return (
        f"CRITICAL DATA FOUND: The student with Roll No {roll_number} "
        f"has a CGPA of {record.cgpa_text}. Name: {record.name or 'N/A'}."
    )


def build_evidence(
    file_names: list[str],
    roll_note: str | None = None,
    document_text: str = "",
    subject: str | None = None,
    textbook_text: str = "",
    document_cap: int = DOCUMENT_CONTEXT_CAP,
    textbook_cap: int = TEXTBOOK_CONTEXT_CAP,
) -> EvidenceBundle:
    """
    Assemble the evidence bundle for one question.

    Args:
        file_names: Names of every file in the library
        roll_note: Output of roll_number_note(), if the question had one
        document_text: Current uploaded-document text
        subject: Subject the student picked, if any
        textbook_text: Full textbook text for that subject

    Returns:
        EvidenceBundle in the fixed section order
    """
    bundle = EvidenceBundle()
    bundle.sections.append(
        EvidenceSection("AVAILABLE FILES IN LIBRARY:", ", ".join(file_names))
    )

    if roll_note:
        bundle.sections.append(EvidenceSection("", roll_note))

    if document_text and document_text.strip():
        bundle.sections.append(
            EvidenceSection("UPLOADED DOCUMENT CONTENT", document_text[:document_cap])
        )

    if subject and textbook_text:
        excerpt = textbook_text[:textbook_cap]
        bundle.sections.append(EvidenceSection(f"TEXTBOOK CONTENT ({subject})", excerpt))
        bundle.subject = subject
        bundle.textbook_excerpt = excerpt

    return bundle
