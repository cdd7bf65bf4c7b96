"""
Grounding - Checks that an LLM answer plausibly came from the textbook.

The check is a keyword heuristic, not entailment. Take the first few long
words of the question. If none of them occur anywhere in the textbook
excerpt, the answer is assumed to come from the model's general knowledge,
and it is replaced with a "not in your textbook" refusal. Answers that
already refuse are left alone. URLs are always stripped.

The check sits behind the GroundingVerifier protocol so a stronger
verifier can replace it without touching the pipeline.
"""

import logging
import re
import string
from dataclasses import dataclass, field
from typing import Protocol

from acadgpt.config import (
    GROUNDING_MAX_KEYWORDS,
    GROUNDING_MIN_WORD_LENGTH,
    NOT_IN_TEXTBOOK_TEMPLATE,
    REFUSAL_MARKERS,
)

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"https?://\S+")


def strip_urls(text: str) -> str:
    """Remove every http(s) URL from text."""
    return _URL_PATTERN.sub("", text)


def is_refusal(answer: str) -> bool:
    lowered = answer.lower()
    return any(marker in lowered for marker in REFUSAL_MARKERS)


def significant_keywords(
    question: str,
    min_length: int = GROUNDING_MIN_WORD_LENGTH,
    limit: int = GROUNDING_MAX_KEYWORDS,
) -> list[str]:
    """
    First `limit` lowercase words longer than `min_length`, in question order.

    Words are split on any whitespace and stripped of surrounding punctuation
    before the length check, so "deadlock?" is kept as "deadlock" and a
    trailing "?" never turns a short word into a keyword.
    """
    words = (word.strip(string.punctuation) for word in question.lower().split())
    return [word for word in words if len(word) > min_length][:limit]


@dataclass(frozen=True)
class GroundingVerdict:
    """
    Result of a grounding check.

    Attributes:
        answer: Final answer text (URLs removed)
        overridden: True if the generated answer was replaced
        keywords: Question keywords that were checked
        matched: Keywords found in the textbook excerpt
    """
    answer: str
    overridden: bool = False
    keywords: list[str] = field(default_factory=list)
    matched: list[str] = field(default_factory=list)


class GroundingVerifier(Protocol):
    def verify(
        self, answer: str, question: str, excerpt: str, subject: str
    ) -> GroundingVerdict:
        ...


class KeywordGroundingVerifier:
    """
    Keeps an answer only if the question's keywords occur in the excerpt.

    Example:
        verifier = KeywordGroundingVerifier()
        verdict = verifier.verify(answer, question, excerpt, "DBMS")
        print(verdict.answer)
    """

    def __init__(
        self,
        min_length: int = GROUNDING_MIN_WORD_LENGTH,
        max_keywords: int = GROUNDING_MAX_KEYWORDS,
    ):
        self.min_length = min_length
        self.max_keywords = max_keywords

    def verify(
        self, answer: str, question: str, excerpt: str, subject: str
    ) -> GroundingVerdict:
        if is_refusal(answer):
            return GroundingVerdict(answer=strip_urls(answer))

        keywords = significant_keywords(question, self.min_length, self.max_keywords)
        excerpt_lower = excerpt.lower()
        matched = [keyword for keyword in keywords if keyword in excerpt_lower]

        # A question with no long words gives nothing to check against
        if keywords and not matched:
            logger.info(
                "No question keywords %s found in %s textbook; replacing answer",
                keywords, subject,
            )
            refusal = NOT_IN_TEXTBOOK_TEMPLATE.format(subject=subject)
            return GroundingVerdict(
                answer=strip_urls(refusal), overridden=True, keywords=keywords
            )

        return GroundingVerdict(
            answer=strip_urls(answer), keywords=keywords, matched=matched
        )
