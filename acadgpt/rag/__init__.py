"""
RAG module - Evidence-grounded question answering.

This module is responsible for:
1. Detecting what a question asks for (files, submissions, SGPA)
2. Assembling evidence from the library, uploads and textbooks
3. Generating answers using Ollama
4. Checking answers against the textbook before returning them
"""

from .assistant import AcademicAssistant, Answer, build_assistant
from .generator import Generator
from .grounding import GroundingVerifier, KeywordGroundingVerifier
from .textbooks import TextbookLibrary

__all__ = [
    "AcademicAssistant",
    "Answer",
    "build_assistant",
    "Generator",
    "GroundingVerifier",
    "KeywordGroundingVerifier",
    "TextbookLibrary",
]
