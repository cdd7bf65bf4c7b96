"""Exceptions raised by the AcadGPT core."""


class AcadGPTError(Exception):
    """Base class for all AcadGPT errors."""


class DocumentExtractionError(AcadGPTError, RuntimeError):
    """A PDF or image could not be turned into text."""


class GenerationError(AcadGPTError):
    """The text-generation backend failed to produce a completion."""


class NoSubjectsDetectedError(AcadGPTError, ValueError):
    """An SGPA was requested over an empty set of subject records."""


class PathTraversalError(AcadGPTError, PermissionError):
    """A requested file name resolves outside the library folder."""
