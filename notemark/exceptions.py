"""Package-specific exception types."""

from __future__ import annotations


class NotemarkError(Exception):
    """Base class for notemark errors.

    The parsing core never raises; these errors belong to the collaborators
    around it (file access and HTML export).
    """


class ConversionError(NotemarkError):
    """Raised when the external Markdown-to-HTML converter fails.

    The message is intentionally opaque; the converter's exception is chained
    as ``__cause__``.
    """

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Markdown conversion failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DocumentReadError(NotemarkError):
    """Raised when a Markdown document cannot be read.

    Args:
        filepath: Path of the document.
        reason: Human-readable description of the failure.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Cannot read {filepath}: {reason}")
