"""Custom exceptions raised by :mod:`pdftranscript.tools.transcript`."""

from __future__ import annotations


class TranscriptError(Exception):
    """Base exception for all fatal transcript pipeline errors.

    ``stage`` names the pipeline stage that was running when the error was
    raised. It is filled in by the pipeline when the raising code does not
    know it.
    """

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage

    @property
    def kind(self) -> str:
        return type(self).__name__


class MalformedFontError(TranscriptError):
    """Raised when an embedded ToUnicode table cannot be parsed."""


class FontDecodeError(MalformedFontError):
    """Raised when a font cannot turn a shown string into valid Unicode text."""


class UnresolvableReferenceError(TranscriptError):
    """Raised when a font's ToUnicode reference does not resolve to a stream."""

    def __init__(self, font_id: str, reference: object, *, stage: str | None = None) -> None:
        self.font_id = font_id
        self.reference = reference
        message = f"ToUnicode reference {reference!r} of font {font_id} does not resolve to a stream"
        super().__init__(message, stage=stage)


class MissingFontContextError(TranscriptError):
    """Raised when text is shown without a selected, resolvable font."""

    def __init__(self, font_id: str | None, *, stage: str | None = None) -> None:
        self.font_id = font_id
        if font_id is None:
            message = "Text shown before any font was selected"
        else:
            message = f"Text shown with unknown font {font_id}"
        super().__init__(message, stage=stage)


class MalformedMatrixError(TranscriptError):
    """Raised when a text matrix carries non-numeric translation operands."""


class MalformedOperandError(TranscriptError):
    """Raised when a font or text operator is given operands of the wrong type."""


class DocumentReadError(TranscriptError):
    """Raised when pypdf cannot read the document structure."""


class NoSuperscriptOffsetError(TranscriptError):
    """Raised in strict mode when no upward offset exists between rows."""

    def __init__(self, *, stage: str | None = None) -> None:
        super().__init__("No superscript offset found", stage=stage)


__all__ = [
    "TranscriptError",
    "MalformedFontError",
    "FontDecodeError",
    "UnresolvableReferenceError",
    "MissingFontContextError",
    "MalformedMatrixError",
    "MalformedOperandError",
    "DocumentReadError",
    "NoSuperscriptOffsetError",
]
