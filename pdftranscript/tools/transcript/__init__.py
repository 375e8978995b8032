"""Layout-aware text transcripts from PDF content streams."""

from __future__ import annotations

from .cmap import load_unicode_map, parse_unicode_map
from .exceptions import (
    DocumentReadError,
    FontDecodeError,
    MalformedFontError,
    MalformedMatrixError,
    MalformedOperandError,
    MissingFontContextError,
    NoSuperscriptOffsetError,
    TranscriptError,
    UnresolvableReferenceError,
)
from .fonts import Font, FontCache, resolve_fonts
from .interpreter import TextState, interpret_document, interpret_page
from .pipeline import TranscriptPipeline, extract_transcript, write_transcript
from .rows import TextChunk, merge_text_rows
from .scripts import dominant_offset, find_superscript_offset, reclassify_rows, upward_offsets
from .types import TranscriptOptions, TranscriptResult

__all__ = [
    "DocumentReadError",
    "Font",
    "FontCache",
    "FontDecodeError",
    "MalformedFontError",
    "MalformedMatrixError",
    "MalformedOperandError",
    "MissingFontContextError",
    "NoSuperscriptOffsetError",
    "TextChunk",
    "TextState",
    "TranscriptError",
    "TranscriptOptions",
    "TranscriptPipeline",
    "TranscriptResult",
    "UnresolvableReferenceError",
    "dominant_offset",
    "extract_transcript",
    "find_superscript_offset",
    "interpret_document",
    "interpret_page",
    "load_unicode_map",
    "merge_text_rows",
    "parse_unicode_map",
    "reclassify_rows",
    "resolve_fonts",
    "upward_offsets",
    "write_transcript",
]
