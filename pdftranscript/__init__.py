"""Layout-aware text transcripts of PDF documents."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .tools import load_builtin_plugins
from .tools.common.interfaces import ConversionContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .tools.transcript import (
    DocumentReadError,
    FontDecodeError,
    MalformedFontError,
    MalformedMatrixError,
    MalformedOperandError,
    MissingFontContextError,
    NoSuperscriptOffsetError,
    TranscriptError,
    TranscriptOptions,
    TranscriptPipeline,
    TranscriptResult,
    UnresolvableReferenceError,
    extract_transcript,
    write_transcript,
)

__version__ = "0.1.0"

load_builtin_plugins()

__all__ = [
    "__version__",
    "ConversionContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "TranscriptOptions",
    "TranscriptPipeline",
    "TranscriptResult",
    "TranscriptError",
    "MalformedFontError",
    "FontDecodeError",
    "UnresolvableReferenceError",
    "MissingFontContextError",
    "MalformedMatrixError",
    "MalformedOperandError",
    "DocumentReadError",
    "NoSuperscriptOffsetError",
    "extract_transcript",
    "write_transcript",
    "transcribe_document",
]


def transcribe_document(
    input: str | Path,
    *,
    options: TranscriptOptions | None = None,
    output: TextIO | None = None,
) -> TranscriptResult:
    """Convenience wrapper around the transcript plugin."""

    context = ConversionContext(input_path=input, output=output, config={"options": options})
    tool = registry.create("transcript", context)
    return tool.run()
