"""Shared type definitions for the transcript pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

__all__ = ["TranscriptOptions", "TranscriptResult"]


@dataclass(slots=True)
class TranscriptOptions:
    """Options controlling how a transcript is extracted."""

    page_numbers: Sequence[int] | None = None
    strict_superscripts: bool = False
    superscript_tag: str = "sup"
    subscript_tag: str = "sub"


@dataclass(slots=True)
class TranscriptResult:
    """Final rows of a transcript together with run statistics."""

    lines: tuple[str, ...]
    superscript_offset: int | None
    page_count: int
    font_count: int
    chunk_count: int
    log: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
