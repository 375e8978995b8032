"""Positioned text chunks and same-baseline row merging."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

__all__ = ["TextChunk", "merge_text_rows"]


@dataclass(frozen=True, slots=True)
class TextChunk:
    """Decoded text drawn at an integer text-space position."""

    text: str
    x: int
    y: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return self.y, self.x

    def __lt__(self, other: TextChunk) -> bool:
        if not isinstance(other, TextChunk):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return self.text


def merge_text_rows(chunks: Iterable[TextChunk]) -> list[TextChunk]:
    """Concatenate consecutive chunks sharing the same ``y`` into one row.

    Input order is preserved; a row keeps the position of its first chunk.
    """

    merged: list[TextChunk] = []
    current: TextChunk | None = None
    for chunk in chunks:
        if current is not None and current.y == chunk.y:
            current = replace(current, text=current.text + chunk.text)
            continue
        if current is not None:
            merged.append(current)
        current = chunk
    if current is not None:
        merged.append(current)
    return merged
