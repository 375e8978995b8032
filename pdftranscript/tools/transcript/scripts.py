"""Superscript and subscript inference from vertical row offsets.

Raised and lowered fragments are small vertical perturbations relative to
the body-text leading. The most common upward jump between consecutive rows
is taken as the superscript offset; any later row whose distance from the
current baseline is non-zero and no larger than that offset is treated as a
fragment of the previous line and wrapped in inline markup.
"""

from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from ...core.utils import get_logger
from .exceptions import NoSuperscriptOffsetError
from .rows import TextChunk

__all__ = [
    "dominant_offset",
    "find_superscript_offset",
    "reclassify_rows",
    "upward_offsets",
]

LOGGER = get_logger("pdftranscript.tools.transcript.scripts")


def upward_offsets(rows: Sequence[TextChunk]) -> Counter[int]:
    """Histogram of the magnitudes of negative ``y`` steps between consecutive rows."""

    histogram: Counter[int] = Counter()
    for previous, current in zip(rows, rows[1:]):
        offset = current.y - previous.y
        if offset < 0:
            histogram[-offset] += 1
    return histogram


def dominant_offset(histogram: Mapping[int, int]) -> int | None:
    """Return the most frequent magnitude, preferring the smallest on ties."""

    if not histogram:
        return None
    highest = max(histogram.values())
    return min(magnitude for magnitude, count in histogram.items() if count == highest)


def find_superscript_offset(rows: Sequence[TextChunk], *, strict: bool = False) -> int | None:
    offset = dominant_offset(upward_offsets(rows))
    if offset is None:
        if strict:
            raise NoSuperscriptOffsetError()
        LOGGER.warning("No upward offsets between rows; skipping superscript detection")
    return offset


def reclassify_rows(
    rows: Sequence[TextChunk],
    superscript_offset: int | None,
    *,
    superscript_tag: str = "sup",
    subscript_tag: str = "sub",
) -> list[TextChunk]:
    """Wrap raised and lowered rows in markup and pin them to the previous baseline."""

    if superscript_offset is None:
        return list(rows)

    result: list[TextChunk] = []
    last_x = 0
    last_y = 0
    for row in rows:
        if row.x < last_x:
            # Horizontal reset: a new line regardless of the vertical step.
            last_x, last_y = row.x, row.y
            result.append(row)
            continue
        offset = row.y - last_y
        if offset != 0 and abs(offset) <= superscript_offset:
            tag = subscript_tag if offset > 0 else superscript_tag
            last_x = row.x
            result.append(TextChunk(text=f"<{tag}>{row.text}</{tag}>", x=row.x, y=last_y))
        else:
            last_x, last_y = row.x, row.y
            result.append(row)
    return result
