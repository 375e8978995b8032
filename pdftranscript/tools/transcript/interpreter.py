"""Content stream interpreter turning text blocks into positioned chunks.

The interpreter is a small state machine. :class:`TextState` holds
everything it tracks for one page, and every supported operator has a
transition function ``(state, operands, fonts) -> (state, chunk)`` which
returns the next state and, when a text block closes, the emitted chunk.
Operators without a transition are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence

from pypdf.generic import DictionaryObject

from ...core.utils import get_logger
from .exceptions import MalformedMatrixError, MalformedOperandError, MissingFontContextError
from .fonts import FontCache
from .operands import is_number, operator_name, string_bytes
from .rows import TextChunk

__all__ = [
    "TRANSITIONS",
    "PageSource",
    "TextState",
    "Transition",
    "begin_text",
    "end_text",
    "interpret_document",
    "interpret_page",
    "set_font",
    "set_text_matrix",
    "show_text",
    "show_text_array",
    "show_text_next_line",
    "show_text_with_spacing",
]

LOGGER = get_logger("pdftranscript.tools.transcript.interpreter")


@dataclass(frozen=True, slots=True)
class TextState:
    """Per-page interpreter state."""

    in_text_block: bool = False
    current_font_id: str | None = None
    x: int = 0
    y: int = 0
    current_text: str = ""


Transition = Callable[[TextState, Sequence[Any], FontCache], "tuple[TextState, TextChunk | None]"]


class PageSource(Protocol):
    def get_decoded_page_instructions(self, page: DictionaryObject) -> list[tuple[list[Any], bytes]]:
        ...


# -- Transitions -------------------------------------------------------------


def begin_text(state: TextState, operands: Sequence[Any], fonts: FontCache):
    return replace(state, in_text_block=True), None


def end_text(state: TextState, operands: Sequence[Any], fonts: FontCache):
    chunk = TextChunk(text=state.current_text, x=state.x, y=state.y)
    return replace(state, in_text_block=False, current_text=""), chunk


def set_font(state: TextState, operands: Sequence[Any], fonts: FontCache):
    font_id = operands[0] if operands else None
    if not isinstance(font_id, str):
        raise MalformedOperandError(f"Expected a font name operand for Tf, found {operands!r}")
    return replace(state, current_font_id=str(font_id)), None


def _append_shown(state: TextState, strings: Iterable[object], fonts: FontCache):
    if not state.in_text_block:
        return state, None
    font = fonts.get(state.current_font_id)
    if font is None:
        raise MissingFontContextError(state.current_font_id)
    decoded: list[str] = []
    for operand in strings:
        raw = string_bytes(operand)
        if raw is None:
            raise MalformedOperandError(f"Expected a string operand, found {operand!r}")
        decoded.append(font.decode(raw))
    return replace(state, current_text=state.current_text + "".join(decoded)), None


def _operand(operands: Sequence[Any], index: int) -> list[Any]:
    if len(operands) <= index:
        raise MalformedOperandError(f"Expected at least {index + 1} operands, found {len(operands)}")
    return [operands[index]]


def show_text(state: TextState, operands: Sequence[Any], fonts: FontCache):
    return _append_shown(state, _operand(operands, 0), fonts)


def show_text_array(state: TextState, operands: Sequence[Any], fonts: FontCache):
    (elements,) = _operand(operands, 0)
    if not isinstance(elements, list):
        raise MalformedOperandError(f"Expected an array operand for TJ, found {elements!r}")
    strings = [item for item in elements if not is_number(item)]
    return _append_shown(state, strings, fonts)


def show_text_next_line(state: TextState, operands: Sequence[Any], fonts: FontCache):
    return _append_shown(state, _operand(operands, 0), fonts)


def show_text_with_spacing(state: TextState, operands: Sequence[Any], fonts: FontCache):
    return _append_shown(state, _operand(operands, 2), fonts)


def _translation(operands: Sequence[Any], index: int) -> int:
    value = operands[index]
    if not is_number(value):
        raise MalformedMatrixError(f"Expected integer or real, found {value!r}")
    return int(value)


def set_text_matrix(state: TextState, operands: Sequence[Any], fonts: FontCache):
    if len(operands) < 6:
        raise MalformedMatrixError(f"Expected 6 text matrix operands, found {len(operands)}")
    return replace(state, x=_translation(operands, 4), y=_translation(operands, 5)), None


TRANSITIONS: Mapping[bytes, Transition] = {
    b"BT": begin_text,
    b"ET": end_text,
    b"Tf": set_font,
    b"Tj": show_text,
    b"TJ": show_text_array,
    b"'": show_text_next_line,
    b'"': show_text_with_spacing,
    b"Tm": set_text_matrix,
}


# -- Drivers -----------------------------------------------------------------


def interpret_page(
    instructions: Iterable[tuple[Sequence[Any], Any]],
    fonts: FontCache,
) -> list[TextChunk]:
    """Run the state machine over one page, returning one chunk per text block."""

    state = TextState()
    chunks: list[TextChunk] = []
    for operands, operator in instructions:
        transition = TRANSITIONS.get(operator_name(operator))
        if transition is None:
            continue
        state, chunk = transition(state, operands, fonts)
        if chunk is not None:
            chunks.append(chunk)
    return chunks


def interpret_document(
    source: PageSource,
    pages: Iterable[DictionaryObject],
    fonts: FontCache,
    chunks: list[TextChunk] | None = None,
) -> list[TextChunk]:
    """Interpret ``pages`` in order, appending their chunks to ``chunks``."""

    chunks = chunks if chunks is not None else []
    for page_index, page in enumerate(pages):
        page_chunks = interpret_page(source.get_decoded_page_instructions(page), fonts)
        LOGGER.debug("Page %d produced %d text chunks", page_index + 1, len(page_chunks))
        chunks.extend(page_chunks)
    return chunks
