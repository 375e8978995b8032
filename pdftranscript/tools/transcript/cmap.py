"""ToUnicode CMap parsing."""

from __future__ import annotations

from typing import Any, Iterable

from pypdf.generic import ContentStream, StreamObject

from .exceptions import MalformedFontError
from .operands import operator_name, string_bytes

__all__ = ["load_unicode_map", "parse_unicode_map"]

_BFCHAR_END = b"endbfchar"


def _decode_code(operand: object) -> int:
    raw = string_bytes(operand)
    if raw is None or len(raw) != 2:
        raise MalformedFontError(f"Expected a 2-byte hexadecimal code, found {operand!r}")
    return int.from_bytes(raw, "big")


def parse_unicode_map(operations: Iterable[tuple[list[Any], Any]]) -> dict[int, int]:
    """Collect the ``endbfchar`` mappings of a tokenised CMap.

    Every ``endbfchar`` carries ``(code, unicode)`` operand pairs written as
    2-byte hexadecimal strings. Later pairs overwrite earlier ones. All other
    operators are ignored.
    """

    result: dict[int, int] = {}
    for operands, operator in operations:
        if operator_name(operator) != _BFCHAR_END:
            continue
        if len(operands) % 2 != 0:
            raise MalformedFontError(
                f"Expected even number of operands, found {len(operands)}"
            )
        for index in range(0, len(operands), 2):
            code = _decode_code(operands[index])
            result[code] = _decode_code(operands[index + 1])
    return result


def load_unicode_map(stream: StreamObject) -> dict[int, int]:
    """Tokenise a ToUnicode stream with pypdf and parse its mappings."""

    content = ContentStream(stream, None, forced_encoding="bytes")
    return parse_unicode_map(content.operations)
