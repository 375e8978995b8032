"""Helpers for reading typed content-stream operands."""

from __future__ import annotations

from pypdf.generic import ByteStringObject, TextStringObject

__all__ = ["is_number", "operator_name", "string_bytes"]


def operator_name(operator: object) -> bytes:
    if isinstance(operator, bytes):
        return operator
    if isinstance(operator, str):
        return operator.encode("latin-1", "ignore")
    return str(operator).encode("latin-1", "ignore")


def string_bytes(operand: object) -> bytes | None:
    """Return the raw bytes of a string operand, or ``None`` for other types."""

    if isinstance(operand, (ByteStringObject, TextStringObject)):
        return bytes(operand.original_bytes)
    if isinstance(operand, (bytes, bytearray)):
        return bytes(operand)
    return None


def is_number(operand: object) -> bool:
    # BooleanObject is not an int subclass, but plain bools are.
    return isinstance(operand, (int, float)) and not isinstance(operand, bool)
