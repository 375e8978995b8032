from __future__ import annotations

import pytest
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    ContentStream,
    DecodedStreamObject,
    FloatObject,
    NameObject,
    NumberObject,
)

from pdftranscript.tools.transcript.exceptions import (
    MalformedMatrixError,
    MalformedOperandError,
    MissingFontContextError,
)
from pdftranscript.tools.transcript.fonts import Font, FontCache
from pdftranscript.tools.transcript.interpreter import (
    TextState,
    begin_text,
    end_text,
    interpret_document,
    interpret_page,
    set_font,
    set_text_matrix,
    show_text,
)
from pdftranscript.tools.transcript.rows import TextChunk


@pytest.fixture()
def fonts() -> FontCache:
    cache = FontCache()
    cache.add("/F1", Font(encoding="/WinAnsiEncoding"))
    cache.add("/F2", Font(unicode_map={0x0001: 0x0048, 0x0002: 0x0069}))
    return cache


def _matrix(x, y) -> list:
    return [NumberObject(1), NumberObject(0), NumberObject(0), NumberObject(1), x, y]


def _instructions(data: bytes) -> list:
    stream = DecodedStreamObject()
    stream.set_data(data)
    return ContentStream(stream, None, forced_encoding="bytes").operations


def test_text_block_emits_one_chunk(fonts) -> None:
    instructions = [
        ([], b"BT"),
        ([NameObject("/F1"), NumberObject(12)], b"Tf"),
        (_matrix(NumberObject(10), NumberObject(700)), b"Tm"),
        ([ByteStringObject(b"Hi")], b"Tj"),
        ([], b"ET"),
    ]

    assert interpret_page(instructions, fonts) == [TextChunk("Hi", 10, 700)]


def test_transitions_are_pure(fonts) -> None:
    state = TextState()

    opened, chunk = begin_text(state, [], fonts)
    assert chunk is None
    assert state.in_text_block is False
    assert opened.in_text_block is True

    selected, _ = set_font(opened, [NameObject("/F1"), NumberObject(12)], fonts)
    shown, _ = show_text(selected, [ByteStringObject(b"ab")], fonts)
    assert shown.current_text == "ab"
    assert selected.current_text == ""

    closed, chunk = end_text(shown, [], fonts)
    assert chunk == TextChunk("ab", 0, 0)
    assert closed.in_text_block is False
    assert closed.current_text == ""
    assert closed.current_font_id == "/F1"


def test_text_outside_block_is_ignored(fonts) -> None:
    instructions = [
        ([NameObject("/F1"), NumberObject(12)], b"Tf"),
        ([ByteStringObject(b"lost")], b"Tj"),
        ([], b"BT"),
        ([ByteStringObject(b"kept")], b"Tj"),
        ([], b"ET"),
    ]

    assert [chunk.text for chunk in interpret_page(instructions, fonts)] == ["kept"]


def test_empty_text_block_still_emits_chunk(fonts) -> None:
    assert interpret_page([([], b"BT"), ([], b"ET")], fonts) == [TextChunk("", 0, 0)]


def test_matrix_translation_truncates_reals(fonts) -> None:
    state, _ = set_text_matrix(TextState(), _matrix(FloatObject("10.9"), FloatObject("-3.7")), fonts)

    assert (state.x, state.y) == (10, -3)


def test_position_and_font_persist_across_blocks(fonts) -> None:
    instructions = _instructions(
        b"BT /F2 10 Tf 1 0 0 1 5 50 Tm <00010002> Tj ET\n"
        b"BT <0002> Tj ET\n"
    )

    chunks = interpret_page(instructions, FontCache({"/F2": fonts.get("/F2")}))

    assert chunks[0] == TextChunk("Hi", 5, 50)
    assert chunks[1] == TextChunk("i", 5, 50)


def test_show_text_without_font_is_fatal(fonts) -> None:
    instructions = [([], b"BT"), ([ByteStringObject(b"x")], b"Tj")]

    with pytest.raises(MissingFontContextError, match="before any font"):
        interpret_page(instructions, fonts)


def test_show_text_with_unknown_font_is_fatal(fonts) -> None:
    instructions = [
        ([], b"BT"),
        ([NameObject("/F9"), NumberObject(12)], b"Tf"),
        ([ByteStringObject(b"x")], b"Tj"),
    ]

    with pytest.raises(MissingFontContextError) as excinfo:
        interpret_page(instructions, fonts)

    assert excinfo.value.font_id == "/F9"


@pytest.mark.parametrize(
    "operands",
    [
        _matrix(NameObject("/X"), NumberObject(0)),
        _matrix(NumberObject(0), ByteStringObject(b"7")),
        [NumberObject(1), NumberObject(0)],
    ],
)
def test_malformed_text_matrix_is_fatal(fonts, operands) -> None:
    with pytest.raises(MalformedMatrixError):
        interpret_page([([], b"BT"), (operands, b"Tm")], fonts)


def test_text_array_keeps_strings_and_drops_adjustments(fonts) -> None:
    instructions = _instructions(b"BT /F1 12 Tf [(Hel) -120 (lo) 30.5 (!)] TJ ET")

    assert interpret_page(instructions, fonts) == [TextChunk("Hello!", 0, 0)]


def test_next_line_show_operators_append_text(fonts) -> None:
    instructions = [
        ([], b"BT"),
        ([NameObject("/F1"), NumberObject(12)], b"Tf"),
        ([ByteStringObject(b"one ")], b"'"),
        ([NumberObject(1), NumberObject(2), ByteStringObject(b"two")], b'"'),
        ([ArrayObject([ByteStringObject(b"!")])], b"TJ"),
        ([], b"ET"),
    ]

    assert interpret_page(instructions, fonts)[0].text == "one two!"


def test_unsupported_operators_are_ignored(fonts) -> None:
    instructions = _instructions(
        b"q 1 0 0 1 0 0 cm BT /F1 12 Tf 1 0 0 1 20 30 Tm 5 6 Td (x) Tj ET Q"
    )

    assert interpret_page(instructions, fonts) == [TextChunk("x", 20, 30)]


class _PagedSource:
    def __init__(self, pages: dict[str, list]):
        self.pages = pages

    def get_decoded_page_instructions(self, page):
        return self.pages[page]


def test_font_selection_does_not_carry_into_next_page(fonts) -> None:
    source = _PagedSource(
        {
            "first": [([], b"BT"), ([NameObject("/F1"), NumberObject(12)], b"Tf"), ([], b"ET")],
            "second": [([], b"BT"), ([ByteStringObject(b"x")], b"Tj"), ([], b"ET")],
        }
    )

    with pytest.raises(MissingFontContextError):
        interpret_document(source, ["first", "second"], fonts)


def test_position_resets_per_page_and_chunks_keep_page_order(fonts) -> None:
    source = _PagedSource(
        {
            "first": [
                ([], b"BT"),
                ([NameObject("/F1"), NumberObject(12)], b"Tf"),
                (_matrix(NumberObject(10), NumberObject(700)), b"Tm"),
                ([ByteStringObject(b"one")], b"Tj"),
                ([], b"ET"),
            ],
            "second": [([], b"BT"), ([], b"ET")],
        }
    )
    collected = [TextChunk("earlier", 1, 1)]

    chunks = interpret_document(source, ["first", "second"], fonts, collected)

    assert chunks is collected
    assert chunks == [TextChunk("earlier", 1, 1), TextChunk("one", 10, 700), TextChunk("", 0, 0)]


@pytest.mark.parametrize(
    "operands",
    [[NumberObject(12)], [], [ByteStringObject(b"F1"), NumberObject(12)]],
)
def test_font_operator_requires_a_name(fonts, operands) -> None:
    with pytest.raises(MalformedOperandError, match="font name"):
        interpret_page([(operands, b"Tf")], fonts)


@pytest.mark.parametrize(
    "instruction",
    [
        ([NumberObject(3)], b"Tj"),
        ([], b"Tj"),
        ([NameObject("/text")], b"'"),
        ([NumberObject(1), NumberObject(2)], b'"'),
        ([ByteStringObject(b"not an array")], b"TJ"),
        ([ArrayObject([ByteStringObject(b"a"), NameObject("/b")])], b"TJ"),
    ],
)
def test_show_text_operands_must_be_strings(fonts, instruction) -> None:
    instructions = [([], b"BT"), ([NameObject("/F1"), NumberObject(12)], b"Tf"), instruction]

    with pytest.raises(MalformedOperandError):
        interpret_page(instructions, fonts)
