from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _cmap_data(mapping: Mapping[int, int]) -> bytes:
    pairs = "\n".join(f"<{code:04X}> <{value:04X}>" for code, value in mapping.items())
    return (
        "/CIDInit /ProcSet findresource begin\n"
        "12 dict begin\n"
        "begincmap\n"
        "/CMapName /Test-UCS def\n"
        "1 begincodespacerange\n<0000> <FFFF>\nendcodespacerange\n"
        f"{len(mapping)} beginbfchar\n{pairs}\nendbfchar\n"
        "endcmap\n"
        "CMapName currentdict /CMap defineresource pop\n"
        "end\nend\n"
    ).encode("latin-1")


def _stream(data: bytes) -> DecodedStreamObject:
    stream = DecodedStreamObject()
    stream.set_data(data)
    return stream


@pytest.fixture()
def cmap_stream() -> Callable[[Mapping[int, int]], DecodedStreamObject]:
    def _create(mapping: Mapping[int, int]) -> DecodedStreamObject:
        return _stream(_cmap_data(mapping))

    return _create


@pytest.fixture()
def pdf_factory(tmp_path: Path):
    """Write a PDF whose pages draw the given content streams.

    ``fonts`` maps resource names to either an encoding name (a simple
    font) or a ``{code: unicode}`` mapping (a Type0 font carrying a
    ToUnicode CMap). Every page sees every font.
    """

    def _create(
        filename: str,
        pages: Sequence[bytes],
        fonts: Mapping[str, str | Mapping[int, int]] | None = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        font_refs = {}
        for font_id, definition in (fonts or {"/F1": "/WinAnsiEncoding"}).items():
            font = DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/Font"),
                    NameObject("/BaseFont"): NameObject("/Helvetica"),
                }
            )
            if isinstance(definition, str):
                font[NameObject("/Subtype")] = NameObject("/Type1")
                font[NameObject("/Encoding")] = NameObject(definition)
            else:
                font[NameObject("/Subtype")] = NameObject("/Type0")
                font[NameObject("/Encoding")] = NameObject("/Identity-H")
                font[NameObject("/ToUnicode")] = writer._add_object(_stream(_cmap_data(definition)))
            font_refs[NameObject(font_id)] = writer._add_object(font)

        for content in pages:
            page = writer.add_blank_page(width=612, height=792)
            page[NameObject("/Contents")] = writer._add_object(_stream(content))
            page[NameObject("/Resources")] = DictionaryObject(
                {NameObject("/Font"): DictionaryObject(font_refs)}
            )

        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def hello_pdf(pdf_factory) -> Path:
    return pdf_factory("hello.pdf", [b"BT /F1 12 Tf 1 0 0 1 10 700 Tm (Hi) Tj ET"])


@pytest.fixture()
def superscript_pdf(pdf_factory) -> Path:
    content = (
        b"BT /F1 12 Tf 1 0 0 1 10 100 Tm (Base) Tj ET\n"
        b"BT /F1 8 Tf 1 0 0 1 40 98 Tm (2) Tj ET\n"
        b"BT /F1 12 Tf 1 0 0 1 10 90 Tm (Next) Tj ET\n"
    )
    return pdf_factory("superscript.pdf", [content])
