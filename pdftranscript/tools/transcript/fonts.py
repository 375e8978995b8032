"""Font resolution and glyph-code decoding for the transcript pipeline."""

from __future__ import annotations

import codecs
import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Protocol

from pypdf import _cmap
from pypdf._codecs import _pdfdoc_encoding, charset_encoding
from pypdf.generic import DictionaryObject, IndirectObject, NameObject, StreamObject

from ...core.utils import get_logger
from .cmap import load_unicode_map
from .exceptions import FontDecodeError, UnresolvableReferenceError

__all__ = [
    "DEFAULT_ENCODING",
    "Font",
    "FontCache",
    "FontSource",
    "build_font",
    "font_encoding_name",
    "font_glyph_table",
    "resolve_fonts",
]

LOGGER = get_logger("pdftranscript.tools.transcript.fonts")

DEFAULT_ENCODING = "/StandardEncoding"

_UTF16_ENCODINGS = {
    "/Identity-H",
    "/Identity-V",
    "/UniGB-UCS2-H",
    "/UniGB-UCS2-V",
    "/UniGB-UTF16-H",
    "/UniGB-UTF16-V",
    "/UniCNS-UCS2-H",
    "/UniCNS-UTF16-H",
    "/UniJIS-UCS2-H",
    "/UniJIS-UTF16-H",
    "/UniKS-UCS2-H",
    "/UniKS-UTF16-H",
}


class FontSource(Protocol):
    """Subset of :class:`~pdftranscript.core.parser.PDFParser` used for font resolution."""

    def get_page_fonts(self, page: DictionaryObject) -> Mapping[str, DictionaryObject]:
        ...

    def resolve_reference(self, ref: IndirectObject) -> StreamObject | None:
        ...


def _check_scalar(value: int) -> str:
    if 0xD800 <= value <= 0xDFFF or not 0 <= value <= 0x10FFFF:
        raise FontDecodeError(f"Code point U+{value:04X} is not a Unicode scalar value")
    return chr(value)


def _printable(text: str) -> str:
    # Bytes an encoding leaves undefined come back as C0/C1 control characters.
    return "".join(
        char for char in text if char in "\t\n\r" or unicodedata.category(char) != "Cc"
    )


@dataclass(frozen=True, slots=True)
class Font:
    """Decoder for the strings shown with one font resource."""

    encoding: str = DEFAULT_ENCODING
    unicode_map: Mapping[int, int] | None = None
    glyphs: tuple[str, ...] | None = None

    def decode(self, raw: bytes) -> str:
        if self.unicode_map is not None:
            return self._decode_with_map(raw)
        return self._decode_with_encoding(raw)

    def _decode_with_map(self, raw: bytes) -> str:
        if len(raw) % 2 != 0:
            raise FontDecodeError(
                f"Expected an even number of bytes for a 16-bit font, found {len(raw)}"
            )
        characters: list[str] = []
        for index in range(0, len(raw), 2):
            code = int.from_bytes(raw[index : index + 2], "big")
            characters.append(_check_scalar(self.unicode_map.get(code, code)))
        return "".join(characters)

    def _decode_with_encoding(self, raw: bytes) -> str:
        table = self.glyphs if self.glyphs is not None else charset_encoding.get(self.encoding)
        if table is not None:
            return _printable("".join(table[byte] for byte in raw))
        if self.encoding in _UTF16_ENCODINGS:
            return self._decode_utf16(raw)
        if raw.startswith(codecs.BOM_UTF16_BE):
            return self._decode_utf16(raw[2:])
        return _printable("".join(_pdfdoc_encoding[byte] for byte in raw))

    @staticmethod
    def _decode_utf16(raw: bytes) -> str:
        try:
            return raw.decode("utf-16-be")
        except UnicodeDecodeError as exc:
            raise FontDecodeError(f"Invalid UTF-16BE text: {exc}") from exc


@dataclass(slots=True)
class FontCache:
    """Document-wide mapping from font resource name to :class:`Font`.

    Written once while fonts are resolved, read-only while pages are
    interpreted.
    """

    fonts: dict[str, Font] = field(default_factory=dict)

    def __contains__(self, font_id: object) -> bool:
        return font_id in self.fonts

    def __len__(self) -> int:
        return len(self.fonts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fonts)

    def get(self, font_id: str | None) -> Font | None:
        if font_id is None:
            return None
        return self.fonts.get(str(font_id))

    def add(self, font_id: str, font: Font) -> None:
        self.fonts[str(font_id)] = font


def font_encoding_name(font_dict: DictionaryObject) -> str:
    """Return the declared encoding name of ``font_dict``."""

    encoding = font_dict.get(NameObject("/Encoding"))
    if isinstance(encoding, IndirectObject):
        encoding = encoding.get_object()
    if isinstance(encoding, NameObject):
        return str(encoding)
    if isinstance(encoding, DictionaryObject):
        base = encoding.get(NameObject("/BaseEncoding"))
        if isinstance(base, NameObject):
            return str(base)
    return DEFAULT_ENCODING


def font_glyph_table(font_dict: DictionaryObject) -> tuple[str, ...] | None:
    """Return the 256-entry glyph table of a dictionary encoding with ``/Differences``."""

    encoding = font_dict.get(NameObject("/Encoding"))
    if isinstance(encoding, IndirectObject):
        encoding = encoding.get_object()
    if not isinstance(encoding, DictionaryObject) or NameObject("/Differences") not in encoding:
        return None
    table, _ = _cmap.get_encoding(font_dict)
    if not isinstance(table, dict):
        return None
    glyphs = []
    for code in range(256):
        glyph = table.get(code, "")
        # Glyph names without a Unicode value are kept by pypdf as "/name".
        glyphs.append("" if glyph.startswith("/") and len(glyph) > 1 else glyph)
    return tuple(glyphs)


def build_font(font_id: str, font_dict: DictionaryObject, source: FontSource) -> Font:
    """Build the :class:`Font` for ``font_dict``, loading its ToUnicode table if present."""

    encoding = font_encoding_name(font_dict)
    to_unicode = font_dict.get(NameObject("/ToUnicode"))
    stream: StreamObject | None = None
    if isinstance(to_unicode, IndirectObject):
        stream = source.resolve_reference(to_unicode)
        if stream is None:
            raise UnresolvableReferenceError(font_id, to_unicode)
    elif isinstance(to_unicode, StreamObject):
        stream = to_unicode
    if stream is None:
        return Font(encoding=encoding, glyphs=font_glyph_table(font_dict))
    unicode_map = load_unicode_map(stream)
    LOGGER.debug("Loaded %d ToUnicode mappings for font %s", len(unicode_map), font_id)
    return Font(encoding=encoding, unicode_map=unicode_map)


def resolve_fonts(
    source: FontSource,
    pages: Iterable[DictionaryObject],
    cache: FontCache | None = None,
) -> FontCache:
    """Resolve every font referenced by ``pages`` into ``cache``.

    Fonts are deduplicated by resource name: the first page declaring a name
    decides which font it refers to for the whole document.
    """

    cache = cache if cache is not None else FontCache()
    for page in pages:
        for font_id, font_dict in source.get_page_fonts(page).items():
            if font_id in cache:
                continue
            cache.add(font_id, build_font(font_id, font_dict, source))
    return cache
