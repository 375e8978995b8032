"""Document access facade for the transcript pipeline.

This module provides a thin abstraction around :class:`pypdf.PdfReader`
exposing exactly what the text reconstruction stages need: the ordered
pages, the font resources visible from each page, indirect reference
resolution, and each page's decoded content stream as a list of
``(operands, operator)`` instructions.  Container parsing, cross-reference
handling and stream decompression all stay inside pypdf.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ContentStream,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    StreamObject,
)

from .utils import get_logger, resolve_path

__all__ = ["Instruction", "ObjectResolver", "PDFParser"]

LOGGER = get_logger("pdftranscript.core.parser")

Instruction = tuple[list[Any], bytes]


@dataclass(slots=True)
class ObjectResolver:
    """Lookup helper to resolve PDF indirect references on demand."""

    reader: PdfReader

    def resolve(self, obj_ref: IndirectObject | tuple[int, int]) -> Any | None:
        """Resolve an indirect reference, returning ``None`` when it is dangling."""

        if isinstance(obj_ref, IndirectObject):
            idnum, generation = obj_ref.idnum, obj_ref.generation
        else:
            idnum, generation = obj_ref
        try:
            resolved = IndirectObject(idnum, generation, self.reader).get_object()
        except (PdfReadError, KeyError, ValueError) as exc:
            LOGGER.debug("Failed to resolve %s %s R: %s", idnum, generation, exc)
            return None
        if isinstance(resolved, NullObject):
            return None
        return resolved


class PDFParser:
    """Page, font and content-stream access for a single PDF file."""

    def __init__(
        self,
        source: str | Path,
        *,
        page_numbers: Sequence[int] | None = None,
        preload: bool = False,
    ) -> None:
        self.source = resolve_path(source)
        self.page_numbers = list(page_numbers) if page_numbers is not None else None
        self._reader: PdfReader | None = None
        self._resolver: ObjectResolver | None = None
        if preload:
            self.load()

    # -- Cached accessors ----------------------------------------------------

    @property
    def reader(self) -> PdfReader:
        """Return a cached :class:`PdfReader` instance for ``source``."""

        return self.load()

    @property
    def resolver(self) -> ObjectResolver:
        if self._resolver is None:
            self._resolver = ObjectResolver(reader=self.reader)
        return self._resolver

    def load(self) -> PdfReader:
        if self._reader is None:
            self._reader = PdfReader(str(self.source))
            LOGGER.debug("Opened %s (%d pages)", self.source, len(self._reader.pages))
        return self._reader

    def page_count(self) -> int:
        """Return the number of pages in the PDF."""

        return len(self.reader.pages)

    def iter_pages(self, *, indices: Iterable[int] | None = None):
        reader = self.reader
        if indices is None:
            yield from reader.pages
            return
        for index in indices:
            yield reader.pages[index]

    # -- Collaborator interface ---------------------------------------------

    def get_pages(self) -> list[DictionaryObject]:
        """Return the selected pages in document order."""

        total = self.page_count()
        if self.page_numbers is None:
            return list(self.iter_pages())
        invalid = [index for index in self.page_numbers if not 0 <= index < total]
        if invalid:
            raise ValueError(f"Page numbers out of range (document has {total} pages): {invalid}")
        return list(self.iter_pages(indices=self.page_numbers))

    def get_page_fonts(self, page: DictionaryObject) -> dict[str, DictionaryObject]:
        """Map each font resource name visible from ``page`` to its font dictionary."""

        fonts: dict[str, DictionaryObject] = {}
        resources = self._inherit_dictionary(page, "/Resources")
        if resources is None:
            return fonts
        font_dict = self._resolve(resources.get(NameObject("/Font")))
        if not isinstance(font_dict, DictionaryObject):
            return fonts
        for font_id, value in font_dict.items():
            resolved = self._resolve(value)
            if isinstance(resolved, DictionaryObject):
                fonts[str(font_id)] = resolved
            else:
                LOGGER.debug("Skipping font resource %s: not a dictionary", font_id)
        return fonts

    def resolve_reference(self, ref: IndirectObject) -> StreamObject | None:
        """Resolve ``ref`` to a stream object, or ``None`` if it does not resolve to one."""

        resolved = self.resolver.resolve(ref)
        if isinstance(resolved, StreamObject):
            return resolved
        return None

    def get_decoded_page_instructions(self, page: DictionaryObject) -> list[Instruction]:
        """Return the page content as ``(operands, operator)`` pairs.

        String operands are kept as raw bytes; decoding them is the job of the
        page's fonts.
        """

        contents = self._resolve(page.get(NameObject("/Contents")))
        if contents is None or isinstance(contents, NullObject):
            return []
        stream = ContentStream(contents, self.reader, forced_encoding="bytes")
        return list(stream.operations)

    # -- Internal helpers ----------------------------------------------------

    def _inherit_dictionary(self, page: DictionaryObject, key: str) -> DictionaryObject | None:
        visited: set[int] = set()
        current: DictionaryObject | None = page
        while current is not None:
            obj_id = id(current)
            if obj_id in visited:
                break
            visited.add(obj_id)
            candidate = current.get(NameObject(key))
            resolved = self._resolve(candidate)
            if isinstance(resolved, DictionaryObject):
                return resolved
            parent = current.get(NameObject("/Parent"))
            parent_resolved = self._resolve(parent)
            current = parent_resolved if isinstance(parent_resolved, DictionaryObject) else None
        return None

    def _resolve(self, obj: Any) -> Any:
        if isinstance(obj, IndirectObject):
            return self.resolver.resolve(obj)
        return obj
