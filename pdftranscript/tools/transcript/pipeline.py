"""Transcript pipeline orchestrating font resolution, interpretation and row analysis."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Protocol, Sequence, TextIO

from pypdf.errors import PyPdfError
from pypdf.generic import DictionaryObject, IndirectObject, StreamObject

from ...core.parser import PDFParser
from ...core.utils import get_logger
from .exceptions import DocumentReadError, TranscriptError
from .fonts import FontCache, resolve_fonts
from .interpreter import interpret_document
from .rows import TextChunk, merge_text_rows
from .scripts import find_superscript_offset, reclassify_rows
from .types import TranscriptOptions, TranscriptResult

__all__ = [
    "PIPELINE_STEPS",
    "DocumentSource",
    "PipelineLogger",
    "TranscriptPipeline",
    "extract_transcript",
    "write_transcript",
]

LOGGER = get_logger("pdftranscript.tools.transcript.pipeline")

PIPELINE_STEPS: Sequence[str] = (
    "Open the document and select pages.",
    "Resolve fonts and load ToUnicode CMaps.",
    "Interpret page content streams into text chunks.",
    "Merge chunks sharing a baseline into rows.",
    "Discover the dominant superscript offset.",
    "Reclassify raised and lowered rows.",
    "Merge reclassified rows into the final transcript.",
)


class DocumentSource(Protocol):
    """Document model consumed by the pipeline."""

    def get_pages(self) -> Sequence[DictionaryObject]:
        ...

    def get_page_fonts(self, page: DictionaryObject) -> Mapping[str, DictionaryObject]:
        ...

    def resolve_reference(self, ref: IndirectObject) -> StreamObject | None:
        ...

    def get_decoded_page_instructions(self, page: DictionaryObject) -> list[tuple[list[Any], bytes]]:
        ...


@dataclass(slots=True)
class PipelineLogger:
    """Tracks progress through the transcript pipeline."""

    steps: Sequence[str] = PIPELINE_STEPS
    _index: int = 0
    records: list[str] = field(default_factory=list)

    def advance(self, detail: str | None = None) -> None:
        if self._index >= len(self.steps):
            raise RuntimeError("Transcript pipeline logged more steps than expected")
        step = self.steps[self._index]
        self._index += 1
        if detail:
            message = f"{step} {detail}"
        else:
            message = step
        self.records.append(message)
        LOGGER.debug(message)

    def remaining(self) -> int:
        return len(self.steps) - self._index


@contextmanager
def _stage(name: str) -> Iterator[None]:
    try:
        yield
    except TranscriptError as exc:
        if exc.stage is None:
            exc.stage = name
        LOGGER.error("Transcript stage '%s' failed: %s", exc.stage, exc)
        raise
    except PyPdfError as exc:
        LOGGER.error("Transcript stage '%s' failed reading the PDF: %s", name, exc)
        raise DocumentReadError(str(exc) or type(exc).__name__, stage=name) from exc


class TranscriptPipeline:
    """Runs the end-to-end PDF → transcript extraction."""

    def __init__(
        self,
        options: TranscriptOptions | None = None,
        *,
        parser_factory: type[PDFParser] = PDFParser,
    ) -> None:
        self.options = options or TranscriptOptions()
        self._parser_factory = parser_factory

    def run(self, input_document: str | Path) -> TranscriptResult:
        """Extract the transcript of the PDF stored at ``input_document``."""

        source_path = Path(input_document)
        if not source_path.exists():
            raise FileNotFoundError(f"Input PDF not found: {source_path}")
        LOGGER.info("Starting transcript extraction for %s", source_path)
        parser = self._parser_factory(source_path, page_numbers=self.options.page_numbers)
        return self.transcribe(parser)

    def transcribe(self, source: DocumentSource) -> TranscriptResult:
        """Run every stage against an already opened document source."""

        logger = PipelineLogger()
        options = self.options

        with _stage("open"):
            pages = list(source.get_pages())
        logger.advance(f"Selected {len(pages)} pages.")

        fonts = FontCache()
        with _stage("fonts"):
            resolve_fonts(source, pages, fonts)
        custom = sum(1 for font_id in fonts if fonts.get(font_id).unicode_map is not None)
        logger.advance(f"Resolved {len(fonts)} fonts ({custom} with ToUnicode tables).")

        with _stage("interpret"):
            chunks = interpret_document(source, pages, fonts)
        logger.advance(f"Collected {len(chunks)} text chunks.")

        rows = merge_text_rows(chunks)
        logger.advance(f"Merged into {len(rows)} rows.")

        with _stage("superscripts"):
            offset = find_superscript_offset(rows, strict=options.strict_superscripts)
        logger.advance(f"Offset: {offset if offset is not None else 'none'}.")

        reclassified = reclassify_rows(
            rows,
            offset,
            superscript_tag=options.superscript_tag,
            subscript_tag=options.subscript_tag,
        )
        moved = sum(1 for before, after in zip(rows, reclassified) if before is not after)
        logger.advance(f"Reclassified {moved} rows.")

        final_rows: list[TextChunk] = merge_text_rows(reclassified)
        logger.advance(f"Produced {len(final_rows)} transcript lines.")

        LOGGER.info(
            "Extracted %d lines from %d pages (superscript offset: %s)",
            len(final_rows),
            len(pages),
            offset,
        )
        return TranscriptResult(
            lines=tuple(str(row) for row in final_rows),
            superscript_offset=offset,
            page_count=len(pages),
            font_count=len(fonts),
            chunk_count=len(chunks),
            log=tuple(logger.records),
        )


def write_transcript(result: TranscriptResult, stream: TextIO | None = None) -> None:
    """Write the offset line followed by one line per transcript row."""

    stream = stream if stream is not None else sys.stdout
    offset = result.superscript_offset
    stream.write(f"Superscript offset: {offset if offset is not None else 'none'}\n")
    for line in result.lines:
        stream.write(line)
        stream.write("\n")


def extract_transcript(
    input_document: str | Path,
    *,
    options: TranscriptOptions | None = None,
) -> TranscriptResult:
    """Convenience wrapper around :class:`TranscriptPipeline`."""

    return TranscriptPipeline(options).run(input_document)
