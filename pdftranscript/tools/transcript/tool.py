"""Plugin adapter exposing the transcript pipeline through the tool registry."""

from __future__ import annotations

from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .pipeline import TranscriptPipeline, write_transcript
from .types import TranscriptOptions, TranscriptResult

LOGGER = get_logger("pdftranscript.tools.transcript")


@register_tool("transcript")
class TranscriptTool(BaseTool):
    name = "transcript"

    def run(self) -> TranscriptResult:
        context = self.context
        source = context.require_input()
        options = context.config.get("options") or TranscriptOptions()
        if not isinstance(options, TranscriptOptions):
            raise TypeError(f"Expected TranscriptOptions, got {type(options).__name__}")

        result = TranscriptPipeline(options).run(source)
        if context.output is not None:
            LOGGER.debug("Writing %d transcript lines", len(result.lines))
            write_transcript(result, context.output)
        context.resources["result"] = result
        return result
