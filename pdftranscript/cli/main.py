"""Command line interface for pdftranscript."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from pypdf.errors import PyPdfError

from ..core.utils import set_log_level
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import ConversionContext
from ..tools.common.pipeline import registry
from ..tools.transcript.exceptions import TranscriptError
from .commands import transcript

COMMAND_MODULES = [transcript]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdftranscript", description="pdftranscript CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)
    set_log_level(logging.DEBUG if args.verbose else logging.WARNING)
    context: ConversionContext = args.build_context(args)
    tool = registry.create(args.tool_name, context)
    try:
        tool.run()
    except TranscriptError as exc:
        stage = exc.stage or "unknown"
        print(f"pdftranscript: [{stage}] {exc.kind}: {exc}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError, PyPdfError) as exc:
        print(f"pdftranscript: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
