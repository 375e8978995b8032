"""CLI helpers for the transcript command."""

from __future__ import annotations

import sys
from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import ConversionContext
from ...tools.transcript.types import TranscriptOptions


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser(
        "transcript",
        help="Print a layout-aware text transcript of a PDF",
    )
    parser.add_argument("input", help="Input PDF path")
    parser.add_argument(
        "--pages",
        nargs="+",
        type=int,
        metavar="N",
        help="1-based page numbers to include (default: all pages)",
    )
    parser.add_argument(
        "--strict-superscripts",
        action="store_true",
        help="Fail when no superscript offset can be inferred instead of skipping detection",
    )
    parser.add_argument("--superscript-tag", default="sup", help="Tag wrapping raised text")
    parser.add_argument("--subscript-tag", default="sub", help="Tag wrapping lowered text")
    parser.set_defaults(build_context=_build_context, tool_name="transcript")


def _build_options(args) -> TranscriptOptions:
    page_numbers = None
    if args.pages:
        if any(page < 1 for page in args.pages):
            raise SystemExit("pdftranscript: page numbers start at 1")
        page_numbers = [page - 1 for page in args.pages]
    return TranscriptOptions(
        page_numbers=page_numbers,
        strict_superscripts=args.strict_superscripts,
        superscript_tag=args.superscript_tag,
        subscript_tag=args.subscript_tag,
    )


def _build_context(args) -> ConversionContext:
    return ConversionContext(
        input_path=args.input,
        output=sys.stdout,
        config={"options": _build_options(args)},
    )
