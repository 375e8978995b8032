"""Namespace for pluggable pdftranscript tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .transcript import tool  # noqa: F401  # register the transcript tool


__all__ = ["registry", "load_builtin_plugins"]
