"""Document access helpers backed by :mod:`pypdf`."""

from .parser import PDFParser
from .utils import get_logger, resolve_path

__all__ = ["PDFParser", "get_logger", "resolve_path"]
