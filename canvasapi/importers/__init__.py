"""Content importers for various source formats."""

from .base import BaseImporter
from .markdown import MarkdownImporter, parse_markdown

__all__ = ["BaseImporter", "MarkdownImporter", "parse_markdown"]
