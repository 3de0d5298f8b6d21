"""
canvasapi: Block-tree documents for collaborative canvases.

Builds canvases from Markdown or block lists, keeps their block trees
canonical, and clones template canvases into new ones.
"""

__version__ = "0.1.0"
__author__ = "canvasapi Project"

# Import main components
from .builder import construct_canvas, update_canvas
from .canonicalizer import canonicalize_blocks
from .database import DatabaseManager, DocumentStore
from .errors import (
    BlockConstructionError,
    CanvasError,
    CanvasNotFound,
    CanvasValidationError,
    InvalidBlockType,
)
from .importers import BaseImporter, MarkdownImporter, parse_markdown
from .models import Block, Canvas, CanvasChangeset
from .services import CanvasResult, CanvasService, ChannelNotifier
from .templates import TemplateResolver

__all__ = [
    "Block",
    "Canvas",
    "CanvasChangeset",
    "construct_canvas",
    "update_canvas",
    "canonicalize_blocks",
    "DatabaseManager",
    "DocumentStore",
    "BaseImporter",
    "MarkdownImporter",
    "parse_markdown",
    "TemplateResolver",
    "CanvasResult",
    "CanvasService",
    "ChannelNotifier",
    "CanvasError",
    "CanvasValidationError",
    "BlockConstructionError",
    "InvalidBlockType",
    "CanvasNotFound"
]
