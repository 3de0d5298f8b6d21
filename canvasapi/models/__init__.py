"""Data models for canvasapi."""

from .block import Block, build_block, find_block, validate_block
from .canvas import Canvas, CanvasChangeset

__all__ = [
    "Block",
    "Canvas",
    "CanvasChangeset",
    "build_block",
    "find_block",
    "validate_block"
]
