"""Canvas persistence."""

from .base import DocumentStore
from .manager import DatabaseManager

__all__ = ["DocumentStore", "DatabaseManager"]
