"""
Error kinds raised by the canvas core.

Validation and block construction failures carry a field-keyed error report
so callers can turn them into structured responses.
"""

from typing import Dict, List


class CanvasError(Exception):
    """Base class for all canvas errors."""


class CanvasValidationError(CanvasError):
    """
    A canvas or one of its fields failed validation.

    Attributes:
        errors: Mapping of field name to the list of messages for that field
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Invalid canvas ({details})")


class BlockConstructionError(CanvasValidationError):
    """Block input that cannot be turned into a valid block."""

    def __init__(self, message: str, field: str = "blocks"):
        self.message = message
        super().__init__({field: [message]})


class InvalidBlockType(BlockConstructionError):
    """A block was given an empty type."""


class CanvasNotFound(CanvasError):
    """A canvas looked up by ID does not exist."""

    def __init__(self, canvas_id: str):
        self.canvas_id = canvas_id
        super().__init__(f"Canvas not found: {canvas_id}")
