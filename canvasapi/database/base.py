"""
Document store interface for canvasapi.

The canvas core never talks to storage directly; it is handed an object
implementing this interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Canvas


class DocumentStore(ABC):
    """
    Abstract base class for canvas persistence.

    Implementations own concurrency control for writes to the same canvas.
    """

    @abstractmethod
    def get(self, canvas_id: str, team_id: Optional[str] = None) -> Optional[Canvas]:
        """
        Fetch a canvas by ID, optionally constrained to a team.

        Returns:
            The canvas, or None if not found
        """
        pass

    @abstractmethod
    def insert(self, canvas: Canvas) -> bool:
        """
        Store a new canvas.

        Returns:
            True if stored, False if a canvas with the same ID already exists
        """
        pass

    @abstractmethod
    def update(self, canvas: Canvas) -> bool:
        """
        Replace a stored canvas.

        Returns:
            True if a stored canvas was replaced, False if none matched
        """
        pass

    @abstractmethod
    def delete(self, canvas: Canvas) -> bool:
        """
        Remove a canvas.

        Returns:
            True if a stored canvas was removed, False if none matched
        """
        pass

    @abstractmethod
    def list_canvases(self, creator_id: str, only_templates: bool = False) -> List[Canvas]:
        """
        List canvases created by a user, oldest first.

        Args:
            creator_id: The creating user
            only_templates: Only return canvases marked as templates
        """
        pass
