"""
Base importer interface for canvasapi.

This module defines the abstract interface that all content importers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseImporter(ABC):
    """
    Abstract base class for all content importers.

    Each importer converts text in a specific source format into plain block
    parameters. Importers do not enforce canvas invariants; their output is
    handed to the canonicalizer.
    """

    @abstractmethod
    def parse(self, text: str) -> List[Dict[str, Any]]:
        """
        Convert source text into block parameters.

        Implementations must be deterministic and must not raise on
        malformed input.

        Args:
            text: The source text

        Returns:
            List of block parameter dicts, in document order
        """
        pass
