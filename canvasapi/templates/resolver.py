"""
Template resolution for canvasapi.

A new canvas may name another canvas as its template. When that canvas
exists, its block tree is cloned into the new canvas. A template that cannot
be found is ignored rather than reported.
"""

import logging
from typing import Any, Mapping, Optional

from ..canonicalizer import canonicalize_blocks
from ..database import DocumentStore
from ..models import CanvasChangeset


TEMPLATE_REF_TYPE = "canvas"


class TemplateResolver:
    """
    Applies template canvases to changesets for new canvases.
    """

    def __init__(self, store: DocumentStore):
        """
        Initialize the resolver.

        Args:
            store: Where template canvases are looked up
        """
        self.store = store

    @staticmethod
    def template_id(template_ref: Optional[Mapping[str, Any]]) -> Optional[str]:
        """Extract the canvas ID from a ``{"id": ..., "type": "canvas"}`` reference."""
        if not isinstance(template_ref, Mapping):
            return None
        if template_ref.get("type") != TEMPLATE_REF_TYPE or not template_ref.get("id"):
            return None
        return str(template_ref["id"])

    def resolve(self, changeset: CanvasChangeset, template_ref: Optional[Mapping[str, Any]],
                ignore_blocks: bool = False) -> CanvasChangeset:
        """
        Apply a template to a changeset.

        Args:
            changeset: The changeset for the new canvas
            template_ref: Reference to the template canvas, or None
            ignore_blocks: Record the template without copying its blocks

        Returns:
            A new changeset with the template applied, or the input changeset
            unchanged if there is no usable template
        """
        template_id = self.template_id(template_ref)
        if template_id is None:
            return changeset

        # TODO: Constrain the lookup to the creating user's team once callers pass it in.
        template = self.store.get(template_id)
        if template is None:
            logging.info(f"Template canvas {template_id} not found; ignoring it")
            return changeset

        updates: dict = {"template_id": template.id}
        if not ignore_blocks:
            updates["blocks"] = canonicalize_blocks(
                [block.to_template_params() for block in template.blocks]
            )
            logging.debug(f"Cloned {len(template.blocks)} blocks from template {template.id}")

        return changeset.model_copy(update=updates)
