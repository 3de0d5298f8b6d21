"""
Canvas document models for canvasapi.

A canvas owns a canonical block tree (title first, at least two top-level
blocks) plus its sharing and bookkeeping metadata.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .block import TITLE, Block, find_block, generate_id


LINK_ACCESS_VALUES = ("none", "read", "edit")
SUMMARY_LENGTH = 140


class Canvas(BaseModel):
    """
    A document made of nested content blocks.

    Serialized documents use camelCase keys (``linkAccess``, ``editedAt``, ...);
    both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=generate_id, description="Canvas identifier")

    team_id: Optional[str] = Field(None, description="The team owning the canvas")
    creator_id: Optional[str] = Field(None, description="The user who created the canvas")
    template_id: Optional[str] = Field(None, description="The canvas this one was cloned from")

    is_template: bool = False
    link_access: Literal["none", "read", "edit"] = "none"
    native_version: str = "1.0.0"
    type: str = "http://sharejs.org/types/JSONv0"
    version: int = 0
    slack_channel_ids: List[str] = Field(default_factory=list)

    edited_at: Optional[datetime] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    blocks: List[Block] = Field(
        default_factory=list,
        description="Top-level blocks; the root of the block tree"
    )

    def find_block(self, block_id: str) -> Optional[Block]:
        """Find a block anywhere in this canvas's tree, or None."""
        return find_block(self.blocks, block_id)

    def title(self) -> str:
        """Get the title, which is the content of a leading title block."""
        if self.blocks and self.blocks[0].type == TITLE:
            return self.blocks[0].content
        return ""

    def summary(self, length: int = SUMMARY_LENGTH) -> str:
        """
        Get a short summary of the canvas.

        Uses the first non-title block; if that block is a container, its first
        child is used instead.

        Args:
            length: Maximum number of characters to return

        Returns:
            The summary text, or an empty string if there is no body block
        """
        block = next((b for b in self.blocks if b.type != TITLE), None)
        if block is None:
            return ""
        if block.is_container() and block.blocks:
            block = block.blocks[0]
        return block.content[:length]

    def to_document(self) -> Dict[str, Any]:
        """Dump the canvas into its JSON document shape."""
        return self.model_dump(by_alias=True, mode="json")


class CanvasChangeset(BaseModel):
    """
    Canvas attributes gathered by the construction pipeline.

    Fields left as None were not supplied and keep the canvas defaults.
    Nothing here has been validated yet except the block list, which is
    already canonical.
    """

    is_template: Optional[bool] = None
    link_access: Optional[str] = None
    slack_channel_ids: Optional[List[str]] = None
    template_id: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)
