"""
Block models for canvasapi.

A block is a typed node of canvas content. Container blocks (lists) own an
ordered sequence of child blocks, so a canvas's top-level block list is the
root of a tree.
"""

import copy
import string
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import BlockConstructionError, InvalidBlockType


TITLE = "title"
PARAGRAPH = "paragraph"
HEADING = "heading"
CODE = "code"
HORIZONTAL_RULE = "horizontal-rule"
IMAGE = "image"
URL = "url"
LIST = "list"
UNORDERED_LIST_ITEM = "unordered-list-item"
ORDERED_LIST_ITEM = "ordered-list-item"
CHECKLIST_ITEM = "checklist-item"

# Block types whose children are part of the tree
CONTAINER_TYPES = frozenset({LIST})

_BASE62_ALPHABET = string.digits + string.ascii_letters


def generate_id() -> str:
    """Generate a random UUID encoded in base 62 (22 characters)."""
    value = uuid.uuid4().int
    chars = []
    while value:
        value, remainder = divmod(value, 62)
        chars.append(_BASE62_ALPHABET[remainder])
    return "".join(reversed(chars)).rjust(22, "0")


class Block(BaseModel):
    """
    A single content block, possibly holding child blocks.

    Blocks are identified by ``id`` alone: two blocks with the same content
    but different IDs are different blocks.
    """

    id: str = Field(
        default_factory=generate_id,
        frozen=True,
        description="An opaque identifier, stable once assigned"
    )

    type: str = Field(
        ...,
        description="The block type (e.g. 'title', 'paragraph', 'list')"
    )

    content: str = Field(
        default="",
        description="The text content of the block; may be empty"
    )

    meta: Dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific metadata (heading level, code language, ...)"
    )

    blocks: List['Block'] = Field(
        default_factory=list,
        description="Child blocks, used by container types such as 'list'"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _none_id_is_generated(cls, value: Any) -> Any:
        return generate_id() if value is None else value

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_container(self) -> bool:
        """Whether this block's children are part of the tree."""
        return self.type in CONTAINER_TYPES

    def to_template_params(self) -> Dict[str, Any]:
        """
        Snapshot this block and its subtree without identities.

        The result can be fed back through block construction to produce an
        independent copy with freshly assigned IDs.

        Returns:
            A plain dict with 'type', 'content', 'meta' and 'blocks' keys
        """
        return {
            "type": self.type,
            "content": self.content,
            "meta": copy.deepcopy(self.meta),
            "blocks": [child.to_template_params() for child in self.blocks],
        }


# Enable forward references for self-referencing model
Block.model_rebuild()


def validate_block(block: Block) -> Block:
    """
    Check a block's type and, for containers, each of its children.

    Args:
        block: The block to validate

    Returns:
        The same block

    Raises:
        InvalidBlockType: If the block (or the first failing child) has an empty type
    """
    if not block.type or not block.type.strip():
        raise InvalidBlockType(f"block {block.id} has an empty type")

    if block.is_container():
        for child in block.blocks:
            validate_block(child)

    return block


def build_block(params: Union[Block, Mapping[str, Any]]) -> Block:
    """
    Construct and validate a block from caller-supplied parameters.

    Args:
        params: A Block (copied, keeping its ID) or a mapping of block attributes

    Returns:
        The validated block

    Raises:
        BlockConstructionError: If the parameters do not describe a valid block
    """
    if isinstance(params, Block):
        # The new tree owns its blocks; IDs are kept
        return validate_block(params.model_copy(deep=True))

    if not isinstance(params, Mapping):
        raise BlockConstructionError(f"expected a block object, got {type(params).__name__}")

    try:
        block = Block.model_validate(dict(params))
    except ValidationError as e:
        messages = [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise BlockConstructionError("; ".join(messages)) from e

    return validate_block(block)


def find_block(blocks: List[Block], block_id: str) -> Optional[Block]:
    """
    Find a block by ID, depth-first in pre-order.

    Only container blocks are searched into.

    Args:
        blocks: The block list to search
        block_id: The ID to look for

    Returns:
        The first matching block, or None if absent
    """
    for block in blocks:
        if block.id == block_id:
            return block
        if block.is_container():
            found = find_block(block.blocks, block_id)
            if found is not None:
                return found
    return None
