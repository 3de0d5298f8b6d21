"""
Block tree canonicalization for canvasapi.

Every canvas's top-level block list starts with a title block and holds at
least two blocks. This module turns a caller-supplied block list into one
that satisfies both rules.
"""

import logging
from typing import Any, List, Optional, Sequence

from .models.block import PARAGRAPH, TITLE, Block, build_block


def canonicalize_blocks(blocks: Optional[Sequence[Any]]) -> List[Block]:
    """
    Build a canonical top-level block list.

    Only the first position is inspected for a title. A list that already
    starts with a title keeps it; a title found further down is left where
    it is, so such a list can end up holding two title blocks.

    Args:
        blocks: Block objects or block parameter mappings, possibly empty

    Returns:
        A new list starting with a title block and holding at least two blocks

    Raises:
        BlockConstructionError: If any supplied block cannot be constructed
    """
    canonical = [build_block(params) for params in (blocks or [])]

    if not canonical or canonical[0].type != TITLE:
        canonical.insert(0, Block(type=TITLE))

    if len(canonical) == 1:
        canonical.append(Block(type=PARAGRAPH))

    logging.debug(f"Canonicalized {len(blocks or [])} supplied blocks into {len(canonical)}")
    return canonical
