"""
Markdown importer for canvasapi.

This module converts Markdown text into block parameters using markdown-it-py's
CommonMark parser. Lists become a single 'list' block whose children are the
list items, flattened, with their nesting depth kept in ``meta['level']``.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..models.block import (
    CHECKLIST_ITEM,
    CODE,
    HEADING,
    HORIZONTAL_RULE,
    IMAGE,
    LIST,
    ORDERED_LIST_ITEM,
    PARAGRAPH,
    TITLE,
    UNORDERED_LIST_ITEM,
    URL,
)
from .base import BaseImporter


CHECKLIST_PATTERN = re.compile(r"^\[([ xX])\]\s+(.*)$", re.DOTALL)
URL_PATTERN = re.compile(r"^<?(https?://[^\s<>]+)>?$")

LIST_OPEN_TYPES = ("bullet_list_open", "ordered_list_open")
LIST_CLOSE_TYPES = ("bullet_list_close", "ordered_list_close")


def _block(block_type: str, content: str = "", blocks: Optional[List[Dict[str, Any]]] = None,
           **meta: Any) -> Dict[str, Any]:
    return {
        "type": block_type,
        "content": content,
        "meta": meta,
        "blocks": blocks or [],
    }


class MarkdownImporter(BaseImporter):
    """
    Importer for Markdown text.

    A level-one heading that opens the document becomes the title block.
    Block quotes and raw HTML are kept as plain paragraph content.
    """

    def __init__(self):
        """Initialize the importer with a CommonMark parser."""
        self.md = MarkdownIt("commonmark")

    def parse(self, text: str) -> List[Dict[str, Any]]:
        """
        Convert Markdown text into block parameters.

        Args:
            text: Markdown source

        Returns:
            List of block parameter dicts in document order
        """
        if not text:
            return []

        try:
            tokens = self.md.parse(text)
        except Exception as e:
            logging.error(f"Markdown parsing failed, importing as a single paragraph: {e}")
            return [_block(PARAGRAPH, text.strip())]

        blocks: List[Dict[str, Any]] = []
        i = 0
        while i < len(tokens):
            token = tokens[i]

            if token.type == "heading_open":
                level = int(token.tag[1])  # h1 -> 1, h2 -> 2, etc.
                content = self._inline_content(tokens, i + 1)
                if level == 1 and not blocks:
                    blocks.append(_block(TITLE, content))
                else:
                    blocks.append(_block(HEADING, content, level=level))
                i = self._skip_past_close(tokens, i)

            elif token.type == "paragraph_open":
                inline = tokens[i + 1] if i + 1 < len(tokens) else None
                blocks.append(self._paragraph(inline))
                i = self._skip_past_close(tokens, i)

            elif token.type in ("fence", "code_block"):
                language = token.info.strip() or None
                blocks.append(_block(CODE, token.content.rstrip("\n"), language=language))
                i += 1

            elif token.type == "hr":
                blocks.append(_block(HORIZONTAL_RULE))
                i += 1

            elif token.type in LIST_OPEN_TYPES:
                list_block, i = self._parse_list(tokens, i)
                blocks.append(list_block)

            elif token.type == "html_block":
                content = token.content.strip()
                if content:
                    blocks.append(_block(PARAGRAPH, content))
                i += 1

            else:
                # Block quotes and other wrappers: their contents are walked as-is
                i += 1

        return blocks

    @staticmethod
    def _inline_content(tokens: List[Token], index: int) -> str:
        if index < len(tokens) and tokens[index].type == "inline":
            return tokens[index].content
        return ""

    @staticmethod
    def _skip_past_close(tokens: List[Token], index: int) -> int:
        """Return the index just after the close token matching tokens[index]."""
        open_token = tokens[index]
        close_type = open_token.type.replace("_open", "_close")
        i = index + 1
        while i < len(tokens):
            if tokens[i].type == close_type and tokens[i].level == open_token.level:
                return i + 1
            i += 1
        return i

    @staticmethod
    def _paragraph(inline: Optional[Token]) -> Dict[str, Any]:
        if inline is None or inline.type != "inline":
            return _block(PARAGRAPH)

        children = [
            child for child in (inline.children or [])
            if child.type not in ("softbreak", "hardbreak")
            and not (child.type == "text" and not child.content.strip())
        ]
        if len(children) == 1 and children[0].type == "image":
            image = children[0]
            return _block(IMAGE, url=image.attrGet("src"), alt=image.content)

        content = inline.content
        url_match = URL_PATTERN.match(content.strip())
        if url_match:
            return _block(URL, url=url_match.group(1))

        return _block(PARAGRAPH, content)

    def _parse_list(self, tokens: List[Token], start: int) -> Tuple[Dict[str, Any], int]:
        """
        Collect a (possibly nested) list into one 'list' block.

        Returns:
            The list block and the index just after the outermost list close
        """
        items: List[Dict[str, Any]] = []
        # One entry per open list: True when ordered
        ordered_stack: List[bool] = []
        # One entry per open list item: its ordering, level and text so far
        item_stack: List[Dict[str, Any]] = []

        def flush_item() -> None:
            """Emit the innermost open item's pending text as one list item."""
            if item_stack and item_stack[-1]["parts"]:
                item = item_stack[-1]
                items.append(self._list_item("\n\n".join(item["parts"]), item["ordered"], item["level"]))
                item["parts"] = []

        i = start
        while i < len(tokens):
            token = tokens[i]

            if token.type in LIST_OPEN_TYPES:
                # Text before a nested list belongs to the parent item
                flush_item()
                ordered_stack.append(token.type == "ordered_list_open")

            elif token.type in LIST_CLOSE_TYPES:
                ordered_stack.pop()
                if not ordered_stack:
                    return _block(LIST, blocks=items), i + 1

            elif token.type == "list_item_open":
                item_stack.append({"parts": [], "ordered": ordered_stack[-1], "level": len(ordered_stack)})

            elif token.type == "list_item_close":
                flush_item()
                item_stack.pop()

            elif item_stack and token.type == "inline":
                item_stack[-1]["parts"].append(token.content)

            elif item_stack and token.type in ("fence", "code_block"):
                item_stack[-1]["parts"].append(token.content.rstrip("\n"))

            elif item_stack and token.type == "html_block" and token.content.strip():
                item_stack[-1]["parts"].append(token.content.strip())

            i += 1

        flush_item()
        return _block(LIST, blocks=items), i

    @staticmethod
    def _list_item(content: str, ordered: bool, level: int) -> Dict[str, Any]:
        checklist = CHECKLIST_PATTERN.match(content)
        if checklist:
            return _block(CHECKLIST_ITEM, checklist.group(2), level=level,
                          checked=checklist.group(1).lower() == "x")
        item_type = ORDERED_LIST_ITEM if ordered else UNORDERED_LIST_ITEM
        return _block(item_type, content, level=level)


_default_importer = MarkdownImporter()


def parse_markdown(text: str) -> List[Dict[str, Any]]:
    """
    Convert Markdown text into block parameters with the default importer.

    Args:
        text: Markdown source

    Returns:
        List of block parameter dicts in document order
    """
    return _default_importer.parse(text)
