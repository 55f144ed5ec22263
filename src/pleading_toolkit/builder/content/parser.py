"""
Module: builder.content.parser

Purpose:
    Parse Markdown section content into an immutable Block sequence.
    Parsing is pure and memoised: identical input yields the identical
    (shared) tuple of blocks.

Key Functions:
    - parse_rich_text(): Markdown -> tuple of Blocks

Behaviour:
    - Supported: paragraphs, headings, bullet/ordered lists, blockquotes,
      tables
    - Inline markup is flattened to text (soft breaks become spaces,
      hard breaks become newlines)
    - Code and HTML blocks degrade to paragraphs of their literal text
    - Anything the parser cannot handle degrades to one plain paragraph;
      parse_rich_text never raises

Dependencies:
    - markdown-it-py: CommonMark tokenizer with the table extension

Used By:
    - builder.content.cache: Per-section block cache
    - builder.output.renderer: Compiled rich-text sections
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from pleading_toolkit.core.models.blocks import Block, BlockKind

logger = logging.getLogger(__name__)

_MARKDOWN_PARSER: Optional[MarkdownIt] = None


def _markdown_parser() -> MarkdownIt:
    global _MARKDOWN_PARSER
    if _MARKDOWN_PARSER is None:
        _MARKDOWN_PARSER = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])
    return _MARKDOWN_PARSER


@lru_cache(maxsize=256)
def parse_rich_text(text: str) -> Tuple[Block, ...]:
    """
    Parse Markdown into blocks.

    Args:
        text: Raw Markdown content

    Returns:
        Tuple of top-level blocks (empty for blank input)

    Example:
        >>> parse_rich_text("# Title\\n\\nBody text.")[0].kind
        <BlockKind.HEADING: 'heading'>
    """
    if not text or not text.strip():
        return ()
    try:
        root = SyntaxTreeNode(_markdown_parser().parse(text))
        blocks = _convert_children(root)
    except Exception as e:
        logger.warning(f"Could not parse rich text ({e}); using it as a plain paragraph")
        return (Block.paragraph(" ".join(text.split())),)
    if not blocks:
        plain = " ".join(text.split())
        return (Block.paragraph(plain),) if plain else ()
    return tuple(blocks)


def _convert_children(node: SyntaxTreeNode) -> List[Block]:
    blocks: List[Block] = []
    for child in node.children:
        block = _convert(child)
        if block is not None:
            blocks.append(block)
    return blocks


def _convert(node: SyntaxTreeNode) -> Optional[Block]:
    kind = node.type

    if kind == "paragraph":
        text = _inline_text(node)
        return Block.paragraph(text) if text.strip() else None

    if kind == "heading":
        text = _inline_text(node)
        if not text.strip():
            return None
        level = int(node.tag[1]) if node.tag[1:].isdigit() else 1
        return Block.heading(text, level)

    if kind in ("bullet_list", "ordered_list"):
        items = [item for item in (_convert(child) for child in node.children) if item is not None]
        if not items:
            return None
        start = 1
        if kind == "ordered_list":
            try:
                start = int(node.attrs.get("start", 1))
            except (TypeError, ValueError):
                start = 1
        return Block.list_of(tuple(items), ordered=kind == "ordered_list", start=start)

    if kind == "list_item":
        children = _convert_children(node)
        return Block.item(*children) if children else None

    if kind == "blockquote":
        children = _convert_children(node)
        return Block.quote(*children) if children else None

    if kind == "table":
        rows = _table_rows(node)
        if not any(any(cell for cell in row) for row in rows):
            return None
        return Block.table(tuple(rows))

    if kind in ("code_block", "fence", "html_block"):
        text = node.content.strip("\n")
        return Block.paragraph(text) if text.strip() else None

    if kind == "hr":
        return None

    # Unknown block types keep whatever text they carry
    text = _inline_text(node) or node.content
    if text.strip():
        logger.debug(f"Degrading unsupported block {kind!r} to a paragraph")
        return Block(kind=BlockKind.PARAGRAPH, text=text.strip())
    return None


def _table_rows(node: SyntaxTreeNode) -> List[Tuple[str, ...]]:
    rows: List[Tuple[str, ...]] = []
    for section in node.children:
        for row in section.children:
            if row.type != "tr":
                continue
            rows.append(tuple(_inline_text(cell).strip() for cell in row.children))
    return rows


def _inline_text(node: SyntaxTreeNode) -> str:
    """Flatten inline descendants of a node to plain text."""
    parts: List[str] = []
    for child in node.children:
        if child.type == "text":
            parts.append(child.content)
        elif child.type == "softbreak":
            parts.append(" ")
        elif child.type == "hardbreak":
            parts.append("\n")
        elif child.type in ("code_inline", "image"):
            parts.append(child.content)
        elif child.type == "html_inline":
            continue
        else:
            parts.append(_inline_text(child))
    return "".join(parts)
