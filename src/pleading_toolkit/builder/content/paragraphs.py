"""
Module: builder.content.paragraphs

Purpose:
    Flatten rich-text blocks into drawable hard lines (Paragraphs). Both
    the compiled renderer and the headless measurer use this, so preview
    and compiled pages wrap the same text.

Key Functions:
    - block_paragraphs(): Hard lines of one block
    - blocks_to_paragraphs(): Hard lines of a block sequence with a blank
      spacer between top-level blocks

Used By:
    - builder.layout.measure: Preview measurement
    - builder.output.renderer: Compiled rich-text sections
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from pleading_toolkit.core.models.blocks import Block, BlockKind
from pleading_toolkit.builder.layout.models import Align, Paragraph, TextStyle

LIST_INDENT = 18.0
QUOTE_INDENT = 24.0
BULLET = "•"


def block_paragraphs(block: Block, indent: float = 0.0) -> List[Paragraph]:
    """Hard lines of a single block, without inter-block spacing."""
    if block.kind == BlockKind.PARAGRAPH:
        return _hard_lines(block.text, TextStyle.BODY, indent)

    if block.kind == BlockKind.HEADING:
        align = Align.CENTER if block.level == 1 else Align.LEFT
        return _hard_lines(block.text, TextStyle.BOLD, indent, align)

    if block.kind == BlockKind.LIST:
        paragraphs: List[Paragraph] = []
        for position, item in enumerate(block.children):
            marker = None
            if not item.continued:
                marker = f"{block.start + position}." if block.ordered else BULLET
            paragraphs.extend(_item_paragraphs(item, marker, indent + LIST_INDENT))
        return paragraphs

    if block.kind == BlockKind.LIST_ITEM:
        marker = None if block.continued else BULLET
        return _item_paragraphs(block, marker, indent + LIST_INDENT)

    if block.kind == BlockKind.BLOCKQUOTE:
        paragraphs = []
        for child in block.children:
            paragraphs.extend(block_paragraphs(child, indent + QUOTE_INDENT))
        return paragraphs

    if block.kind == BlockKind.TABLE:
        rows = [row for row in block.rows if any(cell.strip() for cell in row)]
        return [
            Paragraph(
                " | ".join(row),
                TextStyle.BOLD if index == 0 and not block.continued else TextStyle.BODY,
                indent,
                keep_with_next=index < len(rows) - 1,
            )
            for index, row in enumerate(rows)
        ]

    return []


def blocks_to_paragraphs(blocks: Sequence[Block]) -> List[Paragraph]:
    """Hard lines of a block sequence, blank spacer between blocks."""
    paragraphs: List[Paragraph] = []
    for block in blocks:
        lines = block_paragraphs(block)
        if not lines:
            continue
        if paragraphs:
            paragraphs.append(Paragraph(""))
        paragraphs.extend(lines)
    return paragraphs


def _item_paragraphs(item: Block, marker: Optional[str], indent: float) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for child in item.children:
        paragraphs.extend(block_paragraphs(child, indent))
    if marker and paragraphs:
        first = paragraphs[0]
        paragraphs[0] = replace(first, text=f"{marker} {first.text}")
    return paragraphs


def _hard_lines(
    text: str,
    style: TextStyle,
    indent: float,
    align: Align = Align.LEFT,
) -> List[Paragraph]:
    return [
        Paragraph(line, style, indent, align)
        for line in text.split("\n")
        if line.strip()
    ]
