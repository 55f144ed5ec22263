"""
Module: blocks

Purpose:
    Provides the Block dataclass - an immutable node of parsed rich text.
    Blocks are the unit the interactive paginator places and splits.
    Leaf blocks (paragraph, heading, table) hold text; composite blocks
    (list, list item, blockquote) hold child blocks.

Key Functions:
    - Block.plain_text: Concatenated text of the block (children joined
      with no separator)
    - Block.text_length: Length of plain_text, the unit for split offsets
    - Block.head(offset) / Block.tail(offset): Split a block so that
      head(k).plain_text + tail(k).plain_text == plain_text
    - Block.is_splittable: Tables never split at a character offset
    - Block.split_rows(count): Split a table between rows

Dependencies:
    - dataclasses (std)

Used By:
    - builder.content.parser: Produces blocks from Markdown
    - builder.content.paragraphs: Flattens blocks into drawable lines
    - builder.layout.paginator: Places and splits blocks
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class BlockKind(str, Enum):
    """Type of rich-text block."""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"

    def __str__(self) -> str:
        return self.value


# Kinds whose content lives in ``children`` rather than ``text``
COMPOSITE_KINDS = frozenset({BlockKind.LIST, BlockKind.LIST_ITEM, BlockKind.BLOCKQUOTE})


@dataclass(frozen=True)
class Block:
    """
    Immutable rich-text block.

    Attributes:
        kind: Block type
        text: Text of a paragraph or heading (unused by composites/tables)
        children: Child blocks of a list, list item or blockquote
        rows: Table cells, one tuple per row (header row first)
        level: Heading level 1-6 (0 for non-headings)
        ordered: True for numbered lists
        start: Number of the first item of an ordered list
        continued: True when this block is the remainder of a block
            split across a page boundary

    Example:
        >>> block = Block.paragraph("Hello world")
        >>> block.head(6).plain_text + block.tail(6).plain_text
        'Hello world'
    """
    kind: BlockKind
    text: str = ""
    children: Tuple["Block", ...] = ()
    rows: Tuple[Tuple[str, ...], ...] = ()
    level: int = 0
    ordered: bool = False
    start: int = 1
    continued: bool = False

    def __post_init__(self) -> None:
        if self.kind == BlockKind.HEADING and not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")
        if self.kind not in COMPOSITE_KINDS and self.children:
            raise ValueError(f"{self.kind} blocks cannot have children")
        if self.kind == BlockKind.LIST and any(
            child.kind != BlockKind.LIST_ITEM for child in self.children
        ):
            raise ValueError("List children must be list items")

    # ─────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    def paragraph(cls, text: str) -> "Block":
        return cls(kind=BlockKind.PARAGRAPH, text=text)

    @classmethod
    def heading(cls, text: str, level: int = 1) -> "Block":
        return cls(kind=BlockKind.HEADING, text=text, level=level)

    @classmethod
    def list_of(cls, items: Tuple["Block", ...], *, ordered: bool = False, start: int = 1) -> "Block":
        return cls(kind=BlockKind.LIST, children=tuple(items), ordered=ordered, start=start)

    @classmethod
    def item(cls, *children: "Block") -> "Block":
        return cls(kind=BlockKind.LIST_ITEM, children=tuple(children))

    @classmethod
    def quote(cls, *children: "Block") -> "Block":
        return cls(kind=BlockKind.BLOCKQUOTE, children=tuple(children))

    @classmethod
    def table(cls, rows: Tuple[Tuple[str, ...], ...]) -> "Block":
        return cls(kind=BlockKind.TABLE, rows=tuple(tuple(row) for row in rows))

    # ─────────────────────────────────────────────────────────────────────
    # Text access
    # ─────────────────────────────────────────────────────────────────────

    @property
    def is_composite(self) -> bool:
        return self.kind in COMPOSITE_KINDS

    @property
    def is_splittable(self) -> bool:
        """Tables split only between rows (split_rows); other kinds at any offset."""
        return self.kind != BlockKind.TABLE

    @property
    def plain_text(self) -> str:
        if self.kind == BlockKind.TABLE:
            return "".join(" | ".join(row) + "\n" for row in self.rows if not _is_blank_row(row))
        if self.is_composite:
            return "".join(child.plain_text for child in self.children)
        return self.text

    @property
    def text_length(self) -> int:
        return len(self.plain_text)

    # ─────────────────────────────────────────────────────────────────────
    # Splitting
    # ─────────────────────────────────────────────────────────────────────

    def head(self, offset: int) -> "Block":
        """
        Return the block truncated to its first ``offset`` characters.

        Composite blocks keep whole children before the cut and a truncated
        copy of the child containing it.
        """
        if not self.is_splittable:
            raise ValueError(f"{self.kind} blocks cannot be split")
        offset = max(0, min(offset, self.text_length))
        if not self.is_composite:
            return replace(self, text=self.text[:offset])

        kept: list[Block] = []
        consumed = 0
        for child in self.children:
            length = child.text_length
            if consumed + length <= offset:
                kept.append(child)
                consumed += length
                continue
            if offset > consumed:
                kept.append(child.head(offset - consumed))
            break
        return replace(self, children=tuple(kept))

    def tail(self, offset: int) -> "Block":
        """
        Return the remainder of the block after its first ``offset`` characters.

        The result is marked ``continued``. Ordered lists renumber so the
        remaining items keep their original numbers.
        """
        if not self.is_splittable:
            raise ValueError(f"{self.kind} blocks cannot be split")
        offset = max(0, min(offset, self.text_length))
        if not self.is_composite:
            return replace(self, text=self.text[offset:], continued=True)

        consumed = 0
        for index, child in enumerate(self.children):
            length = child.text_length
            if consumed + length <= offset and consumed + length < self.text_length:
                consumed += length
                continue
            if offset > consumed:
                remainder = (child.tail(offset - consumed),) + self.children[index + 1:]
            else:
                remainder = self.children[index:]
            start = self.start + index if self.kind == BlockKind.LIST else self.start
            return replace(self, children=remainder, start=start, continued=True)
        return replace(self, children=(), continued=True)

    def split_rows(self, count: int) -> Tuple["Block", "Block"]:
        """
        Split a table after its first ``count`` rows.

        The remainder is marked ``continued`` so its first row is not
        drawn as a header.

        Example:
            >>> head, tail = Block.table((("A",), ("1",), ("2",))).split_rows(2)
            >>> head.plain_text, tail.plain_text
            ('A\\n1\\n', '2\\n')
        """
        if self.kind != BlockKind.TABLE:
            raise ValueError(f"{self.kind} blocks have no rows")
        count = max(0, min(count, len(self.rows)))
        return (
            replace(self, rows=self.rows[:count]),
            replace(self, rows=self.rows[count:], continued=True),
        )

    def is_break_offset(self, offset: int) -> bool:
        """
        True when cutting at ``offset`` does not split a word.

        Clean cuts sit next to whitespace or on a boundary between child
        blocks (list items join their text with no separator).
        """
        text = self.plain_text
        if offset <= 0 or offset >= len(text):
            return True
        if text[offset - 1].isspace() or text[offset].isspace():
            return True
        if not self.is_composite:
            return False
        consumed = 0
        for child in self.children:
            length = child.text_length
            if offset == consumed or offset == consumed + length:
                return True
            if consumed < offset < consumed + length:
                return child.is_break_offset(offset - consumed)
            consumed += length
        return False


def _is_blank_row(row: Tuple[str, ...]) -> bool:
    return not any(cell.strip() for cell in row)
