"""
Module: builder.layout.models

Purpose:
    Data models for both paginators: preview pages of blocks and
    compiled lines positioned on the pleading grid.

Key Classes:
    - PageBudgets: Content height available on first/other pages
    - PreviewPage / PreviewResult: Interactive pagination output
    - TextStyle / Align / Paragraph: Drawable hard lines
    - LayoutLine / TextLayout: Compiled text positions

Dependencies:
    - core.models.blocks.Block

Used By:
    - builder.layout.paginator
    - builder.layout.text_layout
    - builder.output.renderer
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from pleading_toolkit.core.models.blocks import Block


@dataclass(frozen=True)
class PageBudgets:
    """
    Content height budgets in points.

    Attributes:
        first: Budget of the first page (after the caption block)
        other: Budget of every following page
    """
    first: float
    other: float

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.first) and math.isfinite(self.other)
            and self.first > 0 and self.other > 0
        )


# ─────────────────────────────────────────────────────────────────────────────
# Interactive pagination
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PreviewPage:
    """
    One preview page.

    Attributes:
        blocks: Blocks on the page in order (may include split heads/tails)
        used: Content height consumed, in points
    """
    blocks: Tuple[Block, ...]
    used: float = 0.0

    @property
    def plain_text(self) -> str:
        return "".join(block.plain_text for block in self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks


@dataclass(frozen=True)
class PreviewResult:
    """
    Result of interactive pagination.

    Attributes:
        pages: At least one page
        warnings: Measurement or budget anomalies
    """
    pages: Tuple[PreviewPage, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def plain_text(self) -> str:
        return "".join(page.plain_text for page in self.pages)


# ─────────────────────────────────────────────────────────────────────────────
# Compiled text
# ─────────────────────────────────────────────────────────────────────────────

class TextStyle(str, Enum):
    """Font role of a drawn line."""
    BODY = "body"
    BOLD = "bold"
    TITLE = "title"

    def __str__(self) -> str:
        return self.value


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Paragraph:
    """
    A hard line of text before wrapping.

    Empty text is a spacer that consumes one grid line unless it falls
    at the top of a page. A run of paragraphs linked by keep_with_next
    moves to a new page together when it does not fit (table rows); a
    run longer than a page breaks only between its paragraphs.
    """
    text: str
    style: TextStyle = TextStyle.BODY
    indent: float = 0.0
    align: Align = Align.LEFT
    keep_with_next: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class LayoutLine:
    """
    A wrapped line positioned on the grid.

    Attributes:
        text: Line text
        page_index: 0-based page within the laid-out run
        slot: 0-based grid line on that page
        baseline_y: Baseline in PDF points (origin bottom-left)
        x: Left edge of the text
        style: Font role
    """
    text: str
    page_index: int
    slot: int
    baseline_y: float
    x: float
    style: TextStyle = TextStyle.BODY


@dataclass(frozen=True)
class TextLayout:
    """
    Compiled text layout.

    Attributes:
        lines: Positioned lines in reading order
        page_count: Pages spanned (at least 1)
        next_slot: First free grid line on the last page
    """
    lines: Tuple[LayoutLine, ...]
    page_count: int
    next_slot: int

    def lines_on_page(self, page_index: int) -> Tuple[LayoutLine, ...]:
        return tuple(line for line in self.lines if line.page_index == page_index)
