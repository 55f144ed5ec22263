"""
Module: builder.layout.config

Purpose:
    Pleading-paper page template. Defines page dimensions, margins, the
    numbered-line grid and the page-budget arithmetic shared by the
    interactive and compiling paginators.

Key Classes:
    - PageTemplate: Immutable page geometry with derived grid values

Key Functions:
    - heading_block_height(): Height of the caption block on a first page
    - PageTemplate.heading_slots(): Caption height snapped to grid lines
    - PageTemplate.page_budgets(): First/other page content budgets

Dependencies:
    - dataclasses (std)
    - core.models.document.Heading

Used By:
    - builder.layout.paginator: Budgets for preview pagination
    - builder.layout.text_layout: Baselines for compiled text
    - builder.output.pleading: Grid, line numbers and caption drawing
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pleading_toolkit.core.models.document import Heading

from .models import PageBudgets


# US Letter in points
LETTER_WIDTH_PT = 612.0
LETTER_HEIGHT_PT = 792.0

# Caption block geometry (points)
HEADER_LINE_HEIGHT = 14.0
MIN_LEFT_FIELD_LINES = 7
CAPTION_BOX_HEIGHT = 4 * HEADER_LINE_HEIGHT
COURT_TITLE_HEIGHT = 1.5 * HEADER_LINE_HEIGHT
CAPTION_GAP = HEADER_LINE_HEIGHT
TITLE_BLOCK_HEIGHT = 2 * HEADER_LINE_HEIGHT


@dataclass(frozen=True)
class PageTemplate:
    """
    Pleading page geometry (immutable).

    The line height is derived from the body height and the fixed line
    count, and is reused for the rule grid, the line-number labels and
    the baseline stepping of compiled text.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin_left: Left margin (line numbers sit just inside it)
        margin_right: Right margin
        margin_top: Top margin
        margin_bottom: Bottom margin
        number_gutter: Space between the left rule and body text
        line_count: Numbered lines per page
        baseline_ratio: Baseline position within a line slot, measured
            up from the slot's bottom edge as a fraction of line height

    Example:
        >>> template = PageTemplate()
        >>> round(template.line_height, 3)
        23.143
    """

    page_width: float = LETTER_WIDTH_PT
    page_height: float = LETTER_HEIGHT_PT

    margin_left: float = 72.0
    margin_right: float = 36.0
    margin_top: float = 72.0
    margin_bottom: float = 72.0

    number_gutter: float = 28.0
    line_count: int = 28
    baseline_ratio: float = 0.3

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("Page dimensions must be positive")
        if min(self.margin_left, self.margin_right, self.margin_top, self.margin_bottom) < 0:
            raise ValueError("Margins cannot be negative")
        if self.line_count < 1:
            raise ValueError(f"line_count must be >= 1, got {self.line_count}")
        if self.body_height <= 0:
            raise ValueError("Vertical margins exceed page height")
        if self.max_text_width <= 0:
            raise ValueError("Horizontal margins and gutter exceed page width")
        if not 0 <= self.baseline_ratio < 1:
            raise ValueError("baseline_ratio must be in [0, 1)")

    # ─────────────────────────────────────────────────────────────────────
    # Derived geometry
    # ─────────────────────────────────────────────────────────────────────

    @property
    def body_top(self) -> float:
        return self.page_height - self.margin_top

    @property
    def body_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def line_height(self) -> float:
        return self.body_height / self.line_count

    @property
    def text_left_x(self) -> float:
        return self.margin_left + self.number_gutter

    @property
    def text_right_x(self) -> float:
        return self.page_width - self.margin_right

    @property
    def max_text_width(self) -> float:
        return self.text_right_x - self.text_left_x

    @property
    def number_rule_x(self) -> float:
        """x of the double rule separating line numbers from body text."""
        return self.margin_left - 6

    def slot_top(self, slot: int) -> float:
        """Top edge (PDF coordinates, origin bottom-left) of a grid slot."""
        return self.body_top - slot * self.line_height

    def baseline_for_slot(self, slot: int) -> float:
        """Baseline y of text drawn in a grid slot (0 = first line)."""
        return self.slot_top(slot + 1) + self.line_height * self.baseline_ratio

    # ─────────────────────────────────────────────────────────────────────
    # Page budgets
    # ─────────────────────────────────────────────────────────────────────

    def heading_slots(self, heading: Heading, title: str = "") -> int:
        """Number of grid lines the caption block occupies (0 if none)."""
        height = heading_block_height(heading, title)
        if height <= 0:
            return 0
        slots = math.ceil(height / self.line_height - 1e-9)
        return min(slots, self.line_count - 1)

    def page_budgets(self, reserved_slots: int = 0) -> PageBudgets:
        """
        Content budgets for the first and subsequent pages.

        Args:
            reserved_slots: Grid lines held on the first page by the
                caption block (clamped so at least one line remains)
        """
        reserved = max(0, min(reserved_slots, self.line_count - 1))
        return PageBudgets(
            first=(self.line_count - reserved) * self.line_height,
            other=self.line_count * self.line_height,
        )


def heading_block_height(heading: Heading, title: str = "") -> float:
    """
    Height in points of the caption block drawn on a section's first page.

    Layout top to bottom: left contact lines (at least seven rows plus a
    spacer), optional court title, the party caption box, then the
    document title. Without heading content only the title line is
    drawn, and with neither nothing is drawn.
    """
    if not heading.has_content:
        return TITLE_BLOCK_HEIGHT if title.strip() else 0.0
    left_rows = max(len(heading.left_fields), MIN_LEFT_FIELD_LINES) + 1
    height = left_rows * HEADER_LINE_HEIGHT
    if heading.court_title.strip():
        height += COURT_TITLE_HEIGHT
    height += CAPTION_BOX_HEIGHT + CAPTION_GAP
    height += TITLE_BLOCK_HEIGHT
    return height
