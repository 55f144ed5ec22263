"""
Module: builder.layout.measure

Purpose:
    Headless measurement oracle for the interactive paginator. Heights
    are wrapped line counts times the template line height, using the
    same paragraphs and wrapping as the compiled output, so a preview
    and a compile of the same content agree on page count.

Key Classes:
    - BlockMeasurer: measure(block) / measure_prefix(block, offset)

Dependencies:
    - builder.content.paragraphs: Block -> hard lines
    - builder.layout.text_layout: wrap_paragraph

Used By:
    - builder.preview: Default oracle when no renderer is attached
    - cli: preview command
"""

from __future__ import annotations

from typing import Optional

from pleading_toolkit.core.models.blocks import Block
from pleading_toolkit.builder.content.paragraphs import block_paragraphs

from .config import PageTemplate
from .fonts import FontSet
from .text_layout import wrap_paragraph


class BlockMeasurer:
    """
    Measure blocks as they would be drawn on the pleading grid.

    Attributes:
        template: Page geometry (line height and text width)
        fonts: Fonts per text style
    """

    def __init__(self, template: Optional[PageTemplate] = None, fonts: Optional[FontSet] = None):
        self.template = template or PageTemplate()
        self.fonts = fonts or FontSet()

    @property
    def spacing(self) -> float:
        """Gap between consecutive blocks (one blank grid line)."""
        return self.template.line_height

    def line_count(self, block: Block) -> int:
        return sum(
            len(wrap_paragraph(paragraph, self.template, self.fonts))
            for paragraph in block_paragraphs(block)
        )

    def measure(self, block: Block) -> float:
        return self.line_count(block) * self.template.line_height

    def measure_prefix(self, block: Block, offset: int) -> float:
        return self.measure(block.head(offset))
