"""
Layout module for pleading pages.

Public API:
    PageTemplate: Page geometry and page-budget arithmetic
    paginate: Interactive (preview) paginator
    layout_paragraphs / layout_text / wrap_text: Compiling paginator
    (BlockMeasurer lives in .measure; it depends on builder.content)
    FontMetrics / FontSet: Width oracles
"""

from .config import PageTemplate, heading_block_height
from .fonts import FontMetrics, FontSet
from .models import (
    Align,
    LayoutLine,
    PageBudgets,
    Paragraph,
    PreviewPage,
    PreviewResult,
    TextLayout,
    TextStyle,
)
from .paginator import paginate
from .text_layout import layout_paragraphs, layout_text, wrap_text

__all__ = [
    "Align",
    "FontMetrics",
    "FontSet",
    "LayoutLine",
    "PageBudgets",
    "PageTemplate",
    "Paragraph",
    "PreviewPage",
    "PreviewResult",
    "TextLayout",
    "TextStyle",
    "heading_block_height",
    "layout_paragraphs",
    "layout_text",
    "paginate",
    "wrap_text",
]
