"""
Module: builder.output.renderer

Purpose:
    Render a rich-text section to pleading-paper PDF pages using
    ReportLab. The caption block is drawn on the section's first page,
    the line-number gutter on every page, and the signature block on
    the last grid lines of the final page (continuing onto further
    pages when it is longer than one).

Key Functions:
    - render_rich_text_section(): Section -> RenderedSection (PDF bytes)
    - signature_lines(): Text of a signature block variant
    - render_blank_page(): One empty pleading page

Dependencies:
    - reportlab: PDF generation
    - builder.layout.text_layout: Grid placement of wrapped lines
    - builder.content: Markdown blocks and paragraphs

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from reportlab.pdfgen.canvas import Canvas

from pleading_toolkit.common.dates import BLANK_DATE, format_display_date
from pleading_toolkit.core.models.blocks import Block
from pleading_toolkit.core.models.document import Document, RichTextSection, SignatureType
from pleading_toolkit.builder.config import CompileConfig
from pleading_toolkit.builder.content import blocks_to_paragraphs, parse_rich_text
from pleading_toolkit.builder.layout.config import PageTemplate
from pleading_toolkit.builder.layout.fonts import FontMetrics, FontSet
from pleading_toolkit.builder.layout.text_layout import layout_paragraphs, wrap_text

from .canvas import PageCanvas
from .pleading import draw_caption_block, draw_lines, draw_pleading_grid

logger = logging.getLogger(__name__)

SIGNATURE_RULE = "______________________________"


@dataclass(frozen=True)
class RenderedSection:
    """
    Rendered rich-text section.

    Attributes:
        pdf_bytes: Section pages as a standalone PDF
        page_count: Pages including any page added for the signature
        content_page_count: Pages used by the caption block and body text
    """
    pdf_bytes: bytes
    page_count: int
    content_page_count: int


def signature_lines(
    signature_type: SignatureType,
    document: Document,
    template: PageTemplate,
    config: CompileConfig,
) -> List[str]:
    """
    Lines of the signature block, top to bottom.

    Example:
        >>> signature_lines(SignatureType.STANDARD, Document(date="2024-03-05"), PageTemplate(), CompileConfig())[0]
        'Date: March 5, 2024'
    """
    date_text = format_display_date(document.date)
    signer = document.heading.plaintiff.strip() or config.party_placeholder

    if signature_type == SignatureType.NONE:
        return []
    if signature_type == SignatureType.STANDARD:
        return [
            f"Date: {date_text}",
            f"Signature: {SIGNATURE_RULE}",
            f"{signer}, Plaintiff in Pro Per",
        ]
    if signature_type == SignatureType.PROPOSED_ORDER:
        return [
            "IT IS SO ORDERED.",
            f"Dated: {BLANK_DATE}",
            SIGNATURE_RULE,
            "Judge of the Superior Court",
        ]
    if signature_type == SignatureType.DECLARATION:
        oath = wrap_text(
            config.declaration_text,
            template.max_text_width,
            FontMetrics(config.header_font),
            config.signature_size,
        )
        return [
            *oath,
            f"Executed on {date_text}.",
            f"Signature: {SIGNATURE_RULE}",
            f"{signer}, Declarant",
        ]
    raise ValueError(f"Unknown signature type: {signature_type}")


def render_rich_text_section(
    section: RichTextSection,
    document: Document,
    *,
    template: Optional[PageTemplate] = None,
    fonts: Optional[FontSet] = None,
    config: Optional[CompileConfig] = None,
    blocks: Optional[Sequence[Block]] = None,
) -> Optional[RenderedSection]:
    """
    Render a rich-text section to PDF.

    Args:
        section: Section to render
        document: Owning document (caption fields, date)
        template: Page geometry
        fonts: Body fonts
        config: Compile configuration
        blocks: Pre-parsed blocks (parsed from section content if None)

    Returns:
        RenderedSection, or None when the section has neither content
        nor caption fields to draw
    """
    template = template or PageTemplate()
    fonts = fonts or FontSet()
    config = config or CompileConfig()
    blocks = parse_rich_text(section.content) if blocks is None else tuple(blocks)
    heading = document.heading
    title = document.caption_title(section)

    if not blocks and not heading.has_content:
        logger.info(f"Skipping empty section {section.section_id}")
        return None

    reserved = template.heading_slots(heading, title)
    layout = layout_paragraphs(
        blocks_to_paragraphs(blocks), template, fonts, reserved_first=reserved
    )

    pages = PageCanvas(template, title=title)
    c = None
    for page_index in range(layout.page_count):
        c = pages.new_page()
        draw_pleading_grid(c, template)
        if page_index == 0 and reserved:
            draw_caption_block(c, template, heading, title, config)
        draw_lines(c, layout.lines_on_page(page_index), fonts)

    lines = signature_lines(section.signature_type, document, template, config)
    if lines:
        _draw_signature(pages, c, lines, layout.next_slot, template, config)

    page_count = pages.page_count
    logger.debug(f"Rendered section {section.section_id}: {page_count} pages")
    return RenderedSection(
        pdf_bytes=pages.finish(),
        page_count=page_count,
        content_page_count=layout.page_count,
    )


def _draw_signature(
    pages: PageCanvas,
    c: Canvas,
    lines: List[str],
    next_slot: int,
    template: PageTemplate,
    config: CompileConfig,
) -> None:
    """
    Draw the signature block on the last grid lines of the final page.

    A block that does not fit below the body starts a new page; one
    longer than a whole page runs from the top and continues onto as
    many further pages as it needs.
    """
    start_slot = max(0, template.line_count - len(lines))
    if next_slot > start_slot or len(lines) > template.line_count:
        logger.debug("Signature block moves to a new page")
        c = pages.new_page()
        draw_pleading_grid(c, template)

    slot = start_slot
    for text in lines:
        if slot >= template.line_count:
            c = pages.new_page()
            draw_pleading_grid(c, template)
            slot = 0
        c.setFont(config.header_font, config.signature_size)
        c.drawString(template.text_left_x, template.baseline_for_slot(slot), text)
        slot += 1


def render_blank_page(template: Optional[PageTemplate] = None) -> bytes:
    """One empty pleading page (line numbers and rules only)."""
    template = template or PageTemplate()
    pages = PageCanvas(template)
    draw_pleading_grid(pages.new_page(), template)
    return pages.finish()
