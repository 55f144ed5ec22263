"""
Module: builder.output.pleading

Purpose:
    Draw the fixed parts of pleading paper on a ReportLab canvas: the
    numbered line gutter, the margin rules, and the caption block shown
    on the first page of a rich-text section.

Key Functions:
    - draw_pleading_grid(): Line numbers 1..N and rules
    - draw_caption_block(): Contact lines, court title, party caption,
      right column and document title
    - draw_lines(): Draw laid-out text lines of one page

Dependencies:
    - reportlab: Canvas drawing
    - builder.layout.config: PageTemplate and caption geometry

Used By:
    - builder.output.renderer
    - builder.output.exhibit_pages
"""

from __future__ import annotations

from typing import Iterable

from reportlab.pdfgen.canvas import Canvas

from pleading_toolkit.core.models.document import Heading
from pleading_toolkit.builder.config import CompileConfig
from pleading_toolkit.builder.layout.config import (
    CAPTION_BOX_HEIGHT,
    CAPTION_GAP,
    COURT_TITLE_HEIGHT,
    HEADER_LINE_HEIGHT,
    MIN_LEFT_FIELD_LINES,
    PageTemplate,
)
from pleading_toolkit.builder.layout.fonts import FontSet
from pleading_toolkit.builder.layout.models import LayoutLine

LINE_NUMBER_FONT = "Times-Roman"
LINE_NUMBER_SIZE = 8
PLACEHOLDER_GREY = 0.45


def draw_pleading_grid(c: Canvas, template: PageTemplate) -> None:
    """Draw line numbers 1..line_count and the pleading rules."""
    c.saveState()
    c.setFont(LINE_NUMBER_FONT, LINE_NUMBER_SIZE)
    c.setFillColorRGB(0, 0, 0)
    number_x = template.number_rule_x - 6
    for slot in range(template.line_count):
        c.drawRightString(number_x, template.baseline_for_slot(slot), str(slot + 1))

    c.setStrokeColorRGB(0, 0, 0)
    c.setLineWidth(1.2)
    c.line(template.number_rule_x, 0, template.number_rule_x, template.page_height)
    c.setLineWidth(0.8)
    c.line(template.text_right_x, 0, template.text_right_x, template.page_height)
    c.line(template.number_rule_x, template.margin_bottom, template.text_right_x, template.margin_bottom)
    c.restoreState()


def draw_lines(c: Canvas, lines: Iterable[LayoutLine], fonts: FontSet) -> None:
    """Draw laid-out lines, each in its style's font."""
    for line in lines:
        c.setFont(fonts.metrics_for(line.style).font_name, fonts.size_for(line.style))
        c.drawString(line.x, line.baseline_y, line.text)


def draw_caption_block(
    c: Canvas,
    template: PageTemplate,
    heading: Heading,
    title: str,
    config: CompileConfig,
) -> None:
    """
    Draw the caption block at the top of the body area.

    Geometry mirrors heading_block_height() so body text starts on the
    first grid line below it.
    """
    left_x = template.text_left_x
    top = template.body_top

    c.saveState()
    c.setFillColorRGB(0, 0, 0)
    if heading.has_content:
        # Contact lines, top left
        c.setFont(config.header_font, config.header_size)
        for row, text in enumerate(heading.left_fields):
            c.drawString(left_x, top - (row + 1) * HEADER_LINE_HEIGHT, text)
        top -= (max(len(heading.left_fields), MIN_LEFT_FIELD_LINES) + 1) * HEADER_LINE_HEIGHT

        if heading.court_title.strip():
            c.setFont(config.header_bold_font, config.caption_size)
            center_x = left_x + template.max_text_width / 2
            c.drawCentredString(center_x, top - HEADER_LINE_HEIGHT, heading.court_title.strip().upper())
            top -= COURT_TITLE_HEIGHT

        _draw_party_caption(c, template, heading, config, top)
        top -= CAPTION_BOX_HEIGHT + CAPTION_GAP

    _draw_title(c, template, title, config, top)
    c.restoreState()


def _draw_party_caption(
    c: Canvas,
    template: PageTemplate,
    heading: Heading,
    config: CompileConfig,
    top: float,
) -> None:
    box_x = template.text_left_x
    box_width = min(240.0, template.max_text_width * 0.45)
    c.setLineWidth(0.8)
    c.rect(box_x, top - CAPTION_BOX_HEIGHT, box_width, CAPTION_BOX_HEIGHT, stroke=1, fill=0)

    rows = (
        ("Plaintiff:", heading.plaintiff.strip() or config.party_placeholder),
        ("v.", ""),
        ("Defendant:", heading.defendant.strip() or config.party_placeholder),
    )
    for row, (label, value) in enumerate(rows):
        baseline = top - (row + 1) * HEADER_LINE_HEIGHT
        c.setFont(config.header_bold_font, config.caption_size)
        c.drawString(box_x + 6, baseline, label)
        if value:
            label_width = c.stringWidth(label, config.header_bold_font, config.caption_size)
            c.setFont(config.header_font, config.caption_size)
            c.drawString(box_x + 10 + label_width, baseline, value)

    right_x = box_x + box_width + 24
    right_fields = [line for line in heading.right_fields if line.strip()]
    c.setFont(config.header_font, config.caption_size)
    if not right_fields:
        c.setFillGray(PLACEHOLDER_GREY)
        c.drawString(right_x, top - HEADER_LINE_HEIGHT, config.right_placeholder)
        c.setFillGray(0)
        return
    for row, text in enumerate(right_fields):
        c.drawString(right_x, top - (row + 1) * HEADER_LINE_HEIGHT, text)


def _draw_title(
    c: Canvas,
    template: PageTemplate,
    title: str,
    config: CompileConfig,
    top: float,
) -> None:
    center_x = template.text_left_x + template.max_text_width / 2
    c.setFont(config.header_bold_font, config.title_size)
    if title.strip():
        c.drawCentredString(center_x, top - HEADER_LINE_HEIGHT, title.strip().upper())
        return
    c.setFillGray(PLACEHOLDER_GREY)
    c.drawCentredString(center_x, top - HEADER_LINE_HEIGHT, config.title_placeholder)
    c.setFillGray(0)
