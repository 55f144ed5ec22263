"""
Module: builder.layout.text_layout

Purpose:
    Compiling paginator. Greedy word wrap against font metrics and
    placement of wrapped lines onto the numbered grid, breaking to a new
    page when the next line would cross the bottom margin.

Key Functions:
    - wrap_text(): Greedy wrap of one hard line
    - layout_paragraphs(): Place styled hard lines on the grid
    - layout_text(): Place plain text (newline separated) on the grid

Algorithm:
    1. Each paragraph is wrapped to the text width minus its indent
    2. Words wider than the text width are split by characters
    3. Lines fill grid slots top to bottom; slot == line_count starts a
       new page
    4. Blank paragraphs consume one slot, except at the top of a page
    5. A keep-together run that does not fit starts a new page; a run
       longer than a page breaks only between its paragraphs

Dependencies:
    - builder.layout.config: PageTemplate grid
    - builder.layout.fonts: FontMetrics, FontSet

Used By:
    - builder.layout.measure: Line counts for preview measurement
    - builder.output.renderer: Rich-text sections
    - builder.output.exhibit_pages: Index and cover pages
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .config import PageTemplate
from .fonts import FontMetrics, FontSet
from .models import Align, LayoutLine, Paragraph, TextLayout, TextStyle

logger = logging.getLogger(__name__)


def wrap_text(text: str, max_width: float, metrics: FontMetrics, size: float) -> List[str]:
    """
    Wrap a single hard line greedily.

    Every returned line measures at most ``max_width`` (a lone character
    wider than the width is the only exception, and is kept on its own
    line so wrapping always progresses).

    Args:
        text: Text without newlines
        max_width: Available width in points
        metrics: Font metrics oracle
        size: Font size in points

    Returns:
        Wrapped lines ([] for blank text)

    Example:
        >>> wrap_text("A short line.", 400, FontMetrics(), 12)
        ['A short line.']
    """
    words = text.split()
    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if metrics.width_of(candidate, size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if metrics.width_of(word, size) <= max_width:
            current = word
            continue
        chunks = _split_long_word(word, max_width, metrics, size)
        lines.extend(chunks[:-1])
        current = chunks[-1]
    if current:
        lines.append(current)
    return lines


def _split_long_word(word: str, max_width: float, metrics: FontMetrics, size: float) -> List[str]:
    chunks: List[str] = []
    chunk = ""
    for char in word:
        if chunk and metrics.width_of(chunk + char, size) > max_width:
            chunks.append(chunk)
            chunk = char
        else:
            chunk += char
    chunks.append(chunk)
    return chunks


def wrap_paragraph(paragraph: Paragraph, template: PageTemplate, fonts: FontSet) -> List[str]:
    """Wrap a paragraph to the template's text width minus its indent."""
    width = max(template.max_text_width - paragraph.indent, 1.0)
    return wrap_text(
        paragraph.text,
        width,
        fonts.metrics_for(paragraph.style),
        fonts.size_for(paragraph.style),
    )


def layout_paragraphs(
    paragraphs: Iterable[Paragraph],
    template: PageTemplate,
    fonts: Optional[FontSet] = None,
    *,
    reserved_first: int = 0,
) -> TextLayout:
    """
    Place paragraphs on the pleading grid.

    Args:
        paragraphs: Hard lines in reading order
        template: Page geometry
        fonts: Fonts per style (default Times 12/14)
        reserved_first: Grid lines held by the caption block on page 1

    Returns:
        TextLayout with positioned lines and page count
    """
    fonts = fonts or FontSet()
    paragraphs = list(paragraphs)
    lines: List[LayoutLine] = []
    page_index = 0
    slot = max(0, min(reserved_first, template.line_count - 1))
    page_has_content = False

    for position, paragraph in enumerate(paragraphs):
        if paragraph.is_blank:
            if page_has_content:
                slot += 1
            continue

        starts_run = paragraph.keep_with_next and (
            position == 0 or not paragraphs[position - 1].keep_with_next
        )
        if starts_run and page_has_content:
            run_lines = _run_line_count(paragraphs, position, template, fonts)
            if slot + run_lines > template.line_count:
                page_index += 1
                slot = 0
                page_has_content = False

        wrapped = wrap_paragraph(paragraph, template, fonts)
        in_run = paragraph.keep_with_next or (
            position > 0 and paragraphs[position - 1].keep_with_next
        )
        if in_run and page_has_content and slot + len(wrapped) > template.line_count:
            page_index += 1
            slot = 0
            page_has_content = False

        metrics = fonts.metrics_for(paragraph.style)
        size = fonts.size_for(paragraph.style)
        for text in wrapped:
            if slot >= template.line_count:
                page_index += 1
                slot = 0
                page_has_content = False
            x = template.text_left_x + paragraph.indent
            if paragraph.align == Align.CENTER:
                x = template.text_left_x + (template.max_text_width - metrics.width_of(text, size)) / 2
            lines.append(LayoutLine(
                text=text,
                page_index=page_index,
                slot=slot,
                baseline_y=template.baseline_for_slot(slot),
                x=x,
                style=paragraph.style,
            ))
            slot += 1
            page_has_content = True

    logger.debug(f"Laid out {len(lines)} lines over {page_index + 1} pages")
    return TextLayout(lines=tuple(lines), page_count=page_index + 1, next_slot=slot)


def _run_line_count(
    paragraphs: List[Paragraph],
    start: int,
    template: PageTemplate,
    fonts: FontSet,
) -> int:
    """Wrapped lines of the keep-together run beginning at ``start``."""
    total = 0
    for paragraph in paragraphs[start:]:
        total += len(wrap_paragraph(paragraph, template, fonts))
        if not paragraph.keep_with_next:
            break
    return total


def layout_text(
    text: str,
    template: PageTemplate,
    metrics: Optional[FontMetrics] = None,
    *,
    font_size: float = 12.0,
    reserved_first: int = 0,
) -> TextLayout:
    """
    Lay out plain text, one paragraph per input line.

    Blank input lines keep their vertical space (one line height) so
    paragraph spacing survives into the compiled pages.
    """
    metrics = metrics or FontMetrics()
    fonts = FontSet(body=metrics, bold=metrics, body_size=font_size, title_size=font_size)
    paragraphs = [Paragraph(line, TextStyle.BODY) for line in text.split("\n")]
    return layout_paragraphs(paragraphs, template, fonts, reserved_first=reserved_first)
