"""
Module: builder.output.exhibit_pages

Purpose:
    Generated pages of an exhibits section: the exhibit index, the cover
    page announcing each image exhibit, and the full-page image itself.

Key Functions:
    - render_exhibit_index(): Captions, title and lettered entries
    - render_exhibit_cover(): Captions plus a centered exhibit title
    - render_image_page(): Image scaled to fit inside the margins

Dependencies:
    - reportlab: PDF generation
    - PIL: Image decoding and normalisation

Used By:
    - builder.controller: Exhibit section emission
"""

from __future__ import annotations

import io
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from pleading_toolkit.core.models.exhibits import Exhibit
from pleading_toolkit.builder.config import CompileConfig
from pleading_toolkit.builder.exhibits.grouper import IndexEntry
from pleading_toolkit.builder.layout.config import PageTemplate
from pleading_toolkit.builder.layout.fonts import FontSet
from pleading_toolkit.builder.layout.models import Align, Paragraph, TextLayout, TextStyle
from pleading_toolkit.builder.layout.text_layout import layout_paragraphs, wrap_paragraph

from .canvas import PageCanvas
from .pleading import draw_lines, draw_pleading_grid

logger = logging.getLogger(__name__)

ENTRY_INDENT = 18.0


def _caption_paragraphs(captions: Sequence[str]) -> List[Paragraph]:
    return [Paragraph(text.strip(), TextStyle.BOLD) for text in captions if text.strip()]


def _draw_layout(pages: PageCanvas, layout: TextLayout, fonts: FontSet) -> None:
    for page_index in range(layout.page_count):
        c = pages.new_page()
        draw_pleading_grid(c, pages.template)
        draw_lines(c, layout.lines_on_page(page_index), fonts)


def render_exhibit_index(
    entries: Sequence[IndexEntry],
    captions: Sequence[str] = (),
    *,
    template: Optional[PageTemplate] = None,
    fonts: Optional[FontSet] = None,
    config: Optional[CompileConfig] = None,
) -> bytes:
    """
    Render the exhibit index on pleading paper.

    Entries appear in group order ("Exhibit A - Title"), each followed by
    its description and its indented children. Long indexes continue on
    further pages.
    """
    template = template or PageTemplate()
    config = config or CompileConfig()
    fonts = replace(fonts or FontSet(), title_size=config.index_title_size)

    paragraphs = _caption_paragraphs(captions)
    if paragraphs:
        paragraphs.append(Paragraph(""))
    paragraphs.append(Paragraph(config.index_title.upper(), TextStyle.TITLE, align=Align.CENTER))
    paragraphs.append(Paragraph(""))

    for entry in entries:
        paragraphs.extend(_entry_paragraphs(entry, 0.0))

    layout = layout_paragraphs(paragraphs, template, fonts)
    pages = PageCanvas(template, title=config.index_title)
    _draw_layout(pages, layout, fonts)
    logger.debug(f"Rendered exhibit index: {len(entries)} entries, {layout.page_count} pages")
    return pages.finish()


def _entry_paragraphs(entry: IndexEntry, indent: float) -> List[Paragraph]:
    paragraphs = [Paragraph(f"• {entry.display_label}", TextStyle.BOLD, indent)]
    if entry.description:
        paragraphs.append(Paragraph(entry.description, TextStyle.BODY, indent + ENTRY_INDENT))
    for child in entry.children:
        paragraphs.extend(_entry_paragraphs(child, indent + ENTRY_INDENT))
    return paragraphs


def render_exhibit_cover(
    label: str,
    exhibit: Exhibit,
    captions: Sequence[str] = (),
    *,
    template: Optional[PageTemplate] = None,
    fonts: Optional[FontSet] = None,
    config: Optional[CompileConfig] = None,
) -> bytes:
    """
    Render the cover page announcing an exhibit.

    The "EXHIBIT A - TITLE" line and the description are centered both
    horizontally and, when they fit, vertically in the space below the
    captions.
    """
    template = template or PageTemplate()
    config = config or CompileConfig()
    fonts = replace(fonts or FontSet(), title_size=config.index_title_size)

    caption_layout = layout_paragraphs(_caption_paragraphs(captions), template, fonts)
    caption_slots = caption_layout.next_slot + (1 if caption_layout.lines else 0)

    body = [Paragraph(f"EXHIBIT {label} - {exhibit.display_title}".upper(), TextStyle.TITLE, align=Align.CENTER)]
    if exhibit.description.strip():
        body.append(Paragraph(""))
        body.append(Paragraph(exhibit.description.strip(), TextStyle.BODY, align=Align.CENTER))

    body_lines = sum(max(len(wrap_paragraph(p, template, fonts)), 1) for p in body)
    free_slots = template.line_count - caption_slots
    start = caption_slots + max(0, (free_slots - body_lines) // 2)
    body_layout = layout_paragraphs(body, template, fonts, reserved_first=start)

    pages = PageCanvas(template, title=f"Exhibit {label}")
    for page_index in range(body_layout.page_count):
        c = pages.new_page()
        draw_pleading_grid(c, template)
        if page_index == 0:
            draw_lines(c, caption_layout.lines, fonts)
        draw_lines(c, body_layout.lines_on_page(page_index), fonts)
    return pages.finish()


def render_image_page(
    image_bytes: bytes,
    *,
    template: Optional[PageTemplate] = None,
    config: Optional[CompileConfig] = None,
) -> Optional[bytes]:
    """
    Render an image on its own page, scaled to fit inside the margins
    and centered.

    Returns:
        PDF bytes, or None when the bytes are not a readable image
    """
    template = template or PageTemplate()
    config = config or CompileConfig()
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            normalized = img.convert("RGBA" if img.mode in ("RGBA", "LA", "P") else "RGB")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning(f"Could not decode exhibit image: {e}")
        return None

    available_w = template.page_width - 2 * config.image_margin
    available_h = template.page_height - 2 * config.image_margin
    scale = min(available_w / normalized.width, available_h / normalized.height)
    width = normalized.width * scale
    height = normalized.height * scale
    x = (template.page_width - width) / 2
    y = (template.page_height - height) / 2

    pages = PageCanvas(template)
    c = pages.new_page()
    c.drawImage(_pil_to_reader(normalized), x, y, width=width, height=height, mask="auto")
    return pages.finish()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
