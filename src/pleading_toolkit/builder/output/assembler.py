"""
Module: builder.output.assembler

Purpose:
    Assemble the compiled document with PyMuPDF: splice rendered and
    source PDFs in order, stamp "Page i of N" on every page, and save
    deterministic bytes.

Key Classes:
    - PdfAssembler: append_pdf() / stamp_page_numbers() / to_bytes()

Key Functions:
    - page_number_x(): Footer x for a placement

Dependencies:
    - fitz (PyMuPDF): PDF splicing and text stamping

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from typing import Optional

import fitz  # PyMuPDF

from pleading_toolkit.core.models.document import PageNumberPlacement
from pleading_toolkit.builder.config import CompileConfig

logger = logging.getLogger(__name__)

PRODUCER = "pleading_toolkit"


def page_number_x(
    placement: PageNumberPlacement,
    text_width: float,
    page_width: float,
    margin: float = 72.0,
) -> float:
    """
    Left edge of the footer label.

    Example:
        >>> page_number_x(PageNumberPlacement.RIGHT, 50, 612)
        490.0
    """
    if placement == PageNumberPlacement.LEFT:
        return float(margin)
    if placement == PageNumberPlacement.CENTER:
        return (page_width - text_width) / 2
    return page_width - text_width - margin


class PdfAssembler:
    """
    Output document under construction.

    Raises:
        RuntimeError: From PyMuPDF if the writer cannot be created
    """

    def __init__(self) -> None:
        self.doc = fitz.open()

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def append_pdf(self, data: bytes, source: str = "") -> int:
        """
        Append every page of a PDF verbatim.

        Returns:
            Pages appended (0 when the bytes are not a readable PDF)
        """
        try:
            with fitz.open(stream=data, filetype="pdf") as src:
                if src.needs_pass:
                    logger.warning(f"Skipping encrypted PDF {source}")
                    return 0
                count = src.page_count
                if count:
                    self.doc.insert_pdf(src)
                return count
        except (RuntimeError, ValueError) as e:
            logger.warning(f"Skipping unreadable PDF {source}: {e}")
            return 0

    def stamp_page_numbers(
        self,
        placement: PageNumberPlacement,
        config: Optional[CompileConfig] = None,
    ) -> None:
        """Draw "Page i of N" on every page."""
        config = config or CompileConfig()
        total = self.doc.page_count
        for index, page in enumerate(self.doc):
            label = f"Page {index + 1} of {total}"
            width = fitz.get_text_length(
                label, fontname=config.page_number_font, fontsize=config.page_number_size
            )
            # page.rect is the visible (rotated) page; stamp in that frame
            x = page_number_x(placement, width, page.rect.width, config.page_number_margin)
            y = page.rect.height - config.page_number_y
            point = fitz.Point(x, y) * page.derotation_matrix
            page.insert_text(
                point,
                label,
                fontname=config.page_number_font,
                fontsize=config.page_number_size,
                color=config.page_number_color,
                rotate=page.rotation,
            )
        logger.debug(f"Stamped page numbers on {total} pages ({placement})")

    def to_bytes(self, title: str = "") -> bytes:
        """Save the document; identical content gives identical bytes."""
        self.doc.set_metadata({
            "title": title,
            "producer": PRODUCER,
            "creator": PRODUCER,
        })
        return self.doc.tobytes(garbage=3, deflate=True, no_new_id=True)

    def close(self) -> None:
        self.doc.close()
