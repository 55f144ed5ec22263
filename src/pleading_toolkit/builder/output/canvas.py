"""
Module: builder.output.canvas

Purpose:
    In-memory ReportLab canvas that tracks how many pages it has drawn.
    Output is produced with ReportLab's invariant mode so identical
    input gives identical bytes.

Key Classes:
    - PageCanvas: new_page() / finish() around a reportlab Canvas

Dependencies:
    - reportlab: PDF generation

Used By:
    - builder.output.renderer
    - builder.output.exhibit_pages
"""

from __future__ import annotations

import io

from reportlab.pdfgen import canvas

from pleading_toolkit.builder.layout.config import PageTemplate


class PageCanvas:
    """
    Page-counting wrapper around a ReportLab canvas.

    Example:
        >>> pages = PageCanvas(PageTemplate())
        >>> c = pages.new_page()
        >>> c.drawString(100, 700, "Hello")
        >>> pdf_bytes = pages.finish()
    """

    def __init__(self, template: PageTemplate, title: str = ""):
        self.template = template
        self._buffer = io.BytesIO()
        self.canvas = canvas.Canvas(
            self._buffer,
            pagesize=(template.page_width, template.page_height),
            invariant=1,
        )
        if title:
            self.canvas.setTitle(title)
        self.page_count = 0

    def new_page(self) -> canvas.Canvas:
        """Close the current page (if any) and start a new one."""
        if self.page_count > 0:
            self.canvas.showPage()
        self.page_count += 1
        return self.canvas

    def finish(self) -> bytes:
        """Close the last page and return the PDF bytes (b"" if no pages)."""
        if self.page_count == 0:
            return b""
        self.canvas.showPage()
        self.canvas.save()
        return self._buffer.getvalue()
