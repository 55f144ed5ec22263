"""
Module: builder.output

Purpose:
    PDF rendering and output generation.
    Draws pleading pages with ReportLab and assembles the filing with
    PyMuPDF.

Key Functions:
    - render_rich_text_section(): Rich-text section pages
    - render_blank_page(): Empty pleading page
    - render_exhibit_index() / render_exhibit_cover() / render_image_page()
    - write_locked_bytes(): Locked output writing

Key Classes:
    - PdfAssembler: Splicing, page numbering and saving

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Splicing and stamping
    - PIL: Image handling
    - portalocker: Output file locking

Used By:
    - builder.controller: Pipeline orchestration
"""

from .assembler import PdfAssembler, page_number_x
from .exhibit_pages import render_exhibit_cover, render_exhibit_index, render_image_page
from .file_locking import write_locked_bytes
from .renderer import RenderedSection, render_blank_page, render_rich_text_section, signature_lines

__all__ = [
    "PdfAssembler",
    "RenderedSection",
    "page_number_x",
    "render_exhibit_cover",
    "render_blank_page",
    "render_exhibit_index",
    "render_image_page",
    "render_rich_text_section",
    "signature_lines",
    "write_locked_bytes",
]
