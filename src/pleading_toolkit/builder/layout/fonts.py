"""
Module: builder.layout.fonts

Purpose:
    Font metrics oracle used to wrap text. Widths come from ReportLab's
    built-in metrics for the standard PDF fonts, so wrapping agrees with
    what the canvas later draws.

Key Classes:
    - FontMetrics: width_of(text, size) for one font
    - FontSet: Metrics and sizes per TextStyle

Dependencies:
    - reportlab: Standard font metrics

Used By:
    - builder.layout.text_layout: Greedy wrapping
    - builder.layout.measure: Headless block measurement
    - builder.output: Font names for drawing
"""

from __future__ import annotations

from dataclasses import dataclass, field

from reportlab.pdfbase.pdfmetrics import stringWidth

from .models import TextStyle


@dataclass(frozen=True)
class FontMetrics:
    """
    Width oracle for a single font.

    Attributes:
        font_name: ReportLab font name (one of the standard 14 or a
            registered TTF)
    """
    font_name: str = "Times-Roman"

    def width_of(self, text: str, size: float) -> float:
        return stringWidth(text, self.font_name, size)


@dataclass(frozen=True)
class FontSet:
    """
    Fonts used for body text on pleading pages.

    Attributes:
        body: Regular body font
        bold: Bold font for headings and labels
        body_size: Point size of body and bold text
        title_size: Point size of centered titles
    """
    body: FontMetrics = field(default_factory=lambda: FontMetrics("Times-Roman"))
    bold: FontMetrics = field(default_factory=lambda: FontMetrics("Times-Bold"))
    body_size: float = 12.0
    title_size: float = 14.0

    def __post_init__(self) -> None:
        if self.body_size <= 0 or self.title_size <= 0:
            raise ValueError("Font sizes must be positive")

    def metrics_for(self, style: TextStyle) -> FontMetrics:
        return self.body if style == TextStyle.BODY else self.bold

    def size_for(self, style: TextStyle) -> float:
        return self.title_size if style == TextStyle.TITLE else self.body_size
