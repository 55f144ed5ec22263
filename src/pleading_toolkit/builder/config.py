"""
Module: builder.config

Purpose:
    Configuration dataclass for compiling a document. Immutable
    configuration with validation on construction.

Key Classes:
    - CompileConfig: Fonts, sizes and optional overrides for a compile

Dependencies:
    - dataclasses (std)

Used By:
    - builder.controller: Compile pipeline
    - builder.output: Page drawing
    - cli: Command line overrides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pleading_toolkit.core.models.document import PageNumberPlacement

DEFAULT_DECLARATION_TEXT = (
    "I declare under penalty of perjury under the laws of the State of "
    "California that the foregoing is true and correct."
)


@dataclass(frozen=True)
class CompileConfig:
    """
    Configuration for compiling a document (immutable).

    Attributes:
        show_page_numbers: Override the document's numbering flag
            (None keeps the document setting)
        page_number_placement: Override the document's footer placement
        header_font: Font for caption block text
        header_bold_font: Font for caption labels and the title
        header_size: Size of left contact lines
        caption_size: Size of party and right-column lines
        title_size: Size of the document title under the caption
        index_title: Heading of the exhibit index
        index_title_size: Size of index and cover titles
        image_margin: Margin around full-page exhibit images (points)
        page_number_font: Font of the "Page i of N" footer
        page_number_size: Size of the footer
        page_number_y: Footer baseline, measured up from the page bottom
        page_number_margin: Footer inset for left/right placement
        signature_size: Size of signature block lines
        declaration_text: Oath line of declaration signature blocks
        party_placeholder: Drawn in place of an empty party name
        right_placeholder: Drawn when no right-column lines are given
        title_placeholder: Drawn when the document has no title

    Example:
        >>> config = CompileConfig(page_number_placement=PageNumberPlacement.CENTER)
    """

    # Page numbering overrides
    show_page_numbers: Optional[bool] = None
    page_number_placement: Optional[PageNumberPlacement] = None

    # Caption block
    header_font: str = "Helvetica"
    header_bold_font: str = "Helvetica-Bold"
    header_size: float = 10.0
    caption_size: float = 11.0
    title_size: float = 14.0

    # Exhibits
    index_title: str = "EXHIBIT INDEX"
    index_title_size: float = 16.0
    image_margin: float = 72.0

    # Footer
    page_number_font: str = "helv"
    page_number_size: float = 10.0
    page_number_y: float = 18.0
    page_number_margin: float = 72.0
    page_number_color: tuple = (0.28, 0.32, 0.37)

    # Signature
    signature_size: float = 11.0
    declaration_text: str = DEFAULT_DECLARATION_TEXT

    # Placeholders
    party_placeholder: str = "____________________________"
    right_placeholder: str = "Court, judge, department details"
    title_placeholder: str = "DOCUMENT TITLE"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("header_size", "caption_size", "title_size", "index_title_size",
                     "page_number_size", "signature_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive: {getattr(self, name)}")
        if self.image_margin < 0:
            raise ValueError(f"image_margin must be non-negative: {self.image_margin}")
        if len(self.page_number_color) != 3:
            raise ValueError("page_number_color must be an (r, g, b) tuple")
