"""
Unit Tests for Exhibit Pages

Tests for the exhibit index, cover pages and full-page images.
"""

import fitz
import pytest

from pleading_toolkit.builder.exhibits.grouper import IndexEntry
from pleading_toolkit.builder.output.exhibit_pages import (
    render_exhibit_cover,
    render_exhibit_index,
    render_image_page,
)
from pleading_toolkit.core.models.exhibits import ContentType, Exhibit


def first_page_text(pdf_bytes: bytes) -> str:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as pdf:
        return pdf[0].get_text()


class TestRenderExhibitIndex:
    """Tests for render_exhibit_index()."""

    def test_render_index_when_entries_then_lists_labels_in_order(self):
        entries = (
            IndexEntry("A", "Lease", "Signed lease", (IndexEntry("A1", "Addendum"),)),
            IndexEntry("B", "Photos"),
            IndexEntry("C", "Letters"),
        )

        text = first_page_text(render_exhibit_index(entries, ("Jane Roe", "Case No. 1")))

        assert "EXHIBIT INDEX" in text
        assert "Jane Roe" in text
        positions = [text.index(label) for label in (
            "Exhibit A - Lease", "Signed lease", "Exhibit A1 - Addendum",
            "Exhibit B - Photos", "Exhibit C - Letters",
        )]
        assert positions == sorted(positions)

    def test_render_index_when_many_entries_then_continues_on_next_page(self):
        entries = tuple(IndexEntry(f"E{i}", f"Document {i}", "Description") for i in range(30))

        pdf_bytes = render_exhibit_index(entries)

        with fitz.open(stream=pdf_bytes, filetype="pdf") as pdf:
            assert pdf.page_count >= 2


class TestRenderExhibitCover:
    """Tests for render_exhibit_cover()."""

    def test_render_cover_when_described_then_title_and_description(self):
        exhibit = Exhibit("x", title="Photos", description="Photos of the unit", content_type=ContentType.RASTER_IMAGE)

        pdf_bytes = render_exhibit_cover("B", exhibit, ("Jane Roe",))

        with fitz.open(stream=pdf_bytes, filetype="pdf") as pdf:
            assert pdf.page_count == 1
            page = pdf[0]
            text = page.get_text()
            title = page.search_for("EXHIBIT B - PHOTOS")[0]
        assert "Photos of the unit" in text
        assert "Jane Roe" in text
        # Centered horizontally in the text area, below the upper third
        assert (title.x0 + title.x1) / 2 == pytest.approx(100 + 476 / 2, abs=3)
        assert title.y0 > 792 / 3


class TestRenderImagePage:
    """Tests for render_image_page()."""

    def test_render_image_when_wide_image_then_scaled_within_margins_and_centered(self, sample_png_bytes):
        pdf_bytes = render_image_page(sample_png_bytes)

        with fitz.open(stream=pdf_bytes, filetype="pdf") as pdf:
            assert pdf.page_count == 1
            info = pdf[0].get_image_info()
        x0, y0, x1, y1 = info[0]["bbox"]
        assert x0 == pytest.approx(72, abs=0.5)
        assert x1 == pytest.approx(540, abs=0.5)
        assert (y0 + y1) / 2 == pytest.approx(396, abs=0.5)

    def test_render_image_when_bytes_not_image_then_none(self):
        assert render_image_page(b"not an image") is None
