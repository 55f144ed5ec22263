"""
Unit Tests for Text Layout

Tests for word wrapping and placement of lines on the pleading grid.
"""

import pytest

from pleading_toolkit.builder.layout.config import PageTemplate
from pleading_toolkit.builder.layout.fonts import FontMetrics
from pleading_toolkit.builder.layout.models import Align, Paragraph, TextStyle
from pleading_toolkit.builder.layout.text_layout import (
    layout_paragraphs,
    layout_text,
    wrap_text,
)

LOREM = (
    "Plaintiff alleges that on or about March fifth the defendant failed to "
    "deliver the goods described in the agreement attached hereto and that "
    "plaintiff suffered damages in an amount to be proven at trial. "
)


class TestWrapText:
    """Tests for wrap_text()."""

    @pytest.mark.parametrize("width", [40.0, 120.0, 476.0])
    def test_wrap_when_real_metrics_then_every_line_within_width(self, width):
        metrics = FontMetrics()

        lines = wrap_text(LOREM * 3, width, metrics, 12)

        assert lines
        assert all(metrics.width_of(line, 12) <= width for line in lines)

    def test_wrap_when_wrapped_then_words_preserved_in_order(self):
        lines = wrap_text(LOREM, 200, FontMetrics(), 12)
        assert " ".join(lines).split() == LOREM.split()

    def test_wrap_when_word_wider_than_line_then_split_by_characters(self, fixed_fonts):
        metrics = fixed_fonts.body

        lines = wrap_text("x" * 100, 60, metrics, 12)  # 10 characters per line

        assert lines == ["x" * 10] * 10

    def test_wrap_when_blank_then_no_lines(self):
        assert wrap_text("   ", 100, FontMetrics(), 12) == []


class TestLayoutParagraphs:
    """Tests for layout_paragraphs()."""

    def test_layout_when_short_line_then_first_slot_of_first_page(self):
        template = PageTemplate()

        layout = layout_text("A short line.", template)

        assert layout.page_count == 1
        assert len(layout.lines) == 1
        line = layout.lines[0]
        assert (line.page_index, line.slot) == (0, 0)
        assert line.baseline_y == pytest.approx(template.baseline_for_slot(0))
        assert line.x == pytest.approx(template.text_left_x)

    def test_layout_when_more_lines_than_slots_then_breaks_page(self, fixed_fonts):
        template = PageTemplate()
        paragraphs = [Paragraph(f"Line {i}") for i in range(30)]

        layout = layout_paragraphs(paragraphs, template, fixed_fonts)

        assert layout.page_count == 2
        assert len(layout.lines_on_page(0)) == 28
        assert layout.lines_on_page(1)[0].slot == 0
        assert layout.next_slot == 2

    def test_layout_when_reserved_first_then_text_starts_below_caption(self, fixed_fonts):
        layout = layout_paragraphs([Paragraph("Body")], PageTemplate(), fixed_fonts, reserved_first=12)
        assert layout.lines[0].slot == 12

    def test_layout_when_blank_at_page_top_then_not_consumed(self, fixed_fonts):
        template = PageTemplate()
        paragraphs = [Paragraph(f"Line {i}") for i in range(28)] + [Paragraph(""), Paragraph("Next")]

        layout = layout_paragraphs(paragraphs, template, fixed_fonts)

        assert layout.lines[-1].page_index == 1
        assert layout.lines[-1].slot == 0

    def test_layout_when_blank_between_lines_then_consumes_one_slot(self, fixed_fonts):
        paragraphs = [Paragraph("One"), Paragraph(""), Paragraph("Two")]

        layout = layout_paragraphs(paragraphs, PageTemplate(), fixed_fonts)

        assert [line.slot for line in layout.lines] == [0, 2]

    def test_layout_when_keep_together_run_does_not_fit_then_moves_whole(self, fixed_fonts):
        """Table rows move to the next page together."""
        template = PageTemplate()
        filler = [Paragraph(f"Line {i}") for i in range(26)]
        table = [
            Paragraph("H1 | H2", TextStyle.BOLD, keep_with_next=True),
            Paragraph("a | b", keep_with_next=True),
            Paragraph("c | d"),
        ]

        layout = layout_paragraphs(filler + table, template, fixed_fonts)

        rows = layout.lines[-3:]
        assert {line.page_index for line in rows} == {1}
        assert [line.slot for line in rows] == [0, 1, 2]

    def test_layout_when_keep_together_run_longer_than_page_then_breaks_between_rows(self, fixed_fonts):
        """A run taller than a page never splits one of its rows."""
        # Arrange
        template = PageTemplate()
        row_text = "cell " * 40  # wraps to 16 + 16 + 8 words
        rows = [Paragraph(row_text, keep_with_next=index < 9) for index in range(10)]

        # Act
        layout = layout_paragraphs(rows, template, fixed_fonts)

        # Assert
        assert layout.page_count == 2
        assert [line.page_index for line in layout.lines[24:27]] == [0, 0, 0]
        assert [(line.page_index, line.slot) for line in layout.lines[27:]] == [(1, 0), (1, 1), (1, 2)]

    def test_layout_when_centered_then_x_centers_within_text_area(self, fixed_fonts):
        template = PageTemplate()
        paragraph = Paragraph("TITLE", TextStyle.BOLD, align=Align.CENTER)

        line = layout_paragraphs([paragraph], template, fixed_fonts).lines[0]

        width = fixed_fonts.bold.width_of("TITLE", 12)
        assert line.x == pytest.approx(template.text_left_x + (template.max_text_width - width) / 2)

    def test_layout_when_empty_then_single_empty_page(self):
        layout = layout_paragraphs([], PageTemplate())
        assert layout.page_count == 1
        assert layout.lines == ()
