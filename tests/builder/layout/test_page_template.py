"""
Unit Tests for Page Template

Tests for pleading grid geometry and page budgets.
"""

import pytest

from pleading_toolkit.builder.layout.config import (
    CAPTION_BOX_HEIGHT,
    CAPTION_GAP,
    HEADER_LINE_HEIGHT,
    TITLE_BLOCK_HEIGHT,
    PageTemplate,
    heading_block_height,
)
from pleading_toolkit.core.models.document import Heading


class TestPageTemplate:
    """Tests for PageTemplate geometry."""

    def test_init_when_defaults_then_letter_pleading_grid(self):
        template = PageTemplate()

        assert template.line_count == 28
        assert template.line_height == pytest.approx(648 / 28)
        assert template.max_text_width == pytest.approx(476)
        assert template.text_left_x == pytest.approx(100)

    def test_baseline_for_slot_when_stepping_then_descends_by_line_height(self):
        template = PageTemplate()

        first = template.baseline_for_slot(0)
        second = template.baseline_for_slot(1)

        assert first == pytest.approx(720 - template.line_height * 0.7)
        assert first - second == pytest.approx(template.line_height)
        assert template.baseline_for_slot(27) > template.margin_bottom

    @pytest.mark.parametrize("kwargs", [
        {"line_count": 0},
        {"margin_top": 500, "margin_bottom": 400},
        {"margin_left": -1},
        {"baseline_ratio": 1.0},
    ])
    def test_init_when_invalid_then_raises_error(self, kwargs):
        with pytest.raises(ValueError):
            PageTemplate(**kwargs)


class TestHeadingBudget:
    """Tests for caption reservation and page budgets."""

    def test_heading_block_height_when_empty_then_zero(self):
        assert heading_block_height(Heading()) == 0
        assert heading_block_height(Heading(), "Motion") == TITLE_BLOCK_HEIGHT

    def test_heading_block_height_when_fields_then_sums_caption_parts(self):
        heading = Heading(left_fields=("Jane Roe",), plaintiff="Jane Roe")

        expected = 8 * HEADER_LINE_HEIGHT + CAPTION_BOX_HEIGHT + CAPTION_GAP + TITLE_BLOCK_HEIGHT

        assert heading_block_height(heading) == pytest.approx(expected)

    def test_heading_slots_when_caption_present_then_rounds_up_to_lines(self):
        template = PageTemplate()
        heading = Heading(left_fields=("Jane Roe",), plaintiff="Jane Roe", court_title="Court")

        slots = template.heading_slots(heading, "Complaint")

        assert slots * template.line_height >= heading_block_height(heading, "Complaint")
        assert (slots - 1) * template.line_height < heading_block_height(heading, "Complaint")

    def test_heading_slots_when_huge_caption_then_leaves_one_line(self):
        template = PageTemplate()
        heading = Heading(left_fields=tuple(f"line {i}" for i in range(80)))

        assert template.heading_slots(heading) == template.line_count - 1

    def test_page_budgets_when_reserved_then_first_page_smaller(self):
        template = PageTemplate()

        budgets = template.page_budgets(10)

        assert budgets.first == pytest.approx(18 * template.line_height)
        assert budgets.other == pytest.approx(template.body_height)
        assert budgets.is_valid
