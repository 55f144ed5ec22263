"""
Unit Tests for Rich Text Parser

Tests for converting Markdown into blocks.
"""

import pytest

from pleading_toolkit.builder.content import parse_rich_text
from pleading_toolkit.core.models.blocks import BlockKind


class TestParseRichText:
    """Tests for parse_rich_text()."""

    @pytest.mark.parametrize("text", ["", "   \n\n  "])
    def test_parse_when_blank_then_no_blocks(self, text):
        assert parse_rich_text(text) == ()

    def test_parse_when_paragraphs_then_one_block_each(self):
        blocks = parse_rich_text("First paragraph\ncontinues.\n\nSecond paragraph.")

        assert [block.kind for block in blocks] == [BlockKind.PARAGRAPH, BlockKind.PARAGRAPH]
        assert blocks[0].text == "First paragraph continues."

    def test_parse_when_inline_markup_then_text_flattened(self):
        blocks = parse_rich_text("Some **bold**, *italic* and `code` text.")
        assert blocks[0].text == "Some bold, italic and code text."

    def test_parse_when_heading_then_level_kept(self):
        blocks = parse_rich_text("# Title\n\n### Subheading")

        assert blocks[0].kind == BlockKind.HEADING
        assert (blocks[0].text, blocks[0].level) == ("Title", 1)
        assert blocks[1].level == 3

    def test_parse_when_ordered_list_then_start_number_kept(self):
        block = parse_rich_text("3. three\n4. four")[0]

        assert block.kind == BlockKind.LIST
        assert block.ordered is True
        assert block.start == 3
        assert [item.plain_text for item in block.children] == ["three", "four"]

    def test_parse_when_nested_list_then_items_hold_sublists(self):
        block = parse_rich_text("- outer\n  - inner")[0]

        item = block.children[0]
        assert item.kind == BlockKind.LIST_ITEM
        assert [child.kind for child in item.children] == [BlockKind.PARAGRAPH, BlockKind.LIST]

    def test_parse_when_blockquote_then_children_wrapped(self):
        block = parse_rich_text("> quoted text")[0]

        assert block.kind == BlockKind.BLOCKQUOTE
        assert block.plain_text == "quoted text"

    def test_parse_when_table_then_rows_and_cells(self):
        block = parse_rich_text("| Item | Cost |\n| --- | --- |\n| Rent | 100 |")[0]

        assert block.kind == BlockKind.TABLE
        assert block.rows == (("Item", "Cost"), ("Rent", "100"))

    def test_parse_when_table_cells_all_blank_then_table_dropped(self):
        blocks = parse_rich_text("| | |\n|---|---|\n| | |\n\nText after.")

        assert [block.kind for block in blocks] == [BlockKind.PARAGRAPH]
        assert blocks[0].text == "Text after."

    def test_parse_when_code_fence_then_plain_paragraph(self):
        block = parse_rich_text("```\nexact text\n```")[0]

        assert block.kind == BlockKind.PARAGRAPH
        assert block.text == "exact text"

    def test_parse_when_repeated_then_same_result(self):
        text = "# A\n\nBody"
        assert parse_rich_text(text) == parse_rich_text(text)

    def test_parse_when_rule_between_paragraphs_then_rule_dropped(self):
        blocks = parse_rich_text("Above\n\n***\n\nBelow")
        assert [block.text for block in blocks] == ["Above", "Below"]
