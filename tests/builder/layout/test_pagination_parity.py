"""
Integration Tests for Pagination Parity

The preview paginator and the compiled output must agree on how many
pages a rich-text section's body occupies.
"""

import fitz
import pytest

from pleading_toolkit.builder.layout.config import PageTemplate
from pleading_toolkit.builder.layout.fonts import FontSet
from pleading_toolkit.builder.output.renderer import render_rich_text_section
from pleading_toolkit.builder.preview import PreviewSession
from pleading_toolkit.core.models.document import (
    Document,
    Heading,
    RichTextSection,
    SignatureType,
)

SENTENCE = (
    "Defendant breached the written agreement by failing to pay the sums "
    "due under it despite repeated demands by plaintiff. "
)


def build_content(paragraphs: int, sentences: int) -> str:
    parts = ["# Statement of Facts"]
    for index in range(paragraphs):
        parts.append(SENTENCE * sentences)
        if index % 4 == 3:
            parts.append("## Further allegations")
    parts.append("- First short point\n- Second short point")
    return "\n\n".join(parts)


def build_table(rows: int, cell: str) -> str:
    lines = ["| Item | Detail |", "|---|---|"]
    lines.extend(f"| Item {index} | {cell} |" for index in range(1, rows))
    return "\n".join(lines)


@pytest.fixture
def caption_heading():
    return Heading(
        left_fields=("Jane Roe", "123 Main Street", "Springfield"),
        plaintiff="Jane Roe",
        defendant="Acme Corp",
        court_title="Superior Court of California",
    )


class TestPaginationParity:
    """Preview page counts match compiled page counts."""

    @pytest.mark.parametrize("paragraphs, sentences", [
        (1, 1),
        (3, 2),
        (6, 3),
        (10, 4),
        (14, 5),
    ])
    def test_page_count_when_previewed_then_matches_compile(
        self, paragraphs, sentences, caption_heading, fixed_fonts
    ):
        # Arrange
        template = PageTemplate()
        section = RichTextSection(
            "body",
            build_content(paragraphs, sentences),
            title="Complaint",
            signature_type=SignatureType.NONE,
        )
        document = Document(heading=caption_heading, sections=(section,))

        # Act
        preview = PreviewSession(template, fixed_fonts).preview_section(section, document)
        rendered = render_rich_text_section(section, document, template=template, fonts=fixed_fonts)

        # Assert
        assert preview.page_count == rendered.content_page_count
        with fitz.open(stream=rendered.pdf_bytes, filetype="pdf") as pdf:
            assert pdf.page_count == rendered.page_count

    @pytest.mark.parametrize("paragraphs", [2, 8, 16])
    def test_page_count_when_standard_fonts_then_matches_compile(self, paragraphs):
        """The default Times metrics give the same agreement."""
        template = PageTemplate()
        fonts = FontSet()
        section = RichTextSection(
            "body",
            build_content(paragraphs, 3),
            signature_type=SignatureType.NONE,
        )
        document = Document(sections=(section,))

        preview = PreviewSession(template, fonts).preview_section(section, document)
        rendered = render_rich_text_section(section, document, template=template, fonts=fonts)

        assert preview.page_count == rendered.content_page_count

    def test_page_count_when_long_section_then_spans_pages(self, caption_heading, fixed_fonts):
        section = RichTextSection("body", build_content(14, 5), signature_type=SignatureType.NONE)
        document = Document(heading=caption_heading, sections=(section,))

        preview = PreviewSession(PageTemplate(), fixed_fonts).preview_section(section, document)

        assert preview.page_count >= 2


class TestTablePaginationParity:
    """Tables agree between preview and compile, including tall ones."""

    @pytest.mark.parametrize("content", [
        "| | |\n|---|---|\n| | |\n\nText after.",
        build_table(41, "$100"),
        build_table(12, SENTENCE * 2),
        build_content(3, 2) + "\n\n" + build_table(41, "$100"),
        build_content(2, 3) + "\n\n" + build_table(9, SENTENCE * 2) + "\n\nClosing remarks.",
    ])
    def test_page_count_when_table_previewed_then_matches_compile(self, content, fixed_fonts):
        # Arrange
        template = PageTemplate()
        section = RichTextSection("body", content, signature_type=SignatureType.NONE)
        document = Document(sections=(section,))

        # Act
        preview = PreviewSession(template, fixed_fonts).preview_section(section, document)
        rendered = render_rich_text_section(section, document, template=template, fonts=fixed_fonts)

        # Assert
        assert preview.page_count == rendered.content_page_count
        assert not preview.warnings

    def test_page_count_when_blank_table_then_single_page(self, fixed_fonts):
        """An all-blank table adds nothing to either path."""
        section = RichTextSection(
            "body", "| | |\n|---|---|\n| | |\n\nText after.", signature_type=SignatureType.NONE
        )
        document = Document(sections=(section,))

        preview = PreviewSession(PageTemplate(), fixed_fonts).preview_section(section, document)

        assert preview.page_count == 1
        assert preview.plain_text == "Text after."

    def test_page_count_when_table_taller_than_page_then_rows_continue(self, fixed_fonts):
        section = RichTextSection("body", build_table(41, "$100"), signature_type=SignatureType.NONE)
        document = Document(sections=(section,))

        preview = PreviewSession(PageTemplate(), fixed_fonts).preview_section(section, document)

        assert preview.page_count == 2
        tail = preview.pages[1].blocks[0]
        assert tail.continued is True
        assert sum(len(page.blocks[0].rows) for page in preview.pages) == 41
