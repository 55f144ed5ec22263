"""
Unit Tests for Preview Session

Tests for previewing whole documents with global page offsets.
"""

from pleading_toolkit.builder import MappingAssetResolver, PreviewSession
from pleading_toolkit.core.models.document import (
    Document,
    ExhibitsSection,
    Heading,
    RichTextSection,
    SourceDocumentSection,
)


class TestPreviewSession:
    """Tests for PreviewSession."""

    def test_preview_section_when_short_then_single_page(self, fixed_fonts):
        section = RichTextSection("s1", "A short line.")

        result = PreviewSession(fonts=fixed_fonts).preview_section(section, Document(sections=(section,)))

        assert result.page_count == 1
        assert result.plain_text == "A short line."

    def test_preview_section_when_caption_then_first_page_holds_less(self, fixed_fonts):
        content = "\n\n".join(f"Paragraph {i}." for i in range(10))
        section = RichTextSection("s1", content)
        plain = Document(sections=(section,))
        captioned = Document(heading=Heading(plaintiff="Jane Roe"), sections=(section,))
        session = PreviewSession(fonts=fixed_fonts)

        without_caption = session.preview_section(section, plain)
        with_caption = session.preview_section(section, captioned)

        assert without_caption.page_count == 1
        assert with_caption.page_count == 2

    def test_preview_document_when_mixed_sections_then_offsets_accumulate(self, make_pdf, fixed_fonts):
        document = Document(sections=(
            RichTextSection("body", "Opening text."),
            SourceDocumentSection("prior", "prior-motion"),
            ExhibitsSection("exhibits"),
            RichTextSection("closing", "Closing text."),
        ))
        resolver = MappingAssetResolver({"prior-motion": make_pdf(3)})

        preview = PreviewSession(fonts=fixed_fonts).preview_document(document, resolver)

        summary = [(s.section_id, s.kind, s.start_page, s.page_count) for s in preview.sections]
        assert summary == [
            ("body", "rich-text", 0, 1),
            ("prior", "source-document", 1, 3),
            ("exhibits", "exhibits", 4, None),
            ("closing", "rich-text", 4, 1),
        ]
        assert preview.total_pages == 5

    def test_preview_document_when_no_resolver_then_source_pages_unknown(self):
        document = Document(sections=(SourceDocumentSection("prior", "prior-motion"),))

        preview = PreviewSession().preview_document(document)

        assert preview.sections[0].page_count is None
        assert preview.total_pages == 0

    def test_preview_document_when_section_removed_then_cache_entry_dropped(self):
        session = PreviewSession()
        first = RichTextSection("a", "First.")
        second = RichTextSection("b", "Second.")
        session.preview_document(Document(sections=(first, second)))

        session.preview_document(Document(sections=(second,)))

        assert "a" not in session.cache
        assert "b" in session.cache

    def test_preview_section_when_custom_oracle_then_used(self):
        section = RichTextSection("s1", "one\n\ntwo\n\nthree")
        session = PreviewSession(
            measure=lambda block: 1000.0,
            measure_prefix=lambda block, offset: 1000.0,
        )

        result = session.preview_section(section, Document(sections=(section,)))

        assert result.page_count == 3
