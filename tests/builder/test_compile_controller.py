"""
Integration Tests for the Document Compiler

Compiles whole documents and inspects the output with PyMuPDF.
"""

import fitz
import pytest

from pleading_toolkit.builder import (
    CompileConfig,
    CompileError,
    CompileState,
    DocumentCompiler,
    MappingAssetResolver,
    compile_document,
)
from pleading_toolkit.builder import controller as controller_module
from pleading_toolkit.core.models.document import (
    Document,
    ExhibitsSection,
    Heading,
    PageNumberPlacement,
    RichTextSection,
    SignatureType,
    SourceDocumentSection,
)
from pleading_toolkit.core.models.exhibits import ContentType, Exhibit


def page_texts(pdf_bytes: bytes) -> list:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as pdf:
        return [page.get_text() for page in pdf]


@pytest.fixture
def assets(make_pdf, sample_png_bytes):
    return MappingAssetResolver({
        "prior-motion": make_pdf(2, "Prior motion page"),
        "lease": make_pdf(1, "Lease page"),
        "addendum": make_pdf(1, "Addendum page"),
        "photo": sample_png_bytes,
    })


@pytest.fixture
def full_document():
    body = RichTextSection(
        "body",
        "# Complaint\n\nPlaintiff alleges as follows.",
        title="Complaint",
    )
    prior = SourceDocumentSection("prior", "prior-motion")
    exhibits = ExhibitsSection(
        "exhibits",
        exhibits=(
            Exhibit("x", title="Lease", content_ref="lease"),
            Exhibit("x1", title="Addendum", content_ref="addendum", is_compound=True),
            Exhibit("y", title="Photo", content_ref="photo", content_type=ContentType.RASTER_IMAGE),
        ),
        captions=("Jane Roe v. Acme Corp",),
    )
    return Document(
        heading=Heading(plaintiff="Jane Roe", defendant="Acme Corp"),
        sections=(body, prior, exhibits),
        title="Complaint",
        date="2024-03-05",
    )


class TestCompileDocument:
    """Tests for compile_document()."""

    def test_compile_when_full_document_then_sections_in_order(self, full_document, assets):
        # Act
        result = compile_document(full_document, assets)
        texts = page_texts(result.pdf_bytes)

        # Assert
        # body, 2 prior pages, index, addendum (A1), photo cover, photo
        assert result.page_count == len(texts) == 7
        assert "Plaintiff alleges as follows." in texts[0]
        assert "Prior motion page 1" in texts[1]
        assert "Prior motion page 2" in texts[2]
        assert "EXHIBIT INDEX" in texts[3]
        assert "Exhibit A - Lease" in texts[3]
        assert "Exhibit A1 - Addendum" in texts[3]
        assert "Exhibit B - Photo" in texts[3]
        assert "Addendum page 1" in texts[4]
        assert "EXHIBIT B - PHOTO" in texts[5]
        assert result.warnings == ()

    def test_compile_when_group_has_children_then_parent_content_omitted(self, full_document, assets):
        texts = page_texts(compile_document(full_document, assets).pdf_bytes)
        assert not any("Lease page" in text for text in texts)

    def test_compile_when_numbering_enabled_then_every_page_numbered(self, full_document, assets):
        texts = page_texts(compile_document(full_document, assets).pdf_bytes)

        for index, text in enumerate(texts):
            assert f"Page {index + 1} of {len(texts)}" in text

    def test_compile_when_numbering_disabled_then_no_footer(self, full_document, assets):
        config = CompileConfig(show_page_numbers=False)

        texts = page_texts(compile_document(full_document, assets, config).pdf_bytes)

        assert not any("Page 1 of" in text for text in texts)

    def test_compile_when_placement_overridden_then_footer_moves(self, full_document, assets):
        config = CompileConfig(page_number_placement=PageNumberPlacement.LEFT)

        result = compile_document(full_document, assets, config)

        with fitz.open(stream=result.pdf_bytes, filetype="pdf") as pdf:
            rect = pdf[0].search_for("Page 1 of 7")[0]
        assert rect.x0 == pytest.approx(72, abs=1.5)

    def test_compile_when_repeated_then_byte_identical(self, full_document, assets):
        first = compile_document(full_document, assets).pdf_bytes
        second = compile_document(full_document, assets).pdf_bytes

        assert first == second

    def test_compile_when_assets_missing_then_skipped_with_warnings(self, full_document):
        result = compile_document(full_document, MappingAssetResolver({}))
        texts = page_texts(result.pdf_bytes)

        # body, index and the photo cover remain
        assert result.page_count == 3
        assert "Exhibit A1 - Addendum" in texts[1]
        reports = {report.section_id: report for report in result.sections}
        assert reports["prior"].skipped_assets == ["prior-motion"]
        assert reports["exhibits"].skipped_assets == ["addendum", "photo"]
        assert len(result.warnings) == 3

    def test_compile_when_resolver_raises_then_asset_skipped(self, full_document):
        def broken(ref):
            raise IOError("storage offline")

        result = compile_document(full_document, broken)

        assert result.page_count == 3

    def test_compile_when_empty_body_section_then_skipped(self, assets, make_pdf):
        document = Document(sections=(
            RichTextSection("empty", "", signature_type=SignatureType.NONE),
            SourceDocumentSection("prior", "prior-motion"),
        ))

        result = compile_document(document, assets)

        assert result.page_count == 2
        assert result.sections[0].page_count == 0
        assert result.sections[1].start_page == 0

    def test_compile_when_no_pages_then_single_blank_page_with_warning(self):
        """A document whose only source is missing still yields a filing."""
        # Arrange
        document = Document(sections=(SourceDocumentSection("s", "missing"),))
        compiler = DocumentCompiler()

        # Act
        result = compiler.compile(document, MappingAssetResolver({}))

        # Assert
        assert result.page_count == 1
        assert any("no pages" in warning for warning in result.warnings)
        assert any("missing" in warning for warning in result.warnings)
        assert compiler.state == CompileState.DONE
        with fitz.open(stream=result.pdf_bytes, filetype="pdf") as pdf:
            assert pdf.page_count == 1

    def test_compile_when_empty_document_then_single_blank_page(self):
        result = compile_document(Document(), MappingAssetResolver({}))
        assert result.page_count == 1


class TestDocumentCompiler:
    """Tests for DocumentCompiler state and error handling."""

    def test_compile_when_successful_then_state_done(self, full_document, assets):
        compiler = DocumentCompiler()

        compiler.compile(full_document, assets)

        assert compiler.state == CompileState.DONE
        assert compiler.current_section is None

    def test_compile_when_fatal_error_then_state_failed(self, full_document, assets, monkeypatch):
        """A writer failure is fatal: no output and the compile is marked failed."""
        def fail_to_save(self, title=""):
            raise RuntimeError("disk full")

        monkeypatch.setattr(controller_module.PdfAssembler, "to_bytes", fail_to_save)
        compiler = DocumentCompiler()

        with pytest.raises(CompileError, match="disk full"):
            compiler.compile(full_document, assets)

        assert compiler.state == CompileState.FAILED

    def test_compile_when_section_raises_then_error_recorded_and_compile_continues(
        self, full_document, assets, monkeypatch
    ):
        def explode(*args, **kwargs):
            raise ValueError("renderer exploded")

        monkeypatch.setattr(controller_module, "render_rich_text_section", explode)

        result = DocumentCompiler().compile(full_document, assets)

        assert result.sections[0].errors == ["renderer exploded"]
        assert result.sections[0].page_count == 0
        assert result.page_count == 6
        assert any("renderer exploded" in warning for warning in result.warnings)

    def test_compile_when_reports_then_start_pages_accumulate(self, full_document, assets):
        result = DocumentCompiler().compile(full_document, assets)

        starts = [(report.start_page, report.page_count) for report in result.sections]

        assert starts == [(0, 1), (1, 2), (3, 4)]
