"""
Module: builder.controller

Purpose:
    Orchestrate compilation of a Document into one PDF.
    Sections in order → rendered/spliced pages → page numbers → bytes

Key Functions:
    - compile_document(): Main entry point for compiling a document

Key Classes:
    - DocumentCompiler: Stateful compiler (serialises overlapping runs)
    - CompileState: IDLE → EMITTING → NUMBERING → DONE / FAILED
    - CompileResult / SectionReport: Compile outcome
    - CompileError: Exception for fatal compile failures

Dependencies:
    - builder.output: Page rendering and PDF assembly
    - builder.exhibits: Exhibit grouping
    - builder.assets: Asset resolution

Used By:
    - cli: compile command
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pleading_toolkit.core.models.document import (
    Document,
    ExhibitsSection,
    RichTextSection,
    Section,
    SourceDocumentSection,
)
from pleading_toolkit.core.models.exhibits import ContentType

from .assets import AssetResolver, safe_resolve
from .config import CompileConfig
from .exhibits import build_index_entries, group_exhibits, iter_emission_plan
from .layout.config import PageTemplate
from .layout.fonts import FontSet
from .output.assembler import PdfAssembler
from .output.exhibit_pages import render_exhibit_cover, render_exhibit_index, render_image_page
from .output.renderer import render_blank_page, render_rich_text_section

logger = logging.getLogger(__name__)


class CompileError(Exception):
    """Fatal compile failure; no partial output is produced."""
    pass


class CompileState(str, Enum):
    """Lifecycle of a compile."""
    IDLE = "idle"
    EMITTING = "emitting"
    NUMBERING = "numbering"
    DONE = "done"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass
class SectionReport:
    """
    What one section contributed.

    Attributes:
        section_id: Section identifier
        kind: "rich-text", "source-document" or "exhibits"
        start_page: 0-based index of the section's first page
        page_count: Pages emitted
        skipped_assets: References that could not be used
        errors: Errors absorbed while emitting the section
    """
    section_id: str
    kind: str
    start_page: int
    page_count: int = 0
    skipped_assets: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CompileResult:
    """
    Complete compile result (immutable).

    Attributes:
        pdf_bytes: The compiled document
        page_count: Total pages
        sections: Per-section reports in document order
        warnings: Skipped assets and absorbed section errors

    Example:
        >>> result = compile_document(document, resolver)
        >>> print(f"Compiled {result.page_count} pages")
    """
    pdf_bytes: bytes
    page_count: int
    sections: Tuple[SectionReport, ...]
    warnings: Tuple[str, ...]


class DocumentCompiler:
    """
    Compiles documents, one at a time.

    A second compile started while one is running waits for it to
    finish. ``state`` and ``current_section`` expose progress.

    Example:
        >>> compiler = DocumentCompiler()
        >>> result = compiler.compile(document, resolver)
        >>> compiler.state
        <CompileState.DONE: 'done'>
    """

    def __init__(
        self,
        config: Optional[CompileConfig] = None,
        template: Optional[PageTemplate] = None,
        fonts: Optional[FontSet] = None,
    ):
        self.config = config or CompileConfig()
        self.template = template or PageTemplate()
        self.fonts = fonts or FontSet()
        self.state = CompileState.IDLE
        self.current_section: Optional[int] = None
        self._lock = threading.Lock()

    def compile(self, document: Document, resolve_asset: AssetResolver) -> CompileResult:
        """
        Compile a document to PDF bytes.

        Pipeline:
        1. Emit each section's pages in order (one blank pleading page
           when nothing is emitted)
        2. Stamp "Page i of N" on every page (if enabled)
        3. Save deterministic bytes

        Args:
            document: Document snapshot
            resolve_asset: Maps asset references to bytes (None = missing)

        Returns:
            CompileResult with bytes and per-section reports

        Raises:
            CompileError: If the PDF writer cannot be created or the
                final document cannot be written
        """
        with self._lock:
            try:
                return self._compile(document, resolve_asset)
            except Exception:
                self.state = CompileState.FAILED
                raise
            finally:
                self.current_section = None

    def _compile(self, document: Document, resolve_asset: AssetResolver) -> CompileResult:
        start_time = time.perf_counter()
        warnings: List[str] = []
        reports: List[SectionReport] = []

        logger.info(f"Starting compile of {len(document.sections)} sections")
        self.state = CompileState.EMITTING
        try:
            assembler = PdfAssembler()
        except (RuntimeError, ValueError) as e:
            raise CompileError(f"Failed to create PDF writer: {e}") from e

        try:
            # 1. Emit sections
            for index, section in enumerate(document.sections):
                self.current_section = index
                report = SectionReport(
                    section_id=section.section_id,
                    kind=_section_kind(section),
                    start_page=assembler.page_count,
                )
                try:
                    self._emit_section(section, document, assembler, resolve_asset, report)
                except Exception as e:
                    message = f"Section {section.section_id} failed: {e}"
                    logger.error(message, exc_info=True)
                    report.errors.append(str(e))
                    warnings.append(message)
                report.page_count = assembler.page_count - report.start_page
                warnings.extend(
                    f"Section {section.section_id}: skipped asset {ref}"
                    for ref in report.skipped_assets
                )
                reports.append(report)
                logger.info(
                    f"Section {index + 1}/{len(document.sections)} ({report.kind}): "
                    f"{report.page_count} pages"
                )
            self.current_section = None

            if assembler.page_count == 0:
                message = "Document produced no pages; emitting one blank page"
                logger.warning(message)
                warnings.append(message)
                assembler.append_pdf(render_blank_page(self.template), source="blank page")

            # 2. Page numbers
            self.state = CompileState.NUMBERING
            show_numbers = self.config.show_page_numbers
            if show_numbers is None:
                show_numbers = document.show_page_numbers
            if show_numbers:
                placement = self.config.page_number_placement or document.page_number_placement
                assembler.stamp_page_numbers(placement, self.config)

            # 3. Save
            page_count = assembler.page_count
            try:
                pdf_bytes = assembler.to_bytes(title=document.title)
            except (RuntimeError, ValueError) as e:
                raise CompileError(f"Failed to write compiled document: {e}") from e
        finally:
            assembler.close()

        self.state = CompileState.DONE
        elapsed = time.perf_counter() - start_time
        logger.info(f"Compile completed: {page_count} pages in {elapsed:.2f}s")
        return CompileResult(
            pdf_bytes=pdf_bytes,
            page_count=page_count,
            sections=tuple(reports),
            warnings=tuple(warnings),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Section emission
    # ─────────────────────────────────────────────────────────────────────

    def _emit_section(
        self,
        section: Section,
        document: Document,
        assembler: PdfAssembler,
        resolve_asset: AssetResolver,
        report: SectionReport,
    ) -> None:
        if isinstance(section, RichTextSection):
            rendered = render_rich_text_section(
                section,
                document,
                template=self.template,
                fonts=self.fonts,
                config=self.config,
            )
            if rendered is not None:
                assembler.append_pdf(rendered.pdf_bytes, source=section.section_id)
            return

        if isinstance(section, SourceDocumentSection):
            data = safe_resolve(resolve_asset, section.content_ref)
            if data is None or not assembler.append_pdf(data, source=section.content_ref):
                report.skipped_assets.append(section.content_ref or section.section_id)
            return

        if isinstance(section, ExhibitsSection):
            self._emit_exhibits(section, assembler, resolve_asset, report)
            return

        raise TypeError(f"Unsupported section type: {type(section).__name__}")

    def _emit_exhibits(
        self,
        section: ExhibitsSection,
        assembler: PdfAssembler,
        resolve_asset: AssetResolver,
        report: SectionReport,
    ) -> None:
        grouping = group_exhibits(section.exhibits)
        entries = build_index_entries(grouping, section.exhibits)
        index_pdf = render_exhibit_index(
            entries,
            section.captions,
            template=self.template,
            fonts=self.fonts,
            config=self.config,
        )
        assembler.append_pdf(index_pdf, source=f"{section.section_id} index")
        logger.debug(f"Exhibit index for {section.section_id}: {len(grouping.groups)} groups")

        for label, exhibit in iter_emission_plan(grouping, section.exhibits):
            if exhibit.content_type == ContentType.RASTER_IMAGE:
                cover = render_exhibit_cover(
                    label,
                    exhibit,
                    section.captions,
                    template=self.template,
                    fonts=self.fonts,
                    config=self.config,
                )
                assembler.append_pdf(cover, source=f"Exhibit {label} cover")
                data = safe_resolve(resolve_asset, exhibit.content_ref)
                image_pdf = render_image_page(data, template=self.template, config=self.config) if data else None
                if image_pdf is None:
                    report.skipped_assets.append(exhibit.content_ref or exhibit.exhibit_id)
                    continue
                assembler.append_pdf(image_pdf, source=f"Exhibit {label} image")
                continue

            data = safe_resolve(resolve_asset, exhibit.content_ref)
            if data is None or not assembler.append_pdf(data, source=f"Exhibit {label}"):
                report.skipped_assets.append(exhibit.content_ref or exhibit.exhibit_id)


def _section_kind(section: Section) -> str:
    if isinstance(section, RichTextSection):
        return "rich-text"
    if isinstance(section, SourceDocumentSection):
        return "source-document"
    return "exhibits"


def compile_document(
    document: Document,
    resolve_asset: AssetResolver,
    config: Optional[CompileConfig] = None,
    *,
    template: Optional[PageTemplate] = None,
    fonts: Optional[FontSet] = None,
) -> CompileResult:
    """
    Compile a document with a one-off compiler.

    Args:
        document: Document snapshot
        resolve_asset: Maps asset references to bytes (None = missing)
        config: Compile configuration
        template: Page geometry
        fonts: Body fonts

    Returns:
        CompileResult

    Raises:
        CompileError: If the PDF cannot be produced
    """
    return DocumentCompiler(config, template, fonts).compile(document, resolve_asset)
