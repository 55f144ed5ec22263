"""
Module: builder.preview

Purpose:
    Interactive preview of a document. Rich-text sections are parsed
    once per content change (BlockCache) and paginated with the
    interactive paginator; the running page offset gives each section's
    global page numbers.

Key Classes:
    - PreviewSession: Block cache + measurement oracle + paginator
    - SectionPreview / DocumentPreview: Preview results

Dependencies:
    - builder.layout.paginator: paginate
    - builder.layout.measure: BlockMeasurer (default oracle)
    - fitz (PyMuPDF): Page counts of source documents

Used By:
    - cli: preview command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import fitz  # PyMuPDF

from pleading_toolkit.core.models.document import (
    Document,
    ExhibitsSection,
    RichTextSection,
    SourceDocumentSection,
)

from .assets import AssetResolver, safe_resolve
from .content import BlockCache
from .layout.config import PageTemplate
from .layout.fonts import FontSet
from .layout.measure import BlockMeasurer
from .layout.models import PreviewResult
from .layout.paginator import DEFAULT_TOLERANCE, MeasureFn, MeasurePrefixFn, paginate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionPreview:
    """
    Preview of one section.

    Attributes:
        section_id: Section identifier
        kind: "rich-text", "source-document" or "exhibits"
        start_page: 0-based global index of the section's first page
        page_count: Pages in the preview (None when unknown)
        result: Paginated blocks (rich-text sections only)
    """
    section_id: str
    kind: str
    start_page: int
    page_count: Optional[int]
    result: Optional[PreviewResult] = None


@dataclass(frozen=True)
class DocumentPreview:
    sections: Tuple[SectionPreview, ...]

    @property
    def total_pages(self) -> int:
        return sum(section.page_count or 0 for section in self.sections)


class PreviewSession:
    """
    Repaginates sections as their content changes.

    The measurement oracle defaults to BlockMeasurer, which wraps text
    exactly as the compiled output does. A renderer-backed oracle can be
    supplied instead.

    Example:
        >>> session = PreviewSession()
        >>> result = session.preview_section(section, document)
        >>> result.page_count
        1
    """

    def __init__(
        self,
        template: Optional[PageTemplate] = None,
        fonts: Optional[FontSet] = None,
        *,
        measure: Optional[MeasureFn] = None,
        measure_prefix: Optional[MeasurePrefixFn] = None,
        spacing: Optional[float] = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        self.template = template or PageTemplate()
        measurer = BlockMeasurer(self.template, fonts)
        self.measure = measure or measurer.measure
        self.measure_prefix = measure_prefix or measurer.measure_prefix
        self.spacing = measurer.spacing if spacing is None else spacing
        self.tolerance = tolerance
        self.cache = BlockCache()

    def preview_section(self, section: RichTextSection, document: Document) -> PreviewResult:
        """Paginate one rich-text section with the caption block on page 1."""
        blocks = self.cache.get(section)
        reserved = self.template.heading_slots(document.heading, document.caption_title(section))
        budgets = self.template.page_budgets(reserved)
        result = paginate(
            blocks,
            budgets,
            self.measure,
            self.measure_prefix,
            spacing=self.spacing,
            tolerance=self.tolerance,
        )
        for warning in result.warnings:
            logger.warning(f"Section {section.section_id}: {warning}")
        return result

    def preview_document(
        self,
        document: Document,
        resolve_asset: Optional[AssetResolver] = None,
    ) -> DocumentPreview:
        """
        Preview every section with global page offsets.

        Source documents are counted when a resolver is given; exhibits
        sections report an unknown page count.
        """
        previews = []
        offset = 0
        for section in document.sections:
            if isinstance(section, RichTextSection):
                result = self.preview_section(section, document)
                preview = SectionPreview(
                    section.section_id, "rich-text", offset, result.page_count, result
                )
            elif isinstance(section, SourceDocumentSection):
                count = _count_pages(resolve_asset, section.content_ref) if resolve_asset else None
                preview = SectionPreview(section.section_id, "source-document", offset, count)
            elif isinstance(section, ExhibitsSection):
                preview = SectionPreview(section.section_id, "exhibits", offset, None)
            else:
                raise TypeError(f"Unsupported section type: {type(section).__name__}")
            previews.append(preview)
            offset += preview.page_count or 0

        # Sections absent from the document no longer need cached blocks
        self.cache.retain(section.section_id for section in document.sections)

        logger.debug(f"Previewed {len(previews)} sections, {offset} known pages")
        return DocumentPreview(sections=tuple(previews))


def _count_pages(resolve_asset: AssetResolver, ref: str) -> Optional[int]:
    data = safe_resolve(resolve_asset, ref)
    if data is None:
        return None
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            return doc.page_count
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Could not count pages of {ref}: {e}")
        return None
