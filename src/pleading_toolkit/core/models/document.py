"""
Module: document

Purpose:
    The Document snapshot compiled in one pass: heading/caption fields,
    date, page numbering options and the ordered sections.

Key Classes:
    - Heading: Caption block fields drawn on a section's first page
    - SignatureType: Signature block variant for rich-text sections
    - PageNumberPlacement: left | center | right
    - RichTextSection / SourceDocumentSection / ExhibitsSection
    - Document: Immutable filing snapshot

Dependencies:
    - dataclasses (std)
    - .exhibits.Exhibit

Used By:
    - core.utils.serialization: JSON loading
    - builder.controller: Compilation
    - builder.preview: Interactive pagination
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .exhibits import Exhibit


class SignatureType(str, Enum):
    """Signature block drawn after a rich-text section."""
    NONE = "none"
    STANDARD = "standard"
    PROPOSED_ORDER = "proposed-order"
    DECLARATION = "declaration"

    def __str__(self) -> str:
        return self.value


class PageNumberPlacement(str, Enum):
    """Horizontal position of the "Page i of N" footer."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Heading:
    """
    Caption block fields.

    Attributes:
        left_fields: Contact lines, top-left of the first page
        right_fields: Court/case lines beside the party caption box
        plaintiff: Plaintiff name
        defendant: Defendant name
        court_title: Court name, centered above the caption
    """
    left_fields: Tuple[str, ...] = ()
    right_fields: Tuple[str, ...] = ()
    plaintiff: str = ""
    defendant: str = ""
    court_title: str = ""

    @property
    def has_content(self) -> bool:
        return any(
            value.strip()
            for value in (
                *self.left_fields, *self.right_fields,
                self.plaintiff, self.defendant, self.court_title,
            )
        )


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RichTextSection:
    """Markdown body drawn on pleading paper."""
    section_id: str
    content: str = ""
    title: str = ""
    signature_type: SignatureType = SignatureType.STANDARD


@dataclass(frozen=True)
class SourceDocumentSection:
    """Previously produced PDF spliced verbatim."""
    section_id: str
    content_ref: str = ""
    title: str = ""


@dataclass(frozen=True)
class ExhibitsSection:
    """Exhibit index followed by the exhibits' content."""
    section_id: str
    exhibits: Tuple[Exhibit, ...] = ()
    captions: Tuple[str, ...] = ()
    title: str = ""


Section = Union[RichTextSection, SourceDocumentSection, ExhibitsSection]


@dataclass(frozen=True)
class Document:
    """
    Immutable filing snapshot.

    Section order alone determines output order. A section may appear
    only once (by section_id).

    Attributes:
        heading: Caption block fields
        sections: Ordered sections
        title: Document title drawn under the caption
        date: ISO date string (may be empty)
        show_page_numbers: Stamp "Page i of N" on every page
        page_number_placement: Footer position
    """
    heading: Heading = field(default_factory=Heading)
    sections: Tuple[Section, ...] = ()
    title: str = ""
    date: str = ""
    show_page_numbers: bool = True
    page_number_placement: PageNumberPlacement = PageNumberPlacement.RIGHT

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for section in self.sections:
            if section.section_id in seen:
                raise ValueError(f"Section {section.section_id} appears more than once")
            seen.add(section.section_id)

    def find(self, section_id: str) -> Section:
        """Find a section by id. Raises KeyError if absent."""
        for section in self.sections:
            if section.section_id == section_id:
                return section
        raise KeyError(section_id)

    def caption_title(self, section: Section) -> str:
        """Title drawn under the caption: the section's own, else the document's."""
        return (getattr(section, "title", "") or "").strip() or self.title.strip()
