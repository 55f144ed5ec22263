"""
Module: exhibits

Purpose:
    Provides the Exhibit dataclass - one labeled attachment inside an
    exhibits section - and the ExhibitRole variant that drives grouping.

Key Classes:
    - ContentType: binary document, raster image, or group marker
    - ExhibitRole: GroupMarker | Parent | Compound (derived from flags)
    - Exhibit: Immutable exhibit entry

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.document.ExhibitsSection
    - builder.exhibits.grouper
    - builder.output.exhibit_pages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ContentType(str, Enum):
    """What an exhibit carries."""
    BINARY_DOCUMENT = "binary-document"  # Spliced verbatim (PDF)
    RASTER_IMAGE = "raster-image"        # Cover page + image page
    GROUP_MARKER = "group-marker"        # Header with no content of its own

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_mime(cls, mime_type: Optional[str]) -> "ContentType":
        """
        Infer content type from a MIME type.

        Example:
            >>> ContentType.from_mime("image/png")
            <ContentType.RASTER_IMAGE: 'raster-image'>
        """
        if mime_type and mime_type.lower().startswith("image/"):
            return cls.RASTER_IMAGE
        return cls.BINARY_DOCUMENT


class ExhibitRole(str, Enum):
    """Position of an exhibit in its group."""
    GROUP_MARKER = "group-marker"  # Starts a group, emits nothing itself
    PARENT = "parent"              # Starts a group, emits its own content
    COMPOUND = "compound"          # Joins the group opened before it

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Exhibit:
    """
    Immutable exhibit entry.

    Attributes:
        exhibit_id: Stable identifier from the editing layer
        title: Display title (may be empty)
        description: Free-text description shown in the index and cover
        content_type: Binary document, raster image, or group marker
        content_ref: Opaque asset reference (None for group markers)
        is_group_header: Explicit group header flag
        is_compound: Entry belongs to the group opened before it
        mime_type: Original MIME type, if known
        name: Original file name, used when title is empty
    """
    exhibit_id: str
    title: str = ""
    description: str = ""
    content_type: ContentType = ContentType.BINARY_DOCUMENT
    content_ref: Optional[str] = None
    is_group_header: bool = False
    is_compound: bool = False
    mime_type: Optional[str] = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.is_group_header and self.is_compound:
            raise ValueError(
                f"Exhibit {self.exhibit_id} cannot be both a group header and compound"
            )

    @property
    def role(self) -> ExhibitRole:
        if self.is_group_header or self.content_type == ContentType.GROUP_MARKER:
            return ExhibitRole.GROUP_MARKER
        if self.is_compound:
            return ExhibitRole.COMPOUND
        return ExhibitRole.PARENT

    @property
    def display_title(self) -> str:
        """Title, falling back to file name, then a generic label."""
        return self.title.strip() or self.name.strip() or "Untitled"
