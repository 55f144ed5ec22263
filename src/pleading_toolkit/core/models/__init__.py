"""
Core data models.

All models are immutable (frozen dataclasses) and validate on construction.
"""

from .blocks import Block, BlockKind
from .document import (
    Document,
    ExhibitsSection,
    Heading,
    PageNumberPlacement,
    RichTextSection,
    Section,
    SignatureType,
    SourceDocumentSection,
)
from .exhibits import ContentType, Exhibit, ExhibitRole

__all__ = [
    "Block",
    "BlockKind",
    "ContentType",
    "Document",
    "Exhibit",
    "ExhibitRole",
    "ExhibitsSection",
    "Heading",
    "PageNumberPlacement",
    "RichTextSection",
    "Section",
    "SignatureType",
    "SourceDocumentSection",
]
