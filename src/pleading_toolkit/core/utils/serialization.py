"""
Serialization Utilities

Load Document snapshots from the editing layer's JSON format.

Accepted shapes:
- A bundle: ``{"kind": "legal-drafting-bundle", "version": 1, "doc": {...}}``
- A bare document: ``{"docTitle": ..., "fragments": [...]}``

Fragments are tagged ``markdown``, ``pdf`` or ``exhibits``. Assets are
referenced by ``fileId`` or embedded as base64 ``data``; embedded assets
are returned alongside the document and referenced as ``inline:<id>``.

Legacy exhibit lists are migrated on load so that grouping needs only
one rule (see ``migrate_legacy_exhibits``).
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..models.document import (
    Document,
    ExhibitsSection,
    Heading,
    PageNumberPlacement,
    RichTextSection,
    Section,
    SignatureType,
    SourceDocumentSection,
)
from ..models.exhibits import ContentType, Exhibit, ExhibitRole

logger = logging.getLogger(__name__)

BUNDLE_KIND = "legal-drafting-bundle"
INLINE_PREFIX = "inline:"

# Older documents used "default" for the standard signature block
_SIGNATURE_ALIASES = {"default": SignatureType.STANDARD, "": SignatureType.STANDARD}


class ParseError(Exception):
    """Document JSON is malformed or has an unsupported shape."""
    pass


@dataclass(frozen=True)
class LoadedDocument:
    """
    Result of loading a document.

    Attributes:
        document: Parsed Document snapshot
        inline_assets: Decoded embedded assets keyed by their ``inline:`` ref
    """
    document: Document
    inline_assets: Dict[str, bytes] = field(default_factory=dict)


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

def load_document(path: Path) -> LoadedDocument:
    """
    Load a document or bundle from a JSON file.

    Raises:
        ParseError: If the file is not valid JSON or not a document
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {path}: {e}") from e
    return deserialize_document(data)


def deserialize_document(data: Any) -> LoadedDocument:
    """
    Build a Document from a parsed JSON payload.

    Args:
        data: Bundle or bare document dictionary

    Returns:
        LoadedDocument with decoded inline assets

    Raises:
        ParseError: If the payload is not a document
    """
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    if data.get("kind") == BUNDLE_KIND:
        version = data.get("version", 1)
        if version != 1:
            raise ParseError(f"Unsupported bundle version: {version}")
        data = data.get("doc")
        if not isinstance(data, dict):
            raise ParseError("Bundle has no 'doc' object")

    fragments = data.get("fragments", [])
    if not isinstance(fragments, list):
        raise ParseError("'fragments' must be a list")

    inline_assets: Dict[str, bytes] = {}
    sections: List[Section] = []
    for position, fragment in enumerate(fragments):
        if not isinstance(fragment, dict):
            logger.warning(f"Skipping fragment {position}: not an object")
            continue
        section = _section_from_payload(fragment, position, inline_assets)
        if section is not None:
            sections.append(section)

    heading = Heading(
        left_fields=_string_tuple(data.get("leftHeadingFields")),
        right_fields=_string_tuple(data.get("rightHeadingFields")),
        plaintiff=_string(data.get("plaintiffName")),
        defendant=_string(data.get("defendantName")),
        court_title=_string(data.get("courtTitle")),
    )

    placement_raw = _string(data.get("pageNumberPlacement")) or PageNumberPlacement.RIGHT.value
    try:
        placement = PageNumberPlacement(placement_raw.lower())
    except ValueError as e:
        raise ParseError(f"Unknown page number placement: {placement_raw}") from e

    show_numbers = data.get("showPageNumbers", True)
    try:
        document = Document(
            heading=heading,
            sections=tuple(sections),
            title=_string(data.get("docTitle")),
            date=_string(data.get("docDate")),
            show_page_numbers=show_numbers if isinstance(show_numbers, bool) else True,
            page_number_placement=placement,
        )
    except ValueError as e:
        raise ParseError(str(e)) from e

    logger.debug(f"Loaded document with {len(sections)} sections, {len(inline_assets)} inline assets")
    return LoadedDocument(document=document, inline_assets=inline_assets)


def _section_from_payload(
    fragment: Dict[str, Any],
    position: int,
    inline_assets: Dict[str, bytes],
) -> Section | None:
    kind = fragment.get("type")
    section_id = _string(fragment.get("id")) or f"fragment-{position}"
    title = _string(fragment.get("title"))

    if kind == "markdown":
        raw_signature = _string(fragment.get("signatureType")).lower()
        signature = _SIGNATURE_ALIASES.get(raw_signature)
        if signature is None:
            try:
                signature = SignatureType(raw_signature)
            except ValueError as e:
                raise ParseError(f"Unknown signature type: {raw_signature}") from e
        return RichTextSection(
            section_id=section_id,
            content=_string(fragment.get("content")),
            title=title,
            signature_type=signature,
        )

    if kind == "pdf":
        ref = _asset_ref(fragment, section_id, inline_assets)
        return SourceDocumentSection(section_id=section_id, content_ref=ref or "", title=title)

    if kind == "exhibits":
        raw_exhibits = fragment.get("exhibits") or []
        if not isinstance(raw_exhibits, list):
            raise ParseError(f"Exhibits of fragment {section_id} must be a list")
        exhibits = tuple(
            _exhibit_from_payload(raw, f"{section_id}-ex-{index}", inline_assets)
            for index, raw in enumerate(raw_exhibits)
            if isinstance(raw, dict)
        )
        return ExhibitsSection(
            section_id=section_id,
            exhibits=migrate_legacy_exhibits(exhibits),
            captions=_string_tuple(fragment.get("captions")),
            title=title,
        )

    logger.warning(f"Skipping fragment {section_id}: unknown type {kind!r}")
    return None


def _exhibit_from_payload(
    raw: Dict[str, Any],
    fallback_id: str,
    inline_assets: Dict[str, bytes],
) -> Exhibit:
    exhibit_id = _string(raw.get("id")) or fallback_id
    mime_type = _string(raw.get("mimeType")) or None
    is_header = bool(raw.get("isGroupHeader")) or raw.get("type") == "group"

    if is_header:
        content_type = ContentType.GROUP_MARKER
        ref = None
    else:
        if raw.get("type") == "image":
            content_type = ContentType.RASTER_IMAGE
        elif raw.get("type") == "pdf":
            content_type = ContentType.BINARY_DOCUMENT
        else:
            content_type = ContentType.from_mime(mime_type)
        ref = _asset_ref(raw, exhibit_id, inline_assets)

    return Exhibit(
        exhibit_id=exhibit_id,
        title=_string(raw.get("title")),
        description=_string(raw.get("description")),
        content_type=content_type,
        content_ref=ref,
        is_group_header=is_header,
        is_compound=bool(raw.get("isCompound")) and not is_header,
        mime_type=mime_type,
        name=_string(raw.get("name")),
    )


def _asset_ref(payload: Dict[str, Any], owner_id: str, inline_assets: Dict[str, bytes]) -> str | None:
    """Prefer embedded data over a storage id, matching bundle export."""
    data = payload.get("data")
    if isinstance(data, str) and data:
        try:
            decoded = base64.b64decode(data, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ParseError(f"Invalid base64 data for {owner_id}: {e}") from e
        ref = f"{INLINE_PREFIX}{owner_id}"
        inline_assets[ref] = decoded
        return ref
    file_id = _string(payload.get("fileId"))
    return file_id or None


# ─────────────────────────────────────────────────────────────────────────────
# Legacy migration
# ─────────────────────────────────────────────────────────────────────────────

def migrate_legacy_exhibits(exhibits: Tuple[Exhibit, ...]) -> Tuple[Exhibit, ...]:
    """
    Normalise legacy exhibit lists so grouping is a single rule.

    Older documents grouped compound entries under whatever non-compound
    entry preceded them. That already matches the grouping rule; the only
    shape it cannot express is a compound entry with nothing before it,
    which is promoted to a parent here.
    """
    migrated: List[Exhibit] = []
    group_open = False
    for exhibit in exhibits:
        if exhibit.role == ExhibitRole.COMPOUND and not group_open:
            logger.info(f"Promoting leading compound exhibit {exhibit.exhibit_id} to parent")
            exhibit = replace(exhibit, is_compound=False)
        group_open = True
        migrated.append(exhibit)
    return tuple(migrated)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _string_tuple(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item if isinstance(item, str) else str(item) for item in value if item is not None)
