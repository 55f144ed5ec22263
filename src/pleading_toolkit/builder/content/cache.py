"""
Module: builder.content.cache

Purpose:
    Per-section cache of parsed blocks. An entry is reused while the
    section's content is unchanged and re-derived as soon as it changes.

Key Classes:
    - BlockCache: section_id -> blocks

Used By:
    - builder.preview: PreviewSession
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from pleading_toolkit.core.models.blocks import Block
from pleading_toolkit.core.models.document import RichTextSection

from .parser import parse_rich_text

logger = logging.getLogger(__name__)


class BlockCache:
    """
    Block trees cached per section.

    Example:
        >>> cache = BlockCache()
        >>> blocks = cache.get(RichTextSection("s1", "Hello"))
        >>> cache.get(RichTextSection("s1", "Hello")) is blocks
        True
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, Tuple[Block, ...]]] = {}

    def get(self, section: RichTextSection) -> Tuple[Block, ...]:
        entry = self._entries.get(section.section_id)
        if entry is not None and entry[0] == section.content:
            return entry[1]
        if entry is not None:
            logger.debug(f"Content of section {section.section_id} changed; re-deriving blocks")
        blocks = parse_rich_text(section.content)
        self._entries[section.section_id] = (section.content, blocks)
        return blocks

    def invalidate(self, section_id: Optional[str] = None) -> None:
        """Drop one section's entry, or every entry when no id is given."""
        if section_id is None:
            self._entries.clear()
        else:
            self._entries.pop(section_id, None)

    def retain(self, section_ids: Iterable[str]) -> None:
        """Drop entries of sections that are no longer in the document."""
        live = set(section_ids)
        for section_id in [sid for sid in self._entries if sid not in live]:
            del self._entries[section_id]

    def __contains__(self, section_id: str) -> bool:
        return section_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
