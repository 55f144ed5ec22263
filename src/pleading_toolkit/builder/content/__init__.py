"""
Rich-text content for pleading sections.

Public API:
    parse_rich_text: Markdown -> immutable blocks
    BlockCache: Per-section block cache
    blocks_to_paragraphs / block_paragraphs: Blocks -> drawable hard lines
"""

from .cache import BlockCache
from .paragraphs import block_paragraphs, blocks_to_paragraphs
from .parser import parse_rich_text

__all__ = [
    "BlockCache",
    "block_paragraphs",
    "blocks_to_paragraphs",
    "parse_rich_text",
]
