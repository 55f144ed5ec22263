"""
Module: builder.assets

Purpose:
    Asset resolution for source documents and exhibits. A resolver maps
    an opaque reference to bytes, or None when the asset is missing; the
    compiler skips missing assets.

Key Classes:
    - MappingAssetResolver: In-memory mapping (inline bundle data)
    - DirectoryAssetResolver: Files under a directory, by name
    - ChainAssetResolver: First resolver that returns bytes wins

Key Functions:
    - safe_resolve(): Call a resolver, turning failures into None

Used By:
    - builder.controller: Section emission
    - cli: --assets directory
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

AssetResolver = Callable[[str], Optional[bytes]]


class MappingAssetResolver:
    """Resolve references from an in-memory mapping."""

    def __init__(self, assets: Mapping[str, bytes]):
        self._assets = dict(assets)

    def __call__(self, ref: str) -> Optional[bytes]:
        return self._assets.get(ref)


class DirectoryAssetResolver:
    """
    Resolve references to files under a root directory.

    A reference is tried as a file name, then with each known extension.
    References that escape the root are refused.
    """

    EXTENSIONS = ("", ".pdf", ".png", ".jpg", ".jpeg", ".gif", ".webp")

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def __call__(self, ref: str) -> Optional[bytes]:
        for suffix in self.EXTENSIONS:
            candidate = (self.root / f"{ref}{suffix}").resolve()
            if self.root not in candidate.parents:
                logger.warning(f"Refusing asset reference outside {self.root}: {ref}")
                return None
            if candidate.is_file():
                return candidate.read_bytes()
        return None


class ChainAssetResolver:
    """Try resolvers in order; the first non-None result wins."""

    def __init__(self, resolvers: Sequence[AssetResolver]):
        self._resolvers = tuple(resolvers)

    def __call__(self, ref: str) -> Optional[bytes]:
        for resolver in self._resolvers:
            data = resolver(ref)
            if data is not None:
                return data
        return None


def safe_resolve(resolver: AssetResolver, ref: Optional[str]) -> Optional[bytes]:
    """
    Resolve an asset, logging and returning None on any failure.

    Args:
        resolver: Asset resolver callable
        ref: Asset reference (None or empty means no asset)
    """
    if not ref:
        return None
    try:
        data = resolver(ref)
    except Exception as e:
        logger.warning(f"Asset resolver failed for {ref!r}: {e}")
        return None
    if data is None:
        logger.warning(f"Asset {ref!r} could not be resolved")
        return None
    return data
