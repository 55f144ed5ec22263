"""Serialization utilities for core models."""

from .serialization import (
    ParseError,
    LoadedDocument,
    deserialize_document,
    load_document,
    migrate_legacy_exhibits,
)

__all__ = [
    "LoadedDocument",
    "ParseError",
    "deserialize_document",
    "load_document",
    "migrate_legacy_exhibits",
]
