"""
Module: builder

Purpose:
    Pagination and compilation of pleading documents. Paginates rich
    text for preview, groups and labels exhibits, and compiles the whole
    document to a single PDF with page numbers.

Key Functions:
    - compile_document(): Main entry point for compiling a document

Key Classes:
    - DocumentCompiler: Stateful compiler
    - CompileConfig: Configuration for compiling
    - PreviewSession: Interactive preview pagination

Dependencies:
    - reportlab: Page drawing
    - fitz (PyMuPDF): Splicing and page numbering
    - markdown-it-py: Rich-text parsing

Used By:
    - pleading_toolkit.cli: Command line interface
"""

from .assets import ChainAssetResolver, DirectoryAssetResolver, MappingAssetResolver
from .config import CompileConfig
from .controller import (
    CompileError,
    CompileResult,
    CompileState,
    DocumentCompiler,
    SectionReport,
    compile_document,
)
from .preview import DocumentPreview, PreviewSession, SectionPreview

__all__ = [
    # Config
    "CompileConfig",
    # Assets
    "ChainAssetResolver",
    "DirectoryAssetResolver",
    "MappingAssetResolver",
    # Controller
    "CompileError",
    "CompileResult",
    "CompileState",
    "DocumentCompiler",
    "SectionReport",
    "compile_document",
    # Preview
    "DocumentPreview",
    "PreviewSession",
    "SectionPreview",
]
