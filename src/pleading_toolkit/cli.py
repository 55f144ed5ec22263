"""
Command line interface.

Usage:
    pleading-toolkit compile DOC.json -o OUT.pdf [--assets DIR]
                             [--placement left|center|right] [--no-page-numbers]
    pleading-toolkit preview DOC.json [--assets DIR]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pleading_toolkit import __version__
from pleading_toolkit.core.models.document import PageNumberPlacement
from pleading_toolkit.core.utils.serialization import LoadedDocument, ParseError, load_document
from pleading_toolkit.builder.assets import (
    AssetResolver,
    ChainAssetResolver,
    DirectoryAssetResolver,
    MappingAssetResolver,
)
from pleading_toolkit.builder.config import CompileConfig
from pleading_toolkit.builder.controller import CompileError, compile_document
from pleading_toolkit.builder.output.file_locking import write_locked_bytes
from pleading_toolkit.builder.preview import PreviewSession

logger = logging.getLogger("pleading_toolkit.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pleading-toolkit",
        description="Paginate and compile pleading-paper legal filings",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Compile a document to PDF")
    compile_parser.add_argument("document", type=Path, help="Document or bundle JSON")
    compile_parser.add_argument("-o", "--output", type=Path, required=True, help="Output PDF path")
    compile_parser.add_argument("--assets", type=Path, help="Directory holding referenced assets")
    compile_parser.add_argument(
        "--placement",
        choices=[p.value for p in PageNumberPlacement],
        help="Override page number placement",
    )
    compile_parser.add_argument(
        "--no-page-numbers", action="store_true", help="Do not stamp page numbers"
    )

    preview_parser = subparsers.add_parser("preview", help="Show the preview page breakdown")
    preview_parser.add_argument("document", type=Path, help="Document or bundle JSON")
    preview_parser.add_argument("--assets", type=Path, help="Directory holding referenced assets")
    return parser


def _resolver(loaded: LoadedDocument, assets_dir: Optional[Path]) -> AssetResolver:
    resolvers: List[AssetResolver] = [MappingAssetResolver(loaded.inline_assets)]
    if assets_dir is not None:
        resolvers.append(DirectoryAssetResolver(assets_dir))
    return ChainAssetResolver(resolvers)


def _run_compile(args: argparse.Namespace, loaded: LoadedDocument) -> int:
    config = CompileConfig(
        show_page_numbers=False if args.no_page_numbers else None,
        page_number_placement=PageNumberPlacement(args.placement) if args.placement else None,
    )
    result = compile_document(loaded.document, _resolver(loaded, args.assets), config)
    write_locked_bytes(args.output, result.pdf_bytes)
    for warning in result.warnings:
        logger.warning(warning)
    logger.info(f"Wrote {result.page_count} pages to {args.output}")
    return 0


def _run_preview(args: argparse.Namespace, loaded: LoadedDocument) -> int:
    resolver = _resolver(loaded, args.assets) if args.assets else None
    preview = PreviewSession().preview_document(loaded.document, resolver)
    for section in preview.sections:
        pages = "?" if section.page_count is None else str(section.page_count)
        print(f"{section.section_id}\t{section.kind}\tstart={section.start_page + 1}\tpages={pages}")
    print(f"total\t{preview.total_pages}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        loaded = load_document(args.document)
    except (OSError, ParseError) as e:
        logger.error(f"Could not load {args.document}: {e}")
        return 1

    try:
        if args.command == "compile":
            return _run_compile(args, loaded)
        return _run_preview(args, loaded)
    except (CompileError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
