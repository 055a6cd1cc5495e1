"""
Build the API catalog from documentation markdown.

This command:
1. Reads documentation from a local directory or over HTTP
2. Parses globals and class documents into one catalog
3. Saves catalog.json
4. Optionally runs a name query against the result

Usage:
    build-api-catalog
    build-api-catalog --docs-dir docs/
    build-api-catalog --base-url https://example.com/docs --query Get
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from docsource import DocumentSource, HttpDocumentSource, LocalDocumentSource

from .builder import CatalogBuilder
from .config import Settings

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build API catalog from documentation markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Fetch the configured documentation over HTTP
    build-api-catalog

    # Build from a local docs directory
    build-api-catalog --docs-dir docs/

    # Show completion candidates for a prefix
    build-api-catalog --docs-dir docs/ --query Get
        """
    )

    parser.add_argument(
        "--docs-dir",
        type=Path,
        default=settings.docs_dir,
        help="Local documentation directory (takes precedence over --base-url)"
    )

    parser.add_argument(
        "--base-url",
        default=settings.base_url,
        help=f"Documentation base URL (default: {settings.base_url})"
    )

    parser.add_argument(
        "--catalog-dir",
        type=Path,
        default=settings.catalog_dir,
        help=f"Output directory for catalog.json (default: {settings.catalog_dir})"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=settings.workers,
        help="Parse documents on this many threads (default: %(default)s)"
    )

    parser.add_argument(
        "--query",
        help="Print catalog names starting with this prefix"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    return parser


def make_source(args: argparse.Namespace, settings: Settings) -> DocumentSource:
    if args.docs_dir:
        return LocalDocumentSource(args.docs_dir)
    return HttpDocumentSource(args.base_url, paths=settings.files, timeout=settings.timeout)


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("\n" + "=" * 70)
    print("API Catalog Builder")
    print("=" * 70)

    source = make_source(args, settings)
    builder = CatalogBuilder(args.catalog_dir, max_workers=args.workers)

    print(f"\nInput: {source.describe()}")
    print(f"Output: {builder.catalog_file}")
    print("=" * 70)

    result = builder.build(source)

    if not result.succeeded:
        print(f"\n✗ Error: {result.error}")
        print("  Nothing was written; run the command again to retry.")
        return 1

    stats = result.stats
    print("\n" + "=" * 70)
    print("CATALOG BUILD COMPLETE")
    print("=" * 70)
    print(f"  Documents: {stats['documents_count']}")
    print(f"  Globals: {stats['globals_count']}")
    print(f"  Classes: {stats['classes_count']}")
    print(f"  Methods: {stats['methods_count']}")
    if stats["properties_count"]:
        print(f"  Properties: {stats['properties_count']}")

    if args.query is not None:
        matches = builder.search(args.query)
        print(f"\nMatches for '{args.query}' ({len(matches)}):")
        for name in matches:
            print(f"  • {name}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
