#!/usr/bin/env python3
"""
Notionpage - typed page and block decoding

Main entry point for Notionpage. Decodes a page record map into a typed
block tree and writes it out as JSON. Page edits are built and shown as a
dry run; submitting them is left to a transaction client.
"""

import json
import logging
import sys
import argparse
from pathlib import Path
from typing import Any, Dict, List

from notionpage.config import config
from notionpage.decoding import PageDecoder, inline_to_plain_text
from notionpage.errors import NotionPageError
from notionpage.importers import BaseImporter, MockImporter, RecordMapImporter
from notionpage.models import Page
from notionpage.mutations import RecordingClient


RAW_BLOCK_KEYS = ("properties", "format_raw")


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def strip_raw_fields(data: Any) -> Any:
    """Remove raw property bags and format payloads from dumped blocks."""
    if isinstance(data, dict):
        is_block = "format_raw" in data
        return {
            key: strip_raw_fields(value) for key, value in data.items()
            if not (is_block and key in RAW_BLOCK_KEYS)
        }
    if isinstance(data, list):
        return [strip_raw_fields(item) for item in data]
    return data


def page_to_dict(page: Page, include_raw: bool = False) -> Dict[str, Any]:
    data = page.model_dump(mode="json", by_alias=True)
    if not include_raw:
        data = strip_raw_fields(data)
    return data


def parse_format_args(pairs: List[str]) -> Dict[str, Any]:
    """
    Parse KEY=VALUE pairs for --set-format; values are read as JSON when possible.
    """
    args = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        try:
            args[key] = json.loads(value)
        except json.JSONDecodeError:
            args[key] = value
    return args


def build_importer(args) -> BaseImporter:
    decoder = PageDecoder(
        max_workers=args.workers or config.max_workers,
        fail_fast=args.fail_fast or config.fail_fast,
    )
    if args.importer == "file":
        if not args.record_map:
            raise ValueError("--record-map is required for the file importer")
        return RecordMapImporter(args.record_map, page_id=args.page_id, decoder=decoder)
    return MockImporter(page_id=args.page_id, decoder=decoder)


def log_page_summary(page: Page, importer: BaseImporter):
    blocks = list(page.all_blocks())
    logging.info(f"Page {page.id}: '{page.root.title}'")
    logging.info(f"  {len(blocks)} blocks, {len(page.users)} users, {len(page.tables)} tables")

    type_counts: Dict[str, int] = {}
    for block in blocks:
        type_counts[block.type] = type_counts.get(block.type, 0) + 1
    for block_type, count in sorted(type_counts.items()):
        logging.info(f"  {block_type}: {count}")

    for block in blocks:
        if block.inline_content:
            logging.debug(f"  {block.id}: {inline_to_plain_text(block.inline_content)}")

    for error in importer.errors:
        logging.warning(f"  failed: {error}")


def run_dry_run_edits(page: Page, args) -> RecordingClient:
    """Build the requested edits against a recording client."""
    client = RecordingClient()
    page.attach_client(client)
    if args.set_title is not None:
        page.set_title(args.set_title)
    if args.set_format:
        page.set_format(parse_format_args(args.set_format))
    return client


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Notionpage - typed page and block decoding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                            # Decode the built-in sample page
  python main.py --importer file --record-map page.json     # Decode a saved record map
  python main.py --importer file --record-map page.json --output page.decoded.json
  python main.py --set-title "New title" --set-format page_full_width=true   # Show edit operations
        """
    )

    parser.add_argument(
        "--importer",
        choices=["mock", "file"],
        default="mock",
        help="Record map source to use (default: mock)"
    )

    parser.add_argument(
        "--record-map",
        type=str,
        help="Path to a record map JSON file (required for the file importer)"
    )

    parser.add_argument(
        "--page-id",
        type=str,
        help="ID of the page root block (default: first page block)"
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write the decoded page to this file instead of stdout"
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Number of block decoding threads"
    )

    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first block that fails to decode"
    )

    parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Keep raw property bags and format payloads in the output"
    )

    parser.add_argument(
        "--set-title",
        type=str,
        help="Build a title change for the page (dry run)"
    )

    parser.add_argument(
        "--set-format",
        nargs="+",
        metavar="KEY=VALUE",
        help="Build a page format change, e.g. page_full_width=true (dry run)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Notionpage 0.1.0"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_arguments()
    setup_logging()

    try:
        importer = build_importer(args)
        page = importer.get_page()
        log_page_summary(page, importer)

        if args.set_title is not None or args.set_format:
            client = run_dry_run_edits(page, args)
            output = [op.model_dump(mode="json") for op in client.operations]
        else:
            output = page_to_dict(page, include_raw=args.include_raw or config.include_raw)

        text = json.dumps(output, indent=config.output_indent, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            logging.info(f"Wrote decoded page to {args.output}")
        else:
            print(text)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(130)

    except (NotionPageError, OSError, ValueError) as e:
        logging.error(f"Decoding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
