"""Command line shell: clean a CSV file on disk."""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .errors import CleanerError
from .normalize import clean_csv_bytes
from .pipeline import CleanOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv-cleaner",
        description="Normalize contact columns and drop rows with repeated phone numbers.",
    )
    parser.add_argument("input", help="CSV file to clean")
    parser.add_argument(
        "-o",
        "--output",
        help="Where to write the cleaned CSV (default: prefixed name next to the input)",
    )
    parser.add_argument(
        "--no-dedup",
        action="store_true",
        help="Keep rows whose phone number was already seen",
    )
    parser.add_argument(
        "--dedup-only",
        action="store_true",
        help="Only normalize the phone number column and drop duplicates",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print run statistics as JSON",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"[csv-cleaner] input file '{input_path}' not found", file=sys.stderr)
        return 1

    options = CleanOptions(
        sanitize_fields=not args.dedup_only,
        deduplicate=not args.no_dedup,
    )
    try:
        cleaned = clean_csv_bytes(input_path.read_bytes(), input_path.name, options, settings)
    except UnicodeEncodeError as exc:
        print(f"[csv-cleaner] output is not representable in {settings.output_encoding}: {exc}", file=sys.stderr)
        return 1
    except (CleanerError, OSError) as exc:
        print(f"[csv-cleaner] {exc}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_name(cleaned.filename)
    try:
        output_path.write_bytes(cleaned.content)
    except OSError as exc:
        print(f"[csv-cleaner] could not write {output_path}: {exc}", file=sys.stderr)
        return 1
    print(f"[csv-cleaner] wrote {cleaned.stats.rows_out} rows to {output_path}")

    if args.stats:
        print(json.dumps(dataclasses.asdict(cleaned.stats), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
