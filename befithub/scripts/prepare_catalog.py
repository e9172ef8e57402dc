"""Translate and enrich an ExerciseDB catalog export into the offline catalog.

Usage:
    python -m befithub.scripts.prepare_catalog --input raw_catalog.json --output offline_catalog.json
"""

import argparse
import logging
import sys
from typing import Optional

from befithub.errors import DataError
from befithub.scripts.common import build_parser, run_script
from befithub.transform.catalog import prepare_catalog
from befithub.utils.file_io import read_json, write_json

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> dict:
    content = read_json(args.input)
    if not isinstance(content, dict):
        raise DataError([f"{args.input}: expected a catalog object with an 'exercises' list"])
    
    logger.info(f"Processing {len(content.get('exercises') or [])} exercises")
    prepared = prepare_catalog(content)
    metadata = write_json(prepared, args.output)
    
    logger.info(
        "Full descriptions still need translating; only tags were translated",
        extra={"output": args.output},
    )
    return {"record_count": len(prepared["exercises"]), **metadata}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser(
        "Add proxy media URLs, Spanish tags and search strings to a catalog export",
        firestore=False,
    )
    parser.add_argument("--input", required=True, help="Catalog export JSON")
    parser.add_argument("--output", required=True, help="Where to write the processed catalog")
    args = parser.parse_args(argv)
    return run_script("prepare_catalog", run, args)


if __name__ == "__main__":
    sys.exit(main())
