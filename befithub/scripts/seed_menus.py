"""Add day menus to the nutrition_days collection.

Usage:
    python -m befithub.scripts.seed_menus
    python -m befithub.scripts.seed_menus --input menus.json
"""

import argparse
import logging
import sys
from typing import Optional

from befithub.errors import DataError
from befithub.loaders.firestore import FirestoreBatchLoader, get_firestore_client, server_timestamp
from befithub.scripts.common import build_parser, run_script
from befithub.transform.normalize import validate_records
from befithub.transform.records import extract_list
from befithub.utils.file_io import read_json, read_packaged_json

logger = logging.getLogger(__name__)

COLLECTION = "nutrition_days"


def load_menus(path: Optional[str] = None) -> list[dict]:
    """Read menus from ``path`` or the packaged defaults.
    
    Raises:
        DataError: If a menu has no name or meals
    """
    content = read_json(path) if path else read_packaged_json("menus.json")
    menus = extract_list(content, "menus")
    _, invalid = validate_records(menus, ["name", "meals"])
    if invalid:
        raise DataError([f"{len(invalid)} menus are missing name or meals"])
    return menus


def run(args: argparse.Namespace, db=None) -> dict:
    menus = load_menus(args.input)
    logger.info(f"Seeding {len(menus)} menus")
    
    loader = FirestoreBatchLoader(db or get_firestore_client(args.service_account), args.collection)
    result = loader.add_documents(
        {**menu, "createdAt": server_timestamp()} for menu in menus
    )
    return {**result.to_dict(), "doc_ids": result.doc_ids}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Add day menus to Firestore")
    parser.add_argument("--input", default=None, help="Menus JSON (default: packaged menus)")
    parser.add_argument("--collection", default=COLLECTION, help=f"Target collection (default: {COLLECTION})")
    args = parser.parse_args(argv)
    return run_script("seed_menus", run, args)


if __name__ == "__main__":
    sys.exit(main())
