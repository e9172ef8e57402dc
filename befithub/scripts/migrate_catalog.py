"""Patch translated fields into the discovery catalog collection.

Usage:
    python -m befithub.scripts.migrate_catalog --input exercisedb_catalog.json
"""

import argparse
import logging
import sys
import uuid
from typing import Optional

from befithub import config
from befithub.errors import DataError
from befithub.loaders.firestore import DocumentWrite, FirestoreBatchLoader, get_firestore_client
from befithub.scripts.common import build_parser, run_script
from befithub.transform.catalog import catalog_doc_id, translation_patch
from befithub.transform.normalize import validate_records
from befithub.utils.file_io import read_json
from befithub.utils.pipeline_logger import PipelineLogger

logger = logging.getLogger(__name__)

COLLECTION = "discovery_catalog"


def build_writes(exercises: list[dict]) -> list[DocumentWrite]:
    """Pair each exercise's catalog document ID with its translation payload."""
    valid, invalid = validate_records(exercises, ["id"])
    if invalid:
        raise DataError([f"{len(invalid)} catalog exercises have no id"])
    return [
        DocumentWrite(doc_id=catalog_doc_id(ex["id"]), data=translation_patch(ex))
        for ex in valid
    ]


def run(args: argparse.Namespace, db=None) -> dict:
    content = read_json(args.input)
    exercises = (content.get("exercises") if isinstance(content, dict) else None) or []
    logger.info(f"Found {len(exercises)} items to update")
    
    writes = build_writes(exercises)
    
    loader = FirestoreBatchLoader(
        db or get_firestore_client(args.service_account),
        args.collection,
        batch_size=args.batch_size or config.get_int_env("CATALOG_BATCH_SIZE", config.CATALOG_BATCH_SIZE),
        pipeline_logger=PipelineLogger("migrate_catalog", uuid.uuid4().hex[:12]),
    )
    return loader.load(writes, merge=True).to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Merge translated exercise fields into the discovery catalog")
    parser.add_argument("--input", required=True, help="Enriched (translated) catalog JSON")
    parser.add_argument("--collection", default=COLLECTION, help=f"Target collection (default: {COLLECTION})")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help=f"Writes per batch (default: $CATALOG_BATCH_SIZE or {config.CATALOG_BATCH_SIZE})",
    )
    args = parser.parse_args(argv)
    
    return run_script("migrate_catalog", run, args)


if __name__ == "__main__":
    sys.exit(main())
