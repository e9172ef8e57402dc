"""Seed the exercises collection from an ExerciseDB catalog export.

Usage:
    python -m befithub.scripts.seed_exercises --input exercisedb_catalog.json
"""

import argparse
import logging
import sys
import uuid
from typing import Optional

from befithub import config
from befithub.loaders.firestore import DocumentWrite, FirestoreBatchLoader, get_firestore_client
from befithub.scripts.common import build_parser, run_script
from befithub.transform.records import exercise_document, extract_exercises
from befithub.utils.file_io import read_json
from befithub.utils.pipeline_logger import PipelineLogger

logger = logging.getLogger(__name__)

COLLECTION = "exercises"


def build_writes(exercises: list[dict]) -> list[DocumentWrite]:
    """Key each exercise by its own ``id``; records without one are skipped by the loader."""
    return [
        DocumentWrite(doc_id=str(ex["id"]) if ex.get("id") else None, data=exercise_document(ex))
        for ex in exercises
    ]


def run(args: argparse.Namespace, db=None) -> dict:
    exercises = extract_exercises(read_json(args.input))
    logger.info(f"Loaded {len(exercises)} exercises from catalog")
    
    run_logger = PipelineLogger("seed_exercises", uuid.uuid4().hex[:12])
    writes = build_writes(exercises)
    run_logger.log_transform(len(exercises), sum(1 for w in writes if w.doc_id))
    
    loader = FirestoreBatchLoader(
        db or get_firestore_client(args.service_account),
        args.collection,
        batch_size=args.batch_size or config.get_int_env("EXERCISE_BATCH_SIZE", config.EXERCISE_BATCH_SIZE),
        pipeline_logger=run_logger,
    )
    return loader.load(writes, merge=True).to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Upload catalog exercises to Firestore in batches")
    parser.add_argument("--input", required=True, help="Catalog JSON (list, or object with exercises/data)")
    parser.add_argument("--collection", default=COLLECTION, help=f"Target collection (default: {COLLECTION})")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help=f"Writes per batch (default: $EXERCISE_BATCH_SIZE or {config.EXERCISE_BATCH_SIZE})",
    )
    args = parser.parse_args(argv)
    
    return run_script("seed_exercises", run, args)


if __name__ == "__main__":
    sys.exit(main())
