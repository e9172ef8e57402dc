"""Insert hand-written exercises into the exercises collection.

Usage:
    python -m befithub.scripts.insert_exercises --input user_exercises.json
"""

import argparse
import logging
import sys
from typing import Optional

from befithub.loaders.firestore import FirestoreBatchLoader, get_firestore_client, server_timestamp
from befithub.scripts.common import build_parser, run_script
from befithub.transform.records import extract_list, user_exercise_document
from befithub.utils.file_io import read_json

logger = logging.getLogger(__name__)

COLLECTION = "exercises"


def run(args: argparse.Namespace, db=None) -> dict:
    exercises = extract_list(read_json(args.input), "exercises")
    # Build everything first so a bad record aborts before any write
    documents = [
        {**user_exercise_document(ex), "createdAt": server_timestamp()}
        for ex in exercises
    ]
    
    loader = FirestoreBatchLoader(db or get_firestore_client(args.service_account), args.collection)
    result = loader.add_documents(documents)
    
    logger.info(f"Inserted {result.documents_written} of {len(exercises)} exercises")
    return result.to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Insert user exercises with auto-generated IDs")
    parser.add_argument("--input", required=True, help="JSON list of exercises")
    parser.add_argument("--collection", default=COLLECTION, help=f"Target collection (default: {COLLECTION})")
    args = parser.parse_args(argv)
    return run_script("insert_exercises", run, args)


if __name__ == "__main__":
    sys.exit(main())
