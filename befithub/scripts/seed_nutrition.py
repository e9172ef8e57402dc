"""Seed curated ingredients or recipes.

Usage:
    python -m befithub.scripts.seed_nutrition ingredients --input ingredients.json
    python -m befithub.scripts.seed_nutrition recipes --input recipes.json
"""

import argparse
import logging
import sys
import uuid
from typing import Callable, Optional

from befithub import config
from befithub.loaders.firestore import (
    DocumentWrite,
    FirestoreBatchLoader,
    get_firestore_client,
    server_timestamp,
)
from befithub.scripts.common import build_parser, run_script
from befithub.transform.records import extract_list, ingredient_document, recipe_document
from befithub.utils.file_io import read_json
from befithub.utils.pipeline_logger import PipelineLogger

logger = logging.getLogger(__name__)

# kind -> (collection, list key in the input file, document builder)
KINDS: dict[str, tuple[str, str, Callable[[dict], dict]]] = {
    "ingredients": ("nutri_ingredients", "ingredients", ingredient_document),
    "recipes": ("nutri_recipes", "recipes", recipe_document),
}


def build_writes(kind: str, records: list[dict]) -> list[DocumentWrite]:
    """Build keyed writes stamped with ``updatedAt``.
    
    Raises:
        DataError: If any record is incomplete (nothing is written)
    """
    _, _, builder = KINDS[kind]
    return [
        DocumentWrite(
            doc_id=str(record["id"]),
            data={**builder(record), "updatedAt": server_timestamp()},
        )
        for record in records
    ]


def run(args: argparse.Namespace, db=None) -> dict:
    collection, list_key, _ = KINDS[args.kind]
    records = extract_list(read_json(args.input), list_key)
    logger.info(f"Starting seeding of {len(records)} {args.kind}")
    
    writes = build_writes(args.kind, records)
    
    loader = FirestoreBatchLoader(
        db or get_firestore_client(args.service_account),
        args.collection or collection,
        batch_size=args.batch_size or config.CATALOG_BATCH_SIZE,
        pipeline_logger=PipelineLogger(f"seed_{args.kind}", uuid.uuid4().hex[:12]),
    )
    return loader.load(writes, merge=True).to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Seed curated ingredients or recipes into Firestore")
    parser.add_argument("kind", choices=sorted(KINDS), help="What to seed")
    parser.add_argument("--input", required=True, help="JSON list, or object with an ingredients/recipes list")
    parser.add_argument("--collection", default=None, help="Override the target collection")
    parser.add_argument("--batch-size", type=int, default=None, help="Writes per batch")
    args = parser.parse_args(argv)
    return run_script("seed_nutrition", run, args)


if __name__ == "__main__":
    sys.exit(main())
