"""Inspect a Firestore collection: count, preview and keyword search.

Usage:
    python -m befithub.scripts.verify_db --collection exercises
    python -m befithub.scripts.verify_db --collection discovery_catalog --preview 5
    python -m befithub.scripts.verify_db --collection nutri_ingredients --search proteína carbohidrato grasa
"""

import argparse
import logging
import sys
from typing import Iterable, Optional

from befithub.loaders.firestore import FirestoreBatchLoader, get_firestore_client
from befithub.scripts.common import build_parser, run_script

logger = logging.getLogger(__name__)


def summarize(snapshot) -> dict:
    """Short description of a catalog or exercise document."""
    data = snapshot.to_dict() or {}
    return {
        "id": snapshot.id,
        "name": data.get("name"),
        "name_es": data.get("name_es"),
        "instructions_es": len(data.get("instructions_es") or []),
    }


def search_names(snapshots: Iterable, keywords: list[str]) -> list[dict]:
    """Documents whose ``name`` contains any keyword (case-insensitive)."""
    keywords = [k.lower() for k in keywords]
    matches = []
    for snapshot in snapshots:
        name = ((snapshot.to_dict() or {}).get("name") or "").lower()
        if any(keyword in name for keyword in keywords):
            matches.append({"id": snapshot.id, "name": (snapshot.to_dict() or {}).get("name")})
    return matches


def run(args: argparse.Namespace, db=None) -> dict:
    loader = FirestoreBatchLoader(db or get_firestore_client(args.service_account), args.collection)
    
    count = loader.count()
    print(f"Total documents in '{args.collection}': {count}")
    result = {"collection": args.collection, "count": count}
    
    if args.preview:
        previews = [summarize(s) for s in loader.preview(args.preview)]
        if not previews:
            print("Collection is empty.")
        for item in previews:
            print(f"ID: {item['id']}  name: {item['name']}  name_es: {item['name_es']}  "
                  f"instructions_es: {item['instructions_es']}")
        result["previewed"] = len(previews)
    
    if args.search:
        matches = search_names(loader.stream(), args.search)
        for match in matches:
            print(f"FOUND: {match['id']} - {match['name']}")
        result["matches"] = len(matches)
    
    return result


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Count, preview and search documents in a collection")
    parser.add_argument("--collection", default="exercises", help="Collection to inspect (default: exercises)")
    parser.add_argument("--preview", type=int, default=0, help="Print the first N documents")
    parser.add_argument("--search", nargs="+", default=None, help="Keywords to look for in document names")
    args = parser.parse_args(argv)
    return run_script("verify_db", run, args)


if __name__ == "__main__":
    sys.exit(main())
