"""Make sure an exercise group exists and sentence-case its exercise names.

Usage:
    python -m befithub.scripts.refine_exercise_names --group "Míos"
"""

import argparse
import logging
import sys
from typing import Optional

from befithub.loaders.firestore import FirestoreBatchLoader, get_firestore_client, server_timestamp
from befithub.scripts.common import build_parser, run_script
from befithub.transform.normalize import to_sentence_case

logger = logging.getLogger(__name__)

GROUPS_COLLECTION = "training_groups"
EXERCISES_COLLECTION = "exercises"
GROUP_TYPE = "EXERCISE"


def ensure_group(groups: FirestoreBatchLoader, name: str) -> str:
    """Create the group, or fix its type if it exists.
    
    Returns:
        "created", "updated" or "unchanged"
    """
    existing = groups.find("name", name)
    if not existing:
        groups.add_documents([{"name": name, "type": GROUP_TYPE, "createdAt": server_timestamp()}])
        logger.info(f"Created group '{name}'")
        return "created"
    
    snapshot = existing[0]
    if (snapshot.to_dict() or {}).get("type") != GROUP_TYPE:
        groups.update(snapshot.id, {"type": GROUP_TYPE})
        logger.info(f"Updated group '{name}' type to {GROUP_TYPE}")
        return "updated"
    
    logger.info(f"Group '{name}' already exists with correct type")
    return "unchanged"


def name_updates(data: dict) -> dict:
    """Fields to change so the exercise names are sentence-cased.
    
    ``name_es`` is only touched when it is all caps.
    """
    updates = {}
    name = data.get("name") or ""
    new_name = to_sentence_case(name)
    if new_name != name:
        updates["name"] = new_name
    
    name_es = data.get("name_es")
    if name_es and name_es == name_es.upper():
        new_name_es = to_sentence_case(name_es)
        if new_name_es != name_es:
            updates["name_es"] = new_name_es
    
    return updates


def run(args: argparse.Namespace, db=None) -> dict:
    db = db or get_firestore_client(args.service_account)
    group_status = ensure_group(FirestoreBatchLoader(db, GROUPS_COLLECTION), args.group)
    
    exercises = FirestoreBatchLoader(db, EXERCISES_COLLECTION)
    snapshots = exercises.find("group", args.group)
    if not snapshots:
        logger.info(f"No exercises found in group '{args.group}'")
    
    updated = 0
    for snapshot in snapshots:
        data = snapshot.to_dict() or {}
        updates = name_updates(data)
        if updates:
            exercises.update(snapshot.id, updates)
            logger.info(f"Updated: {data.get('name')!r} -> {updates.get('name', data.get('name'))!r}")
            updated += 1
    
    return {"group": group_status, "exercises_checked": len(snapshots), "exercises_updated": updated}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Ensure an exercise group exists and tidy its exercise names")
    parser.add_argument("--group", default="Míos", help="Exercise group name (default: Míos)")
    args = parser.parse_args(argv)
    return run_script("refine_exercise_names", run, args)


if __name__ == "__main__":
    sys.exit(main())
