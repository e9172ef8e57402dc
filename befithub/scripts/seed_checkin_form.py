"""Create the weekly check-in form, replacing forms with the same name.

Usage:
    python -m befithub.scripts.seed_checkin_form
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from befithub.loaders.firestore import FirestoreBatchLoader, get_firestore_client
from befithub.scripts.common import build_parser, run_script
from befithub.transform.normalize import require_fields
from befithub.utils.file_io import read_json, read_packaged_json

logger = logging.getLogger(__name__)

COLLECTION = "training_forms"


def build_form(content: dict, now: Optional[datetime] = None) -> dict:
    """Validate a form definition and stamp it with ISO timestamps.
    
    Raises:
        DataError: If the form or any of its fields is incomplete
    """
    require_fields(content, ["name", "fields"], context="form")
    for form_field in content["fields"]:
        require_fields(form_field, ["id", "type", "label"], context=f"form {content['name']}")
    
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return {**content, "createdAt": stamp, "updatedAt": stamp}


def run(args: argparse.Namespace, db=None) -> dict:
    content = read_json(args.input) if args.input else read_packaged_json("checkin_form.json")
    form = build_form(content)
    
    logger.info(f"Creating form: {form['name']}")
    loader = FirestoreBatchLoader(db or get_firestore_client(args.service_account), args.collection)
    
    deleted = loader.delete_where("name", form["name"])
    if deleted:
        logger.info(f"Deleted {deleted} existing '{form['name']}' forms")
    
    result = loader.add_documents([form])
    return {"deleted": deleted, "doc_ids": result.doc_ids}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Create the weekly check-in form")
    parser.add_argument("--input", default=None, help="Form JSON (default: packaged weekly check-in)")
    parser.add_argument("--collection", default=COLLECTION, help=f"Target collection (default: {COLLECTION})")
    args = parser.parse_args(argv)
    return run_script("seed_checkin_form", run, args)


if __name__ == "__main__":
    sys.exit(main())
