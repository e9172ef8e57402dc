"""Query the third-party nutrition APIs and print the JSON result.

Usage:
    python -m befithub.scripts.nutrition_lookup fatsecret "pechuga de pollo"
    python -m befithub.scripts.nutrition_lookup fatsecret --food-id 33691
    python -m befithub.scripts.nutrition_lookup edamam chicken --meal-type Dinner --health high-protein
    python -m befithub.scripts.nutrition_lookup spoonacular --ingredient-id 9266 --amount 150
"""

import argparse
import json
import logging
import sys
from typing import Any, Optional

from befithub.clients import EdamamClient, FatSecretClient, SpoonacularClient
from befithub.errors import ConfigError
from befithub.scripts.common import build_parser, run_script

logger = logging.getLogger(__name__)


CLIENTS = {
    "fatsecret": FatSecretClient,
    "edamam": EdamamClient,
    "spoonacular": SpoonacularClient,
}


def lookup(args: argparse.Namespace, client) -> Any:
    """Dispatch the lookup described by ``args`` to ``client``."""
    if args.source == "fatsecret":
        if args.food_id:
            return client.get_food(args.food_id)
        _require_query(args)
        return client.search_foods(args.query, region=args.region, language=args.language)
    
    if args.source == "edamam":
        if args.recipe_id:
            return client.get_recipe(args.recipe_id)
        _require_query(args)
        return client.search_recipes(
            q=args.query,
            meal_type=args.meal_type,
            health=args.health,
            cuisine_type=args.cuisine_type,
        )
    
    if args.ingredient_id:
        return client.get_ingredient_nutrition(args.ingredient_id, amount=args.amount, unit=args.unit)
    _require_query(args)
    return client.search_ingredients(args.query, number=args.number)


def _require_query(args: argparse.Namespace) -> None:
    if not args.query:
        raise ConfigError(f"A search query is required for {args.source} searches")


def run(args: argparse.Namespace, client=None) -> dict:
    client = client or CLIENTS[args.source]()
    result = lookup(args, client)
    logger.info(
        f"{args.source} lookup complete",
        extra={"source": args.source, "requests": client.metrics.to_dict()},
    )
    print(json.dumps(result, indent=2, ensure_ascii=False))
    if isinstance(result, list):
        count = len(result)
    elif "hits" in result:
        count = len(result["hits"])
    else:
        count = 1
    return {"source": args.source, "record_count": count}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser("Search FatSecret, Edamam or Spoonacular", firestore=False)
    parser.add_argument("source", choices=sorted(CLIENTS))
    parser.add_argument("query", nargs="?", default=None, help="Search text")
    # FatSecret
    parser.add_argument("--food-id", default=None, help="FatSecret food ID to fetch")
    parser.add_argument("--region", default="ES")
    parser.add_argument("--language", default="es")
    # Edamam
    parser.add_argument("--recipe-id", default=None, help="Edamam recipe ID to fetch")
    parser.add_argument("--meal-type", default=None)
    parser.add_argument("--health", action="append", default=None)
    parser.add_argument("--cuisine-type", action="append", default=None)
    # Spoonacular
    parser.add_argument("--ingredient-id", type=int, default=None, help="Spoonacular ingredient ID")
    parser.add_argument("--amount", type=float, default=100)
    parser.add_argument("--unit", default="g")
    parser.add_argument("--number", type=int, default=10)
    args = parser.parse_args(argv)
    return run_script("nutrition_lookup", run, args)


if __name__ == "__main__":
    sys.exit(main())
