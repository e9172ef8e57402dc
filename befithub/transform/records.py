"""Builders turning source data into Firestore document payloads."""

import logging
from typing import Any

from befithub.errors import DataError
from befithub.transform.normalize import require_fields, sanitize_record

logger = logging.getLogger(__name__)

USER_EXERCISE_DEFAULTS = {
    "source": "user_list",
    "usageCount": 0,
    "isFavorite": False,
    "mediaUrl": "",
    "imageStart": "",
    "imageEnd": "",
    "youtubeUrl": "",
}


def extract_exercises(content: Any) -> list[dict]:
    """Find the exercise list in a catalog export.
    
    Accepts a bare list or an object holding it under ``exercises`` or
    ``data``.
    
    Raises:
        DataError: If no exercise list is found
    """
    if isinstance(content, list):
        return content
    if isinstance(content, dict):
        for key in ("exercises", "data"):
            if isinstance(content.get(key), list):
                return content[key]
    raise DataError(["Could not find exercises array in catalog file"])


def extract_list(content: Any, key: str) -> list[dict]:
    """Return ``content`` if it is a list, else ``content[key]``.
    
    Raises:
        DataError: If neither is a list
    """
    if isinstance(content, list):
        return content
    if isinstance(content, dict) and isinstance(content.get(key), list):
        return content[key]
    raise DataError([f"Expected a list or an object with a '{key}' list"])


def exercise_document(exercise: dict) -> dict:
    """Catalog exercise as stored in ``exercises``."""
    return sanitize_record(exercise)


def ingredient_document(ingredient: dict) -> dict:
    """Flatten a curated ingredient into the ``nutri_ingredients`` layout.
    
    Raises:
        DataError: If the ingredient or its macros are incomplete
    """
    require_fields(ingredient, ["id", "name", "category", "unit", "macros"], context="ingredient")
    macros = require_fields(
        ingredient["macros"],
        ["protein", "carbs", "fat", "kcal"],
        context=f"ingredient {ingredient['id']} macros",
    )
    
    document = {
        "name": ingredient["name"],
        "category": ingredient["category"],
        "unit": ingredient["unit"],
        "protein": macros["protein"],
        "carbs": macros["carbs"],
        "fats": macros["fat"],
        "calories": macros["kcal"],
    }
    if ingredient.get("portionWeight"):
        document["portionWeight"] = ingredient["portionWeight"]
    
    return document


def recipe_document(recipe: dict) -> dict:
    """Curated recipe as stored in ``nutri_recipes``."""
    require_fields(recipe, ["id", "name"], context="recipe")
    return sanitize_record(recipe)


def user_exercise_document(exercise: dict) -> dict:
    """Apply the user-list defaults to a hand-written exercise.
    
    Raises:
        DataError: If the exercise has no name
    """
    require_fields(exercise, ["name"], context="user exercise")
    return {
        **sanitize_record(exercise),
        **USER_EXERCISE_DEFAULTS,
        "tags": exercise.get("tags") or [],
    }
