"""Data transformation modules.

Handles:
- Field contract validation
- Catalog translation and enrichment
- Firestore document builders
"""

from .normalize import (
    to_sentence_case,
    sanitize_record,
    validate_required_fields,
    validate_records,
    require_fields,
    ValidationResult,
)
from .catalog import (
    catalog_doc_id,
    enrich_exercise,
    prepare_catalog,
    translation_patch,
)
from .records import (
    extract_exercises,
    extract_list,
    exercise_document,
    ingredient_document,
    recipe_document,
    user_exercise_document,
)

__all__ = [
    # Validation
    "to_sentence_case",
    "sanitize_record",
    "validate_required_fields",
    "validate_records",
    "require_fields",
    "ValidationResult",
    # Catalog
    "catalog_doc_id",
    "enrich_exercise",
    "prepare_catalog",
    "translation_patch",
    # Documents
    "extract_exercises",
    "extract_list",
    "exercise_document",
    "ingredient_document",
    "recipe_document",
    "user_exercise_document",
]
