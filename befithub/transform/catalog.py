"""ExerciseDB catalog preparation: tag translation and enrichment."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

from befithub.transform.normalize import require_fields, sanitize_record

logger = logging.getLogger(__name__)

EXERCISEDB_HOST = "exercisedb.p.rapidapi.com"
CATALOG_SOURCE = "exercisedb_offline"
CATALOG_DOC_PREFIX = "yuh_"

BODY_PARTS = {
    "waist": "Cintura / Core",
    "upper legs": "Piernas (Sup.)",
    "back": "Espalda",
    "lower legs": "Piernas (Inf.)",
    "chest": "Pecho",
    "upper arms": "Brazos",
    "cardio": "Cardio",
    "shoulders": "Hombros",
    "lower arms": "Antebrazos",
    "neck": "Cuello",
}

EQUIPMENT = {
    "body weight": "Peso Corporal",
    "cable": "Polea",
    "leverage machine": "Máquina de Palanca",
    "assisted": "Asistido",
    "medicine ball": "Balón Medicinal",
    "stability ball": "Balón Suizo",
    "band": "Banda Elástica",
    "barbell": "Barra",
    "dumbbell": "Mancuernas",
    "kettlebell": "Pesa Rusa",
    "smith machine": "Máquina Smith",
}

TARGETS = {
    "abs": "Abdominales",
    "lats": "Dorsales",
    "pectorals": "Pectorales",
    "glutes": "Glúteos",
    "hamstrings": "Isquios",
    "quads": "Cuádriceps",
    "triceps": "Tríceps",
    "biceps": "Bíceps",
    "calves": "Gemelos",
    "delts": "Deltoides",
}

DEFAULT_LEVEL = "Intermedio"


def translate_tag(mapping: dict[str, str], value: Optional[str]) -> Optional[str]:
    """Translate a tag, falling back to the original value."""
    if value is None:
        return None
    return mapping.get(value, value)


def proxy_image_url(exercise_id: str, resolution: int = 360) -> str:
    """Build the ExerciseDB image proxy URL for an exercise."""
    return f"https://{EXERCISEDB_HOST}/image?exerciseId={exercise_id}&resolution={resolution}"


def catalog_doc_id(exercise_id: Any) -> str:
    """Derive the ``discovery_catalog`` document ID for an exercise.
    
    Example:
        >>> catalog_doc_id("barbell curl 01")
        'yuh_barbell_curl_01'
    """
    return CATALOG_DOC_PREFIX + re.sub(r"\s+", "_", str(exercise_id))


def enrich_exercise(exercise: dict) -> dict:
    """Add media URL, Spanish tags and a search string to a catalog entry."""
    require_fields(exercise, ["id"], context="catalog exercise")
    
    body_part_es = translate_tag(BODY_PARTS, exercise.get("bodyPart"))
    equipment_es = translate_tag(EQUIPMENT, exercise.get("equipment"))
    target_es = translate_tag(TARGETS, exercise.get("target"))
    
    searchable = " ".join(
        str(part)
        for part in (exercise.get("name"), body_part_es, equipment_es, target_es)
        if part
    ).lower()
    
    return {
        **exercise,
        "source": CATALOG_SOURCE,
        "mediaUrl": exercise.get("gifUrl") or proxy_image_url(exercise["id"]),
        "bodyPart_es": body_part_es,
        "equipment_es": equipment_es,
        "target_es": target_es,
        "searchable": searchable,
    }


def prepare_catalog(
    content: dict,
    processed_at: Optional[datetime] = None,
) -> dict:
    """Enrich every exercise of a catalog export.
    
    Args:
        content: Catalog object with ``exercises`` and optional ``metadata``
        processed_at: Processing timestamp (defaults to UTC now)
        
    Returns:
        New catalog object with enriched exercises and updated metadata
    """
    processed_at = processed_at or datetime.now(timezone.utc)
    exercises = content.get("exercises") or []
    
    processed = [enrich_exercise(ex) for ex in exercises]
    
    logger.info(
        f"Prepared {len(processed)} catalog exercises",
        extra={"record_count": len(processed)}
    )
    
    return {
        "metadata": {
            **(content.get("metadata") or {}),
            "processedDate": processed_at.isoformat(),
            "note": "Processed with proxy URLs and basic tag translations.",
        },
        "exercises": processed,
    }


def translation_patch(exercise: dict) -> dict:
    """Build the merge payload that patches translated fields into the catalog.
    
    Translations missing from ``exercise`` are left out so the merge keeps
    whatever the stored document already has.
    """
    return sanitize_record({
        "name_es": exercise.get("name_es"),
        "instructions_es": exercise.get("instructions_es"),
        "description": exercise.get("description") or "",
        "level": exercise.get("level") or DEFAULT_LEVEL,
        "qualities": exercise.get("qualities") or [],
        "subQualities": exercise.get("subQualities") or [],
        "equipment_es": exercise.get("equipment_es") or "",
        "mediaUrl": exercise.get("mediaUrl") or exercise.get("gifUrl") or "",
    })
