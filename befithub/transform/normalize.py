"""Record validation and normalization utilities."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from befithub.errors import DataError

logger = logging.getLogger(__name__)


def to_sentence_case(value: Optional[str]) -> str:
    """Lowercase a string and capitalize its first character.
    
    Example:
        >>> to_sentence_case("  PRESS INCLINADO MANCUERNAS ")
        'Press inclinado mancuernas'
    """
    if not value:
        return ""
    text = value.strip().lower()
    return text[:1].upper() + text[1:]


def sanitize_record(value: Any) -> Any:
    """Recursively drop ``None`` values from dicts.
    
    Firestore stores ``None`` as null; the seeded documents omit such
    fields instead. ``None`` items inside lists are dropped as well.
    """
    if isinstance(value, dict):
        return {
            key: sanitize_record(item)
            for key, item in value.items()
            if item is not None
        }
    if isinstance(value, list):
        return [sanitize_record(item) for item in value if item is not None]
    return value


# ============================================
# Validation
# ============================================

@dataclass
class ValidationResult:
    """Result of record validation."""
    
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    record: Optional[dict] = None


def validate_required_fields(
    record: Any,
    required_fields: list[str],
) -> ValidationResult:
    """Validate that required fields are present and not null.
    
    Args:
        record: The record to validate
        required_fields: List of required field names
        
    Returns:
        ValidationResult with is_valid flag and any errors
    """
    if not isinstance(record, dict):
        return ValidationResult(
            is_valid=False,
            errors=[f"Expected an object, got {type(record).__name__}"],
        )
    
    errors = []
    
    for field_name in required_fields:
        if field_name not in record:
            errors.append(f"Missing required field: {field_name}")
        elif record[field_name] is None:
            errors.append(f"Null value for required field: {field_name}")
        elif isinstance(record[field_name], str) and not record[field_name].strip():
            errors.append(f"Empty value for required field: {field_name}")
    
    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        record=record if len(errors) == 0 else None,
    )


def require_fields(
    record: Any,
    required_fields: list[str],
    context: str = "record",
) -> dict:
    """Validate a single record and return it.
    
    Raises:
        DataError: If any required field is missing, null or empty
    """
    result = validate_required_fields(record, required_fields)
    if not result.is_valid:
        raise DataError([f"{context}: {error}" for error in result.errors])
    return record


def validate_records(
    records: list[dict],
    required_fields: list[str],
    raise_on_error: bool = False,
) -> tuple[list[dict], list[dict]]:
    """Validate a list of records.
    
    Args:
        records: List of records to validate
        required_fields: List of required field names
        raise_on_error: If True, raise exception on first error
        
    Returns:
        Tuple of (valid_records, invalid_records)
        
    Raises:
        DataError: If raise_on_error=True and validation fails
    """
    valid_records = []
    invalid_records = []
    
    for i, record in enumerate(records):
        result = validate_required_fields(record, required_fields)
        
        if result.is_valid:
            valid_records.append(record)
        else:
            if raise_on_error:
                raise DataError([f"record {i}: {error}" for error in result.errors])
            
            invalid_record = {
                "_validation_errors": result.errors,
                "_record_index": i,
                **(record if isinstance(record, dict) else {}),
            }
            invalid_records.append(invalid_record)
            
            logger.warning(
                f"Validation failed for record {i}",
                extra={"errors": result.errors, "record_index": i}
            )
    
    logger.info(
        f"Validation complete: {len(valid_records)} valid, {len(invalid_records)} invalid",
        extra={
            "valid_count": len(valid_records),
            "invalid_count": len(invalid_records),
        }
    )
    
    return valid_records, invalid_records
