"""JSON file helpers for catalog inputs and outputs."""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Union

from befithub.errors import ConfigError, DataError

logger = logging.getLogger(__name__)


def read_json(file_path: Union[str, Path]) -> Any:
    """Read and parse a JSON file.
    
    Raises:
        ConfigError: If the file does not exist
        DataError: If the file is not valid UTF-8 JSON
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise ConfigError(f"Input file not found: {file_path}")
    
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            content = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DataError([f"{file_path}: invalid JSON ({e})"]) from e
    
    logger.debug(f"Read JSON from {file_path}", extra={"file_path": str(file_path)})
    return content


def write_json(
    content: Any,
    output_path: Union[str, Path],
    indent: int = 2,
) -> dict:
    """Write content to a JSON file, creating parent directories.
    
    Returns:
        Metadata dict with file info
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(content, f, indent=indent, ensure_ascii=False, default=str)
        f.write("\n")
    
    metadata = {
        "file_path": str(output_path),
        "file_size_bytes": output_path.stat().st_size,
    }
    
    logger.info(f"Wrote JSON to {output_path}", extra=metadata)
    return metadata


def read_packaged_json(name: str) -> Any:
    """Read a JSON data file shipped in ``befithub/data``."""
    text = resources.files("befithub.data").joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)
