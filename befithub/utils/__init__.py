"""Utility modules for the scripts.

Includes:
- Logging configuration
- Structured run logging
- JSON file helpers
"""

from .logging_config import setup_logging, get_logger, JsonFormatter
from .file_io import read_json, write_json, read_packaged_json
from .pipeline_logger import PipelineLogger, timed_operation

__all__ = [
    "setup_logging",
    "get_logger",
    "JsonFormatter",
    "read_json",
    "write_json",
    "read_packaged_json",
    "PipelineLogger",
    "timed_operation",
]
