"""Logging configuration for the scripts."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Attributes every LogRecord has; anything else came in through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line, including ``extra`` fields."""
    
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    stream=None,
) -> logging.Logger:
    """Configure the root logger.
    
    Args:
        level: Log level name
        json_format: Emit JSON lines instead of plain text
        stream: Output stream (defaults to stderr)
        
    Returns:
        The root logger
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
    
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
    
    # Google client libraries are chatty at DEBUG
    for noisy in ("urllib3", "google", "grpc"):
        logging.getLogger(noisy).setLevel(max(root.level, logging.INFO))
    
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
