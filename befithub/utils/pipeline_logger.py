"""Structured logging for seeding and migration runs.

Every record carries:
- source (script or collection)
- run_id
- step
- row_count
- batch_number
- duration
"""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class PipelineLogContext:
    """Context for pipeline logging with required fields."""
    
    source: str
    run_id: str
    step: str = ""
    row_count: int = 0
    batch_number: Optional[int] = None
    total_batches: Optional[int] = None
    duration_ms: Optional[float] = None
    status: str = "started"
    error: Optional[str] = None
    extra: dict = field(default_factory=dict)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        return {k: v for k, v in data.items() if v is not None}
    
    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class PipelineLogger:
    """Structured logger for a single seeding run."""
    
    def __init__(self, source: str, run_id: str):
        """Initialize pipeline logger.
        
        Args:
            source: Run source name (e.g. 'seed_exercises')
            run_id: Unique run identifier
        """
        self.source = source
        self.run_id = run_id
        self.logger = logging.getLogger(f"pipeline.{source}")
        self._start_time: Optional[float] = None
        self._rows_written = 0
        self._batches_committed = 0
    
    def _log(self, level: int, step: str, **kwargs) -> None:
        ctx = PipelineLogContext(
            source=self.source,
            run_id=self.run_id,
            step=step,
            **kwargs
        )
        self.logger.log(level, ctx.to_json(), extra=ctx.to_dict())
    
    def _elapsed_ms(self) -> Optional[float]:
        if self._start_time is None:
            return None
        return round((time.time() - self._start_time) * 1000, 2)
    
    def start(self, step: str, **kwargs) -> None:
        """Log step start."""
        self._start_time = time.time()
        self._log(logging.INFO, step, status="started", **kwargs)
    
    def success(self, step: str, **kwargs) -> None:
        """Log step success."""
        self._log(logging.INFO, step, status="success", duration_ms=self._elapsed_ms(), **kwargs)
    
    def error(self, step: str, error: Exception, **kwargs) -> None:
        """Log step error."""
        self._log(
            logging.ERROR,
            step,
            status="error",
            error=str(error),
            duration_ms=self._elapsed_ms(),
            **kwargs
        )
    
    def log_batch_commit(
        self,
        batch_number: int,
        total_batches: int,
        row_count: int,
        duration_ms: float,
    ) -> None:
        """Log one committed write batch."""
        self._rows_written += row_count
        self._batches_committed += 1
        self._log(
            logging.INFO,
            step="batch_commit",
            status="success",
            batch_number=batch_number,
            total_batches=total_batches,
            row_count=row_count,
            duration_ms=round(duration_ms, 2),
            extra={"total_written": self._rows_written},
        )
    
    def log_transform(
        self,
        input_count: int,
        output_count: int,
        skipped_count: int = 0,
    ) -> None:
        """Log a transformation step."""
        self._log(
            logging.INFO,
            step="transform",
            status="success",
            row_count=output_count,
            extra={
                "input_count": input_count,
                "output_count": output_count,
                "skipped_count": skipped_count,
            }
        )
    
    def get_metrics(self) -> dict:
        """Get aggregated metrics."""
        return {
            "source": self.source,
            "run_id": self.run_id,
            "rows_written": self._rows_written,
            "batches_committed": self._batches_committed,
        }


@contextmanager
def timed_operation(name: str, logger: logging.Logger = None):
    """Context manager to time an operation.
    
    Usage:
        with timed_operation("batch_commit") as timer:
            batch.commit()
        print(f"Took {timer.duration_ms}ms")
    
    Yields:
        Timer object with duration_ms attribute
    """
    class Timer:
        def __init__(self):
            self.start_time = time.time()
            self.end_time = None
            self.duration_ms = 0
    
    timer = Timer()
    
    try:
        yield timer
    finally:
        timer.end_time = time.time()
        timer.duration_ms = (timer.end_time - timer.start_time) * 1000
        
        if logger:
            logger.debug(
                f"Operation '{name}' completed",
                extra={"operation": name, "duration_ms": timer.duration_ms}
            )
