"""Tests for logging configuration and structured run logging."""

import io
import json
import logging
import sys

import pytest

from befithub.utils.logging_config import JsonFormatter, setup_logging
from befithub.utils.pipeline_logger import PipelineLogContext, PipelineLogger, timed_operation


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("befithub.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Tests for the JSON line formatter."""
    
    def test_base_fields(self):
        payload = json.loads(JsonFormatter().format(make_record("Seeded 3 menus")))
        
        assert payload["level"] == "INFO"
        assert payload["logger"] == "befithub.test"
        assert payload["message"] == "Seeded 3 menus"
        assert "timestamp" in payload
    
    def test_extra_fields_included(self):
        record = make_record(collection="exercises", doc_id="0001")
        
        payload = json.loads(JsonFormatter().format(record))
        
        assert payload["collection"] == "exercises"
        assert payload["doc_id"] == "0001"
        assert "levelno" not in payload
    
    def test_exception_text(self):
        try:
            raise RuntimeError("commit failed")
        except RuntimeError:
            record = logging.LogRecord(
                "befithub.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        
        payload = json.loads(JsonFormatter().format(record))
        
        assert "RuntimeError: commit failed" in payload["exc_info"]


class TestSetupLogging:
    """Tests for root logger configuration."""
    
    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
    
    def test_json_output(self):
        stream = io.StringIO()
        setup_logging(level="DEBUG", json_format=True, stream=stream)
        
        logging.getLogger("befithub.scripts").info("done", extra={"script": "verify_db"})
        
        payload = json.loads(stream.getvalue().strip())
        assert payload["script"] == "verify_db"
        assert logging.getLogger().level == logging.DEBUG
    
    def test_replaces_handlers(self):
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        
        assert len(logging.getLogger().handlers) == 1
    
    def test_quiets_client_libraries(self):
        setup_logging(level="DEBUG", stream=io.StringIO())
        
        assert logging.getLogger("google").level == logging.INFO


class TestPipelineLogger:
    """Tests for structured run logging."""
    
    def test_context_drops_none(self):
        data = PipelineLogContext(source="seed_exercises", run_id="abc").to_dict()
        
        assert "batch_number" not in data
        assert data["status"] == "started"
    
    def test_batch_commit_metrics(self, caplog):
        run_logger = PipelineLogger("seed_exercises", "run-1")
        
        with caplog.at_level(logging.INFO, logger="pipeline.seed_exercises"):
            run_logger.log_batch_commit(1, 2, 100, 12.345)
            run_logger.log_batch_commit(2, 2, 40, 8.0)
        
        assert run_logger.get_metrics() == {
            "source": "seed_exercises",
            "run_id": "run-1",
            "rows_written": 140,
            "batches_committed": 2,
        }
        last = caplog.records[-1]
        assert last.step == "batch_commit"
        assert last.batch_number == 2
        assert last.extra == {"total_written": 140}
    
    def test_error_is_logged_at_error_level(self, caplog):
        run_logger = PipelineLogger("migrate_catalog", "run-2")
        run_logger.start("load")
        
        with caplog.at_level(logging.INFO, logger="pipeline.migrate_catalog"):
            run_logger.error("load", RuntimeError("commit failed"))
        
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error == "commit failed"
        assert record.duration_ms is not None
    
    def test_timed_operation(self):
        with timed_operation("noop") as timer:
            pass
        
        assert timer.duration_ms >= 0
        assert timer.end_time is not None
