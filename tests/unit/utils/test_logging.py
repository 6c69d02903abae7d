"""Tests for logging configuration utilities."""

import json
import logging
import sys

import pytest

from muster.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)

pytestmark = pytest.mark.usefixtures("isolated_logging")


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="muster.test",
        level=logging.WARNING,
        pathname="/path/to/resolver.py",
        lineno=42,
        msg="No valid spot near %s",
        args=("(4, 7)",),
        exc_info=None,
    )
    record.funcName = "find_valid_spot"
    record.module = "resolver"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self):
        data = json.loads(StructuredJSONFormatter().format(_record()))

        assert data["level"] == "WARNING"
        assert data["message"] == "No valid spot near (4, 7)"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "muster.test"
        assert data["context"]["module"] == "resolver"
        assert data["context"]["function"] == "find_valid_spot"
        assert data["context"]["line"] == 42

    def test_extra_fields_in_context(self):
        data = json.loads(StructuredJSONFormatter().format(_record(composite_id="party-1", radius=3)))

        assert data["context"]["composite_id"] == "party-1"
        assert data["context"]["radius"] == 3
        assert "msg" not in data["context"]

    def test_exception_info(self):
        try:
            raise ValueError("bad offset")
        except ValueError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(StructuredJSONFormatter().format(record))

        assert data["context"]["error_type"] == "ValueError"
        assert data["context"]["error_message"] == "bad offset"
        assert "Traceback" in data["context"]["stack_trace"]


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_level_is_case_insensitive(self):
        configure_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_structured_file_output(self, tmp_path):
        log_file = tmp_path / "muster.jsonl"
        configure_logging(level="INFO", filename=str(log_file), structured=True)

        logging.getLogger("muster.test").info("Merged %d agents", 3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert entry["message"] == "Merged 3 agents"
        assert entry["level"] == "INFO"

    def test_text_format(self, tmp_path):
        log_file = tmp_path / "muster.log"
        configure_logging(level="WARNING", format_string="%(levelname)s|%(message)s", filename=str(log_file))

        logging.getLogger("muster.test").info("hidden")
        logging.getLogger("muster.test").warning("shown")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.read_text(encoding="utf-8").strip() == "WARNING|shown"


class TestGetLogger:
    """Test suite for get_logger."""

    def test_plain_logger(self):
        assert isinstance(get_logger("muster.test"), logging.Logger)

    def test_context_adapter(self):
        adapter = get_logger("muster.test", composite_id="party-1")

        assert isinstance(adapter, logging.LoggerAdapter)
        assert adapter.extra == {"composite_id": "party-1"}
