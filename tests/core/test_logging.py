"""Tests for logging setup and formatters."""

import json
import logging

from exprcalc.core.config import Settings
from exprcalc.core.logging import (
    ContextLoggerAdapter,
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
    setup_logging,
)


def make_record(message="hello", **extra_data):
    record = logging.LogRecord("exprcalc.test", logging.INFO, __file__, 10, message, None, None)
    if extra_data:
        record.extra_data = extra_data
    return record


class TestFormatters:
    """Test the JSON and text formatters."""

    def test_structured_formatter(self):
        """Test JSON output includes message and extra data."""
        output = json.loads(StructuredFormatter().format(make_record(depth=2)))
        assert output["message"] == "hello"
        assert output["level"] == "INFO"
        assert output["logger"] == "exprcalc.test"
        assert output["depth"] == 2

    def test_structured_formatter_without_extra(self):
        """Test JSON output for a plain record."""
        output = json.loads(StructuredFormatter().format(make_record()))
        assert "depth" not in output

    def test_text_formatter(self):
        """Test the human-readable format."""
        output = TextFormatter().format(make_record())
        assert "exprcalc.test - INFO - hello" in output


class TestContextLogger:
    """Test ContextLoggerAdapter context handling."""

    def test_context_merged_with_extra_data(self):
        """Test fixed context and per-call data end up in extra_data."""
        adapter = get_context_logger("exprcalc.test", component="tests")
        msg, kwargs = adapter.process("m", {"extra_data": {"depth": 1}})
        assert msg == "m"
        assert kwargs["extra"]["extra_data"] == {"component": "tests", "depth": 1}
        assert isinstance(adapter, ContextLoggerAdapter)

    def test_call_data_overrides_context(self):
        """Test per-call data wins over fixed context without changing it."""
        adapter = get_context_logger("exprcalc.test", component="tests")
        _, kwargs = adapter.process("m", {"extra_data": {"component": "cli"}})
        assert kwargs["extra"]["extra_data"] == {"component": "cli"}
        assert adapter.extra == {"component": "tests"}

        _, kwargs = adapter.process("m", {})
        assert kwargs["extra"]["extra_data"] == {"component": "tests"}


class TestSetupLogging:
    """Test setup_logging."""

    def test_level_and_json_format(self, restore_root_logger):
        """Test explicit level and JSON formatter."""
        setup_logging("debug", Settings(LOG_FORMAT="json", LOG_FILE=None))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_level_from_settings(self, restore_root_logger):
        """Test the level comes from settings when not given."""
        setup_logging(settings=Settings(LOG_LEVEL="ERROR", LOG_FORMAT="text", LOG_FILE=None))
        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_log_file(self, restore_root_logger, tmp_path):
        """Test that LOG_FILE adds a file handler."""
        log_file = tmp_path / "logs" / "exprcalc.log"
        setup_logging("info", Settings(LOG_FILE=str(log_file)))
        logging.getLogger("exprcalc.test").info("written")
        assert "written" in log_file.read_text()
