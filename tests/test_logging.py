"""Tests for logging configuration."""

import io
import json
import logging
import sys
from unittest.mock import patch

from mochow.config import Environment, Settings
from mochow.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    record_context,
    setup_logging,
)


def make_record(
    msg: str = "Test message",
    level: int = logging.INFO,
    name: str = "test",
    **extra: object,
) -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRecordContext:
    """Tests for extra-field collection."""

    def test_standard_record_has_no_context(self) -> None:
        """A plain record carries no context."""
        assert record_context(make_record()) == {}

    def test_extra_fields_collected(self) -> None:
        """Fields passed with extra= are collected."""
        record = make_record(operation="search", status_code=200)
        assert record_context(record) == {"operation": "search", "status_code": 200}


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert "context" not in data

    def test_format_includes_file_info(self) -> None:
        """Log includes file and line information."""
        data = json.loads(JSONFormatter().format(make_record(level=logging.ERROR)))
        assert data["source"]["file"] == "/app/module.py:42"

    def test_format_includes_context(self) -> None:
        """Extra fields are rendered under context."""
        record = make_record(operation="batchSearch", database="book")
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"operation": "batchSearch", "database": "book"}

    def test_format_with_exception(self) -> None:
        """Exception info is included in output."""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = make_record(msg="Error", level=logging.ERROR)
        record.exc_info = exc_info

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level, logger and message."""
        output = DevFormatter().format(
            make_record(msg="Warning message", level=logging.WARNING, name="test.module")
        )

        assert "WARNING" in output
        assert "test.module" in output
        assert "Warning message" in output

    def test_format_appends_context(self) -> None:
        """Extra fields are appended as key=value pairs."""
        output = DevFormatter().format(make_record(operation="search"))
        assert output.endswith("| operation=search")


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        """setup_logging returns root logger."""
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger()

    def test_uses_json_in_production(self) -> None:
        """JSON output is used in production environment."""
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("mochow.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        """Dev formatter is used in development environment."""
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("mochow.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, DevFormatter)

    def test_level_override(self) -> None:
        """Log level can be overridden."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_writes_to_given_stream(self) -> None:
        """Records are written to the given stream."""
        stream = io.StringIO()
        setup_logging(level="INFO", json_output=True, stream=stream)

        get_logger("mochow.test").info("hello", extra={"operation": "search"})

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "hello"
        assert data["context"] == {"operation": "search"}

    def test_noisy_loggers_clamped(self) -> None:
        """httpx and httpcore loggers are clamped to WARNING."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        assert get_logger("mochow.search").name == "mochow.search"

    def test_library_logger_has_null_handler(self) -> None:
        """The library logger never prints without configuration."""
        handlers = logging.getLogger("mochow").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
