"""
Structured logger tests.
"""

import io
import json

import pytest

from splice.core.config import Config, ConfigError
from splice.utils.logger import (
    JsonFormatter,
    Logger,
    LogLevel,
    LogRecord,
    StreamHandler,
    TextFormatter,
    configure_logging,
    get_logger,
)


def logger_with_stream(level=LogLevel.DEBUG, formatter=None):
    stream = io.StringIO()
    logger = Logger("test", level=level, handlers=[StreamHandler(stream=stream, formatter=formatter)])
    return logger, stream


class TestLogLevel:
    def test_from_name_is_case_insensitive(self):
        assert LogLevel.from_name("debug") is LogLevel.DEBUG

    def test_unknown_name(self):
        with pytest.raises(ConfigError, match="Unknown log level"):
            LogLevel.from_name("verbose")


class TestLogger:
    def test_level_filters_records(self):
        logger, stream = logger_with_stream(level=LogLevel.INFO)
        logger.debug("hidden")
        logger.info("shown")
        assert "hidden" not in stream.getvalue()
        assert "[INFO] shown" in stream.getvalue()

    def test_context_is_appended(self):
        logger, stream = logger_with_stream()
        logger.warning("parse slow", fragments=3)
        assert stream.getvalue().rstrip().endswith("[WARNING] parse slow fragments=3")

    def test_with_context_shares_handlers(self):
        logger, stream = logger_with_stream()
        child = logger.with_context(source="page.html")
        child.info("done", segments=2)
        assert "done source=page.html segments=2" in stream.getvalue()

    def test_add_handler_fans_out(self):
        logger, first = logger_with_stream()
        second = io.StringIO()
        assert logger.add_handler(StreamHandler(stream=second)) is logger
        logger.info("both")
        assert "[INFO] both" in first.getvalue()
        assert "[INFO] both" in second.getvalue()

    def test_error_includes_exception(self):
        logger, stream = logger_with_stream()
        try:
            raise ValueError("bad")
        except ValueError as e:
            logger.error("failed", exception=e)
        assert "ValueError: bad" in stream.getvalue()


class TestFormatters:
    def test_json_record(self):
        record = LogRecord(level=LogLevel.INFO, message="m", context={"k": 1}, logger_name="x")
        data = json.loads(JsonFormatter().format(record))
        assert data["level"] == "INFO"
        assert data["context"] == {"k": 1}
        assert data["logger"] == "x"

    def test_text_record_with_date_format(self):
        record = LogRecord(level=LogLevel.ERROR, message="m")
        output = TextFormatter(date_format="%Y").format(record)
        assert output == f"{record.timestamp:%Y} [ERROR] m"


class TestGetLogger:
    def test_registry_returns_same_logger(self):
        assert get_logger("a") is get_logger("a")

    def test_level_and_format_from_config(self):
        config = Config()
        config.set("log.level", "info")
        config.set("log.format", "json")
        logger = get_logger("configured", config=config)
        assert logger.level is LogLevel.INFO
        assert isinstance(logger._handlers[0].formatter, JsonFormatter)

    def test_unknown_format(self):
        config = Config()
        config.set("log.format", "xml")
        with pytest.raises(ConfigError, match="Unknown log format"):
            get_logger("broken", config=config)

    def test_configure_logging_replaces_handlers(self):
        logger = get_logger("existing")
        stream = io.StringIO()
        configure_logging(LogLevel.INFO, stream=stream)
        assert len(logger._handlers) == 1
        logger.info("rehandled")
        assert "[INFO] rehandled" in stream.getvalue()
