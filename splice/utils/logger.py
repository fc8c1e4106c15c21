"""
Splice Logger
=============

Structured logging with pluggable formatters.

Records carry a message plus key=value context, so parser events read:

    2026-01-15 10:30:45 [DEBUG] parse started fragments=12 jsx=False
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional, TextIO

from splice.core.config import Config, ConfigError, get_config


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Look up a level by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ConfigError(f"Unknown log level: {name!r}") from None


@dataclass
class LogRecord:
    """
    Structured log record.

    Attributes:
        level: Log level
        message: Log message
        timestamp: Record timestamp
        context: Additional context
        exception: Exception info
    """

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    logger_name: str = "splice"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2026-01-15 10:30:45 [DEBUG] parse finished segments=3
    """

    def __init__(self, date_format: str = "%Y-%m-%d %H:%M:%S") -> None:
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        message = record.message
        if record.context:
            message += " " + " ".join(f"{k}={v}" for k, v in record.context.items())

        output = f"{record.timestamp.strftime(self.date_format)} [{record.level.name}] {message}"

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter, one object per line."""

    def format(self, record: LogRecord) -> str:
        return json.dumps(record.to_dict(), default=str)


FORMATTERS = {
    "text": TextFormatter,
    "json": JsonFormatter,
}


class StreamHandler:
    """Writes formatted records to a stream (stderr by default)."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ) -> None:
        self.stream = stream or sys.stderr
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        if record.level >= self.level:
            self.stream.write(self.formatter.format(record) + "\n")
            self.stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("splice.parser")
        logger.debug("parse started", fragments=12, jsx=False)

        # With context
        logger = logger.with_context(source="page.html")
        logger.debug("parse finished")
    """

    def __init__(
        self,
        name: str = "splice",
        level: LogLevel = LogLevel.WARNING,
        handlers: Optional[List[StreamHandler]] = None,
    ) -> None:
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    def add_handler(self, handler: StreamHandler) -> "Logger":
        self._handlers.append(handler)
        return self

    def with_context(self, **context: Any) -> "Logger":
        """Create a logger sharing this one's handlers with extra context."""
        child = Logger(name=self.name, level=self.level, handlers=self._handlers)
        child._context = {**self._context, **context}
        return child

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        record = LogRecord(
            level=level,
            message=message,
            context={**self._context, **context},
            exception=exception,
            logger_name=self.name,
        )

        for handler in self._handlers:
            handler.handle(record)

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self._log(LogLevel.ERROR, message, exception, **context)


# Global logger registry
_loggers: Dict[str, Logger] = {}
# stream for loggers created after configure_logging()
_stream: Optional[TextIO] = None


def _formatter(name: str) -> LogFormatter:
    try:
        return FORMATTERS[name.lower()]()
    except KeyError:
        raise ConfigError(f"Unknown log format: {name!r}") from None


def get_logger(name: str = "splice", config: Optional[Config] = None) -> Logger:
    """
    Get or create a logger.

    New loggers take their level and format from ``log.level`` and
    ``log.format``.

    Args:
        name: Logger name
        config: Configuration to read (default: the global config)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        config = config or get_config()
        level = LogLevel.from_name(config.get_str("log.level", "WARNING"))
        handler = StreamHandler(
            stream=_stream,
            formatter=_formatter(config.get_str("log.format", "text")),
        )
        _loggers[name] = Logger(name=name, level=level).add_handler(handler)

    return _loggers[name]


def configure_logging(
    level: LogLevel = LogLevel.WARNING,
    format: str = "text",
    stream: Optional[TextIO] = None,
) -> None:
    """
    Reconfigure every registered logger and set defaults for new ones.

    Args:
        level: Log level
        format: Output format ("text" or "json")
        stream: Output stream (default: stderr)
    """
    config = get_config()
    config.set("log.level", level.name)
    config.set("log.format", format)

    global _stream
    _stream = stream

    formatter = _formatter(format)
    for logger in _loggers.values():
        logger.level = level
        logger._handlers.clear()
        logger.add_handler(StreamHandler(stream=stream, formatter=formatter))
