"""
Splice Utils Package
====================

Structured logging.
"""

from __future__ import annotations

from splice.utils.logger import Logger, LogLevel, configure_logging, get_logger

__all__ = [
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
]
