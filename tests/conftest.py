"""
Shared fixtures.

Every test starts from a fresh global config and logger registry, with no
SPLICE_* variables leaking in from the environment.
"""

import io
import os

import pytest

import splice.utils.logger as logger_module
from splice import parse_source
from splice.core.config import reset_config


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SPLICE_"):
            monkeypatch.delenv(key)
    reset_config()
    logger_module._loggers.clear()
    monkeypatch.setattr(logger_module, "_stream", None)
    yield
    reset_config()
    logger_module._loggers.clear()


@pytest.fixture
def parse():
    """Parse source with the default grammar."""
    return lambda source: parse_source(source, jsx=False)


@pytest.fixture
def parse_jsx():
    """Parse source with the brace grammar."""
    return lambda source: parse_source(source, jsx=True)


@pytest.fixture
def log_stream():
    return io.StringIO()
