"""
Splice Core Module
==================

- Config: Layered configuration with SPLICE_* environment overrides
- ParseOptions: Per-parse options record
"""

from splice.core.config import Config, ConfigError, ParseOptions, get_config, reset_config

__all__ = [
    "Config",
    "ConfigError",
    "ParseOptions",
    "get_config",
    "reset_config",
]
