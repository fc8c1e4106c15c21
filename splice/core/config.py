"""
Splice Configuration
====================

Layered configuration with dot-notation access, plus the options record
handed to each parse.

Configuration Loading Priority (highest to lowest):
1. Runtime overrides (``config.set``)
2. Environment variables (SPLICE_*)
3. Default values

Example:
    config = get_config()
    config.set("parser.jsx", True)

    options = ParseOptions.from_config(config)   # ParseOptions(jsx=True)

    # or from the environment
    $ SPLICE_PARSER_JSX=true SPLICE_LOG_LEVEL=debug python app.py
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypeVar, Union

T = TypeVar("T")

ENV_PREFIX = "SPLICE_"

DEFAULTS: Dict[str, Any] = {
    "parser": {
        "jsx": False,
    },
    "log": {
        "level": "WARNING",
        "format": "text",
    },
}


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""
    pass


@dataclass
class ConfigSource:
    """Represents a configuration source with priority."""
    name: str
    data: Dict[str, Any] = field(default_factory=dict)
    priority: int = 0


@dataclass(frozen=True)
class ParseOptions:
    """
    Options for a single parse.

    Attributes:
        jsx: Use the brace-delimited surface grammar (``{expr}``,
            ``{...mixin}``) instead of the ``@``-prefixed one.
    """
    jsx: bool = False

    @classmethod
    def from_config(cls, config: Optional["Config"] = None) -> "ParseOptions":
        """Build options from ``config`` (default: the global config)."""
        config = config or get_config()
        return cls(jsx=config.get_bool("parser.jsx"))


class Config:
    """
    Configuration container.

    Values are nested dicts addressed with dot notation. Sources are
    merged lowest priority first, so higher priorities override.

    Example:
        config = Config()
        config.get("log.level")              # "WARNING"
        config.set("log.level", "DEBUG")
        config.get("log.missing", "default") # "default"
    """

    def __init__(self, defaults: bool = True) -> None:
        self._sources: List[ConfigSource] = []
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        if defaults:
            self.add_source("defaults", copy.deepcopy(DEFAULTS), priority=0)

    def load_env(self, environ: Optional[Dict[str, str]] = None) -> None:
        """Load overrides from SPLICE_* environment variables."""
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if key.startswith(ENV_PREFIX):
                # SPLICE_PARSER_JSX -> parser.jsx
                config_key = key[len(ENV_PREFIX):].lower().replace("_", ".")
                overrides[config_key] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", self._unflatten(overrides), priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _unflatten(self, flat: Dict[str, Any]) -> Dict[str, Any]:
        """Convert flat dot-notation keys to nested dict."""
        result: Dict[str, Any] = {}

        for key, value in flat.items():
            parts = key.split(".")
            current = result
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

        return result

    def add_source(self, name: str, data: Dict[str, Any], priority: int = 0) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True

    def _merge(self) -> None:
        if not self._dirty:
            return

        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            self._deep_merge(self._merged, source.data)

        self._dirty = False

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            elif isinstance(value, dict):
                base[key] = {}
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "parser.jsx")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        self._merge()

        current: Any = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def get_str(self, key: str, default: str = "") -> str:
        """Get configuration value as string."""
        value = self.get(key, default)
        return default if value is None else str(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime = next((s for s in self._sources if s.name == "runtime"), None)
        if runtime is None:
            runtime = ConfigSource(name="runtime", priority=1000)
            self._sources.append(runtime)

        parts = key.split(".")
        current = runtime.data
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value
        self._dirty = True

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def all(self) -> Dict[str, Any]:
        """Get all configuration as dict."""
        self._merge()
        return copy.deepcopy(self._merged)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance, reading SPLICE_* on first use."""
    global _config
    if _config is None:
        _config = Config()
        _config.load_env()
    return _config


def reset_config() -> None:
    """Drop the global configuration so the next access rebuilds it."""
    global _config
    _config = None
