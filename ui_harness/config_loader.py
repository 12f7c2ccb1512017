"""
================================================================================
Configuration Provider
================================================================================

YAML-based configuration with environment variable overrides.

Features:
    - Built-in defaults for every key the harness consumes
    - YAML file with flat dotted keys or nested sections
    - Environment variable override (BROWSER_IMPLICIT_WAIT overrides
      browser.implicit.wait)
    - Environment-qualified lookup ("staging.base.url" before "base.url")
    - Typed accessors (int / bool)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger

from .exceptions import ConfigurationError


# Default configuration file path (overridable with HARNESS_CONFIG)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "browser": "chrome",
    "headless": False,
    "browser.implicit.wait": 10,
    "browser.explicit.wait": 20,
    "browser.page.load.timeout": 30,
    "base.url": "https://www.google.com",
    "screenshot.on.failure": True,
    "report.screenshots.on.pass": False,
    "logging.level": "INFO",
}

_MISSING = object()
_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigProvider:
    """
    Configuration provider with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (BROWSER_EXPLICIT_WAIT)
        2. YAML configuration file
        3. Built-in DEFAULTS

    Construct it once at process start and pass it to the components that
    need it; there is no process-wide instance.

    Usage:
        >>> config = ConfigProvider()
        >>> config.get_int("browser.explicit.wait")
        20
        >>> config.get_env("base.url")   # tries "<env>.base.url" first
        'https://www.google.com'
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        environment: Optional[str] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize configuration provider.

        Args:
            config_path: Path to YAML configuration file. Falls back to the
                HARNESS_CONFIG env var, then DEFAULT_CONFIG_PATH.
            environment: Environment name for get_env(). Falls back to the
                ENVIRONMENT / ENV env vars, then "dev".
            defaults: Replacement for the built-in DEFAULTS.
        """
        if config_path is None:
            config_path = os.environ.get("HARNESS_CONFIG") or DEFAULT_CONFIG_PATH
        self._config_path = Path(config_path)
        self._defaults = dict(DEFAULTS if defaults is None else defaults)
        self._config: Dict[str, Any] = {}
        self.environment = (
            environment
            or os.getenv("ENVIRONMENT")
            or os.getenv("ENV")
            or "dev"
        )
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self._config_path}"
            )
        self._config = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _lookup(self, key: str) -> Any:
        # Environment variable first
        env_value = os.environ.get(key.upper().replace(".", "_"))
        if env_value is not None:
            return env_value

        # Flat dotted key, then nested sections
        if key in self._config:
            return self._config[key]
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                value = _MISSING
                break
        if value is not _MISSING and not isinstance(value, dict):
            return value

        return self._defaults.get(key, _MISSING)

    def has(self, key: str) -> bool:
        """Return True if the key resolves from any source."""
        return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dotted key.

        Args:
            key: Dotted key (e.g., "browser.explicit.wait")
            default: Returned when no source defines the key

        Returns:
            Configuration value or default
        """
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return default
        return value

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """
        Get an integer value.

        Raises:
            ConfigurationError: If the key is missing without default,
                or its value is not an integer
        """
        value = self.get(key, default)
        if value is None:
            raise ConfigurationError(f"Missing integer configuration key: {key}")
        if isinstance(value, bool):
            raise ConfigurationError(f"Expected integer for '{key}', got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Expected integer for '{key}', got {value!r}"
            ) from e

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        """Get a float value (seconds-valued settings may be fractional)."""
        value = self.get(key, default)
        if value is None:
            raise ConfigurationError(f"Missing numeric configuration key: {key}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Expected number for '{key}', got {value!r}"
            ) from e

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean value. Strings are true for true/1/yes/on."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES

    def get_env(self, key: str, default: Any = None) -> Any:
        """
        Environment-qualified lookup.

        Tries "<environment>.<key>" first, then "<key>".
        """
        qualified = f"{self.environment}.{key}"
        if self.has(qualified):
            return self.get(qualified, default)
        return self.get(key, default)

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")


__all__ = [
    "ConfigProvider",
    "ConfigurationError",
    "DEFAULTS",
    "DEFAULT_CONFIG_PATH",
]
