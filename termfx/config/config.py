"""Configuration management for termfx.

Provides centralized configuration with TOML support, validation and
hierarchical loading from defaults → config file → environment.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import toml

from termfx.exceptions import ConfigurationError
from termfx.models import ColorMode, Config
from termfx.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

CONFIG_FILE_NAME = "termfx.toml"

# Mapping of environment variables to config paths
ENV_MAPPINGS: dict[str, str] = {
    # Effects
    "TERMFX_DELAY": "effects.delay",
    "TERMFX_ITERATIONS": "effects.iterations",
    "TERMFX_WIDTH": "effects.width",
    # Display
    "TERMFX_COLOR_MODE": "display.color_mode",
    "TERMFX_HIDE_CURSOR": "display.hide_cursor",
    "TERMFX_FALLBACK_WIDTH": "display.fallback_width",
    "TERMFX_FALLBACK_HEIGHT": "display.fallback_height",
    # Observability
    "TERMFX_LOG_LEVEL": "observability.log_level",
    "TERMFX_LOG_FILE": "observability.log_file",
    "TERMFX_STRUCTURED_LOGGING": "observability.structured_logging",
    "TERMFX_LOG_CORRELATION_ID": "observability.log_correlation_id",
}

# Global configuration instance
_config_manager: ConfigManager | None = None


def _parse_env_value(raw: str) -> bool | int | float | str:
    low = raw.lower()
    if low in {"true", "yes", "on"}:
        return True
    if low in {"false", "no", "off"}:
        return False
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    cur = d
    for p in parts[:-1]:
        cur = cur.setdefault(p, {})
    cur[parts[-1]] = value


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_file: str | Path | None = None, setup_logs: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for termfx.toml
            setup_logs: Configure the termfx logger from the loaded config

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()
        if setup_logs:
            self._setup_logging()

    def _find_config_file(
        self,
        config_file: str | Path | None,
    ) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        # Search in current directory, then home directory
        search_paths = [
            Path.cwd() / CONFIG_FILE_NAME,
            Path.home() / ".config" / "termfx" / CONFIG_FILE_NAME,
            Path.home() / ".termfx.toml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def _load_config(self) -> Config:
        """Load configuration from file and environment."""
        config_data: dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data.update(toml.load(f))
            except (OSError, toml.TomlDecodeError) as e:
                logger.warning("Failed to load config file %s: %s", self.config_file, e)

        config_data = self._merge_config(config_data, self._get_env_config())

        try:
            return Config(**config_data)
        except Exception as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            _set_nested(env_config, cfg_path, _parse_env_value(raw))

        # https://no-color.org: any non-empty value disables color
        if os.getenv("NO_COLOR"):
            _set_nested(env_config, "display.color_mode", ColorMode.NONE.value)

        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def export(self, fmt: str = "toml") -> str:
        """Export current configuration as a string.

        Args:
            fmt: one of "toml" or "json"

        """
        data = self.config.model_dump(mode="json", exclude_none=True)

        fmt = (fmt or "toml").lower()
        if fmt == "toml":
            return toml.dumps(data)
        if fmt == "json":
            return json.dumps(data, indent=2)
        msg = f"Unsupported export format: {fmt}"
        raise ConfigurationError(msg)

    def _setup_logging(self) -> None:
        """Set up logging configuration."""
        setup_logging(self.config.observability)


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def init_config(config_file: str | Path | None = None) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager


def reload_config() -> Config:
    """Reload configuration from file."""
    if _config_manager is None:
        msg = "Configuration not initialized"
        raise ConfigurationError(msg)

    _config_manager.config = _config_manager._load_config()  # noqa: SLF001
    _config_manager._setup_logging()  # noqa: SLF001
    return _config_manager.config


def set_config(new_config: Config) -> None:
    """Replace the global configuration at runtime.

    Reconfigures logging based on the new config.
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(None)
    _config_manager.config = new_config
    _config_manager._setup_logging()  # noqa: SLF001
