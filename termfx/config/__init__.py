"""Configuration management.

Loads termfx settings from TOML files and environment variables.
"""

from __future__ import annotations

from termfx.config.config import (
    Config,
    ConfigManager,
    get_config,
    init_config,
    reload_config,
    set_config,
)

__all__ = [
    "Config",
    "ConfigManager",
    "get_config",
    "init_config",
    "reload_config",
    "set_config",
]
