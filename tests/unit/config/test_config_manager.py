"""Unit tests for configuration loading."""

from __future__ import annotations

import json
import logging

import pytest
import toml

from termfx.config import config as config_module
from termfx.config.config import (
    ConfigManager,
    get_config,
    init_config,
    reload_config,
    set_config,
)
from termfx.exceptions import ConfigurationError
from termfx.models import ColorMode, Config, LogLevel

pytestmark = [pytest.mark.unit, pytest.mark.config]


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty cwd and home so no real config file is found."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    monkeypatch.setattr(config_module, "_config_manager", None)
    return work


def _write(path, data):
    path.write_text(toml.dumps(data), encoding="utf-8")
    return path


class TestConfigFile:
    """Test config file discovery and loading."""

    def test_defaults_without_file(self, isolated):
        """Test defaults apply when no file exists."""
        manager = ConfigManager()
        assert manager.config_file is None
        assert manager.config == Config()

    def test_explicit_file(self, isolated):
        """Test values from an explicit file."""
        path = _write(
            isolated / "custom.toml",
            {"effects": {"delay": 10, "width": 20}, "display": {"color_mode": "ansi256"}},
        )
        manager = ConfigManager(path)
        assert manager.config_file == path
        assert manager.config.effects.delay == 10
        assert manager.config.effects.width == 20
        assert manager.config.effects.iterations == 3
        assert manager.config.display.color_mode == ColorMode.ANSI256

    def test_discovers_cwd_file(self, isolated):
        """Test termfx.toml in the working directory is found."""
        _write(isolated / "termfx.toml", {"effects": {"iterations": 7}})
        manager = ConfigManager()
        assert manager.config_file.name == "termfx.toml"
        assert manager.config.effects.iterations == 7

    def test_discovers_home_file(self, isolated, tmp_path):
        """Test ~/.config/termfx/termfx.toml is found."""
        config_dir = tmp_path / "home" / ".config" / "termfx"
        config_dir.mkdir(parents=True)
        _write(config_dir / "termfx.toml", {"display": {"hide_cursor": False}})
        assert ConfigManager().config.display.hide_cursor is False

    def test_malformed_file_falls_back(self, isolated, caplog):
        """Test an unparsable file is skipped with a warning."""
        path = isolated / "broken.toml"
        path.write_text("[effects\ndelay = ", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            manager = ConfigManager(path, setup_logs=False)
        assert manager.config == Config()
        assert "Failed to load config file" in caplog.text

    def test_invalid_values_rejected(self, isolated):
        """Test out-of-range values raise ConfigurationError."""
        path = _write(isolated / "bad.toml", {"effects": {"width": 0}})
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigManager(path)


class TestEnvironment:
    """Test environment overrides."""

    def test_env_overrides_file(self, isolated, monkeypatch):
        """Test environment variables win over the file."""
        path = _write(isolated / "c.toml", {"effects": {"delay": 10}})
        monkeypatch.setenv("TERMFX_DELAY", "5")
        monkeypatch.setenv("TERMFX_WIDTH", "12")
        config = ConfigManager(path).config
        assert config.effects.delay == 5
        assert config.effects.width == 12

    @pytest.mark.parametrize(("raw", "expected"), [("false", False), ("off", False), ("true", True), ("0", False)])
    def test_boolean_values(self, isolated, monkeypatch, raw, expected):
        """Test boolean environment values."""
        monkeypatch.setenv("TERMFX_HIDE_CURSOR", raw)
        assert ConfigManager().config.display.hide_cursor is expected

    def test_log_settings(self, isolated, monkeypatch, tmp_path):
        """Test observability overrides."""
        log_file = tmp_path / "logs" / "termfx.log"
        monkeypatch.setenv("TERMFX_LOG_LEVEL", "debug")
        monkeypatch.setenv("TERMFX_LOG_FILE", str(log_file))
        monkeypatch.setenv("TERMFX_STRUCTURED_LOGGING", "yes")
        observability = ConfigManager().config.observability
        assert observability.log_level == LogLevel.DEBUG
        assert observability.log_file == str(log_file)
        assert observability.structured_logging is True

    def test_correlation_id_switch(self, isolated, monkeypatch):
        """Test correlation IDs can be turned off."""
        assert ConfigManager().config.observability.log_correlation_id is True
        monkeypatch.setenv("TERMFX_LOG_CORRELATION_ID", "off")
        assert ConfigManager().config.observability.log_correlation_id is False

    def test_no_color_forces_none(self, isolated, monkeypatch):
        """Test NO_COLOR disables colors even when configured."""
        path = _write(isolated / "c.toml", {"display": {"color_mode": "truecolor"}})
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setenv("TERMFX_COLOR_MODE", "ansi256")
        assert ConfigManager(path).config.display.color_mode == ColorMode.NONE

    def test_empty_no_color_ignored(self, isolated, monkeypatch):
        """Test an empty NO_COLOR leaves colors on."""
        monkeypatch.setenv("NO_COLOR", "")
        assert ConfigManager().config.display.color_mode == ColorMode.TRUECOLOR

    @pytest.mark.parametrize(
        ("name", "value"),
        [("TERMFX_DELAY", "-5"), ("TERMFX_COLOR_MODE", "sixteen"), ("TERMFX_WIDTH", "wide")],
    )
    def test_invalid_env_rejected(self, isolated, monkeypatch, name, value):
        """Test invalid environment values raise ConfigurationError."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError):
            ConfigManager()


class TestExport:
    """Test configuration export."""

    def test_toml(self, isolated, monkeypatch):
        """Test TOML export parses back."""
        monkeypatch.setenv("TERMFX_ITERATIONS", "9")
        data = toml.loads(ConfigManager().export("toml"))
        assert data["effects"]["iterations"] == 9
        assert data["display"]["color_mode"] == "truecolor"

    def test_json(self, isolated):
        """Test JSON export parses back."""
        data = json.loads(ConfigManager().export("json"))
        assert data["observability"]["log_level"] == "WARNING"

    def test_unsupported(self, isolated):
        """Test unknown formats are rejected."""
        with pytest.raises(ConfigurationError):
            ConfigManager().export("yaml")


class TestGlobalConfig:
    """Test module-level configuration accessors."""

    def test_get_config_creates_manager(self, isolated):
        """Test get_config lazily builds a manager."""
        assert get_config() == Config()
        assert config_module._config_manager is not None

    def test_init_config_replaces_global(self, isolated):
        """Test init_config installs a new manager."""
        path = _write(isolated / "c.toml", {"effects": {"delay": 1}})
        manager = init_config(path)
        assert get_config() is manager.config
        assert get_config().effects.delay == 1

    def test_reload_config(self, isolated):
        """Test reload picks up file changes."""
        path = _write(isolated / "c.toml", {"effects": {"delay": 1}})
        init_config(path)
        _write(path, {"effects": {"delay": 2}})
        assert reload_config().effects.delay == 2
        assert get_config().effects.delay == 2

    def test_reload_without_init(self, isolated):
        """Test reload before init is an error."""
        with pytest.raises(ConfigurationError):
            reload_config()

    def test_set_config(self, isolated):
        """Test set_config replaces the active config."""
        new = Config(effects={"delay": 99})
        set_config(new)
        assert get_config() is new

    def test_logging_configured(self, isolated, tmp_path):
        """Test the manager configures the termfx logger."""
        log_file = tmp_path / "out.log"
        path = _write(
            isolated / "c.toml",
            {"observability": {"log_level": "INFO", "log_file": str(log_file)}},
        )
        ConfigManager(path)
        logger = logging.getLogger("termfx")
        assert logger.level == logging.INFO
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
