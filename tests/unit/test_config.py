"""
Unit tests for bandvocoder.core.config and bandvocoder.core.logger modules.
"""

import logging

import pytest

from bandvocoder.core import config as config_module
from bandvocoder.core.config import (
    DEFAULT_CONFIG,
    Config,
    create_default_config_file,
    find_config_file,
    get_config,
    get_default_config,
    load_config_cascade,
    load_toml,
    reset_config,
    save_toml,
    set_config,
)
from bandvocoder.core.exceptions import ValidationError
from bandvocoder.core.logger import PACKAGE_NAME, get_logger, set_level
from bandvocoder.models.audio import ChannelPolicy
from bandvocoder.models.config import EngineSettings


class TestDefaults:
    """Tests for built-in defaults."""

    def test_default_sections(self):
        config = get_default_config()
        assert config.sections == ["engine", "compressor", "output", "queue", "logging"]
        assert config.get("engine", "band_count") == 16
        assert config.get("queue", "overflow") == "queue"

    def test_get_missing_key_returns_default(self):
        assert get_default_config().get("engine", "nope", 42) == 42

    def test_default_config_is_a_copy(self):
        config = get_default_config()
        config.set("engine", "min_hz", 1.0)
        assert DEFAULT_CONFIG["engine"]["min_hz"] == 80.0

    def test_engine_settings_from_defaults(self):
        settings = EngineSettings.from_config(get_default_config())
        assert settings == EngineSettings()


class TestLoading:
    """Tests for file loading and the cascade."""

    def test_save_and_load_toml(self, tmp_path):
        path = save_toml({"engine": {"channel_policy": "first", "min_hz": 100.0}}, tmp_path / "c.toml")
        assert load_toml(path) == {"engine": {"channel_policy": "first", "min_hz": 100.0}}

    def test_load_toml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "missing.toml")

    def test_explicit_file_overrides_defaults(self, isolated_config):
        path = isolated_config / "custom.toml"
        path.write_text('[engine]\nchannel_policy = "first"\n\n[compressor]\nratio = 4.0\n')

        config = load_config_cascade(str(path))

        assert config._source == str(path)
        assert config.get("engine", "channel_policy") == "first"
        assert config.get("compressor", "ratio") == 4.0
        assert config.get("compressor", "knee_db") == 10.0

        settings = EngineSettings.from_config(config)
        assert settings.channel_policy is ChannelPolicy.FIRST
        assert settings.compressor.ratio == 4.0

    def test_cascade_priority(self, isolated_config, monkeypatch):
        user = isolated_config / "user.toml"
        user.write_text("[queue]\nworkers = 2\nmax_pending = 5\n")
        local = isolated_config / "local.toml"
        local.write_text("[queue]\nworkers = 4\n")
        # Highest priority first, as in CONFIG_LOCATIONS
        monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [local, user])

        config = load_config_cascade()

        assert config.get("queue", "workers") == 4
        assert config.get("queue", "max_pending") == 5
        assert config._source == str(local)

    def test_no_files_uses_defaults(self, isolated_config):
        config = load_config_cascade()
        assert config._source == "defaults"
        assert config.to_dict() == DEFAULT_CONFIG

    def test_missing_explicit_file_falls_back(self, isolated_config):
        config = load_config_cascade(str(isolated_config / "nope.toml"))
        assert config._source == "defaults"

    def test_unreadable_file_skipped(self, isolated_config):
        path = isolated_config / "broken.toml"
        path.write_text("[engine\nthis is not toml")
        config = load_config_cascade(str(path))
        assert config._source == "defaults"

    @pytest.mark.parametrize(
        "content",
        [
            "[engine]\nband_count = 32\n",
            "[engine]\nwork_rate = 44100\n",
            '[engine]\nchannel_policy = "left"\n',
            '[queue]\noverflow = "drop"\n',
        ],
    )
    def test_invalid_settings_rejected(self, isolated_config, content):
        path = isolated_config / "bad.toml"
        path.write_text(content)
        with pytest.raises(ValidationError):
            load_config_cascade(str(path))

    def test_find_config_file_prefers_explicit_path(self, isolated_config):
        path = isolated_config / "single.toml"
        path.write_text("[output]\nmakeup_gain = 2.0\n")
        assert find_config_file(str(path)) == path

    def test_find_config_file_missing(self, isolated_config):
        assert find_config_file(str(isolated_config / "absent.toml")) is None
        assert find_config_file() is None


class TestGlobalConfig:
    """Tests for the process-wide config instance."""

    def test_get_set_reset(self, isolated_config):
        custom = Config.from_dict({"engine": {"min_hz": 90.0}}, source="test")
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config() is not custom

    def test_create_default_config_file(self, isolated_config):
        path = create_default_config_file()
        assert load_toml(path) == DEFAULT_CONFIG


class TestLogger:
    """Tests for package logging."""

    def test_get_logger_configures_package(self):
        log = get_logger("bandvocoder.tests")
        package = logging.getLogger(PACKAGE_NAME)

        assert log.name == "bandvocoder.tests"
        assert package.handlers
        assert package.propagate is False

    def test_set_level(self):
        set_level("DEBUG")
        assert logging.getLogger(PACKAGE_NAME).level == logging.DEBUG
        set_level(logging.INFO)
        assert logging.getLogger(PACKAGE_NAME).level == logging.INFO

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            set_level("LOUD")
