"""
Tests for configuration loading.
"""

import json

import pytest

from epics_archiver.core.config import Config
from epics_archiver.core.errors import ConfigError
from epics_archiver.models import ArchiverSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep overrides from the developer's shell out of the tests."""
    for var in ("ARCHIVER_SERVER", "ARCHIVER_MANAGE_PORT", "ARCHIVER_DATA_PORT",
                "LOG_LEVEL", "ENVIRONMENT", "CONFIG_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write a config document and return its path."""
    def _write(document):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(document) if not isinstance(document, str) else document)
        return str(path)
    return _write


VALID = {
    "archiver": {"server": "k1dataserver", "manage_port": 17665, "data_port": "17668"},
    "query": {"max_workers": 8},
    "logging": {"level": "DEBUG", "file": "logs/test.log"},
}


class TestConfig:
    """Test cases for Config."""

    def test_load(self, write_config):
        config = Config(write_config(VALID))

        assert config.server == "k1dataserver"
        assert config.manage_port == "17665"
        assert config.data_port == "17668"
        assert config.max_workers == 8
        assert config.log_level == "DEBUG"
        assert config.log_file == "logs/test.log"

    def test_defaults(self, write_config):
        config = Config(write_config({"archiver": VALID["archiver"]}))

        assert config.data_timeout == 60
        assert config.status_timeout == 30
        assert config.max_workers == 4
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_dot_notation(self, write_config):
        config = Config(write_config(VALID))

        assert config.get("archiver.server") == "k1dataserver"
        assert config.get("archiver.missing", "x") == "x"
        assert config.get("archiver.server.nested") is None

    def test_env_overrides(self, write_config, monkeypatch):
        monkeypatch.setenv("ARCHIVER_SERVER", "k2dataserver")
        monkeypatch.setenv("ARCHIVER_DATA_PORT", "18000")
        monkeypatch.setenv("ENVIRONMENT", "test")

        config = Config(write_config(VALID))

        assert config.server == "k2dataserver"
        assert config.data_port == "18000"
        assert config.get("environment") == "test"

    def test_config_file_from_env(self, write_config, monkeypatch):
        monkeypatch.setenv("CONFIG_FILE", write_config(VALID))
        assert Config().server == "k1dataserver"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            Config(str(tmp_path / "absent.json"))

    def test_invalid_json(self, write_config):
        with pytest.raises(ConfigError):
            Config(write_config("{not json"))

    def test_missing_keys(self, write_config):
        with pytest.raises(ConfigError, match="archiver.data_port"):
            Config(write_config({"archiver": {"server": "h", "manage_port": "17665"}}))

    def test_bad_port(self, write_config):
        with pytest.raises(ConfigError):
            Config(write_config({"archiver": {"server": "h", "manage_port": "web", "data_port": "1"}}))

    @pytest.mark.parametrize("workers", [0, -1, "4"])
    def test_bad_worker_count(self, write_config, workers):
        document = dict(VALID, query={"max_workers": workers})
        with pytest.raises(ConfigError):
            Config(write_config(document))

    def test_settings_from_config(self, write_config):
        settings = ArchiverSettings.from_config(Config(write_config(VALID)))

        assert settings.data_url == "http://k1dataserver:17668"
        assert settings.manage_url == "http://k1dataserver:17665"
