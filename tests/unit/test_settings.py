"""
Unit tests for store settings and logging configuration.
"""

import json
import logging

import pytest
import yaml

from neo_store import Permission, Store, StoreSettings
from neo_store.config import LoggingConfig, get_logger
from neo_store.config.logging_config import get_log_level_from_verbosity


class TestStoreSettings:
    """Test settings defaults, environment and file sources."""

    def test_defaults(self, monkeypatch):
        for name in ("DEFAULT_POLICY", "CHILD_STORE_KEY", "DETECT_CYCLES", "LOG_OPERATIONS"):
            monkeypatch.delenv(f"NEO_STORE_{name}", raising=False)

        settings = StoreSettings()
        assert settings.default_policy is Permission.READ_WRITE
        assert settings.child_store_key == "store"
        assert settings.detect_cycles is True
        assert settings.log_operations is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("NEO_STORE_DEFAULT_POLICY", "read")
        monkeypatch.setenv("NEO_STORE_CHILD_STORE_KEY", "nested")
        monkeypatch.setenv("NEO_STORE_DETECT_CYCLES", "false")

        settings = StoreSettings()
        assert settings.default_policy is Permission.READ
        assert settings.child_store_key == "nested"
        assert settings.detect_cycles is False

    def test_empty_child_store_key_disables_sentinel(self):
        assert StoreSettings(child_store_key="").child_store_key is None

    def test_child_store_key_without_delimiter(self):
        with pytest.raises(ValueError):
            StoreSettings(child_store_key="a:b")

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            StoreSettings(default_policy="admin")

    def test_from_yaml_file(self, tmp_path):
        config_file = tmp_path / "store.yaml"
        config_file.write_text(
            yaml.safe_dump({"store": {"default_policy": "r", "child_store_key": "sub"}})
        )

        settings = StoreSettings.from_file(config_file)
        assert settings.default_policy is Permission.READ
        assert settings.child_store_key == "sub"

    def test_from_json_file_with_overrides(self, tmp_path):
        config_file = tmp_path / "store.json"
        config_file.write_text(json.dumps({"default_policy": "none", "log_operations": True}))

        settings = StoreSettings.from_file(config_file, default_policy="rw")
        assert settings.default_policy is Permission.READ_WRITE
        assert settings.log_operations is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StoreSettings.from_file(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        config_file = tmp_path / "store.toml"
        config_file.write_text("default_policy = 'r'")
        with pytest.raises(ValueError, match="Unsupported"):
            StoreSettings.from_file(config_file)

    def test_to_dict(self, settings):
        assert settings.to_dict() == {
            "default_policy": "rw",
            "child_store_key": "store",
            "detect_cycles": True,
            "log_operations": False,
        }

    def test_store_uses_settings_policy(self, tmp_path):
        config_file = tmp_path / "store.yml"
        config_file.write_text("default_policy: w\n")
        store = Store(settings=StoreSettings.from_file(config_file))
        assert store.allowed_to_write("key")
        assert not store.allowed_to_read("key")


class TestLogging:
    """Test logging configuration and operation logging."""

    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", "ERROR"), ("NORMAL", "WARNING"), ("verbose", "INFO"), ("debug", "DEBUG"), ("bogus", "WARNING")],
    )
    def test_verbosity_mapping(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        config = LoggingConfig.build_config()
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["loggers"]["neo_store.store"]["level"] == "DEBUG"

    def test_single_handler_on_package_logger(self):
        config = LoggingConfig.build_config()
        package = config["loggers"]["neo_store"]
        assert package["handlers"] == ["console"]
        assert package["propagate"] is False
        for module in LoggingConfig.STORE_LOGGERS:
            assert "handlers" not in config["loggers"][module]
            assert config["loggers"][module]["propagate"] is True

    def test_json_format(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_FORMAT", "json")
        config = LoggingConfig.build_config()
        assert config["formatters"]["default"]["format"].startswith('{"time"')

    def test_get_logger(self):
        assert get_logger("neo_store.store") is logging.getLogger("neo_store.store")

    def test_operation_logging(self, caplog):
        store = Store(settings=StoreSettings(log_operations=True))
        with caplog.at_level(logging.DEBUG, logger="neo_store.store.store"):
            store.write("a", 1)
            store.read("a")
        messages = [record.getMessage() for record in caplog.records]
        assert any("wrote Store['a']" in message for message in messages)
        assert any("read Store['a']" in message for message in messages)

    def test_denial_logged(self, caplog, gated_store):
        with caplog.at_level(logging.INFO, logger="neo_store.store.store"):
            gated_store.try_write("readable", 1)
        assert any("denied" in record.getMessage() for record in caplog.records)
