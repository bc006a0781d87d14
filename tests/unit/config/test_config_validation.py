"""
Unit tests for logger configuration, config files and environment settings
"""

import json

import pytest

from lumberlog.core.config.settings import LoggingSettings, get_settings
from lumberlog.core.config.validation import (
    ConfigLoader,
    LoggerConfig,
    RotationConfig,
    validate_config,
)
from lumberlog.core.exceptions.custom_exceptions import ConfigurationError
from lumberlog.core.logging.logger import logger_from_settings
from lumberlog.core.logging.levels import Severity


class TestLoggerConfig:
    def test_defaults(self):
        """Test defaults"""
        config = LoggerConfig()
        assert config.threshold is Severity.INFO
        assert config.json_output is False
        assert config.show_caller is False
        assert config.color is False
        assert config.output_path == ""
        assert config.rotation == RotationConfig()

    def test_threshold_accepts_names(self):
        """Test threshold accepts names"""
        assert LoggerConfig(threshold="warning").threshold is Severity.WARN
        assert LoggerConfig(threshold=0).threshold is Severity.DEBUG

    def test_invalid_threshold_raises_configuration_error(self):
        """Test invalid threshold raises configuration error"""
        with pytest.raises(ConfigurationError):
            LoggerConfig(threshold=9)

    def test_config_is_frozen(self):
        """Test config is frozen"""
        config = LoggerConfig()
        with pytest.raises(Exception):
            config.threshold = Severity.DEBUG

    def test_output_path_accepts_path_objects(self, tmp_path):
        """Test output path accepts path objects"""
        config = LoggerConfig(output_path=tmp_path / "app.log")
        assert config.output_path == str(tmp_path / "app.log")


class TestValidateConfig:
    def test_none_means_defaults(self):
        """Test None means defaults"""
        assert validate_config(None) == LoggerConfig()

    def test_mapping_is_validated(self):
        """Test mapping is validated"""
        config = validate_config(
            {"threshold": "ERROR", "json_output": True, "rotation": {"compress": True}}
        )
        assert config.threshold is Severity.ERROR
        assert config.json_output is True
        assert config.rotation.compress is True

    @pytest.mark.parametrize(
        "rotation",
        [{"max_size_mb": 0}, {"max_backups": 0}, {"max_age_days": -1}],
    )
    def test_invalid_rotation(self, rotation):
        """Test invalid rotation"""
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config({"rotation": rotation})
        assert exc_info.value.error_code == "CONFIG_VALIDATION_FAILED"
        assert exc_info.value.details["errors"]


class TestConfigLoader:
    def test_yaml_file(self, tmp_path):
        """Test YAML file"""
        path = tmp_path / "logging.yaml"
        path.write_text(
            "threshold: DEBUG\n"
            "json_output: true\n"
            "output_path: /tmp/app.log\n"
            "rotation:\n"
            "  max_size_mb: 10\n"
            "  max_backups: 2\n"
        )
        config = ConfigLoader.load_file(str(path))
        assert config.threshold is Severity.DEBUG
        assert config.output_path == "/tmp/app.log"
        assert config.rotation.max_size_mb == 10
        assert config.rotation.max_backups == 2

    def test_json_file(self, tmp_path):
        """Test JSON file"""
        path = tmp_path / "logging.json"
        path.write_text(json.dumps({"threshold": "WARN", "color": True}))
        config = ConfigLoader.load_file(str(path))
        assert config.threshold is Severity.WARN
        assert config.color is True

    def test_empty_yaml_means_defaults(self, tmp_path):
        """Test empty YAML means defaults"""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert ConfigLoader.load_file(str(path)) == LoggerConfig()

    def test_missing_file(self, tmp_path):
        """Test missing file"""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.load_file(str(tmp_path / "nope.yaml"))
        assert exc_info.value.error_code == "CONFIG_FILE_NOT_FOUND"

    def test_unsupported_format(self, tmp_path):
        """Test unsupported format"""
        path = tmp_path / "logging.ini"
        path.write_text("[logging]\n")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.load_file(str(path))
        assert exc_info.value.error_code == "CONFIG_UNSUPPORTED_FORMAT"

    def test_non_mapping_content(self, tmp_path):
        """Test non mapping content"""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader.load_file(str(path))

    def test_malformed_json(self, tmp_path):
        """Test malformed JSON"""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            ConfigLoader.load_file(str(path))


class TestLoggingSettings:
    @pytest.fixture(autouse=True)
    def isolated_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in (
            "LEVEL",
            "FORMAT",
            "SHOW_CALLER",
            "COLOR",
            "FILE_PATH",
            "MAX_SIZE_MB",
            "MAX_BACKUPS",
            "MAX_AGE_DAYS",
            "COMPRESS",
        ):
            monkeypatch.delenv(f"LUMBERLOG_{name}", raising=False)

    def test_defaults(self):
        """Test defaults"""
        config = LoggingSettings().to_logger_config()
        assert config == LoggerConfig()

    def test_environment_overrides(self, monkeypatch):
        """Test environment overrides"""
        monkeypatch.setenv("LUMBERLOG_LEVEL", "debug")
        monkeypatch.setenv("LUMBERLOG_FORMAT", "JSON")
        monkeypatch.setenv("LUMBERLOG_SHOW_CALLER", "true")
        monkeypatch.setenv("LUMBERLOG_FILE_PATH", "/var/log/app.log")
        monkeypatch.setenv("LUMBERLOG_MAX_BACKUPS", "7")
        monkeypatch.setenv("LUMBERLOG_COMPRESS", "1")

        config = LoggingSettings().to_logger_config()
        assert config.threshold is Severity.DEBUG
        assert config.json_output is True
        assert config.show_caller is True
        assert config.output_path == "/var/log/app.log"
        assert config.rotation.max_backups == 7
        assert config.rotation.compress is True

    def test_invalid_level(self, monkeypatch):
        """Test invalid level"""
        monkeypatch.setenv("LUMBERLOG_LEVEL", "verbose")
        with pytest.raises(ConfigurationError):
            LoggingSettings()

    def test_invalid_format(self, monkeypatch):
        """Test an unknown format surfaces as a configuration error"""
        monkeypatch.setenv("LUMBERLOG_FORMAT", "xml")
        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()
        assert exc_info.value.error_code == "CONFIG_VALIDATION_FAILED"
        assert exc_info.value.details["errors"][0]["field"] == "FORMAT"

    def test_non_boolean_flag(self, monkeypatch):
        """Test a malformed boolean variable surfaces as a configuration error"""
        monkeypatch.setenv("LUMBERLOG_SHOW_CALLER", "sometimes")
        with pytest.raises(ConfigurationError):
            get_settings()

    @pytest.mark.parametrize("name", ["MAX_SIZE_MB", "MAX_BACKUPS"])
    def test_invalid_rotation_values(self, monkeypatch, name):
        """Test out-of-range rotation variables fail with a configuration error"""
        monkeypatch.setenv(f"LUMBERLOG_{name}", "0")
        with pytest.raises(ConfigurationError) as exc_info:
            get_settings().to_logger_config()
        assert exc_info.value.error_code == "CONFIG_VALIDATION_FAILED"

    def test_logger_from_settings_reports_configuration_error(self, monkeypatch):
        """Test building a logger from bad settings raises ConfigurationError"""
        monkeypatch.setenv("LUMBERLOG_FORMAT", "xml")
        with pytest.raises(ConfigurationError):
            logger_from_settings()
