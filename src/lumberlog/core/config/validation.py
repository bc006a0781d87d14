"""
Configuration validation for Lumberlog loggers.

Loggers are constructed from a ``LoggerConfig`` value. Validation happens
once, when the logger is built, so that a bad severity name or an impossible
rotation policy fails fast with a ``ConfigurationError`` instead of surfacing
on the first write.

Recognised options:
    threshold: Minimum severity written (default INFO)
    json_output: Emit newline-delimited JSON instead of text lines
    show_caller: Include the ``file:line`` of the application call site
    color: Colour text lines by severity (ignored for JSON)
    output_path: File to write to; empty means standard output
    rotation: Size, backup-count, age and compression policy for file output

Configuration Formats:
    ``ConfigLoader`` reads the same options from YAML (``.yaml``/``.yml``)
    or JSON files:

        threshold: WARN
        json_output: true
        output_path: /var/log/app/app.log
        rotation:
          max_size_mb: 50
          max_backups: 5
          max_age_days: 14
          compress: true

Example:
    >>> config = ConfigLoader.load_file("logging.yaml")
    >>> logger = new_logger(config)
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lumberlog.core.exceptions.custom_exceptions import ConfigurationError
from lumberlog.core.logging.levels import Severity


class RotationConfig(BaseModel):
    """Rotation policy for file output"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_size_mb: int = Field(default=100, gt=0)
    max_backups: int = Field(default=3, ge=1)
    max_age_days: int = Field(default=28, ge=0)
    compress: bool = False


class LoggerConfig(BaseModel):
    """Construction value for a logger"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: Severity = Severity.INFO
    json_output: bool = False
    show_caller: bool = False
    color: bool = False
    output_path: str = ""
    rotation: RotationConfig = RotationConfig()

    @field_validator("threshold", mode="before")
    @classmethod
    def validate_threshold(cls, v):
        # ConfigurationError is not a ValueError, so pydantic lets it through
        return Severity.parse(v)

    @field_validator("output_path", mode="before")
    @classmethod
    def validate_output_path(cls, v):
        if v is None:
            return ""
        if isinstance(v, Path):
            return str(v)
        return v


def validation_details(error: ValidationError) -> Dict[str, Any]:
    return {
        "errors": [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in error.errors()
        ]
    }


def validate_config(
    config: Union[LoggerConfig, Mapping[str, Any], None],
) -> LoggerConfig:
    """
    Turn ``config`` into a validated LoggerConfig.

    Raises:
        ConfigurationError: If any option is invalid
    """
    if config is None:
        return LoggerConfig()
    if isinstance(config, LoggerConfig):
        return config
    try:
        return LoggerConfig.model_validate(dict(config))
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid logger configuration: {e}",
            error_code="CONFIG_VALIDATION_FAILED",
            details=validation_details(e),
        ) from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid logger configuration: {e}") from e


class ConfigLoader:
    """Load logger configuration from files"""

    @staticmethod
    def load_data(file_path: str) -> Dict[str, Any]:
        """Read a YAML or JSON configuration file into a dict"""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                error_code="CONFIG_FILE_NOT_FOUND",
                details={"path": str(path)},
            )

        suffix = path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported file format: {path.suffix}",
                error_code="CONFIG_UNSUPPORTED_FORMAT",
                details={"path": str(path)},
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                error_code="CONFIG_INVALID_STRUCTURE",
                details={"path": str(path)},
            )
        return data

    @staticmethod
    def load_file(file_path: str) -> LoggerConfig:
        """Load and validate a configuration file"""
        return validate_config(ConfigLoader.load_data(file_path))
