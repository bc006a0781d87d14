"""
Environment-driven logging settings for Lumberlog.

Applications that configure logging through the environment rather than
code can build their root logger from ``LoggingSettings``. Every option is
read from a ``LUMBERLOG_``-prefixed variable (or a ``.env`` file) and
converted into a validated ``LoggerConfig``.

Environment Variables:
    LUMBERLOG_LEVEL: Minimum severity (DEBUG/INFO/WARN/ERROR/FATAL)
    LUMBERLOG_FORMAT: Output format, ``text`` or ``json``
    LUMBERLOG_SHOW_CALLER: Include ``file:line`` of the call site
    LUMBERLOG_COLOR: Colour text output by severity
    LUMBERLOG_FILE_PATH: Log file path; unset means standard output
    LUMBERLOG_MAX_SIZE_MB: Rotate once the file reaches this size
    LUMBERLOG_MAX_BACKUPS: Number of rotated files to keep
    LUMBERLOG_MAX_AGE_DAYS: Delete rotated files older than this
    LUMBERLOG_COMPRESS: Gzip rotated files

Example:
    >>> settings = get_settings()
    >>> logger = new_logger(settings.to_logger_config())
"""

from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lumberlog.core.config.validation import (
    LoggerConfig,
    validate_config,
    validation_details,
)
from lumberlog.core.exceptions.custom_exceptions import ConfigurationError
from lumberlog.core.logging.levels import Severity


class LoggingSettings(BaseSettings):
    """
    Logging options loaded from the environment.

    Attributes:
        LEVEL: Minimum severity name
        FORMAT: ``text`` or ``json``
        SHOW_CALLER: Include the caller location
        COLOR: Colour text output
        FILE_PATH: Optional log file path
        MAX_SIZE_MB: Rotation size threshold in MiB
        MAX_BACKUPS: Rotated files retained
        MAX_AGE_DAYS: Maximum age of rotated files in days
        COMPRESS: Compress rotated files
    """

    LEVEL: str = "INFO"
    FORMAT: str = "text"
    SHOW_CALLER: bool = False
    COLOR: bool = False
    FILE_PATH: Optional[str] = None
    MAX_SIZE_MB: int = 100
    MAX_BACKUPS: int = 3
    MAX_AGE_DAYS: int = 28
    COMPRESS: bool = False

    @field_validator("LEVEL")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise the severity name; unknown names raise ConfigurationError."""
        return Severity.parse(v).label

    @field_validator("FORMAT")
    @classmethod
    def validate_format(cls, v: str) -> str:
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"FORMAT must be one of: {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="LUMBERLOG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def to_logger_config(self) -> LoggerConfig:
        """Convert these settings into a validated logger construction value."""
        return validate_config(
            {
                "threshold": self.LEVEL,
                "json_output": self.FORMAT == "json",
                "show_caller": self.SHOW_CALLER,
                "color": self.COLOR,
                "output_path": self.FILE_PATH or "",
                "rotation": {
                    "max_size_mb": self.MAX_SIZE_MB,
                    "max_backups": self.MAX_BACKUPS,
                    "max_age_days": self.MAX_AGE_DAYS,
                    "compress": self.COMPRESS,
                },
            }
        )


def get_settings() -> LoggingSettings:
    """
    Get logging settings from the current environment.

    Raises:
        ConfigurationError: If a LUMBERLOG_* variable has an invalid value
    """
    try:
        return LoggingSettings()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid logging settings: {e.error_count()} error(s)",
            error_code="CONFIG_VALIDATION_FAILED",
            details=validation_details(e),
        ) from e
