"""
Lumberlog - Leveled, Structured Logging with Rotating Output

Lumberlog is a small synchronous logging facility. It filters calls by
severity, enriches them with contextual fields and the application call site,
renders them as text or newline-delimited JSON, and writes each record as one
atomic line to standard output or a rotating file.

Modules:
    core.logging: The record pipeline and the Logger itself
    core.config: Construction values, file loading and environment settings
    core.exceptions: Error hierarchy
    cli: Command-line interface for emitting records from scripts

Example:
    >>> from lumberlog import LoggerConfig, new_logger
    >>> logger = new_logger(LoggerConfig(threshold="DEBUG", show_caller=True))
    >>> logger.with_fields({"service": "auth"}).warn("slow query")
    [WARN] 2026-10-18T12:00:00+02:00 app.py:3 slow query | service=auth
"""

__version__ = "0.1.0"
__author__ = "Lumberlog"
__description__ = (
    "Leveled, structured logging with text and JSON rendering, contextual "
    "fields, call-site capture and size/age rotated file output."
)

from lumberlog.core.logging.logger import (
    Logger,
    default_logger,
    get_logger,
    logger_from_settings,
    new_logger,
)
from lumberlog.core.logging.levels import Severity
from lumberlog.core.logging.context import (
    REQUEST_ID,
    USER_ID,
    ContextKey,
    RequestContext,
)
from lumberlog.core.config.validation import LoggerConfig, RotationConfig
from lumberlog.core.exceptions.custom_exceptions import (
    ConfigurationError,
    LumberlogError,
)

__all__ = [
    "ConfigurationError",
    "ContextKey",
    "Logger",
    "LoggerConfig",
    "LumberlogError",
    "REQUEST_ID",
    "RequestContext",
    "RotationConfig",
    "Severity",
    "USER_ID",
    "default_logger",
    "get_logger",
    "logger_from_settings",
    "new_logger",
]
