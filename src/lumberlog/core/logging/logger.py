"""
Leveled, structured logger for Lumberlog.

This module ties the pipeline together. Each severity call goes through the
same synchronous sequence on the calling thread:

    idle -> threshold check -> [drop | lock -> caller -> render -> write] -> idle

The threshold check comes first, so a call below the threshold costs no
formatting and no lock acquisition. Past it, the sink's lock is held for the
whole caller-resolution, render and write sequence, and released on every
exit path. Any ``Exception`` raised inside that sequence (a bad format
string, an unserialisable value, a full disk) is swallowed: the record is
dropped and the application carries on.

FATAL is different from every other severity: after the record is written
and the sink flushed, the process is terminated with ``os._exit(1)``. The
call never returns, ``finally`` blocks do not run and atexit handlers are
skipped.

Functions:
    new_logger(config): Build a root logger from a configuration
    default_logger(): Process-wide logger, created on first use
    get_logger(**fields): Default logger, optionally with fields bound
    logger_from_settings(settings): Build a logger from environment settings

Example:
    >>> from lumberlog import LoggerConfig, new_logger
    >>> logger = new_logger(LoggerConfig(threshold="DEBUG", json_output=True))
    >>> auth_logger = logger.with_fields({"service": "auth"})
    >>> auth_logger.info("user %s logged in", "alice")
    {"time": "...", "level": "INFO", "message": "user alice logged in", "service": "auth"}
"""

import copy
import logging
import os
import threading
from typing import Any, Dict, Mapping, Optional, Union

from lumberlog.core.config.validation import LoggerConfig, validate_config
from lumberlog.core.logging.caller import CallerResolver
from lumberlog.core.logging.context import ContextLike, extract_context_fields
from lumberlog.core.logging.fields import EMPTY_FIELDS, merge_fields
from lumberlog.core.logging.levels import Severity
from lumberlog.core.logging.renderers import Renderer, build_event, build_renderer
from lumberlog.core.logging.sinks import RotatingFileWriter, Sink, StreamSink

diagnostics = logging.getLogger("lumberlog")


def open_sink(config: LoggerConfig) -> Sink:
    """Create the sink described by ``config``: a rotating file or stdout."""
    if config.output_path:
        rotation = config.rotation
        return RotatingFileWriter(
            config.output_path,
            max_size_mb=rotation.max_size_mb,
            max_backups=rotation.max_backups,
            max_age_days=rotation.max_age_days,
            compress=rotation.compress,
        )
    return StreamSink()


class Logger:
    """
    Leveled logger with immutable configuration and fields.

    A root logger owns its sink. Loggers derived through ``with_fields`` or
    ``with_context`` share the root's configuration, sink and sink lock, and
    get their own frozen copy of the fields.

    Args:
        config: Logger configuration; a mapping is validated into
            ``LoggerConfig``
        sink: Destination to write to; when omitted, one is opened from
            ``config.output_path``

    Raises:
        ConfigurationError: If the configuration is invalid or the output
            path is unusable
    """

    def __init__(
        self,
        config: Union[LoggerConfig, Mapping[str, Any], None] = None,
        sink: Optional[Sink] = None,
    ) -> None:
        self._config = validate_config(config)
        self._sink = sink if sink is not None else open_sink(self._config)
        self._fields: Mapping[str, Any] = EMPTY_FIELDS
        self._renderer: Renderer = build_renderer(
            self._config.json_output, self._config.color
        )
        self._caller: Optional[CallerResolver] = (
            CallerResolver() if self._config.show_caller else None
        )

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def fields(self) -> Mapping[str, Any]:
        """Read-only view of this logger's fields."""
        return self._fields

    def _derive(self, fields: Mapping[str, Any]) -> "Logger":
        child = copy.copy(self)
        child._fields = fields
        return child

    def with_fields(
        self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> "Logger":
        """
        Return a logger whose fields are this logger's plus ``fields``.

        New values win over existing ones with the same key; keyword
        arguments win over the mapping. The receiver is not modified.
        """
        extra: Dict[str, Any] = dict(fields or {})
        extra.update(kwargs)
        return self._derive(merge_fields(self._fields, extra))

    def with_context(self, ctx: ContextLike) -> "Logger":
        """
        Return a logger enriched with the well-known values found in ``ctx``.

        Only ``request_id`` and ``user_id`` are looked up; absent or ``None``
        values are skipped. Never raises.
        """
        return self.with_fields(extract_context_fields(ctx))

    def is_enabled_for(self, severity: Severity) -> bool:
        return severity >= self._config.threshold

    def _log(self, severity: Severity, fmt: str, args: tuple) -> None:
        if severity < self._config.threshold:
            return

        with self._sink.lock:
            try:
                message = fmt % args if args else str(fmt)
                caller = self._caller.resolve() if self._caller else None
                event = build_event(severity, message, caller, self._fields)
                line = self._renderer(self, severity.name.lower(), event)
                self._sink.write(line)
            except Exception:
                diagnostics.debug("dropped %s record", severity.label, exc_info=True)

    def debug(self, fmt: str, *args: Any) -> None:
        self._log(Severity.DEBUG, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        self._log(Severity.INFO, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        self._log(Severity.WARN, fmt, args)

    warning = warn

    def error(self, fmt: str, *args: Any) -> None:
        self._log(Severity.ERROR, fmt, args)

    def fatal(self, fmt: str, *args: Any) -> None:
        """
        Write a FATAL record, then terminate the process with exit status 1.

        This call never returns. Unlike ``sys.exit`` it cannot be caught:
        no ``finally`` blocks, context managers or atexit handlers run.
        """
        self._log(Severity.FATAL, fmt, args)
        try:
            with self._sink.lock:
                self._sink.flush()
        except Exception:
            diagnostics.debug("flush before exit failed", exc_info=True)
        os._exit(1)

    def close(self) -> None:
        """Release the sink. Derived loggers share it and become unusable."""
        with self._sink.lock:
            self._sink.close()


def new_logger(config: Union[LoggerConfig, Mapping[str, Any], None] = None) -> Logger:
    """Build a root logger; see ``LoggerConfig`` for the options."""
    return Logger(config)


DEFAULT_CONFIG = LoggerConfig(
    threshold=Severity.INFO,
    json_output=False,
    show_caller=True,
    color=True,
    output_path="",
)

_default_logger: Optional[Logger] = None
_default_lock = threading.Lock()


def default_logger() -> Logger:
    """
    Return the process-wide default logger, creating it on first use.

    Configuration: INFO threshold, text output, caller shown, colour on,
    standard output. The instance lives for the rest of the process and is
    never torn down. Prefer passing explicit loggers where possible; this is
    a convenience accessor.
    """
    global _default_logger
    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                _default_logger = Logger(DEFAULT_CONFIG)
    return _default_logger


def get_logger(**fields: Any) -> Logger:
    """Default logger, with ``fields`` bound when given."""
    logger = default_logger()
    if fields:
        return logger.with_fields(fields)
    return logger


def logger_from_settings(settings: Any = None) -> Logger:
    """Build a logger from ``LoggingSettings`` (read from the environment by default)."""
    from lumberlog.core.config.settings import get_settings

    if settings is None:
        settings = get_settings()
    return Logger(settings.to_logger_config())
