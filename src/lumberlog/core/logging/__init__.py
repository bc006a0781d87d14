"""
Lumberlog Logging Module - Leveled, Structured Application Logging.

This package holds the log-record pipeline: severity filtering, field
composition, caller resolution and dual-format rendering, written to a
single locked sink.

Components:
    - levels: Ordered severities with display names and ANSI colours
    - context: Request-scoped context values and the well-known keys
    - fields: Immutable, copy-on-derive field maps
    - caller: Resolution of the application call site
    - renderers: JSON and text renderers (structlog processor signature)
    - sinks: Standard output and rotating file destinations
    - logger: Logger core, factories and the process-wide default logger

Output Formats:
    - JSON: One object per line for log aggregation systems
    - Text: ``[LEVEL] TIME [CALLER] MESSAGE | k=v`` for humans, optionally
      coloured by severity

Example:
    >>> from lumberlog.core.logging.logger import get_logger
    >>>
    >>> logger = get_logger()
    >>> logger.info("worker %d started", 3)
    >>>
    >>> # Derive a logger with persistent fields for request tracking
    >>> request_logger = logger.with_fields({"request_id": "req-456"})
    >>> request_logger.info("Processing started")
    >>> request_logger.warn("Processing slow: %.2fs", 1.25)
"""
