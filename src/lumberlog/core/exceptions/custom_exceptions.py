"""
Custom exception hierarchy for Lumberlog error handling.

Lumberlog distinguishes two kinds of failure. Problems with how a logger is
configured are raised eagerly, at construction time, so that a misconfigured
application fails before it serves traffic. Problems on the write path
(formatting, serialisation, I/O on the sink) are never raised to the caller at
all: logging is best-effort and must not destabilise the application.

Only the first kind is represented here.

Exception Hierarchy:
    LumberlogError (base)
    └── ConfigurationError: Invalid severity, rotation policy, output path
        or configuration file

Example:
    >>> try:
    ...     logger = new_logger({"threshold": "LOUD"})
    ... except ConfigurationError as e:
    ...     print(e.error_code, e.details)
"""

from typing import Any, Dict, Optional


class LumberlogError(Exception):
    """
    Base exception class for all Lumberlog errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier, defaults to the
            class name
        details (Dict[str, Any]): Additional contextual information, such as
            the offending configuration value
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(LumberlogError):
    """
    Raised when a logger cannot be constructed from its configuration.

    Common scenarios:
        - Unknown severity name or out-of-range severity number
        - Non-positive rotation size or backup count
        - Output path that cannot be opened for appending
        - Missing, unreadable or unsupported configuration file

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown severity 'LOUD'",
        ...     error_code="CONFIG_INVALID_SEVERITY",
        ...     details={"value": "LOUD"},
        ... )
    """

    pass
