"""
Severity model for Lumberlog.

Severities form a fixed total order, DEBUG < INFO < WARN < ERROR < FATAL, and
are compared as plain integers. The integer value doubles as an index into the
display-name and colour tables.

Values coming from outside the program (configuration files, environment
variables, CLI arguments) must go through ``Severity.parse`` so that an
unknown name or an out-of-range number is rejected with a
``ConfigurationError`` instead of silently behaving like a boundary level.

Example:
    >>> Severity.parse("warning")
    <Severity.WARN: 2>
    >>> Severity.ERROR > Severity.INFO
    True
    >>> Severity.INFO.label
    'INFO'
"""

from enum import IntEnum
from typing import Union

from lumberlog.core.exceptions.custom_exceptions import ConfigurationError

COLOR_RESET = "\033[0m"

_LABELS = ("DEBUG", "INFO", "WARN", "ERROR", "FATAL")

_COLORS = (
    "\033[36m",  # cyan
    "\033[32m",  # green
    "\033[33m",  # yellow
    "\033[31m",  # red
    "\033[35m",  # magenta
)

_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class Severity(IntEnum):
    """Ordered log severity. FATAL is maximal."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    @property
    def label(self) -> str:
        """Canonical uppercase name used in rendered records."""
        return _LABELS[self.value]

    @property
    def color(self) -> str:
        """ANSI escape sequence that starts this severity's colour."""
        return _COLORS[self.value]

    @classmethod
    def parse(cls, value: Union["Severity", int, str]) -> "Severity":
        """
        Convert external input into a Severity.

        Accepts a Severity, an integer in range, or a case-insensitive name
        (``WARNING`` and ``CRITICAL`` are accepted as aliases).

        Raises:
            ConfigurationError: If the value does not name one of the five
                severities
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, bool):
            raise ConfigurationError(
                f"Invalid severity: {value!r}",
                error_code="CONFIG_INVALID_SEVERITY",
                details={"value": value},
            )

        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ConfigurationError(
                    f"Severity out of range: {value}",
                    error_code="CONFIG_INVALID_SEVERITY",
                    details={"value": value, "valid": [s.value for s in cls]},
                ) from None

        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]

        raise ConfigurationError(
            f"Unknown severity: {value!r}",
            error_code="CONFIG_INVALID_SEVERITY",
            details={"value": value, "valid": list(_LABELS)},
        )
