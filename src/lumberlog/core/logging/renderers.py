"""
Record renderers.

A record reaches a renderer as a structlog-style event dict holding the
envelope (``time``, ``level``, ``message`` and, when resolved, ``caller``)
plus the logger's fields under the private key ``_fields``. Renderers follow
the structlog processor signature ``(logger, method_name, event_dict)`` and
return the final line without a trailing newline.

Two mutually exclusive renderers exist:

JSON:
    One flat object per line, produced by structlog's ``JSONRenderer``.
    User fields are merged after the envelope. A user field may replace
    ``caller``, but ``time``, ``level`` and ``message`` are protected: a
    colliding user value is kept under ``fields.<name>`` instead.

    {"time": "2026-10-18T12:00:00+02:00", "level": "INFO", "message": "ready"}

Text:
    ``[LEVEL] TIME[ CALLER] MESSAGE[ | k1=v1 k2=v2]``, optionally wrapped
    in the severity's ANSI colour. Colour is never applied to JSON output.

    [WARN] 2026-10-18T12:00:00+02:00 slow query | service=auth
"""

from datetime import datetime
from typing import Any, Callable, Dict, MutableMapping

import structlog

from lumberlog.core.logging.levels import COLOR_RESET, Severity

RESERVED_KEYS = frozenset({"time", "level", "message"})
FIELDS_KEY = "_fields"
RESERVED_PREFIX = "fields."

Renderer = Callable[[Any, str, MutableMapping[str, Any]], str]


def rfc3339_now() -> str:
    """Local wall-clock time as RFC3339 with seconds precision."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


class JSONRenderer:
    """Render an event dict as one line of JSON."""

    def __init__(self) -> None:
        self._renderer = structlog.processors.JSONRenderer(
            ensure_ascii=False, allow_nan=False
        )

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        fields = event_dict.pop(FIELDS_KEY, None) or {}
        for key, value in fields.items():
            if key in RESERVED_KEYS:
                event_dict[RESERVED_PREFIX + key] = value
            else:
                event_dict[key] = value
        return self._renderer(logger, method_name, event_dict)


class TextRenderer:
    """
    Render an event dict as a human-readable line.

    Args:
        color: Wrap the whole line in the severity's ANSI colour
    """

    def __init__(self, color: bool = False) -> None:
        self._color = color

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        line = f"[{event_dict['level']}] {event_dict['time']}"

        caller = event_dict.get("caller")
        if caller:
            line += f" {caller}"

        line += f" {event_dict['message']}"

        fields = event_dict.get(FIELDS_KEY)
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())

        if self._color:
            severity = Severity[method_name.upper()]
            line = severity.color + line + COLOR_RESET
        return line


def build_renderer(json_output: bool, color: bool) -> Renderer:
    """Select the renderer for a logger's configuration."""
    if json_output:
        return JSONRenderer()
    return TextRenderer(color=color)


def build_event(
    severity: Severity,
    message: str,
    caller: Any = None,
    fields: Any = None,
) -> Dict[str, Any]:
    """Assemble the envelope of a single record."""
    event: Dict[str, Any] = {
        "time": rfc3339_now(),
        "level": severity.label,
        "message": message,
    }
    if caller:
        event["caller"] = caller
    event[FIELDS_KEY] = fields or {}
    return event
