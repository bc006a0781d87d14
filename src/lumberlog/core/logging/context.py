"""
Request-scoped context values for log enrichment.

A ``RequestContext`` is a small immutable key/value store that application
code passes explicitly down its call chain (typically one per inbound
request). Keys are ``ContextKey`` objects rather than bare strings, so two
libraries cannot collide by accident on a key like ``"id"``.

Only the keys listed in ``WELL_KNOWN_KEYS`` are ever copied into log fields
by ``Logger.with_context``. Everything else in the context is ignored.

Example:
    >>> ctx = RequestContext().with_value(REQUEST_ID, "req-42")
    >>> ctx = ctx.with_value(USER_ID, 7)
    >>> request_logger = logger.with_context(ctx)
    >>> request_logger.info("order placed")  # carries request_id and user_id
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class ContextKey:
    """Identity-compared key for values stored in a RequestContext."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


REQUEST_ID = ContextKey("request_id")
USER_ID = ContextKey("user_id")

WELL_KNOWN_KEYS: Tuple[ContextKey, ...] = (REQUEST_ID, USER_ID)


class RequestContext:
    """Immutable mapping from ContextKey to value."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[ContextKey, Any]] = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def with_value(self, key: ContextKey, value: Any) -> "RequestContext":
        """Return a new context with ``key`` set; the receiver is unchanged."""
        values = dict(self._values)
        values[key] = value
        return RequestContext(values)

    def get(self, key: ContextKey, default: Any = None) -> Any:
        return self._values.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k.name}={v!r}" for k, v in self._values.items())
        return f"RequestContext({items})"


ContextLike = Union[RequestContext, Mapping[str, Any], None]


def extract_context_fields(ctx: ContextLike) -> Dict[str, Any]:
    """
    Collect the well-known values present in ``ctx``.

    Keys that are absent or hold ``None`` are omitted. A plain mapping keyed
    by field name is accepted as well, for request state that already lives
    in a dict. Never raises.
    """
    fields: Dict[str, Any] = {}
    if ctx is None:
        return fields

    for key in WELL_KNOWN_KEYS:
        if isinstance(ctx, RequestContext):
            value = ctx.get(key)
        elif isinstance(ctx, Mapping):
            value = ctx.get(key.name)
        else:
            value = None
        if value is not None:
            fields[key.name] = value
    return fields
