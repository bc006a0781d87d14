"""
Immutable field maps.

Every logger carries a read-only view of its contextual fields. Deriving a
logger never touches the parent's map: a fresh dict is built from the parent
fields plus the additions (additions win on key conflicts) and frozen behind a
``MappingProxyType``. Because nothing is ever mutated after construction, a
tree of derived loggers can be shared across threads without locking the
field data.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

EMPTY_FIELDS: Mapping[str, Any] = MappingProxyType({})


def merge_fields(
    base: Mapping[str, Any], extra: Optional[Mapping[str, Any]] = None
) -> Mapping[str, Any]:
    """
    Return a frozen union of ``base`` and ``extra``.

    Parent keys keep their original position; new keys follow in the order
    given. Values from ``extra`` override same-key values from ``base``.

    Raises:
        TypeError: If a key in ``extra`` is not a string
    """
    if not extra:
        return base if isinstance(base, MappingProxyType) else MappingProxyType(dict(base))

    merged = dict(base)
    for key, value in extra.items():
        if not isinstance(key, str):
            raise TypeError(f"field names must be str, got {type(key).__name__}")
        merged[key] = value
    return MappingProxyType(merged)
