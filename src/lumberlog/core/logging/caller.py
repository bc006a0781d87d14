"""
Call-site resolution.

Instead of counting a fixed number of frames up from the logging internals,
the resolver walks the stack outward and reports the first frame that does
not belong to structlog, the standard ``logging`` package or Lumberlog's own
logging package. Helper layers inside the library can therefore be added or
removed without shifting the reported location away from the application's
call site.

Ignored packages are matched on module-name boundaries: ``logging`` skips
``logging`` and ``logging.handlers`` but not an application module called
``logging_helpers``.
"""

import os
import sys
from typing import Iterable, Optional, Tuple

_INTERNAL_PACKAGES = ("structlog", "logging", "lumberlog.core.logging")


def _in_package(module: str, packages: Tuple[str, ...]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in packages)


class CallerResolver:
    """
    Resolve ``file:line`` of the first application frame on the stack.

    Args:
        additional_ignores: Extra packages to skip, for applications that
            wrap the logger in their own helper module
    """

    def __init__(self, additional_ignores: Optional[Iterable[str]] = None) -> None:
        ignores = list(_INTERNAL_PACKAGES)
        if additional_ignores:
            ignores.extend(additional_ignores)
        self._ignores = tuple(ignores)

    def resolve(self) -> Optional[str]:
        """
        Return ``short_file_name:line`` for the calling application frame.

        Returns ``None`` when the stack cannot be inspected. Never raises.
        """
        try:
            frame = sys._getframe(1)
        except ValueError:
            return None

        while frame is not None:
            module = frame.f_globals.get("__name__") or ""
            if not _in_package(module, self._ignores):
                filename = os.path.basename(frame.f_code.co_filename)
                return f"{filename}:{frame.f_lineno}"
            frame = frame.f_back
        return None
