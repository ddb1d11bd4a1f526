"""Middleware Registry - Named middleware with dotted namespaces.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class MiddlewareRegistry:
    """Ordered mapping of names to middleware.

    Middleware values are opaque; the registry never calls them.

    Namespaces:
        A registry mounted under namespace ``auth`` re-exports ``check``
        as ``auth.check``. Namespaces nest, so mounting that parent under
        ``api`` yields ``api.auth.check``.
    """

    def __init__(self, middleware: Optional[Dict[str, Any]] = None):
        self._middleware: Dict[str, Any] = dict(middleware or {})

    def register(self, name: str, middleware: Any) -> "MiddlewareRegistry":
        """Register middleware under a name, replacing any previous entry."""
        if name in self._middleware:
            logger.debug(f"Replacing middleware {name!r}")
        self._middleware[name] = middleware
        return self

    def unregister(self, name: str) -> bool:
        """Remove middleware by name."""
        try:
            del self._middleware[name]
            return True
        except KeyError:
            return False

    def get(self, name: str, default: Any = None) -> Any:
        return self._middleware.get(name, default)

    def merge(
        self,
        other: "MiddlewareRegistry",
        namespace: Optional[str] = None,
    ) -> "MiddlewareRegistry":
        """Copy another registry's entries, prefixed by ``namespace.``."""
        prefix = f"{namespace}." if namespace else ""
        for name, middleware in other.items():
            self.register(f"{prefix}{name}", middleware)
        return self

    def resolve(self, names: Iterable[str]) -> List[Any]:
        """Look up several names, preserving order.

        Raises:
            KeyError: For an unregistered name.
        """
        return [self[name] for name in names]

    def names(self) -> List[str]:
        return list(self._middleware)

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._middleware.items())

    def copy(self) -> "MiddlewareRegistry":
        return MiddlewareRegistry(self._middleware)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._middleware[name]
        except KeyError:
            raise KeyError(f"Unknown middleware: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._middleware

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._middleware))

    def __len__(self) -> int:
        return len(self._middleware)


__all__ = [
    "MiddlewareRegistry",
]
