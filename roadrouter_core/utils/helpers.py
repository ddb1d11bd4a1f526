"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Iterable

_STRAY_SLASHES = re.compile(r"(^/+)|(/+$)")


def strip_slashes(path: str) -> str:
    """Remove leading and trailing slashes; inner slashes are kept."""
    return _STRAY_SLASHES.sub("", path)


def join_path(parts: Iterable[str], absolute: bool = False) -> str:
    """Join path parts with single separators between them.

    Each part is trimmed of stray slashes first. Empty parts are kept so
    that a route's own empty segments survive the join.
    """
    path = strip_slashes("/".join(strip_slashes(p) for p in parts))
    if absolute:
        return f"/{path}"
    return path


__all__ = [
    "strip_slashes",
    "join_path",
]
