"""Utils module - Utility functions."""

from roadrouter_core.utils.config import (
    RouterConfig,
    load_config,
)
from roadrouter_core.utils.helpers import (
    strip_slashes,
    join_path,
)

__all__ = [
    "RouterConfig",
    "load_config",
    "strip_slashes",
    "join_path",
]
