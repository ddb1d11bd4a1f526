"""Middleware module - Named middleware registries."""

from roadrouter_core.middleware.registry import MiddlewareRegistry

__all__ = [
    "MiddlewareRegistry",
]
