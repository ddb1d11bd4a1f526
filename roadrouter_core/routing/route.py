"""Route - A single routable pattern.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from roadrouter_core.routing.grammar import (
    ConstantSegment,
    Segment,
    compile_segments,
    parse,
)
from roadrouter_core.utils.helpers import strip_slashes

if TYPE_CHECKING:
    from roadrouter_core.routing.router import Router

# Handlers and middleware are opaque to the engine.
Handler = Any


class MissingParameterError(Exception):
    """Raised when a URI cannot be built because a parameter is absent."""

    def __init__(self, name: str, path: str = ""):
        self.name = name
        self.path = path
        super().__init__(f'Missing parameter "{name}".')


@dataclass(eq=False)
class Route:
    """Route definition.

    The pattern is parsed once on construction. The regex matcher is
    compiled on first use and never rebuilt; extracted parameters are
    memoized per literal path.
    """

    path: str
    method: str = "GET"
    handlers: List[Handler] = field(default_factory=list)
    name: Optional[str] = None
    segments: Optional[Tuple[Segment, ...]] = field(default=None, repr=False)

    _matcher: Optional[re.Pattern] = field(default=None, init=False, repr=False)
    _cache: Dict[str, Dict[str, str]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self):
        self.path = strip_slashes(self.path)
        self.method = self.method.upper()
        if self.segments is None:
            self.segments = parse(self.path)

    @classmethod
    def join(cls, a: "Route", b: "Route") -> "Route":
        """Create a route for ``a``'s path followed by ``b``'s path."""
        path = strip_slashes(f"{a.path}/{b.path}")
        return cls(path, method=b.method, handlers=b.handlers)

    @property
    def matcher(self) -> re.Pattern:
        """Compiled matcher, anchored at both ends."""
        if self._matcher is None:
            self._matcher = re.compile(compile_segments(self.segments))
        return self._matcher

    def named(self, name: str) -> "Route":
        """Set the route name and return the route."""
        self.name = name
        return self

    def match(self, path: str) -> Optional[re.Match]:
        """Match a trimmed path against the full pattern."""
        return self.matcher.match(path)

    def _parameter_match(self, path: str) -> Optional[re.Match]:
        return self.match(path)

    def parse_parameters(self, path: str) -> Dict[str, str]:
        """Extract parameters from a path.

        Returns an empty dict when the path does not match.
        """
        params = self._cache.get(path)
        if params is None:
            match = self._parameter_match(path)
            params = match.groupdict() if match else {}
            self._cache[path] = params
        return dict(params)

    def make_uri(self, params: Mapping[str, Any]) -> str:
        """Build a concrete path by filling in parameter values.

        Raises:
            MissingParameterError: If a parameter has no value.
        """
        parts = []

        for segment in self.segments:
            if isinstance(segment, ConstantSegment):
                parts.append(segment.text)
            else:
                if segment.name not in params:
                    raise MissingParameterError(segment.name, self.path)
                parts.append(str(params[segment.name]))

        return "/".join(parts)

    def clone(self) -> "Route":
        """Copy sharing pattern and handlers, with empty caches."""
        return Route(
            self.path,
            method=self.method,
            handlers=self.handlers,
            name=self.name,
            segments=self.segments,
        )

    def __str__(self) -> str:
        return f"{self.method} {self.path} => {self.handlers}"


@dataclass(eq=False)
class SymlinkRoute(Route):
    """Mount point delegating the rest of a path to a child router."""

    method: str = "*"
    router: Optional["Router"] = None

    _head: Optional[re.Pattern] = field(default=None, init=False, repr=False)

    @property
    def head(self) -> re.Pattern:
        """Prefix matcher: the full matcher without its end anchor."""
        if self._head is None:
            self._head = re.compile(compile_segments(self.segments, anchored=False))
        return self._head

    def match_head(self, path: str) -> Optional[re.Match]:
        return self.head.match(path)

    def _parameter_match(self, path: str) -> Optional[re.Match]:
        return self.match_head(path)

    def clone(self, router: Optional["Router"] = None) -> "SymlinkRoute":
        """Copy pointing at ``router`` (default: a clone of the child)."""
        symlink = SymlinkRoute(
            self.path,
            handlers=self.handlers,
            name=self.name,
            segments=self.segments,
            router=router if router is not None else self.router.clone(),
        )
        symlink._head = self._head
        return symlink

    def __str__(self) -> str:
        return f"{self.path} => {self.router!r}"


__all__ = [
    "Handler",
    "Route",
    "SymlinkRoute",
    "MissingParameterError",
]
