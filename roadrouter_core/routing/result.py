"""Routing Result - Outcome of a successful resolution.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from roadrouter_core.routing.route import Route

if TYPE_CHECKING:
    from roadrouter_core.routing.router import Router


@dataclass(frozen=True)
class RoutingResult:
    """Resolved route, chained through mounts down to the matched leaf.

    Results compare structurally: same route and router objects, equal
    parameters, tail and nested result. The raw regex match is not
    compared.

    Structure:
        RoutingResult(route=<mount "api">, nested=
            RoutingResult(route=<GET "users/:id">, nested=None))
    """

    route: Route
    router: "Router"
    params: Dict[str, str] = field(default_factory=dict)
    nested: Optional["RoutingResult"] = None
    tail: str = ""
    match: Optional[re.Match] = field(default=None, compare=False, repr=False)

    @property
    def deepest(self) -> "RoutingResult":
        result = self
        while result.nested is not None:
            result = result.nested
        return result

    @property
    def deepest_route(self) -> Route:
        return self.deepest.route

    @property
    def deepest_router(self) -> "Router":
        return self.deepest.router

    @property
    def shallowest_route(self) -> Route:
        return self.route

    @property
    def handlers(self) -> List[Any]:
        return list(self.route.handlers)

    @property
    def all_handlers(self) -> List[Any]:
        """Router middleware then route handlers, for every level top-down."""
        handlers: List[Any] = []
        result: Optional[RoutingResult] = self

        while result is not None:
            handlers.extend(result.router.middleware)
            handlers.extend(result.route.handlers)
            result = result.nested

        return handlers

    @property
    def all_params(self) -> Dict[str, str]:
        """Parameters of every level; deeper levels win on name clashes."""
        params: Dict[str, str] = {}
        result: Optional[RoutingResult] = self

        while result is not None:
            params.update(result.params)
            result = result.nested

        return params


__all__ = [
    "RoutingResult",
]
