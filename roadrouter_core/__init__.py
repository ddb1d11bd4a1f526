"""RoadRouter - Hierarchical path-pattern routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadRouter resolves request paths against a tree of routers:
- Route patterns with named, optionally constrained parameters
- Mounted sub-routers with namespaced middleware
- First-match and exhaustive resolution
- Reverse routing from names, paths and parameters
- Declarative route tables (YAML/JSON)

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              RoadRouter                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                          Resolution                                    │  │
│  │  Path ──▶ Router ──▶ Route / Mount ──▶ Child Router ──▶ RoutingResult │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Grammar      │  │     Route       │  │         Router              │ │
│  │                 │  │                 │  │                             │ │
│  │ - Segments      │  │ - Matcher       │  │ - Registration              │ │
│  │ - Parameters    │  │ - Parameters    │  │ - resolve / resolve_all     │ │
│  │ - Constraints   │  │ - make_uri      │  │ - navigate                  │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │   Middleware    │  │  Declarative    │  │         Config              │ │
│  │                 │  │                 │  │                             │ │
│  │ - Named         │  │ - YAML / JSON   │  │ - File / env                │ │
│  │ - Namespaces    │  │ - Groups        │  │ - Mount depth               │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
    from roadrouter_core import Router

    router = Router()
    router.get("users/:id", show_user).named("user")
    router.group("api", lambda api: api.get("items/:id(\\d+)", show_item))

    result = router.resolve("/api/items/7", "/api/items/7", "GET")
    result.all_params            # {"id": "7"}
    router.navigate(["user", {"id": 42}])   # "/users/42"
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from roadrouter_core.routing.grammar import (
    ParseError,
    ConstantSegment,
    ParameterSegment,
    parse,
)
from roadrouter_core.routing.route import Route, SymlinkRoute, MissingParameterError
from roadrouter_core.routing.result import RoutingResult
from roadrouter_core.routing.router import Router, RoutingException
from roadrouter_core.routing.declarative import build_router, load_router

# Middleware
from roadrouter_core.middleware.registry import MiddlewareRegistry

# Utils
from roadrouter_core.utils.config import RouterConfig, load_config

__all__ = [
    # Version
    "__version__",
    # Routing
    "ParseError",
    "ConstantSegment",
    "ParameterSegment",
    "parse",
    "Route",
    "SymlinkRoute",
    "MissingParameterError",
    "RoutingResult",
    "Router",
    "RoutingException",
    "build_router",
    "load_router",
    # Middleware
    "MiddlewareRegistry",
    # Utils
    "RouterConfig",
    "load_config",
]
