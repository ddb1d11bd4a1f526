"""Declarative Routes - Build router trees from YAML/JSON definitions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Definition format:
    named_middleware:       # registered by name
      auth: check_auth
    use: [log_request]      # router-level middleware
    routes:
      - method: GET
        path: users/:id
        handler: show_user
        middleware: [auth]
        name: user
      - path: api           # entries with 'routes' become groups
        namespace: api
        routes:
          - {method: POST, path: items, handler: create_item}

Handler and middleware names refer to keys of the ``handlers`` mapping.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from roadrouter_core.routing.router import Router, RoutingException
from roadrouter_core.utils.config import RouterConfig

logger = logging.getLogger(__name__)


def _lookup(handlers: Mapping[str, Any], name: str, kind: str) -> Any:
    try:
        return handlers[name]
    except KeyError:
        raise RoutingException(f"Unknown {kind} {name!r} in route definition.") from None


def _lookup_all(handlers: Mapping[str, Any], names: Optional[List[str]]) -> List[Any]:
    return [_lookup(handlers, name, "middleware") for name in names or []]


def _populate(
    router: Router,
    definition: Mapping[str, Any],
    handlers: Mapping[str, Any],
    config: RouterConfig,
) -> Router:
    for name, key in (definition.get("named_middleware") or {}).items():
        router.register_middleware(name, _lookup(handlers, key, "middleware"))

    for middleware in _lookup_all(handlers, definition.get("use")):
        router.use(middleware)

    for entry in definition.get("routes") or []:
        if "path" not in entry:
            raise RoutingException(f"Route definition without a path: {entry!r}")

        if "routes" in entry:
            router.group(
                entry["path"],
                lambda child, entry=entry: _populate(child, entry, handlers, config),
                middleware=_lookup_all(handlers, entry.get("middleware")),
                name=entry.get("name"),
                namespace=entry.get("namespace"),
            )
            continue

        if "handler" not in entry:
            raise RoutingException(f"Route definition without a handler: {entry!r}")

        route = router.add_route(
            entry.get("method", config.default_method),
            entry["path"],
            _lookup(handlers, entry["handler"], "handler"),
            middleware=_lookup_all(handlers, entry.get("middleware")),
        )
        if entry.get("name"):
            route.named(entry["name"])

    return router


def build_router(
    definition: Mapping[str, Any],
    handlers: Mapping[str, Any],
    config: Optional[RouterConfig] = None,
) -> Router:
    """Build a router tree from a definition mapping.

    Raises:
        RoutingException: For unknown handler names or incomplete entries.
        ParseError: For malformed route patterns.
    """
    config = config or RouterConfig()
    router = _populate(Router(config=config), definition or {}, handlers, config)
    logger.info(f"Built router with {len(router.routes)} top-level route(s)")
    return router


def load_router(
    path: str,
    handlers: Mapping[str, Any],
    config: Optional[RouterConfig] = None,
) -> Router:
    """Load a route definition file (.yaml, .yml or .json)."""
    path_obj = Path(path)

    with open(path_obj, "r") as f:
        if path_obj.suffix == ".json":
            definition: Dict[str, Any] = json.load(f)
        elif path_obj.suffix in (".yaml", ".yml"):
            definition = yaml.safe_load(f)
        else:
            raise RoutingException(f"Unknown route definition format: {path}")

    logger.info(f"Loading routes from {path}")
    return build_router(definition, handlers, config)


__all__ = [
    "build_router",
    "load_router",
]
