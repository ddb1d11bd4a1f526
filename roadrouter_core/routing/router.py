"""Router - Hierarchical route resolution engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from roadrouter_core.middleware.registry import MiddlewareRegistry
from roadrouter_core.routing.result import RoutingResult
from roadrouter_core.routing.route import Handler, Route, SymlinkRoute
from roadrouter_core.utils.config import RouterConfig
from roadrouter_core.utils.helpers import join_path, strip_slashes

logger = logging.getLogger(__name__)


class RoutingException(Exception):
    """Raised when a link cannot be resolved or the route tree is unusable."""


class Router:
    """Request Router.

    Features:
    - Pattern-based routing (users/:id, files/:name(.+))
    - Mounted sub-routers with namespaced middleware
    - First-match resolution in registration order
    - Exhaustive resolution of every matching route
    - Reverse routing from names, paths and parameters

    Usage:
        router = Router()
        router.get("users/:id", show_user).named("user")
        router.group("api", lambda api: api.post("items", create_item))

        result = router.resolve("/users/42", "/users/42", "GET")
        if result:
            handlers, params = result.all_handlers, result.all_params

        router.navigate(["user", {"id": 42}])  # "/users/42"
    """

    def __init__(
        self,
        debug: Optional[bool] = None,
        config: Optional[RouterConfig] = None,
    ):
        self.config = config or RouterConfig()
        self.debug = self.config.debug if debug is None else debug
        self._routes: List[Route] = []
        self._mounted: Dict[str, Router] = {}
        self._middleware: List[Any] = []
        self._request_middleware = MiddlewareRegistry()
        self._lock = threading.RLock()

    @property
    def routes(self) -> Tuple[Route, ...]:
        """Snapshot of the routes in precedence order."""
        with self._lock:
            return tuple(self._routes)

    @property
    def mounted(self) -> Mapping[str, "Router"]:
        with self._lock:
            return MappingProxyType(dict(self._mounted))

    @property
    def middleware(self) -> Tuple[Any, ...]:
        return tuple(self._middleware)

    @property
    def request_middleware(self) -> MiddlewareRegistry:
        """Named middleware, including re-exports from mounted routers."""
        return self._request_middleware

    def _log(self, message: str, debug: bool = False) -> None:
        level = logging.INFO if (self.debug or debug) else logging.DEBUG
        logger.log(level, message)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        middleware: Optional[Iterable[Any]] = None,
    ) -> Route:
        """Add a route.

        Args:
            method: HTTP method (case-insensitive), or '*' for any method
            path: Route pattern
            handler: Request handler, stored first in the handler chain
            middleware: Handlers appended after ``handler``

        Raises:
            ParseError: If the pattern is malformed.
        """
        handlers = [handler]
        if middleware:
            handlers.extend(middleware)

        route = Route(path, method=method, handlers=handlers)

        with self._lock:
            self._routes.append(route)

        logger.debug(f"Added route {route.method} /{route.path}")
        return route

    def all(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add a route that responds to any method."""
        return self.add_route("*", path, handler, middleware=middleware)

    def get(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add GET route."""
        return self.add_route("GET", path, handler, middleware=middleware)

    def post(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add POST route."""
        return self.add_route("POST", path, handler, middleware=middleware)

    def put(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add PUT route."""
        return self.add_route("PUT", path, handler, middleware=middleware)

    def patch(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add PATCH route."""
        return self.add_route("PATCH", path, handler, middleware=middleware)

    def delete(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add DELETE route."""
        return self.add_route("DELETE", path, handler, middleware=middleware)

    def head(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add HEAD route."""
        return self.add_route("HEAD", path, handler, middleware=middleware)

    def options(self, path: str, handler: Handler, middleware: Optional[Iterable[Any]] = None) -> Route:
        """Add OPTIONS route."""
        return self.add_route("OPTIONS", path, handler, middleware=middleware)

    def mount(
        self,
        path: str,
        router: "Router",
        namespace: Optional[str] = None,
    ) -> SymlinkRoute:
        """Delegate every path under ``path`` to another router.

        The child's named middleware is copied into this router, prefixed
        with ``namespace.`` when a namespace is given.

        Raises:
            RoutingException: If ``router`` is this router or already
                mounts it, directly or further down.
        """
        if router is self or router._reaches(self):
            raise RoutingException("A router cannot be mounted inside itself.")

        route = SymlinkRoute(path, name=namespace, router=router)

        with self._lock:
            self._request_middleware.merge(router.request_middleware, namespace)
            self._mounted[route.path] = router
            self._routes.append(route)

        logger.debug(f"Mounted router at /{route.path}")
        return route

    def _reaches(self, target: "Router") -> bool:
        """Whether ``target`` is mounted anywhere below this router."""
        pending = [self]
        seen = set()

        while pending:
            router = pending.pop()
            if id(router) in seen:
                continue
            seen.add(id(router))

            for route in router.routes:
                if isinstance(route, SymlinkRoute):
                    if route.router is target:
                        return True
                    pending.append(route.router)

        return False

    def group(
        self,
        path: str,
        callback: Callable[["Router"], Any],
        middleware: Optional[Iterable[Any]] = None,
        name: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> SymlinkRoute:
        """Create a child router, populate it via ``callback`` and mount it."""
        router = Router(debug=self.debug, config=self.config)
        router._middleware.extend(middleware or [])
        callback(router)

        route = self.mount(path, router, namespace=namespace)
        if name is not None:
            route.name = name
        return route

    def use(self, middleware: Any) -> "Router":
        """Append middleware run before every route of this router."""
        with self._lock:
            self._middleware.append(middleware)
        return self

    def register_middleware(self, name: str, middleware: Any) -> "Router":
        """Assign a middleware to a name."""
        with self._lock:
            self._request_middleware.register(name, middleware)
        return self

    def remove(self, route: Route) -> bool:
        """Remove a route (by identity)."""
        with self._lock:
            for i, existing in enumerate(self._routes):
                if existing is route:
                    self._routes.pop(i)
                    if isinstance(route, SymlinkRoute):
                        if self._mounted.get(route.path) is route.router:
                            del self._mounted[route.path]
                    return True
        return False

    def clone(self) -> "Router":
        """Structural copy of the whole tree.

        Patterns and handler chains are shared; route lists, mounts and
        compiled-matcher caches are fresh.
        """
        router = Router(debug=self.debug, config=self.config)

        with self._lock:
            router._middleware.extend(self._middleware)
            router._request_middleware = self._request_middleware.copy()
            routes = list(self._routes)

        for route in routes:
            if isinstance(route, SymlinkRoute):
                symlink = route.clone()
                router._mounted[symlink.path] = symlink.router
                router._routes.append(symlink)
            else:
                router._routes.append(route.clone())

        return router

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(
        self,
        full_path: str,
        path: str,
        method: str = "GET",
    ) -> Optional[RoutingResult]:
        """Find the first route matching the path and method.

        Routes are tried in registration order. The first mount whose
        prefix matches ends the scan at this level, whether or not its
        router resolves the rest of the path.

        Args:
            full_path: Complete request path, for diagnostics
            path: Path left to resolve at this router
            method: HTTP method

        Returns:
            RoutingResult chain, or None when nothing matches

        Raises:
            RoutingException: If mounts nest deeper than max_mount_depth.
        """
        return self._resolve(
            strip_slashes(full_path),
            strip_slashes(path),
            method.upper(),
            depth=0,
            debug=self.debug,
        )

    def _resolve(
        self,
        full_path: str,
        path: str,
        method: str,
        depth: int,
        debug: bool,
    ) -> Optional[RoutingResult]:
        if depth > self.config.max_mount_depth:
            raise RoutingException(
                f"Mount depth exceeds {self.config.max_mount_depth} "
                f'while resolving "/{full_path}".'
            )

        self._log(f'Now resolving {method} "/{path}", full path: "/{full_path}"', debug)

        for route in self.routes:
            if isinstance(route, SymlinkRoute):
                match = route.match_head(path)
                if match is None:
                    continue

                tail = strip_slashes(path[match.end():])
                self._log(f'Matched head "{match.group(0)}" to /{route.path}. Tail: "{tail}"', debug)

                nested = route.router._resolve(
                    full_path, tail, method, depth + 1, debug or route.router.debug
                )
                if nested is None:
                    self._log(f'Could not resolve path "/{path}".', debug)
                    return None

                return self._resolved(
                    path,
                    RoutingResult(
                        route=route,
                        router=self,
                        params=route.parse_parameters(path),
                        nested=nested,
                        tail=tail,
                        match=match,
                    ),
                    debug,
                )

            if route.method == "*" or route.method == method:
                match = route.match(path)
                if match is not None:
                    return self._resolved(
                        path,
                        RoutingResult(
                            route=route,
                            router=self,
                            params=route.parse_parameters(path),
                            match=match,
                        ),
                        debug,
                    )

        self._log(f'Could not resolve path "/{path}".', debug)
        return None

    def _resolved(self, path: str, result: RoutingResult, debug: bool) -> RoutingResult:
        self._log(f'Resolved "/{path}" to {result.deepest_route}', debug)
        return result

    def resolve_all(
        self,
        full_path: str,
        path: str,
        method: str = "GET",
    ) -> List[RoutingResult]:
        """Find every route matching the path and method.

        Works on a clone: each match's leaf route is removed from the
        clone and resolution is repeated until nothing, or an already
        collected result, comes back. This router is left untouched.
        """
        router = self.clone()
        results: List[RoutingResult] = []
        result = router.resolve(full_path, path, method)

        while result is not None:
            if result in results:
                break
            results.append(result)

            result.deepest_router.remove(result.deepest_route)
            result = router.resolve(full_path, path, method)

        self._log(
            f'Results of {method.upper()} "/{strip_slashes(full_path)}": '
            f"{[str(r.deepest_route) for r in results]}"
        )
        return results

    # ------------------------------------------------------------------
    # Reverse routing
    # ------------------------------------------------------------------

    def _find_link(self, link: str) -> Optional[Route]:
        routes = self.routes

        for route in routes:
            if route.name == link:
                return route

        path = strip_slashes(link)
        for route in routes:
            if route.path == path or route.match(path) is not None:
                return route

        # Leading segments of a pattern, e.g. "users" for "users/:id"
        segments = path.split("/")
        for route in routes:
            if route.path.split("/")[: len(segments)] == segments:
                return route

        return None

    def navigate(self, link_params: Iterable[Any], absolute: bool = True) -> str:
        """Generate a URI from route names, paths, routes and parameters.

        Each item is one of:
        - str: a route name, or a path as it was declared
        - Route: appended as-is
        - Mapping: parameters filled into the preceding route

        Resolving a mount narrows later lookups to the mounted router.

        Example:
            router.navigate(["users/:id", {"id": "1337"}, "profile"])

        Raises:
            RoutingException: If an item cannot be resolved.
            MissingParameterError: If a parameter value is missing.
        """
        segments: List[str] = []
        search: Router = self
        last_route: Optional[Route] = None

        for param in link_params:
            if isinstance(param, str):
                route = search._find_link(param)
                if route is None:
                    raise RoutingException(f'Cannot resolve route for link param "{param}".')
            elif isinstance(param, Route):
                route = param
            elif isinstance(param, Mapping):
                if last_route is None:
                    raise RoutingException(
                        "Maps in link params must be preceded by a Route or String."
                    )
                segments.pop()
                segments.append(strip_slashes(last_route.make_uri(param)))
                continue
            else:
                raise RoutingException(
                    f"Link param {param!r} is not Route, String, or Mapping."
                )

            segments.append(route.path)
            last_route = route
            if isinstance(route, SymlinkRoute):
                search = route.router

        return join_path(segments, absolute=absolute)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def dump_tree(
        self,
        callback: Optional[Callable[[str], Any]] = None,
        header: str = "Dumping route tree:",
        tab: str = "  ",
        show_matchers: bool = False,
    ) -> str:
        """Render the route hierarchy as indented text.

        The text is passed to ``callback`` if given, otherwise logged at DEBUG.
        """
        lines: List[str] = []
        if header:
            lines.append(header)
        lines.append("<root>")

        def dump_router(router: Router, depth: int) -> None:
            indent = tab * depth
            for route in router.routes:
                path = route.path or "/"
                if isinstance(route, SymlinkRoute):
                    lines.append(f"{indent}- {path}")
                    dump_router(route.router, depth + 1)
                    continue

                line = f"{indent}- {route.method} {path}"
                if show_matchers:
                    line += f" ({route.matcher.pattern})"
                lines.append(f"{line} => {len(route.handlers)} handler(s)")

        dump_router(self, 1)
        tree = "\n".join(lines)

        if callback is not None:
            callback(tree)
        else:
            logger.debug(tree)
        return tree

    def __repr__(self) -> str:
        return f"<Router routes={len(self._routes)} mounted={len(self._mounted)}>"


__all__ = [
    "Router",
    "RoutingException",
]
