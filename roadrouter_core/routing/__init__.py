"""Routing module - Pattern parsing, resolution and reverse routing."""

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

__all__ = [
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
]
