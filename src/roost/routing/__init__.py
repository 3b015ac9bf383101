"""Routing — method + path-template route table.

Routes are registered during startup and frozen before the first request.
"""

from roost.routing.route import PathSegment, Route, RouteMatch
from roost.routing.router import RouteTable, parse_template

__all__ = [
    "PathSegment",
    "Route",
    "RouteMatch",
    "RouteTable",
    "parse_template",
]
