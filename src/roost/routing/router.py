"""Route table with specificity-ordered template matching.

Routes are registered during startup and the table is frozen with
``compile()`` before requests are served; resolution only reads.
"""

import logging

from roost.errors import ConfigurationError, MethodNotAllowed, NotFound
from roost.http.path import decode_segment, split_segments
from roost.routing.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("roost.routing")


def parse_template(template: str) -> tuple[PathSegment, ...]:
    """Parse a route template into segments.

    Examples::

        "/test"         -> (PathSegment("test"),)
        "/test/:table"  -> (PathSegment("test"), PathSegment(":table", is_param=True, ...))
        "/"             -> ()

    Raises ``ConfigurationError`` for an unnamed placeholder or a
    parameter name used twice.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_segments(template):
        if not part.startswith(":"):
            segments.append(PathSegment(value=part))
            continue
        name = part[1:]
        if not name:
            msg = f"Route template {template!r} has a placeholder without a name."
            raise ConfigurationError(msg)
        if name in seen:
            msg = f"Route template {template!r} repeats parameter {name!r}."
            raise ConfigurationError(msg)
        seen.add(name)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))
    return tuple(segments)


def _specificity(route: Route) -> tuple[int, ...]:
    # Literal (0) sorts before param (1) at the leftmost differing position.
    return tuple(1 if seg.is_param else 0 for seg in route.segments)


def _bind(route: Route, parts: tuple[str, ...]) -> dict[str, str] | None:
    params: dict[str, str] = {}
    for seg, part in zip(route.segments, parts, strict=True):
        if seg.is_param:
            params[seg.param_name or ""] = part
        elif seg.value != part:
            return None
    return params


class RouteTable:
    """Method + template route table.

    Usage::

        table = RouteTable()
        table.add(Route("GET", "/test", handler))
        table.add(Route("GET", "/test/:table", handler))
        table.compile()
        match = table.resolve("GET", "/test/rows")
        match.params  # {"table": "rows"}

    Candidates share the request's method and segment count. A literal
    segment matches exactly (case-sensitive); a placeholder matches any
    non-empty segment. When several routes match, the one with a literal
    at the leftmost differing position wins, then registration order.
    """

    __slots__ = ("_by_shape", "_compiled", "_method_not_allowed", "_routes")

    def __init__(self, *, method_not_allowed: bool = False) -> None:
        self._routes: list[Route] = []
        self._by_shape: dict[tuple[str, tuple[str | None, ...]], Route] = {}
        self._compiled = False
        self._method_not_allowed = method_not_allowed

    def add(self, route: Route) -> Route:
        """Register *route*, parsing its template if needed.

        Raises ``ConfigurationError`` on a duplicate (method, template)
        or once the table is compiled.
        """
        if self._compiled:
            msg = "Cannot add routes after the route table is compiled."
            raise ConfigurationError(msg)

        if not route.segments:
            route = Route(
                method=route.method.upper(),
                template=route.template,
                handler=route.handler,
                segments=parse_template(route.template),
            )

        key = (route.method, route.shape)
        existing = self._by_shape.get(key)
        if existing is not None:
            msg = (
                f"Duplicate route {route.method} {route.template!r}: "
                f"already registered as {existing.method} {existing.template!r}."
            )
            raise ConfigurationError(msg)

        self._by_shape[key] = route
        self._routes.append(route)
        logger.debug("registered %s %s", route.method, route.template)
        return route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def resolve(self, method: str, path: str) -> RouteMatch:
        """Resolve a request method and path to a route and its params.

        *path* is percent-encoded as sent; each segment is decoded after
        splitting, so an encoded ``/`` stays inside one parameter.

        Raises ``NotFound`` if no route matches. With
        ``method_not_allowed`` enabled, raises ``MethodNotAllowed`` when
        the path matches routes registered only for other methods.
        """
        method = method.upper()
        parts = tuple(decode_segment(part) for part in split_segments(path.partition("?")[0]))

        best: RouteMatch | None = None
        best_rank: tuple[int, ...] = ()
        other_methods: set[str] = set()

        for route in self._routes:
            if len(route.segments) != len(parts):
                continue
            params = _bind(route, parts)
            if params is None:
                continue
            if route.method != method:
                other_methods.add(route.method)
                continue
            rank = _specificity(route)
            if best is None or rank < best_rank:
                best = RouteMatch(route=route, params=params)
                best_rank = rank

        if best is not None:
            return best
        if self._method_not_allowed and other_methods:
            raise MethodNotAllowed(frozenset(other_methods))
        raise NotFound(f"No route matches {method} {path!r}")
