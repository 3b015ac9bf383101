"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route template.

    Literal:  ``/users``  (is_param=False)
    Param:    ``/:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``handler`` is the bound handler the adapter layer produced at
    registration time.
    """

    method: str
    template: str
    handler: Any
    segments: tuple[PathSegment, ...] = ()

    @property
    def shape(self) -> tuple[str | None, ...]:
        """Template with parameter names erased.

        ``/users/:id`` and ``/users/:name`` share a shape and would
        match exactly the same requests.
        """
        return tuple(None if seg.is_param else seg.value for seg in self.segments)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution."""

    route: Route
    params: Mapping[str, str]
