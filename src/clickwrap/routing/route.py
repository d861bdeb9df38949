"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Literal:  ``/versions``   (is_param=False)
    Param:    ``/{version}``  (is_param=True, param_name="version")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created while the site is assembled, compiled into the router at
    freeze time. Never mutated or removed.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful path match."""

    route: Route
    path_params: dict[str, str]

    @property
    def handler(self) -> Callable[..., Any]:
        return self.route.handler
