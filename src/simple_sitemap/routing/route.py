"""PathSegment, Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:    ``/blog``      (is_param=False)
    Param:     ``/:slug``     (is_param=True, param_name="slug")
    Wildcard:  ``/*``         (is_param=True, param_name="_0")
    Catch-all: ``/**``        (is_catch_all=True, param_name="_")
    Named:     ``/**:path``   (is_catch_all=True, param_name="path")
    """

    value: str
    is_param: bool = False
    is_catch_all: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A registered pattern with the data attached to it."""

    pattern: str
    data: Any = None
    order: int = 0
    specificity: tuple[int, int, int] = (0, 0, 0)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful pattern match."""

    route: Route
    path_params: dict[str, str]
