"""Data models for file-based route inference.

Tokens are immutable.  ``RouteNode`` is mutable while the tree is being
assembled and is flattened into frozen ``PageRoute`` records for the
sitemap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenType(Enum):
    """Kinds of token a path segment can contain."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    OPTIONAL = "optional"
    CATCHALL = "catchall"


@dataclass(frozen=True, slots=True)
class RouteToken:
    """One typed run of characters within a path segment.

    ``about``      -> ``RouteToken(STATIC, "about")``
    ``[id]``       -> ``RouteToken(DYNAMIC, "id")``
    ``[[lang]]``   -> ``RouteToken(OPTIONAL, "lang")``
    ``[...slug]``  -> ``RouteToken(CATCHALL, "slug")``
    """

    type: TokenType
    value: str


@dataclass(slots=True)
class RouteNode:
    """A route in the tree built from page files.

    Attributes:
        name: Dash-joined segment names (``blog-post``).  ``None`` once a
            child with an empty path has become the canonical route for
            this position.
        path: Route path.  Absolute at the top level, relative to the
            parent once nested.
        file: Page file this route was inferred from.
        children: Nested routes owned by this node.
    """

    name: str | None
    path: str
    file: str
    children: list[RouteNode] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PageRoute:
    """A flattened, sitemap-eligible route with its source file."""

    path: str
    file: str
    name: str | None = None
