"""Pattern router with trie-based path matching.

Patterns are registered once and compiled into an immutable lookup
structure.  Unlike a request router, :meth:`Router.match_all` returns
*every* pattern that matches a path, ordered from least to most
specific, so callers can layer rule data on top of each other.

Pattern syntax::

    /blog            static
    /blog/:slug      one named segment
    /blog/*          one unnamed segment
    /blog/**         any number of segments, including none
    /blog/**:rest    same, captured as ``rest``
"""

from typing import Any

from simple_sitemap.errors import ConfigurationError
from simple_sitemap.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/blog"         -> [PathSegment("blog")]
        "/blog/:slug"   -> [PathSegment("blog"), PathSegment(":slug", is_param=True, ...)]
        "/blog/**"      -> [PathSegment("blog"), PathSegment("**", is_catch_all=True, ...)]
    """
    segments: list[PathSegment] = []
    unnamed = 0
    parts = [p for p in path.strip("/").split("/") if p]
    for i, part in enumerate(parts):
        if part == "**" or part.startswith("**:"):
            if i != len(parts) - 1:
                msg = f"Catch-all '**' must be the last segment in pattern {path!r}"
                raise ConfigurationError(msg)
            name = part[3:] or "_"
            segments.append(PathSegment(value=part, is_catch_all=True, param_name=name))
        elif part == "*":
            segments.append(PathSegment(value=part, is_param=True, param_name=f"_{unnamed}"))
            unnamed += 1
        elif part.startswith(":"):
            if len(part) == 1:
                msg = f"Empty parameter name in pattern {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            segments.append(PathSegment(value=part))
    return segments


def specificity(segments: list[PathSegment]) -> tuple[int, int, int]:
    """Rank a pattern: more static segments, more segments, no catch-all."""
    statics = sum(1 for seg in segments if not seg.is_param and not seg.is_catch_all)
    bounded = sum(1 for seg in segments if not seg.is_catch_all)
    terminal = 0 if segments and segments[-1].is_catch_all else 1
    return (statics, bounded, terminal)


class _TrieNode:
    """A node in the pattern trie. Mutable during compilation only."""

    __slots__ = ("catch_all_routes", "children", "param_child", "routes")

    def __init__(self) -> None:
        # Static segment children: "blog" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single-segment parameter child (":slug" and "*" share it)
        self.param_child: _ParamEdge | None = None
        # Catch-all routes consuming the rest of the path
        self.catch_all_routes: list[tuple[str, Route]] = []
        # Routes terminating at this node
        self.routes: list[tuple[tuple[str, ...], Route]] = []


class _ParamEdge:
    __slots__ = ("node",)

    def __init__(self) -> None:
        self.node = _TrieNode()


class Router:
    """Compiled pattern router.

    Usage::

        router = Router()
        router.add("/blog/**", {"changefreq": "daily"})
        router.add("/blog/:slug", {"priority": 0.8})
        router.compile()
        matches = router.match_all("/blog/hello")
    """

    __slots__ = ("_compiled", "_count", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def add(self, pattern: str, data: Any = None) -> None:
        """Add a pattern to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add patterns after compilation."
            raise RuntimeError(msg)

        segments = parse_path(pattern)
        route = Route(
            pattern=pattern,
            data=data,
            order=self._count,
            specificity=specificity(segments),
        )
        self._count += 1

        node = self._root
        param_names: list[str] = []
        for seg in segments:
            if seg.is_catch_all:
                node.catch_all_routes.append((seg.param_name or "_", route))
                return
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge()
                param_names.append(seg.param_name or "")
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        node.routes.append((tuple(param_names), route))

    def compile(self) -> None:
        """Freeze the router. No more patterns can be added."""
        self._compiled = True

    def match_all(self, path: str) -> list[RouteMatch]:
        """Return every pattern matching *path*, least specific first.

        Ties keep registration order.
        """
        parts = [p for p in path.split("?", 1)[0].strip("/").split("/") if p]
        found: list[RouteMatch] = []
        self._collect(self._root, parts, 0, [], found)
        found.sort(key=lambda m: (m.route.specificity, m.route.order))
        return found

    def match(self, path: str) -> RouteMatch | None:
        """Return the most specific match for *path*, or ``None``."""
        matches = self.match_all(path)
        return matches[-1] if matches else None

    def _collect(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: list[str],
        found: list[RouteMatch],
    ) -> None:
        """Recursively walk every trie branch compatible with *parts*."""
        for name, route in node.catch_all_routes:
            rest = "/".join(parts[index:])
            params = self._params_for(route, values)
            params[name] = rest
            found.append(RouteMatch(route=route, path_params=params))

        if index == len(parts):
            for names, route in node.routes:
                found.append(RouteMatch(route=route, path_params=dict(zip(names, values, strict=True))))
            return

        part = parts[index]
        if part in node.children:
            self._collect(node.children[part], parts, index + 1, values, found)
        if node.param_child is not None:
            self._collect(node.param_child.node, parts, index + 1, [*values, part], found)

    @staticmethod
    def _params_for(route: Route, values: list[str]) -> dict[str, str]:
        segments = [s for s in parse_path(route.pattern) if s.is_param]
        return {seg.param_name or "": value for seg, value in zip(segments, values, strict=False)}
