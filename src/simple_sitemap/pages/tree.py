"""Route tree construction from page file paths.

``build_routes`` turns a sorted list of page files into a nested tree of
:class:`RouteNode` objects, merging shared prefixes (``blog.vue`` owns
``blog/post.vue``) and mapping ``index`` files onto their directory.
``normalise_pages_for_sitemap`` flattens that tree into the fully static
routes that can appear in a sitemap.
"""

import re
from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import Any

from simple_sitemap._internal.urls import join_url, with_leading_slash
from simple_sitemap.merge import merge_on_key
from simple_sitemap.pages.tokenizer import route_path, segment_name, tokenize
from simple_sitemap.pages.types import PageRoute, RouteNode

_INDEX_SUFFIX_RE = re.compile(r"-index$")

# Catch-all routes are terminal: they cannot own nested routes
_CATCHALL_SUFFIX = "(.*)*"


def _relative_segments(file: str, base_dir: str) -> list[str]:
    """Split *file* relative to *base_dir*, without its extension."""
    relative = PurePosixPath(file).relative_to(PurePosixPath(base_dir))
    return list(relative.with_suffix("").parts)


def build_routes(files: Iterable[str], base_dir: str) -> list[RouteNode]:
    """Build a route tree from page files under *base_dir*.

    Args:
        files: Page file paths, sorted lexicographically.
        base_dir: Pages directory the paths are relative to.

    Returns:
        Top-level route nodes after :func:`prepare_routes`.

    Raises:
        ParseError: If any path segment is malformed.
    """
    routes: list[RouteNode] = []

    for file in files:
        route = RouteNode(name="", path="", file=str(file))
        parent = routes

        for segment in _relative_segments(str(file), base_dir):
            tokens = tokenize(segment)
            name = segment_name(tokens)
            route.name = f"{route.name}-{name}" if route.name else name

            child = next(
                (
                    node
                    for node in parent
                    if node.name == route.name and not node.path.endswith(_CATCHALL_SUFFIX)
                ),
                None,
            )
            if child is not None:
                parent = child.children
                route.path = ""
            elif name == "index" and not route.path:
                route.path += "/"
            elif name != "index":
                route.path += route_path(tokens)

        parent.append(route)

    return prepare_routes(routes)


def prepare_routes(routes: list[RouteNode], parent: RouteNode | None = None) -> list[RouteNode]:
    """Finalise names and paths of a freshly built tree, in place.

    - strips a trailing ``-index`` from names
    - makes nested paths relative to their parent
    - drops the name of any node owning an empty-path child, which
      becomes the canonical route for that position
    """
    for route in routes:
        if route.name:
            route.name = _INDEX_SUFFIX_RE.sub("", route.name)
        if parent is not None and route.path.startswith("/"):
            route.path = route.path[1:]
        if route.children:
            route.children = prepare_routes(route.children, route)
        if any(child.path == "" for child in route.children):
            route.name = None
    return routes


def _unpack(route: RouteNode, path: str) -> list[dict[str, Any]]:
    record = {"path": path, "file": route.file, "name": route.name}
    flat = [record]
    for child in route.children:
        flat.extend(_unpack(child, with_leading_slash(join_url(path, child.path))))
    return flat


def is_dynamic_path(path: str) -> bool:
    """Whether *path* has a parameter segment (``:`` or ``[``)."""
    return ":" in path or "[" in path


def flatten_routes(routes: Iterable[RouteNode]) -> list[PageRoute]:
    """Flatten route trees depth-first, resolving child paths against parents."""
    flat: list[PageRoute] = []
    for route in routes:
        flat.extend(
            PageRoute(path=record["path"], file=record["file"], name=record["name"])
            for record in _unpack(route, route.path)
        )
    return flat


def normalise_pages_for_sitemap(routes: Iterable[RouteNode]) -> list[PageRoute]:
    """Flatten route trees into sitemap-eligible page routes.

    Routes with a dynamic segment are dropped.  Duplicate paths are
    merged, later files winning, first-seen order kept.
    """
    static = [
        {"path": page.path, "file": page.file, "name": page.name}
        for page in flatten_routes(routes)
        if not is_dynamic_path(page.path)
    ]
    return [
        PageRoute(path=record["path"], file=record["file"], name=record.get("name"))
        for record in merge_on_key(static, "path")
    ]
