"""Per-path route rules.

A route rule table maps patterns to overrides::

    {
        "/admin/**": {"index": False},
        "/blog/**": {"sitemap": {"changefreq": "daily"}},
        "/blog/archive": {"sitemap": {"priority": 0.1}},
    }

Every matching pattern contributes; more specific patterns win field
conflicts.  Keys other than ``index`` and ``sitemap`` belong to the host
and are ignored.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from simple_sitemap._internal.urls import without_base, without_trailing_slash
from simple_sitemap.merge import merge_entries
from simple_sitemap.routing.router import Router


@dataclass(frozen=True, slots=True)
class RouteRule:
    """Resolved rule for one path.

    Attributes:
        index: ``False`` excludes the path from the sitemap.
        sitemap: Entry fields merged under the entry (entry fields win).
    """

    index: bool | None = None
    sitemap: dict[str, Any] = field(default_factory=dict)

    @property
    def excluded(self) -> bool:
        return self.index is False


RouteRuleResolver: TypeAlias = Callable[[str], RouteRule]


def _rule_data(raw: Mapping[str, Any]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if raw.get("index") is not None:
        data["index"] = bool(raw["index"])
    if raw.get("sitemap"):
        data["sitemap"] = dict(raw["sitemap"])
    return data


class RouteRules:
    """Resolve the merged :class:`RouteRule` for a path.

    Instances are callable, so they satisfy :data:`RouteRuleResolver`.
    Paths may carry the application base path and a trailing slash;
    both are stripped before matching.
    """

    __slots__ = ("_base_url", "_router")

    def __init__(self, rules: Mapping[str, Mapping[str, Any]] | None = None, *, base_url: str = "/") -> None:
        self._base_url = base_url
        self._router = Router()
        for pattern, raw in (rules or {}).items():
            self._router.add(pattern, _rule_data(raw))
        self._router.compile()

    def resolve(self, path: str) -> RouteRule:
        relative = without_trailing_slash(without_base(without_trailing_slash(path), self._base_url))
        merged: dict[str, Any] = {}
        for match in self._router.match_all(relative):
            merged = merge_entries(merged, match.route.data)
        return RouteRule(index=merged.get("index"), sitemap=merged.get("sitemap", {}))

    def __call__(self, path: str) -> RouteRule:
        return self.resolve(path)

    def __len__(self) -> int:
        return len(self._router)
