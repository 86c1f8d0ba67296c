"""Routing: pattern trie shared by URL filters and route rules.

Patterns are compiled into a trie once and matched in O(path-depth).
"""

from simple_sitemap.routing.route import PathSegment, Route, RouteMatch
from simple_sitemap.routing.router import Router
from simple_sitemap.routing.rules import RouteRule, RouteRules

__all__ = ["PathSegment", "Route", "RouteMatch", "RouteRule", "RouteRules", "Router"]
