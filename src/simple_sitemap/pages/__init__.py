"""File-based route inference.

Page file names define routes.  Each path segment is tokenized into
static text and parameters, and the files are assembled into a route
tree that is flattened into the static paths a sitemap can list.

Conventions:

    pages/
      index.vue              # /
      about.vue              # /about
      blog.vue               # /blog (owns nested blog/ routes)
      blog/
        index.vue            # /blog
        [slug].vue           # /blog/:slug (dynamic, not in sitemap)
      [[lang]]/docs.vue      # /:lang?/docs (optional)
      [...path].vue          # /:path(.*)* (catch-all)
"""

from simple_sitemap.pages.discovery import DiscoveredPages, pages_to_entries, resolve_pages_routes
from simple_sitemap.pages.tokenizer import route_path, segment_name, tokenize
from simple_sitemap.pages.tree import build_routes, flatten_routes, normalise_pages_for_sitemap, prepare_routes
from simple_sitemap.pages.types import PageRoute, RouteNode, RouteToken, TokenType

__all__ = [
    "DiscoveredPages",
    "PageRoute",
    "RouteNode",
    "RouteToken",
    "TokenType",
    "build_routes",
    "flatten_routes",
    "normalise_pages_for_sitemap",
    "pages_to_entries",
    "prepare_routes",
    "resolve_pages_routes",
    "route_path",
    "segment_name",
    "tokenize",
]
