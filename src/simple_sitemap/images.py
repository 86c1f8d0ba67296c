"""Image discovery from rendered HTML.

Scans the ``<main>`` element of a prerendered page for ``<img src>``
values and turns them into sitemap image records.  The
:func:`inject_discovered_images` stage attaches what was collected to
the matching entries just before serialization.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlsplit

from simple_sitemap._internal.urls import without_base, without_trailing_slash
from simple_sitemap.merge import merge_entries

if TYPE_CHECKING:
    from simple_sitemap.context import GenerationContext, RenderContext, SitemapStage
    from simple_sitemap.entries import SitemapEntry

_MAIN_RE = re.compile(r"<main[^>]*>([\s\S]*?)</main>", re.IGNORECASE)
_IMG_SRC_RE = re.compile(r"<img[^>]+src=\"([^\">]+)\"", re.IGNORECASE)


def discover_images(html: str, site_url: str) -> list[dict[str, str]]:
    """Return ``{"loc": absolute_src}`` for each image inside ``<main>``."""
    main = _MAIN_RE.search(html)
    if main is None or "<img" not in main.group(1).lower():
        return []
    base = site_url.rstrip("/") + "/" if site_url else ""
    return [{"loc": urljoin(base, src) if base else src} for src in _IMG_SRC_RE.findall(main.group(1))]


def _route_key(loc: str, base_url: str) -> str:
    path = urlsplit(loc).path or "/"
    return without_trailing_slash(without_base(path, base_url))


def inject_discovered_images(context: GenerationContext) -> SitemapStage:
    """Build a stage merging images collected on *context* into entries.

    Images already present on an entry are kept; discovered ones are
    appended when their ``loc`` is new.
    """

    def stage(entries: list[SitemapEntry], render: RenderContext) -> list[SitemapEntry]:
        if not context.images:
            return entries
        result: list[SitemapEntry] = []
        for entry in entries:
            images = context.images.get(_route_key(entry["loc"], render.config.base_url))
            if images:
                entry = merge_entries({"images": images}, entry)
            result.append(entry)
        return result

    return stage
