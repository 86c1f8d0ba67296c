"""Per-run generation state.

A :class:`GenerationContext` is created for each generation run and
passed explicitly through the pipeline.  It holds everything the host
reports while rendering pages (prerendered routes, discovered images)
and the guard that keeps a run from writing its files twice.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeAlias

from simple_sitemap._internal.urls import without_trailing_slash
from simple_sitemap.images import discover_images

if TYPE_CHECKING:
    from simple_sitemap.config import SitemapConfig
    from simple_sitemap.entries import SitemapEntry


@dataclass(slots=True)
class GenerationContext:
    """Mutable state for one generation run.

    Attributes:
        now: Timestamp used wherever ``auto_lastmod`` needs "now".
        prerendered_routes: Routes the host reported as rendered.
        images: Discovered image records keyed by route path.
        generated: Set once output files have been written.
    """

    now: datetime = field(default_factory=lambda: datetime.now(UTC))
    prerendered_routes: list[str] = field(default_factory=list)
    images: dict[str, list[dict[str, str]]] = field(default_factory=dict)
    generated: bool = False

    def add_prerendered_route(
        self,
        route: str,
        html: str | None = None,
        *,
        site_url: str = "",
        discover: bool = True,
    ) -> None:
        """Record a rendered route, harvesting its images when *html* is given.

        Routes that look like files (contain a ``.``) are ignored.
        """
        if "." in route:
            return
        if route not in self.prerendered_routes:
            self.prerendered_routes.append(route)
        if html and discover:
            found = discover_images(html, site_url)
            if found:
                self.images.setdefault(without_trailing_slash(route), []).extend(found)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """What a pipeline stage knows about the document being rendered."""

    sitemap_name: str
    config: SitemapConfig
    generation: GenerationContext


SitemapStage: TypeAlias = "Callable[[list[SitemapEntry], RenderContext], list[SitemapEntry]]"
