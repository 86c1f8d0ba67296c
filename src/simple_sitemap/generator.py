"""Sitemap generation orchestration.

:class:`SitemapGenerator` ties the pieces together for one run:

1. collect URL inputs from every enabled source
2. run the merge pipeline (once per named shard when sharded)
3. apply caller-registered stages to each document's entries
4. serialize to ``sitemap.xml`` or ``sitemap_index.xml`` plus shards

Usage::

    config = SitemapConfig(site_url="https://example.com", pages_dirs=("pages",))
    generator = SitemapGenerator(config)
    await generator.write("dist")
"""

import dataclasses
import json
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import anyio
import httpx

from simple_sitemap._internal.urls import url_with_base
from simple_sitemap.builder import build_sitemap, build_sitemap_index, chunk_entries
from simple_sitemap.config import DEFAULT_XSL, SitemapConfig
from simple_sitemap.context import GenerationContext, RenderContext, SitemapStage
from simple_sitemap.entries import SitemapEntry, SitemapSources, generate_entries
from simple_sitemap.images import inject_discovered_images
from simple_sitemap.routing.rules import RouteRuleResolver
from simple_sitemap.sources import ROUTES_PAYLOAD_PATH, CollectedSources, collect_sources
from simple_sitemap.stylesheet import generate_xsl_stylesheet

logger = logging.getLogger("simple_sitemap.generator")

SITEMAP_FILE = "sitemap.xml"
SITEMAP_INDEX_FILE = "sitemap_index.xml"


def shard_filename(name: str) -> str:
    return f"{name}-sitemap.xml"


@dataclass(frozen=True, slots=True)
class Shard:
    """One sitemap document of a sharded run."""

    name: str
    config: SitemapConfig
    entries: list[SitemapEntry]


class SitemapGenerator:
    """Build sitemap documents for one run.

    Args:
        config: Base configuration.
        route_rules: Per-path rule resolver.  Defaults to one built from
            each document's ``config.route_rules``.
        stages: Functions applied, in order, to each document's entries
            just before serialization.
        client: HTTP client for endpoint sources.  A client is created
            per collection when omitted.
        context: Run state.  A fresh one is created when omitted.
    """

    __slots__ = ("_client", "_collected", "_route_rules", "_stages", "config", "context")

    def __init__(
        self,
        config: SitemapConfig,
        *,
        route_rules: RouteRuleResolver | None = None,
        stages: Sequence[SitemapStage] = (),
        client: httpx.AsyncClient | None = None,
        context: GenerationContext | None = None,
    ) -> None:
        self.config = config
        self.context = context if context is not None else GenerationContext()
        self._route_rules = route_rules
        self._client = client
        self._collected: CollectedSources | None = None
        built_in: list[SitemapStage] = []
        if config.discover_images:
            built_in.append(inject_discovered_images(self.context))
        self._stages: tuple[SitemapStage, ...] = (*built_in, *stages)

    # -- Collection --

    async def collect(self) -> CollectedSources:
        """Gather URL inputs from every source. Cached for the generator's lifetime."""
        if self._collected is None:
            prerendered = tuple(self.context.prerendered_routes)
            if self._client is not None:
                self._collected = await collect_sources(self.config, self._client, prerendered=prerendered)
            else:
                async with httpx.AsyncClient() as client:
                    self._collected = await collect_sources(self.config, client, prerendered=prerendered)
        return self._collected

    def _sources_for(self, config: SitemapConfig, collected: CollectedSources) -> SitemapSources:
        """Drop sources a shard override has switched off."""
        sources = collected.sources
        return dataclasses.replace(
            sources,
            dynamic=sources.dynamic if config.has_api_routes_url else (),
            pages=sources.pages if config.infer_static_pages_as_routes else (),
            content=sources.content if config.is_content_document_driven else (),
        )

    async def entries(self, config: SitemapConfig | None = None) -> list[SitemapEntry]:
        """Run the merge pipeline for *config* (the base config by default)."""
        config = config or self.config
        collected = await self.collect()
        if collected.excludes:
            config = dataclasses.replace(config, exclude=(*config.exclude, *collected.excludes))
        return generate_entries(
            self._sources_for(config, collected),
            config,
            route_rules=self._route_rules,
            now=self.context.now,
        )

    async def resolve_shards(self) -> list[Shard]:
        """Split entries into shards.

        ``sitemaps=True`` chunks the base entries into numbered shards.
        A mapping runs the pipeline once per named shard with that
        shard's overrides applied.
        """
        if not self.config.is_sharded:
            return [Shard(name="sitemap", config=self.config, entries=await self.entries())]
        if self.config.sitemaps is True:
            chunks = chunk_entries(await self.entries())
            return [Shard(name=name, config=self.config, entries=urls) for name, urls in chunks.items()]
        shards: list[Shard] = []
        for name in self.config.shard_names:
            config = self.config.for_shard(name)
            shards.append(Shard(name=name, config=config, entries=await self.entries(config)))
        return shards

    # -- Rendering --

    def apply_stages(self, entries: list[SitemapEntry], name: str, config: SitemapConfig) -> list[SitemapEntry]:
        render = RenderContext(sitemap_name=name, config=config, generation=self.context)
        for stage in self._stages:
            entries = stage(entries, render)
        return entries

    def _render_shard(self, shard: Shard) -> str:
        return build_sitemap(self.apply_stages(shard.entries, shard.name, shard.config), shard.config)

    async def render_sitemap(self) -> str:
        """The single ``sitemap.xml`` document of an unsharded run."""
        entries = await self.entries()
        return build_sitemap(self.apply_stages(entries, "sitemap", self.config), self.config)

    async def render_index(self) -> str:
        shards = await self.resolve_shards()
        chunks = {shard.name: shard.entries for shard in shards}
        return build_sitemap_index(chunks, self.config, now=self.context.now).xml

    async def render_shard(self, name: str) -> str | None:
        """One shard document, or ``None`` when *name* is not a shard."""
        for shard in await self.resolve_shards():
            if shard.name == name:
                return self._render_shard(shard)
        return None

    async def render(self) -> dict[str, str]:
        """Every document of this run, keyed by file name."""
        if not self.config.is_sharded:
            return {SITEMAP_FILE: await self.render_sitemap()}
        shards = await self.resolve_shards()
        chunks = {shard.name: shard.entries for shard in shards}
        documents = {SITEMAP_INDEX_FILE: build_sitemap_index(chunks, self.config, now=self.context.now).xml}
        for shard in shards:
            documents[shard_filename(shard.name)] = self._render_shard(shard)
        return documents

    # -- Output --

    def robots_sitemap_url(self) -> str:
        """Absolute URL to list in ``robots.txt``."""
        name = SITEMAP_INDEX_FILE if self.config.is_sharded else SITEMAP_FILE
        return url_with_base(name, self.config.base_url, self.config.site_url)

    async def write(self, output_dir: str | Path) -> dict[str, Path] | None:
        """Render and write every document under *output_dir*.

        Runs at most once per :class:`GenerationContext`.

        Returns:
            Written paths keyed by file name, or ``None`` when nothing
            was written (already generated, disabled, or no site URL).
        """
        if self.context.generated:
            logger.debug("Sitemap already generated for this run, skipping")
            return None
        if not self.config.enabled:
            logger.info("Sitemap generation is disabled")
            return None
        if not self.config.site_url:
            logger.error("Please set a site_url on the sitemap config to generate a sitemap")
            return None
        # Nothing touches disk until every document has rendered
        start = time.perf_counter()
        documents = await self.render()
        render_ms = (time.perf_counter() - start) * 1000
        self.context.generated = True

        out = anyio.Path(output_dir)
        await out.mkdir(parents=True, exist_ok=True)
        written: dict[str, Path] = {}

        if self.config.xsl == DEFAULT_XSL:
            target = out / DEFAULT_XSL.lstrip("/")
            await target.parent.mkdir(parents=True, exist_ok=True)
            await target.write_text(generate_xsl_stylesheet(), encoding="utf-8")
            written[DEFAULT_XSL.lstrip("/")] = Path(target)

        names = list(documents)
        for position, name in enumerate(names):
            start = time.perf_counter()
            target = out / name
            await target.write_text(documents[name], encoding="utf-8")
            written[name] = Path(target)
            elapsed = (time.perf_counter() - start) * 1000 + (render_ms if position == 0 else 0)
            branch = "└─" if position == len(names) - 1 else "├─"
            logger.info("%s /%s (%dms)", branch, name, elapsed)
        return written

    async def write_routes_cache(self, output_dir: str | Path) -> Path:
        """Write the raw URL list to ``__sitemap__/routes.json``.

        Holds prerendered routes, config URLs and inferred page paths,
        de-duplicated in that order, for a later run to serialize.
        """
        collected = await self.collect()
        urls: list[str] = []
        for raw in (*self.context.prerendered_routes, *self.config.urls, *collected.sources.pages):
            url = raw if isinstance(raw, str) else raw.get("url") or raw.get("loc")
            if url and url not in urls:
                urls.append(url)

        target = anyio.Path(output_dir) / ROUTES_PAYLOAD_PATH.lstrip("/")
        await target.parent.mkdir(parents=True, exist_ok=True)
        await target.write_text(json.dumps(urls), encoding="utf-8")
        logger.info("├─ %s (0ms)", ROUTES_PAYLOAD_PATH)
        return Path(target)
