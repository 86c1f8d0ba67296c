"""URL sources fetched over HTTP or read from disk.

Each source contributes a list of URL inputs (strings or partial
entries).  Endpoints are requested from the origin serving the site:
``config.host`` when set, else ``config.site_url``.

A source that fails (network error, bad status, non-JSON body, or a
payload that is not a list) contributes nothing and logs a warning.
With ``strict_sources`` enabled the failure raises :class:`SourceError`
instead.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from simple_sitemap._internal.urls import join_url, strip_base_suffix
from simple_sitemap.config import SitemapConfig
from simple_sitemap.entries import SitemapSources, UrlLike
from simple_sitemap.errors import SourceError
from simple_sitemap.pages.discovery import pages_to_entries, resolve_pages_routes

logger = logging.getLogger("simple_sitemap.sources")

ROUTES_PAYLOAD_PATH = "/__sitemap__/routes.json"

_HTML_DOCTYPE = "<!DOCTYPE html>"


@dataclass(frozen=True, slots=True)
class CollectedSources:
    """Everything gathered for one run.

    Attributes:
        sources: URL inputs per source.
        excludes: Extra exclude paths from ignored page files.
    """

    sources: SitemapSources
    excludes: tuple[str, ...] = ()


def _origin(config: SitemapConfig) -> str:
    if config.host:
        return config.host.rstrip("/")
    return strip_base_suffix(config.site_url, config.base_url)


def endpoint_url(endpoint: str, config: SitemapConfig) -> str:
    """Absolute URL of a site endpoint, honouring the base path."""
    return join_url(_origin(config), config.base_url, endpoint)


def _fail(config: SitemapConfig, source: str, endpoint: str, detail: str) -> list[UrlLike]:
    if config.strict_sources:
        raise SourceError(source=source, endpoint=endpoint, detail=detail)
    logger.warning("Ignoring %s source %s: %s", source, endpoint, detail)
    return []


async def fetch_url_list(
    client: httpx.AsyncClient,
    config: SitemapConfig,
    *,
    source: str,
    endpoint: str,
    reject_html: bool = False,
) -> list[UrlLike]:
    """GET a JSON list of URL inputs from *endpoint*.

    Args:
        client: HTTP client used for the request.
        config: Run configuration (origin, timeout, strictness).
        source: Source name used in logs and errors.
        endpoint: Site-relative path of the endpoint.
        reject_html: Treat an HTML page (a host fallback rendering)
            as "no payload" rather than an error.
    """
    if not (config.host or config.site_url):
        return _fail(config, source, endpoint, "no site URL or host to fetch from")

    url = endpoint_url(endpoint, config)
    try:
        response = await client.get(
            url,
            headers={"Accept": "application/json"},
            timeout=config.fetch_timeout,
        )
    except httpx.HTTPError as exc:
        return _fail(config, source, url, f"request failed: {exc}")

    if reject_html and response.text.lstrip().startswith(_HTML_DOCTYPE):
        logger.debug("%s returned HTML, treating as empty", url)
        return []

    if response.status_code != 200:
        return _fail(config, source, url, f"HTTP {response.status_code}")

    try:
        data: Any = response.json()
    except ValueError:
        return _fail(config, source, url, "response is not JSON")

    if not isinstance(data, list):
        return _fail(config, source, url, f"expected a JSON list, got {type(data).__name__}")

    urls: list[UrlLike] = []
    for item in data:
        if isinstance(item, str | Mapping):
            urls.append(item)
        else:
            logger.warning("Dropping invalid %s URL from %s: %r", source, url, item)

    logger.debug("Fetched %d URLs from %s", len(urls), url)
    return urls


async def fetch_dynamic_urls(client: httpx.AsyncClient, config: SitemapConfig) -> list[UrlLike]:
    return await fetch_url_list(client, config, source="dynamic", endpoint=config.dynamic_urls_api_endpoint)


async def fetch_prerendered_routes(client: httpx.AsyncClient, config: SitemapConfig) -> list[UrlLike]:
    return await fetch_url_list(
        client, config, source="prerendered", endpoint=ROUTES_PAYLOAD_PATH, reject_html=True
    )


async def fetch_content_urls(client: httpx.AsyncClient, config: SitemapConfig) -> list[UrlLike]:
    return await fetch_url_list(client, config, source="content", endpoint=config.content_urls_endpoint)


async def collect_sources(
    config: SitemapConfig,
    client: httpx.AsyncClient,
    *,
    prerendered: Sequence[UrlLike] = (),
) -> CollectedSources:
    """Gather every enabled source for one run.

    Args:
        config: Run configuration.
        client: HTTP client for endpoint sources.
        prerendered: Routes recorded during this run.  The remote
            routes payload is appended when enabled.
    """
    prerendered_urls = list(prerendered)
    if config.has_prerendered_routes_payload:
        prerendered_urls.extend(await fetch_prerendered_routes(client, config))

    dynamic: list[UrlLike] = []
    if config.has_api_routes_url:
        dynamic = await fetch_dynamic_urls(client, config)

    pages: list[UrlLike] = []
    excludes: tuple[str, ...] = ()
    if config.pages_dirs:
        discovered = await resolve_pages_routes(config.pages_dirs, config.extensions, config.ignore)
        excludes = discovered.excludes
        if config.infer_static_pages_as_routes:
            pages = list(pages_to_entries(discovered.routes, auto_lastmod=config.auto_lastmod))
        logger.debug("Inferred %d page routes", len(pages))

    content: list[UrlLike] = []
    if config.is_content_document_driven:
        content = await fetch_content_urls(client, config)

    return CollectedSources(
        sources=SitemapSources(
            prerendered=tuple(prerendered_urls),
            dynamic=tuple(dynamic),
            pages=tuple(pages),
            content=tuple(content),
        ),
        excludes=excludes,
    )
