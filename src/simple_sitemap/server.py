"""ASGI application serving sitemap documents on demand.

Routes (relative to ``config.base_url``):

- ``/sitemap.xml`` -- the sitemap, or a redirect to the index when sharded
- ``/sitemap_index.xml`` -- the index (sharded only)
- ``/<name>-sitemap.xml`` -- one shard (sharded only)
- ``/__sitemap__/style.xsl`` -- the stylesheet (default ``xsl`` only)

Every request runs a fresh generation so dynamic sources stay current.
When ``site_url`` is unset the request's own origin is used.

Run with any ASGI server::

    app = SitemapApp(SitemapConfig.from_file("sitemap.toml"))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

import httpx

from simple_sitemap._internal.asgi import HTTPScope, Receive, Scope, Send
from simple_sitemap._internal.urls import with_base, without_base
from simple_sitemap.config import DEFAULT_XSL, SitemapConfig
from simple_sitemap.context import GenerationContext, SitemapStage
from simple_sitemap.errors import SitemapError
from simple_sitemap.generator import SITEMAP_FILE, SITEMAP_INDEX_FILE, SitemapGenerator
from simple_sitemap.routing.rules import RouteRuleResolver
from simple_sitemap.stylesheet import generate_xsl_stylesheet

logger = logging.getLogger("simple_sitemap.server")

XML_CONTENT_TYPE = "text/xml; charset=UTF-8"
CACHE_CONTROL = "max-age=600, must-revalidate"

_SHARD_SUFFIX = "-sitemap.xml"


@dataclass(frozen=True, slots=True)
class Response:
    """A complete HTTP response."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = XML_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")


def _body_allowed(status: int) -> bool:
    # 1xx, 204 and 304 responses carry no body
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI send() calls.

    With *head* set, headers describe the full body but none is sent.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": b"" if head else body})


def _xml(body: str) -> Response:
    return Response(body=body).with_header("Cache-Control", CACHE_CONTROL)


_NOT_FOUND = Response(body="Not Found", status=404, content_type="text/plain; charset=utf-8")


class SitemapApp:
    """ASGI app serving the sitemap documents of a :class:`SitemapConfig`.

    Args:
        config: Base configuration.
        route_rules: Per-path rule resolver passed to each generation.
        stages: Pipeline stages passed to each generation.
        client: HTTP client for endpoint sources, shared across requests.
        context: Run state whose prerendered routes and images seed
            every request's generation.
    """

    __slots__ = ("_client", "_context", "_route_rules", "_stages", "config")

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
        self._route_rules = route_rules
        self._stages = tuple(stages)
        self._client = client
        self._context = context

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        http = HTTPScope.from_scope(scope)
        response = await self.handle(http)
        await send_response(response, send, head=http.method == "HEAD")

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _generator(self, http: HTTPScope) -> SitemapGenerator:
        config = self.config
        if not config.site_url:
            config = config.with_site_url(http.request_origin())
        context = GenerationContext()
        if self._context is not None:
            context.prerendered_routes.extend(self._context.prerendered_routes)
            context.images.update(self._context.images)
        return SitemapGenerator(
            config,
            route_rules=self._route_rules,
            stages=self._stages,
            client=self._client,
            context=context,
        )

    async def handle(self, http: HTTPScope) -> Response:
        """Route one request to its document."""
        if http.method not in ("GET", "HEAD") or not self.config.enabled:
            return _NOT_FOUND
        path = without_base(http.path, self.config.base_url)

        if path == DEFAULT_XSL and self.config.xsl == DEFAULT_XSL:
            return _xml(generate_xsl_stylesheet())

        try:
            if path == f"/{SITEMAP_FILE}":
                if self.config.is_sharded:
                    location = with_base(f"/{SITEMAP_INDEX_FILE}", self.config.base_url)
                    return Response(status=301, content_type="text/plain; charset=utf-8").with_header(
                        "Location", location
                    )
                return _xml(await self._generator(http).render_sitemap())

            if not self.config.is_sharded:
                return _NOT_FOUND

            if path == f"/{SITEMAP_INDEX_FILE}":
                return _xml(await self._generator(http).render_index())

            if path.startswith("/") and path.endswith(_SHARD_SUFFIX):
                name = path[1 : -len(_SHARD_SUFFIX)]
                document = await self._generator(http).render_shard(name)
                if document is not None:
                    return _xml(document)
        except SitemapError:
            logger.exception("Sitemap generation failed for %s", http.path)
            return Response(body="Sitemap generation failed", status=500, content_type="text/plain; charset=utf-8")

        return _NOT_FOUND
