"""Tests for simple_sitemap.server — the ASGI sitemap app."""

import httpx
import pytest

from simple_sitemap.config import SitemapConfig
from simple_sitemap.context import GenerationContext
from simple_sitemap.server import CACHE_CONTROL, Response, SitemapApp, send_response


def _client(app: SitemapApp) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def _app(**options: object) -> SitemapApp:
    sources = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    return SitemapApp(SitemapConfig(**options), client=sources)  # type: ignore[arg-type]


class TestSitemapRoute:
    @pytest.mark.anyio
    async def test_serves_sitemap(self) -> None:
        async with _client(_app(site_url="https://example.com", urls=("/about",))) as client:
            response = await client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/xml; charset=UTF-8"
        assert response.headers["cache-control"] == CACHE_CONTROL
        assert "<loc>https://example.com/about</loc>" in response.text

    @pytest.mark.anyio
    async def test_origin_from_request(self) -> None:
        async with _client(_app()) as client:
            response = await client.get("/sitemap.xml")
        assert "<loc>http://testserver/</loc>" in response.text

    @pytest.mark.anyio
    async def test_forwarded_origin(self) -> None:
        async with _client(_app()) as client:
            response = await client.get(
                "/sitemap.xml",
                headers={"x-forwarded-host": "example.org", "x-forwarded-proto": "https"},
            )
        assert "<loc>https://example.org/</loc>" in response.text

    @pytest.mark.anyio
    async def test_prerendered_context_seeds_requests(self) -> None:
        context = GenerationContext()
        context.add_prerendered_route("/rendered")
        app = SitemapApp(
            SitemapConfig(site_url="https://example.com"),
            context=context,
            client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(404))),
        )
        async with _client(app) as client:
            first = await client.get("/sitemap.xml")
            second = await client.get("/sitemap.xml")
        assert "<loc>https://example.com/rendered</loc>" in first.text
        assert first.text.count("<url>") == second.text.count("<url>")
        assert context.generated is False

    @pytest.mark.anyio
    async def test_base_url(self) -> None:
        app = _app(site_url="https://example.com/docs", base_url="/docs")
        async with _client(app) as client:
            response = await client.get("/docs/sitemap.xml")
        assert response.status_code == 200
        assert "<loc>https://example.com/docs</loc>" in response.text


class TestShardedRoutes:
    @pytest.mark.anyio
    async def test_sitemap_redirects_to_index(self) -> None:
        async with _client(_app(site_url="https://example.com", sitemaps=True)) as client:
            response = await client.get("/sitemap.xml")
        assert response.status_code == 301
        assert response.headers["location"] == "/sitemap_index.xml"

    @pytest.mark.anyio
    async def test_index(self) -> None:
        async with _client(_app(site_url="https://example.com", sitemaps=True)) as client:
            response = await client.get("/sitemap_index.xml")
        assert response.status_code == 200
        assert "<loc>https://example.com/0-sitemap.xml</loc>" in response.text

    @pytest.mark.anyio
    async def test_named_shard(self) -> None:
        app = _app(site_url="https://example.com", urls=("/posts/a",), sitemaps={"posts": {"include": ["/posts/**"]}})
        async with _client(app) as client:
            response = await client.get("/posts-sitemap.xml")
            missing = await client.get("/other-sitemap.xml")
        assert response.status_code == 200
        assert "<loc>https://example.com/posts/a</loc>" in response.text
        assert missing.status_code == 404

    @pytest.mark.anyio
    async def test_index_not_served_when_unsharded(self) -> None:
        async with _client(_app(site_url="https://example.com")) as client:
            response = await client.get("/sitemap_index.xml")
        assert response.status_code == 404


class TestOtherRoutes:
    @pytest.mark.anyio
    async def test_stylesheet(self) -> None:
        async with _client(_app(site_url="https://example.com")) as client:
            response = await client.get("/__sitemap__/style.xsl")
        assert response.status_code == 200
        assert "xsl:stylesheet" in response.text

    @pytest.mark.anyio
    async def test_stylesheet_not_served_for_custom_xsl(self) -> None:
        async with _client(_app(site_url="https://example.com", xsl="/custom.xsl")) as client:
            response = await client.get("/__sitemap__/style.xsl")
        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_unknown_path(self) -> None:
        async with _client(_app(site_url="https://example.com")) as client:
            response = await client.get("/robots.txt")
        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_head_has_no_body(self) -> None:
        async with _client(_app(site_url="https://example.com")) as client:
            found = await client.head("/sitemap.xml")
            missing = await client.head("/robots.txt")
        assert found.status_code == 200
        assert found.content == b""
        assert int(found.headers["content-length"]) > 0
        assert missing.status_code == 404
        assert missing.content == b""

    @pytest.mark.anyio
    async def test_post_not_found(self) -> None:
        async with _client(_app(site_url="https://example.com")) as client:
            response = await client.post("/sitemap.xml")
        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_disabled(self) -> None:
        async with _client(_app(site_url="https://example.com", enabled=False)) as client:
            response = await client.get("/sitemap.xml")
        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_source_failure_is_500(self) -> None:
        app = _app(site_url="https://example.com", has_api_routes_url=True, strict_sources=True)
        async with _client(app) as client:
            response = await client.get("/sitemap.xml")
        assert response.status_code == 500


class TestSendResponse:
    @pytest.mark.anyio
    async def test_messages(self) -> None:
        messages: list[dict[str, object]] = []

        async def send(message: dict[str, object]) -> None:
            messages.append(message)

        await send_response(Response(body="hi").with_header("X-Test", "1"), send)

        start, body = messages
        assert start["status"] == 200
        assert (b"x-test", b"1") in start["headers"]  # type: ignore[operator]
        assert (b"content-length", b"2") in start["headers"]  # type: ignore[operator]
        assert body == {"type": "http.response.body", "body": b"hi"}

    @pytest.mark.anyio
    async def test_head_keeps_length(self) -> None:
        messages: list[dict[str, object]] = []

        async def send(message: dict[str, object]) -> None:
            messages.append(message)

        await send_response(Response(body="hello"), send, head=True)
        assert (b"content-length", b"5") in messages[0]["headers"]  # type: ignore[operator]
        assert messages[1]["body"] == b""

    @pytest.mark.anyio
    async def test_no_body_for_304(self) -> None:
        messages: list[dict[str, object]] = []

        async def send(message: dict[str, object]) -> None:
            messages.append(message)

        await send_response(Response(body="ignored", status=304), send)
        assert messages[1]["body"] == b""
