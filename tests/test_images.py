"""Tests for simple_sitemap.images — image discovery and injection."""

from simple_sitemap.config import SitemapConfig
from simple_sitemap.context import GenerationContext, RenderContext
from simple_sitemap.images import discover_images, inject_discovered_images

PAGE = """
<html>
  <header><img src="/logo.png"></header>
  <main class="content">
    <h1>About</h1>
    <img alt="Team" src="/img/team.jpg">
    <IMG SRC="https://cdn.example.com/photo.png">
  </main>
</html>
"""


class TestDiscoverImages:
    def test_only_inside_main(self) -> None:
        images = discover_images(PAGE, "https://example.com")
        assert images == [
            {"loc": "https://example.com/img/team.jpg"},
            {"loc": "https://cdn.example.com/photo.png"},
        ]

    def test_no_main(self) -> None:
        assert discover_images('<img src="/a.png">', "https://example.com") == []

    def test_main_without_images(self) -> None:
        assert discover_images("<main><p>hi</p></main>", "https://example.com") == []

    def test_relative_to_site_path(self) -> None:
        images = discover_images('<main><img src="a.png"></main>', "https://example.com/docs")
        assert images == [{"loc": "https://example.com/docs/a.png"}]


class TestInjectDiscoveredImages:
    def _render(self, context: GenerationContext, **options: object) -> RenderContext:
        config = SitemapConfig(site_url="https://example.com", **options)  # type: ignore[arg-type]
        return RenderContext(sitemap_name="sitemap", config=config, generation=context)

    def test_images_attached_by_route(self) -> None:
        context = GenerationContext(images={"/about": [{"loc": "https://example.com/a.png"}]})
        stage = inject_discovered_images(context)
        entries = stage(
            [{"loc": "https://example.com/"}, {"loc": "https://example.com/about"}],
            self._render(context),
        )
        assert "images" not in entries[0]
        assert entries[1]["images"] == [{"loc": "https://example.com/a.png"}]

    def test_existing_images_kept_and_deduplicated(self) -> None:
        context = GenerationContext(
            images={"/about": [{"loc": "https://example.com/a.png"}, {"loc": "https://example.com/b.png"}]}
        )
        stage = inject_discovered_images(context)
        entries = stage(
            [{"loc": "https://example.com/about", "images": [{"loc": "https://example.com/a.png", "title": "A"}]}],
            self._render(context),
        )
        assert entries[0]["images"] == [
            {"loc": "https://example.com/a.png", "title": "A"},
            {"loc": "https://example.com/b.png"},
        ]

    def test_base_url_stripped(self) -> None:
        context = GenerationContext(images={"/guide": [{"loc": "https://example.com/docs/g.png"}]})
        stage = inject_discovered_images(context)
        entries = stage(
            [{"loc": "https://example.com/docs/guide"}],
            self._render(context, base_url="/docs"),
        )
        assert entries[0]["images"] == [{"loc": "https://example.com/docs/g.png"}]

    def test_no_images_is_passthrough(self) -> None:
        context = GenerationContext()
        entries = [{"loc": "https://example.com/"}]
        assert inject_discovered_images(context)(entries, self._render(context)) is entries
