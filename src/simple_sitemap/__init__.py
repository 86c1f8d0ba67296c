"""simple_sitemap: XML sitemaps from page files, route rules and URL endpoints.

Infers static routes from a pages directory, merges them with
configured, prerendered and fetched URLs, applies route rules and
filters, and serializes a sitemap (or a sitemap index plus shards).

Basic usage::

    from simple_sitemap import SitemapConfig, SitemapGenerator

    config = SitemapConfig(site_url="https://example.com", pages_dirs=("pages",))
    await SitemapGenerator(config).write("public")

Serving on demand (any ASGI server)::

    from simple_sitemap import SitemapApp

    app = SitemapApp(config)
"""

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "GenerationContext",
    "ParseError",
    "RenderContext",
    "SitemapApp",
    "SitemapConfig",
    "SitemapError",
    "SitemapGenerator",
    "SitemapSources",
    "SourceError",
    "build_routes",
    "build_sitemap",
    "build_sitemap_index",
    "create_filter",
    "generate_entries",
    "tokenize",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import simple_sitemap`` fast while providing a clean top-level API.
    """
    if name == "SitemapConfig":
        from simple_sitemap.config import SitemapConfig

        return SitemapConfig

    if name == "SitemapGenerator":
        from simple_sitemap.generator import SitemapGenerator

        return SitemapGenerator

    if name == "SitemapApp":
        from simple_sitemap.server import SitemapApp

        return SitemapApp

    if name in ("GenerationContext", "RenderContext"):
        from simple_sitemap import context as _ctx

        return getattr(_ctx, name)

    if name in ("SitemapSources", "generate_entries"):
        from simple_sitemap import entries as _entries

        return getattr(_entries, name)

    if name in ("build_sitemap", "build_sitemap_index"):
        from simple_sitemap import builder as _builder

        return getattr(_builder, name)

    if name == "create_filter":
        from simple_sitemap.filtering import create_filter

        return create_filter

    if name == "tokenize":
        from simple_sitemap.pages.tokenizer import tokenize

        return tokenize

    if name == "build_routes":
        from simple_sitemap.pages.tree import build_routes

        return build_routes

    if name in ("ConfigurationError", "ParseError", "SitemapError", "SourceError"):
        from simple_sitemap import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
