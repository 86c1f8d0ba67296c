"""Tests for simple_sitemap.config — SitemapConfig frozen dataclass and loaders."""

import re
from pathlib import Path

import pytest

from simple_sitemap.config import DEFAULT_XSL, SitemapConfig
from simple_sitemap.errors import ConfigurationError


class TestSitemapConfig:
    def test_defaults(self) -> None:
        cfg = SitemapConfig()

        assert cfg.enabled is True
        assert cfg.site_url == ""
        assert cfg.base_url == "/"
        assert cfg.trailing_slash is False
        assert cfg.auto_lastmod is True
        assert cfg.xsl == DEFAULT_XSL
        assert cfg.sitemaps is False
        assert cfg.has_api_routes_url is False
        assert cfg.strict_sources is False

    def test_frozen(self) -> None:
        cfg = SitemapConfig()

        with pytest.raises(AttributeError):
            cfg.enabled = False  # type: ignore[misc]

    def test_site_url_gets_scheme(self) -> None:
        assert SitemapConfig(site_url="example.com").site_url == "https://example.com"

    def test_base_url_gets_leading_slash(self) -> None:
        assert SitemapConfig(base_url="docs").base_url == "/docs"

    def test_custom_dynamic_endpoint_enables_fetch(self) -> None:
        cfg = SitemapConfig(dynamic_urls_api_endpoint="/api/urls")
        assert cfg.has_api_routes_url is True


class TestShards:
    def test_unsharded(self) -> None:
        cfg = SitemapConfig()
        assert not cfg.is_sharded
        assert cfg.shard_names == ()

    def test_count_sharded(self) -> None:
        cfg = SitemapConfig(sitemaps=True)
        assert cfg.is_sharded
        assert cfg.shard_names == ()

    def test_named_shards_exclude_index(self) -> None:
        cfg = SitemapConfig(
            sitemaps={"posts": {}, "pages": {}, "index": [{"sitemap": "https://a.com/extra.xml"}]},
        )
        assert cfg.shard_names == ("posts", "pages")
        assert cfg.index_extras == ({"sitemap": "https://a.com/extra.xml"},)

    def test_for_shard_applies_overrides(self) -> None:
        cfg = SitemapConfig(site_url="https://a.com", sitemaps={"posts": {"include": ["/posts/**"]}})
        shard = cfg.for_shard("posts")
        assert shard.include == ("/posts/**",)
        assert shard.site_url == "https://a.com"

    def test_for_shard_accepts_camel_case(self) -> None:
        cfg = SitemapConfig(sitemaps={"posts": {"autoLastmod": False}})
        assert cfg.for_shard("posts").auto_lastmod is False

    def test_unknown_shard(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown sitemap shard"):
            SitemapConfig(sitemaps={"posts": {}}).for_shard("pages")

    def test_index_is_not_a_shard(self) -> None:
        with pytest.raises(ConfigurationError):
            SitemapConfig(sitemaps={"index": []}).for_shard("index")


class TestFromMapping:
    def test_camel_case_keys(self) -> None:
        cfg = SitemapConfig.from_mapping(
            {"siteUrl": "example.com", "trailingSlash": True, "baseURL": "/docs", "autoLastmod": False}
        )
        assert cfg.site_url == "https://example.com"
        assert cfg.trailing_slash is True
        assert cfg.base_url == "/docs"
        assert cfg.auto_lastmod is False

    def test_aliases(self) -> None:
        cfg = SitemapConfig.from_mapping({"hostname": "https://a.com", "isNuxtContentDocumentDriven": True})
        assert cfg.site_url == "https://a.com"
        assert cfg.is_content_document_driven is True

    def test_lists_become_tuples(self) -> None:
        cfg = SitemapConfig.from_mapping({"urls": ["/a", "/b"], "pagesDirs": ["pages"]})
        assert cfg.urls == ("/a", "/b")
        assert cfg.pages_dirs == ("pages",)

    def test_regex_rules_compiled(self) -> None:
        cfg = SitemapConfig.from_mapping({"exclude": ["/private/**", {"regex": "^/draft-"}]})
        assert cfg.exclude[0] == "/private/**"
        assert isinstance(cfg.exclude[1], re.Pattern)
        assert cfg.exclude[1].pattern == "^/draft-"

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid regex"):
            SitemapConfig.from_mapping({"include": [{"regex": "("}]})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown option 'colour'"):
            SitemapConfig.from_mapping({"colour": "blue"})

    def test_string_for_list_option(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a list"):
            SitemapConfig.from_mapping({"urls": "/a"})


class TestFromFile:
    def test_sitemap_table(self, tmp_path: Path) -> None:
        path = tmp_path / "sitemap.toml"
        path.write_text('[sitemap]\nsite_url = "https://a.com"\ntrailingSlash = true\n')

        cfg = SitemapConfig.from_file(path)
        assert cfg.site_url == "https://a.com"
        assert cfg.trailing_slash is True

    def test_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "sitemap.toml"
        path.write_text('site_url = "https://a.com"\n')
        assert SitemapConfig.from_file(path).site_url == "https://a.com"

    def test_overrides_skip_none(self, tmp_path: Path) -> None:
        path = tmp_path / "sitemap.toml"
        path.write_text('site_url = "https://a.com"\n')

        cfg = SitemapConfig.from_file(path, site_url=None, trailing_slash=True)
        assert cfg.site_url == "https://a.com"
        assert cfg.trailing_slash is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "sitemap.toml"
        path.write_text("site_url = \n")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            SitemapConfig.from_file(path)


class TestFromEnv:
    def test_reads_site_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SITEMAP_SITE_URL", "https://env.example.com")
        assert SitemapConfig.from_env().site_url == "https://env.example.com"

    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SITEMAP_SITE_URL", "https://env.example.com")
        assert SitemapConfig.from_env(site_url="https://a.com").site_url == "https://a.com"
