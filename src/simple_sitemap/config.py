"""Sitemap configuration.

SitemapConfig is a frozen dataclass, immutable after creation, so the
pipeline never does string-key dict lookups.  Mappings (parsed TOML,
JSON, framework options) go through :meth:`SitemapConfig.from_mapping`,
which also accepts camelCase option names.
"""

from __future__ import annotations

import dataclasses
import os
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from simple_sitemap.errors import ConfigurationError

DEFAULT_XSL = "/__sitemap__/style.xsl"
DEFAULT_DYNAMIC_URLS_ENDPOINT = "/api/_sitemap-urls"
DEFAULT_CONTENT_URLS_ENDPOINT = "/api/__sitemap__/document-driven-urls"
SITE_URL_ENV = "SITEMAP_SITE_URL"

# Fields that hold sequences and are stored as tuples
_TUPLE_FIELDS = frozenset(
    {"pages_dirs", "extensions", "ignore", "include", "exclude", "urls", "auto_alternative_lang_prefixes"}
)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


@dataclass(frozen=True, slots=True)
class SitemapConfig:
    """Sitemap generation configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SitemapConfig(site_url="https://example.com", trailing_slash=True)
    """

    enabled: bool = True

    # Site
    site_url: str = ""
    base_url: str = "/"
    host: str = ""  # Origin serving the prerendered routes payload (defaults to site_url)
    trailing_slash: bool = False

    # Entries
    auto_lastmod: bool = True
    defaults: Mapping[str, Any] = field(default_factory=dict)
    urls: tuple[str | Mapping[str, Any], ...] = ()
    include: tuple[str | re.Pattern[str], ...] = ()
    exclude: tuple[str | re.Pattern[str], ...] = ()
    auto_alternative_lang_prefixes: tuple[str, ...] | None = None
    route_rules: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    # Page inference
    infer_static_pages_as_routes: bool = True
    pages_dirs: tuple[str | Path, ...] = ()
    extensions: tuple[str, ...] = (".vue", ".py", ".html", ".md")
    ignore: tuple[str, ...] = ()
    discover_images: bool = True

    # Endpoints
    has_api_routes_url: bool = False
    dynamic_urls_api_endpoint: str = DEFAULT_DYNAMIC_URLS_ENDPOINT
    has_prerendered_routes_payload: bool = False
    is_content_document_driven: bool = False
    content_urls_endpoint: str = DEFAULT_CONTENT_URLS_ENDPOINT
    strict_sources: bool = False
    fetch_timeout: float = 10.0

    # Output
    sitemaps: bool | Mapping[str, Any] = False
    xsl: str | None = DEFAULT_XSL

    def __post_init__(self) -> None:
        if self.site_url and not self.site_url.startswith(("http://", "https://")):
            object.__setattr__(self, "site_url", f"https://{self.site_url}")
        if not self.base_url.startswith("/"):
            object.__setattr__(self, "base_url", "/" + self.base_url)
        if self.dynamic_urls_api_endpoint != DEFAULT_DYNAMIC_URLS_ENDPOINT and not self.has_api_routes_url:
            object.__setattr__(self, "has_api_routes_url", True)

    # -- Derived values --

    @property
    def is_sharded(self) -> bool:
        return bool(self.sitemaps)

    @property
    def shard_names(self) -> tuple[str, ...]:
        """Names of configured shards (``index`` excluded). Empty when count-sharded."""
        if isinstance(self.sitemaps, Mapping):
            return tuple(name for name in self.sitemaps if name != "index")
        return ()

    @property
    def index_extras(self) -> tuple[Mapping[str, Any], ...]:
        """Literal entries appended verbatim to the sitemap index."""
        if isinstance(self.sitemaps, Mapping):
            return tuple(self.sitemaps.get("index", ()))
        return ()

    # -- Construction --

    def for_shard(self, name: str) -> SitemapConfig:
        """Return this config with the named shard's overrides applied."""
        if not isinstance(self.sitemaps, Mapping) or name not in self.sitemaps or name == "index":
            msg = f"Unknown sitemap shard {name!r}"
            raise ConfigurationError(msg)
        overrides = _normalise_options(self.sitemaps[name], context=f"sitemaps.{name}")
        overrides.pop("sitemaps", None)
        return dataclasses.replace(self, **overrides)

    def with_site_url(self, site_url: str) -> SitemapConfig:
        return dataclasses.replace(self, site_url=site_url)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SitemapConfig:
        """Build a config from a plain mapping.

        Keys may be snake_case or camelCase.  Unknown keys raise
        :class:`ConfigurationError`.
        """
        return cls(**_normalise_options(data, context="sitemap"))

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> SitemapConfig:
        """Load a TOML file.

        Reads the ``[sitemap]`` table when present, else the top level.
        Keyword overrides are applied on top, skipping ``None`` values.
        """
        try:
            with open(path, "rb") as fh:
                document = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ConfigurationError(msg) from exc
        data = dict(document.get("sitemap", document))
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, **options: Any) -> SitemapConfig:
        """Build a config, taking ``site_url`` from ``SITEMAP_SITE_URL`` when unset."""
        if not options.get("site_url") and not options.get("siteUrl"):
            options["site_url"] = os.environ.get(SITE_URL_ENV, "")
        return cls.from_mapping(options)


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(SitemapConfig))

# Option names that don't map by case alone
_ALIASES = {
    "hostname": "site_url",
    "is_nuxt_content_document_driven": "is_content_document_driven",
}


def _compile_rule(rule: Any, context: str) -> str | re.Pattern[str]:
    if isinstance(rule, str | re.Pattern):
        return rule
    if isinstance(rule, Mapping) and "regex" in rule:
        try:
            return re.compile(rule["regex"])
        except re.error as exc:
            msg = f"Invalid regex in {context}: {exc}"
            raise ConfigurationError(msg) from exc
    msg = f"Unsupported filter rule in {context}: {rule!r}"
    raise ConfigurationError(msg)


def _normalise_options(data: Mapping[str, Any], *, context: str) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _snake(raw_key)
        key = _ALIASES.get(key, key)
        if key not in _FIELD_NAMES:
            msg = f"Unknown option {raw_key!r} in {context}"
            raise ConfigurationError(msg)
        if key in ("include", "exclude"):
            value = tuple(_compile_rule(rule, f"{context}.{key}") for rule in value or ())
        elif key in _TUPLE_FIELDS and value is not None:
            if isinstance(value, str | Mapping):
                msg = f"Option {raw_key!r} in {context} must be a list"
                raise ConfigurationError(msg)
            value = tuple(value)
        options[key] = value
    return options
