"""URL collection and normalisation pipeline.

Turns URL inputs from every source into a deduplicated, filtered,
ordered list of sitemap entries.  The pipeline is a pure function of
its inputs: fetching and filesystem work happen in
:mod:`simple_sitemap.sources` and :mod:`simple_sitemap.pages`.

Sources are merged in a fixed order, later sources overriding earlier
ones for the same ``loc``:

1. the site root ``/``
2. prerendered routes payload
3. dynamic URLs endpoint
4. ``config.urls``
5. inferred static pages
6. content-system URLs
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TypeAlias

from simple_sitemap._internal.urls import (
    encode_uri,
    has_protocol,
    join_url,
    path_looks_like_file,
    split_origin,
    strip_base_suffix,
    with_base,
    with_leading_slash,
    with_trailing_slash,
    without_base,
    without_trailing_slash,
)
from simple_sitemap.config import SitemapConfig
from simple_sitemap.dates import normalise_date
from simple_sitemap.filtering import FilterRule, create_filter
from simple_sitemap.merge import merge_entries, merge_on_key
from simple_sitemap.routing.rules import RouteRuleResolver, RouteRules

SitemapEntry: TypeAlias = dict[str, Any]


@dataclass(frozen=True, slots=True)
class LiteralUrl:
    """A bare URL or path."""

    url: str


@dataclass(frozen=True, slots=True)
class DetailedUrl:
    """A partial entry: ``loc`` (or ``url``) plus any sitemap fields."""

    fields: Mapping[str, Any]


RawUrlInput: TypeAlias = LiteralUrl | DetailedUrl
UrlLike: TypeAlias = str | Mapping[str, Any] | LiteralUrl | DetailedUrl


def coerce_input(value: UrlLike) -> DetailedUrl:
    """Normalise any accepted URL input to :class:`DetailedUrl`."""
    if isinstance(value, DetailedUrl):
        return value
    if isinstance(value, LiteralUrl):
        return DetailedUrl({"loc": value.url})
    if isinstance(value, str):
        return DetailedUrl({"loc": value})
    if isinstance(value, Mapping):
        return DetailedUrl(dict(value))
    msg = f"Unsupported URL input: {value!r}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class SitemapSources:
    """URL inputs gathered from every collaborator for one run."""

    prerendered: tuple[UrlLike, ...] = ()
    dynamic: tuple[UrlLike, ...] = ()
    pages: tuple[UrlLike, ...] = ()
    content: tuple[UrlLike, ...] = ()

    def ordered(self, config: SitemapConfig) -> list[UrlLike]:
        """All inputs in precedence order, lowest first."""
        return ["/", *self.prerendered, *self.dynamic, *config.urls, *self.pages, *self.content]


# -- Single-entry helpers --


def fix_loc(url: str, config: SitemapConfig) -> str:
    """Base-prefix, slash-normalise and encode a URL.

    Absolute URLs skip the base prefix but follow the same slash policy
    and encoding.  Paths that look like files keep their slash as given.
    """
    origin, path = split_origin(url)
    if not origin:
        path = with_base(with_leading_slash(path), config.base_url)
    if not path_looks_like_file(path):
        path = with_trailing_slash(path) if config.trailing_slash else without_trailing_slash(path)
    return origin + encode_uri(path)


def absolute_loc(url: str, config: SitemapConfig) -> str:
    """Resolve a base-prefixed path against the site URL."""
    if has_protocol(url) or not config.site_url:
        return url
    return with_base(url, strip_base_suffix(config.site_url, config.base_url))


def _prefix_path(prefix: str, config: SitemapConfig) -> str:
    return with_base(f"/{prefix.strip('/')}", config.base_url)


def _has_lang_prefix(loc: str, prefixes: Sequence[str], config: SitemapConfig) -> bool:
    _, loc = split_origin(loc)
    for prefix in prefixes:
        path = _prefix_path(prefix, config)
        if loc == path or loc.startswith(path.rstrip("/") + "/"):
            return True
    return False


def lang_alternatives(loc: str, prefixes: Sequence[str], config: SitemapConfig) -> list[dict[str, str]]:
    """Alternate-language links for *loc*, one per prefix.

    An absolute *loc* keeps its origin on every link.
    """
    origin, path = split_origin(loc)
    relative = without_base(path, config.base_url)
    return [
        {"hreflang": prefix, "href": origin + fix_loc(join_url(prefix, relative), config)}
        for prefix in prefixes
    ]


def _normalise_lastmod(entry: SitemapEntry) -> None:
    """Format ``lastmod`` in place, dropping values that are not dates."""
    if "lastmod" not in entry:
        return
    lastmod = normalise_date(entry["lastmod"])
    if lastmod is None:
        del entry["lastmod"]
    else:
        entry["lastmod"] = lastmod


# -- Pipeline --


def _base_rules(rules: Iterable[FilterRule], config: SitemapConfig) -> list[FilterRule]:
    return [with_base(rule, config.base_url) if isinstance(rule, str) else rule for rule in rules]


def _defaults_layer(config: SitemapConfig, now: datetime | None) -> dict[str, Any]:
    layer = dict(config.defaults)
    if config.auto_lastmod and not layer.get("lastmod"):
        layer["lastmod"] = now or datetime.now(UTC)
    return layer


def pre_normalise(
    inputs: Iterable[UrlLike],
    config: SitemapConfig,
    *,
    now: datetime | None = None,
) -> list[SitemapEntry]:
    """Coerce, key, merge, filter, sort and annotate raw URL inputs."""
    defaults = _defaults_layer(config, now)
    url_filter = create_filter(
        include=_base_rules(config.include, config),
        exclude=_base_rules(config.exclude, config),
    )

    keyed: list[SitemapEntry] = []
    for raw in inputs:
        fields = dict(coerce_input(raw).fields)
        loc = fields.pop("loc", None) or fields.pop("url", None)
        fields.pop("url", None)
        if not loc:
            continue
        entry = merge_entries(defaults, fields)
        keyed.append({"loc": fix_loc(str(loc), config), **{k: v for k, v in entry.items() if k != "loc"}})

    entries = [entry for entry in merge_on_key(keyed, "loc") if url_filter(entry["loc"])]
    entries.sort(key=lambda entry: len(entry["loc"]))

    prefixes = config.auto_alternative_lang_prefixes
    result: list[SitemapEntry] = []
    for entry in entries:
        _normalise_lastmod(entry)

        if prefixes is not None:
            if _has_lang_prefix(entry["loc"], prefixes, config):
                continue
            auto = lang_alternatives(entry["loc"], prefixes, config)
            entry = {"loc": entry["loc"], **merge_entries({"alternatives": auto}, entry)}
        result.append(entry)
    return result


def apply_route_rules(entries: Iterable[SitemapEntry], resolver: RouteRuleResolver) -> list[SitemapEntry]:
    """Drop entries whose rule sets ``index: false``; merge rule fields under the rest."""
    result: list[SitemapEntry] = []
    for entry in entries:
        rule = resolver(without_trailing_slash(entry["loc"]))
        if rule.excluded:
            continue
        if rule.sitemap:
            entry = {"loc": entry["loc"], **merge_entries(rule.sitemap, entry)}
            # Rule fields arrive after date normalisation
            _normalise_lastmod(entry)
        result.append(entry)
    return result


def generate_entries(
    sources: SitemapSources,
    config: SitemapConfig,
    *,
    route_rules: RouteRuleResolver | None = None,
    now: datetime | None = None,
) -> list[SitemapEntry]:
    """Run the full merge pipeline over every source.

    Args:
        sources: URL inputs gathered for this run.
        config: Effective configuration (a shard's config when sharded).
        route_rules: Per-path rule resolver.  Defaults to one built from
            ``config.route_rules``.
        now: Timestamp used for ``auto_lastmod``.  Pass a fixed value for
            reproducible output.

    Returns:
        Entries with absolute ``loc`` values, unique by ``loc``.
    """
    resolver = route_rules
    if resolver is None:
        resolver = RouteRules(config.route_rules, base_url=config.base_url)
    entries = pre_normalise(sources.ordered(config), config, now=now)
    entries = apply_route_rules(entries, resolver)
    for entry in entries:
        entry["loc"] = absolute_loc(entry["loc"], config)
    return merge_on_key(entries, "loc")
