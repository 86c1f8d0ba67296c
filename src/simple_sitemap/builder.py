"""Sitemap and sitemap index XML serialization.

Entries are plain records; every field becomes a child of ``<url>``.
List-valued fields get dedicated markup:

- ``images``       -> ``<image:image>`` with ``<image:loc>`` etc.
- ``videos``       -> ``<video:video>`` with ``<video:title>`` etc.
- ``alternatives`` -> self-closing ``<xhtml:link rel="alternate" .../>``

Values are normalised by :func:`normalise_value` and XML-escaped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any
from xml.sax.saxutils import escape

from simple_sitemap._internal.urls import (
    has_protocol,
    path_looks_like_file,
    url_with_base,
    with_base,
    with_trailing_slash,
    without_trailing_slash,
)
from simple_sitemap.config import SitemapConfig
from simple_sitemap.dates import normalise_date

MAX_SITEMAP_SIZE = 1000

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_URLSET_OPEN = (
    '<urlset xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'
    ' xmlns:xhtml="http://www.w3.org/1999/xhtml"'
    ' xmlns:image="http://www.google.com/schemas/sitemap-image/1.1"'
    ' xmlns:video="http://www.google.com/schemas/sitemap-video/1.1"'
    ' xsi:schemaLocation="http://www.sitemaps.org/schemas/sitemap/0.9'
    " http://www.sitemaps.org/schemas/sitemap/0.9/sitemap.xsd"
    " http://www.google.com/schemas/sitemap-image/1.1"
    ' http://www.google.com/schemas/sitemap-image/1.1/sitemap-image.xsd"'
    f' xmlns="{SITEMAP_NS}">'
)

_GENERATOR_COMMENT = "<!-- XML Sitemap generated by simple-sitemap -->"

# Children the sitemap schema expects first, in this order
_LEADING_FIELDS = ("loc", "lastmod", "changefreq", "priority")

# List fields rendered in a namespace: field -> element prefix
_NAMESPACED_LISTS = {"images": "image", "videos": "video"}

_ATTR_ENTITIES = {'"': "&quot;", "'": "&apos;"}


@dataclass(frozen=True, slots=True)
class SitemapIndexEntry:
    """One ``<sitemap>`` element of a sitemap index."""

    sitemap: str
    lastmod: str | None = None


@dataclass(frozen=True, slots=True)
class SitemapIndex:
    """A rendered sitemap index and the shards it references."""

    shards: tuple[SitemapIndexEntry, ...]
    xml: str


# -- Chunking --


def chunk_entries(entries: Sequence[Mapping[str, Any]], size: int = MAX_SITEMAP_SIZE) -> dict[str, list[Any]]:
    """Split entries into numbered shards of at most *size* entries."""
    if size < 1:
        msg = f"Shard size must be positive, got {size}"
        raise ValueError(msg)
    return {str(i // size): list(entries[i : i + size]) for i in range(0, len(entries), size)}


def shard_url(name: str, config: SitemapConfig) -> str:
    """Absolute URL of the shard document ``<name>-sitemap.xml``."""
    return url_with_base(f"{name}-sitemap.xml", config.base_url, config.site_url)


def shard_lastmod(
    entries: Iterable[Mapping[str, Any]],
    *,
    auto_lastmod: bool = False,
    now: datetime | None = None,
) -> str | None:
    """Latest ``lastmod`` among *entries*, falling back to *now* when ``auto_lastmod``."""
    dates = [d for d in (normalise_date(e.get("lastmod")) for e in entries if e.get("lastmod")) if d]
    if dates:
        return max(dates)
    if auto_lastmod:
        return normalise_date(now or datetime.now(UTC))
    return None


# -- Value normalisation --


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def xml_escape(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)


def normalise_value(key: str, value: Any, config: SitemapConfig) -> str:
    """Render one field value as escaped XML text.

    ``loc``/``href`` values are resolved against the site URL unless
    already absolute; extensionless paths follow the trailing-slash
    policy.  Dates use the canonical UTC format, booleans render as
    ``yes``/``no``.
    """
    if key in ("loc", "href") and isinstance(value, str):
        if has_protocol(value):
            return xml_escape(value)
        url = url_with_base(value, config.base_url, config.site_url)
        if not path_looks_like_file(url):
            url = with_trailing_slash(url) if config.trailing_slash else without_trailing_slash(url)
        return xml_escape(url)
    if isinstance(value, datetime | date):
        return normalise_date(value) or ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, int | float):
        return _format_number(value)
    return xml_escape(str(value))


# -- Element rendering --


def _ordered_fields(entry: Mapping[str, Any]) -> list[str]:
    leading = [key for key in _LEADING_FIELDS if key in entry]
    return leading + [key for key in entry if key not in _LEADING_FIELDS]


def _render_children(
    prefix: str,
    data: Mapping[str, Any],
    config: SitemapConfig,
    indent: str,
) -> list[str]:
    lines: list[str] = []
    for key, value in data.items():
        if value is None:
            continue
        tag = f"{prefix}:{key}" if prefix else key
        if isinstance(value, Mapping):
            lines.append(f"{indent}<{tag}>")
            lines.extend(_render_children(prefix, value, config, indent + "    "))
            lines.append(f"{indent}</{tag}>")
        else:
            lines.append(f"{indent}<{tag}>{normalise_value(key, value, config)}</{tag}>")
    return lines


def _render_alternative(link: Mapping[str, Any], config: SitemapConfig) -> str:
    attrs = " ".join(
        f'{key}="{normalise_value(key, value, config)}"' for key, value in link.items() if value is not None
    )
    return f'        <xhtml:link rel="alternate" {attrs} />'


def _render_list(key: str, items: Sequence[Any], config: SitemapConfig) -> list[str]:
    if key == "alternatives":
        return [_render_alternative(item, config) for item in items]

    prefix = _NAMESPACED_LISTS.get(key, "")
    tag = f"{prefix}:{prefix}" if prefix else key
    lines: list[str] = []
    for item in items:
        if isinstance(item, Mapping):
            lines.append(f"        <{tag}>")
            lines.extend(_render_children(prefix, item, config, "            "))
            lines.append(f"        </{tag}>")
        else:
            lines.append(f"        <{tag}>{normalise_value(key, item, config)}</{tag}>")
    return lines


def render_url(entry: Mapping[str, Any], config: SitemapConfig) -> str:
    """Render one entry as a ``<url>`` element."""
    lines = ["    <url>"]
    for key in _ordered_fields(entry):
        value = entry[key]
        if value is None:
            continue
        if isinstance(value, list | tuple):
            if value:
                lines.extend(_render_list(key, value, config))
        elif isinstance(value, Mapping):
            lines.append(f"        <{key}>")
            lines.extend(_render_children("", value, config, "            "))
            lines.append(f"        </{key}>")
        else:
            lines.append(f"        <{key}>{normalise_value(key, value, config)}</{key}>")
    lines.append("    </url>")
    return "\n".join(lines)


def wrap_sitemap_xml(body: list[str], config: SitemapConfig) -> str:
    """Add the XML declaration, optional stylesheet PI and generator comment."""
    declaration = '<?xml version="1.0" encoding="UTF-8"?>'
    if config.xsl:
        href = config.xsl if has_protocol(config.xsl) else with_base(config.xsl, config.base_url)
        declaration += f'<?xml-stylesheet type="text/xsl" href="{xml_escape(href)}"?>'
    return "\n".join([declaration, *body, _GENERATOR_COMMENT])


# -- Documents --


def build_sitemap(entries: Iterable[Mapping[str, Any]], config: SitemapConfig) -> str:
    """Serialize entries as a ``<urlset>`` document."""
    urls = [render_url(entry, config) for entry in entries]
    return wrap_sitemap_xml([_URLSET_OPEN, *urls, "</urlset>"], config)


def build_sitemap_index(
    chunks: Mapping[str, Sequence[Mapping[str, Any]]],
    config: SitemapConfig,
    *,
    now: datetime | None = None,
) -> SitemapIndex:
    """Serialize a ``<sitemapindex>`` referencing one document per chunk.

    Literal entries from the ``index`` key of ``config.sitemaps`` are
    appended as given.
    """
    shards = [
        SitemapIndexEntry(
            sitemap=shard_url(name, config),
            lastmod=shard_lastmod(urls, auto_lastmod=config.auto_lastmod, now=now),
        )
        for name, urls in chunks.items()
    ]
    for extra in config.index_extras:
        shards.append(SitemapIndexEntry(sitemap=extra["sitemap"], lastmod=extra.get("lastmod")))

    body: list[str] = []
    for shard in shards:
        body.append("    <sitemap>")
        body.append(f"        <loc>{normalise_value('loc', shard.sitemap, config)}</loc>")
        if shard.lastmod:
            body.append(f"        <lastmod>{normalise_value('lastmod', shard.lastmod, config)}</lastmod>")
        body.append("    </sitemap>")

    xml = wrap_sitemap_xml([f'<sitemapindex xmlns="{SITEMAP_NS}">', *body, "</sitemapindex>"], config)
    return SitemapIndex(shards=tuple(shards), xml=xml)
