"""simple_sitemap exception hierarchy.

Shared across the tokenizer, pipeline, sources, and generator so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class SitemapError(Exception):
    """Base for all simple_sitemap errors."""


class ConfigurationError(SitemapError):
    """Raised when sitemap configuration is invalid.

    Typically raised while loading a config mapping or resolving a
    named shard override.
    """


@dataclass(frozen=True, slots=True)
class ParseError(SitemapError):
    """A page file name could not be parsed into route tokens.

    Fatal to the build: route inference cannot skip a file without
    producing an incomplete sitemap.
    """

    segment: str
    reason: str

    def __str__(self) -> str:
        return f"{self.reason} in segment {self.segment!r}"


@dataclass(frozen=True, slots=True)
class SourceError(SitemapError):
    """An endpoint supplying URLs failed to produce a usable payload.

    Only raised when ``strict_sources`` is enabled. Otherwise the
    failure is logged and the source contributes no URLs.
    """

    source: str
    endpoint: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.source} ({self.endpoint}): {self.detail}"
        return f"{self.source} ({self.endpoint})"
