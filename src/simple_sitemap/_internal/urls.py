"""URL path helpers.

Small string utilities for joining, prefixing and normalising URL
paths.  All functions are pure and leave absolute URLs
(``http://``/``https://``) untouched where a base would otherwise be
applied.
"""

import re
from urllib.parse import quote, urlsplit

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)

# Characters encodeURI() leaves alone, plus "%" so encoded input stays stable
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#%"


def has_protocol(url: str) -> bool:
    """Whether *url* is absolute (starts with ``http://`` or ``https://``)."""
    return bool(_PROTOCOL_RE.match(url))


def split_origin(url: str) -> tuple[str, str]:
    """Split *url* into ``scheme://host`` and the rest, which starts with ``/``.

    Relative URLs have an empty origin.
    """
    if not has_protocol(url):
        return "", url
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}"
    rest = url[len(origin) :]
    return origin, rest if rest.startswith("/") else "/" + rest


def encode_uri(url: str) -> str:
    """Percent-encode characters that are not valid anywhere in a URI."""
    return quote(url, safe=_URI_SAFE)


def _split_suffix(url: str) -> tuple[str, str]:
    """Split *url* into its path part and its ``?query#fragment`` suffix."""
    for i, char in enumerate(url):
        if char in "?#":
            return url[:i], url[i:]
    return url, ""


def has_trailing_slash(url: str) -> bool:
    path, _ = _split_suffix(url)
    return path.endswith("/")


def with_trailing_slash(url: str) -> str:
    path, suffix = _split_suffix(url)
    if path.endswith("/"):
        return url
    return f"{path}/{suffix}"


def without_trailing_slash(url: str) -> str:
    path, suffix = _split_suffix(url)
    if not path.endswith("/"):
        return url
    return (path.rstrip("/") or "/") + suffix


def with_leading_slash(url: str) -> str:
    if has_protocol(url) or url.startswith("/"):
        return url
    return "/" + url


def is_empty_base(base: str | None) -> bool:
    return not base or base == "/"


def join_url(base: str, *inputs: str) -> str:
    """Join URL parts with exactly one ``/`` between each pair.

    ``join_url("en", "/about")`` -> ``"en/about"``
    ``join_url("https://site.com/", "/docs/")`` -> ``"https://site.com/docs/"``
    """
    url = base or ""
    for segment in inputs:
        if not segment or segment == "/":
            if segment == "/" and not url.endswith("/"):
                url += "/"
            continue
        if url:
            url = url.rstrip("/") + "/" + segment.lstrip("/")
        else:
            url = segment
    return url


def _starts_with_base(url: str, base: str) -> bool:
    if not url.startswith(base):
        return False
    rest = url[len(base) :]
    return not rest or rest[0] in "/?#"


def with_base(url: str, base: str) -> str:
    """Prefix *url* with *base* unless it is absolute or already prefixed."""
    if is_empty_base(base) or has_protocol(url):
        return url
    stripped = without_trailing_slash(base)
    if _starts_with_base(url, stripped):
        return url
    return join_url(stripped, url)


def without_base(url: str, base: str) -> str:
    """Remove a leading *base* from *url*; the result keeps a leading ``/``."""
    if is_empty_base(base):
        return url
    stripped = without_trailing_slash(base)
    if not _starts_with_base(url, stripped):
        return url
    trimmed = url[len(stripped) :]
    return trimmed if trimmed.startswith("/") else "/" + trimmed


def strip_base_suffix(site_url: str, base: str) -> str:
    """Remove a trailing *base* from a site URL, e.g. ``https://a.com/docs`` -> ``https://a.com``."""
    if is_empty_base(base):
        return site_url.rstrip("/")
    stripped = site_url.rstrip("/")
    base_path = without_trailing_slash(base)
    if stripped.endswith(base_path):
        stripped = stripped[: -len(base_path)]
    return stripped


def url_with_base(url: str, base: str, site_url: str) -> str:
    """Resolve a site-relative *url* to an absolute URL under *site_url* and *base*."""
    origin = strip_base_suffix(site_url, base)
    relative = url
    if not is_empty_base(base):
        relative = without_base(url, base)
    return join_url(origin, base or "/", relative)


def path_looks_like_file(url: str) -> bool:
    """Whether the last path segment contains a ``.`` (e.g. ``/feed.xml``)."""
    path, _ = _split_suffix(url)
    if has_protocol(path):
        path = path.split("://", 1)[1]
        path = path[path.find("/") :] if "/" in path else ""
    last = path.rstrip("/").rsplit("/", 1)[-1]
    return "." in last
