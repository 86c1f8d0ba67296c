"""Path segment tokenizer for bracket-style page file names.

A page file name segment mixes static text with bracketed parameters::

    about          -> static "about"
    [id]           -> dynamic "id"
    [[lang]]       -> optional "lang"
    [...slug]      -> catch-all "slug"
    post-[id]      -> static "post-", dynamic "id"

``tokenize`` is a single pass over the characters with one state per
token kind.  ``route_path`` renders tokens into a route path fragment.
"""

import re
from enum import Enum
from urllib.parse import quote

from simple_sitemap.errors import ParseError
from simple_sitemap.pages.types import RouteToken, TokenType

# Characters allowed inside a parameter name; anything else is dropped
_PARAM_CHAR_RE = re.compile(r"[A-Za-z0-9_.]")

# pchar set from RFC 3986, minus the characters the route syntax reserves
_PATH_SAFE = "/!$&'()*+,;=@-._~"


class _State(Enum):
    INITIAL = 0
    STATIC = 1
    DYNAMIC = 2
    OPTIONAL = 3
    CATCHALL = 4


_TOKEN_FOR_STATE = {
    _State.STATIC: TokenType.STATIC,
    _State.DYNAMIC: TokenType.DYNAMIC,
    _State.OPTIONAL: TokenType.OPTIONAL,
    _State.CATCHALL: TokenType.CATCHALL,
}


def tokenize(segment: str) -> list[RouteToken]:
    """Parse one path segment into typed tokens.

    Raises:
        ParseError: On an unterminated parameter (``[id``) or an empty
            parameter name (``[]``).
    """
    tokens: list[RouteToken] = []
    state = _State.INITIAL
    buffer = ""
    previous = ""
    i = 0

    def consume() -> None:
        nonlocal buffer
        if buffer:
            tokens.append(RouteToken(_TOKEN_FOR_STATE[state], buffer))
        buffer = ""

    while i < len(segment):
        char = segment[i]

        if state is _State.INITIAL:
            buffer = ""
            if char == "[":
                state = _State.DYNAMIC
                previous = char
                i += 1
            else:
                # Re-read this character as static text
                state = _State.STATIC
            continue

        if state is _State.STATIC:
            if char == "[":
                consume()
                state = _State.DYNAMIC
            else:
                buffer += char
        else:
            if buffer == "...":
                buffer = ""
                state = _State.CATCHALL
            if char == "[" and state is _State.DYNAMIC and not buffer and previous == "[":
                state = _State.OPTIONAL
            elif char == "]" and (state is not _State.OPTIONAL or previous == "]"):
                if not buffer:
                    raise ParseError(segment=segment, reason="Empty param")
                consume()
                state = _State.INITIAL
            elif _PARAM_CHAR_RE.match(char):
                buffer += char

        previous = char
        i += 1

    if state in (_State.DYNAMIC, _State.OPTIONAL, _State.CATCHALL):
        raise ParseError(segment=segment, reason="Unfinished param")

    if state is _State.STATIC:
        consume()
    return tokens


def segment_name(tokens: list[RouteToken]) -> str:
    """Concatenate token values into a human-readable segment name."""
    return "".join(token.value for token in tokens)


def route_path(tokens: list[RouteToken]) -> str:
    """Render tokens as a route path fragment with a leading ``/``.

    Static text is percent-encoded; parameters become ``:name``,
    ``:name?`` or ``:name(.*)*``.
    """
    path = "/"
    for token in tokens:
        if token.type is TokenType.OPTIONAL:
            path += f":{token.value}?"
        elif token.type is TokenType.DYNAMIC:
            path += f":{token.value}"
        elif token.type is TokenType.CATCHALL:
            path += f":{token.value}(.*)*"
        else:
            path += quote(token.value, safe=_PATH_SAFE)
    return path
