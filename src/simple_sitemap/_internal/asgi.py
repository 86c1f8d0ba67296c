"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with a typed
dataclass for internal use by :mod:`simple_sitemap.server`.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict."""

    method: str
    path: str
    scheme: str
    root_path: str
    headers: tuple[tuple[bytes, bytes], ...]
    server: tuple[str, int] | None

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        server = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            scheme=scope.get("scheme", "http"),
            root_path=scope.get("root_path", ""),
            headers=tuple(scope.get("headers", ())),
            server=tuple(server) if server else None,
        )

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        key = name.lower().encode("latin-1")
        for raw_name, raw_value in self.headers:
            if raw_name.lower() == key:
                return raw_value.decode("latin-1")
        return None

    def request_origin(self) -> str:
        """Scheme and host the client used, honouring ``X-Forwarded-*`` headers.

        Local hosts (``localhost``, ``127.0.0.1``) are always ``http``.
        """
        host = (self.header("x-forwarded-host") or self.header("host") or "").split(",")[0].strip()
        if not host and self.server:
            name, port = self.server
            host = name if port in (80, 443) else f"{name}:{port}"
        host = host or "localhost"
        proto = (self.header("x-forwarded-proto") or self.scheme).split(",")[0].strip()
        use_http = proto == "http" or "localhost" in host or "127.0.0.1" in host
        return f"{'http' if use_http else 'https'}://{host}"
