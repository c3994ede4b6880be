"""Immutable HTTP request.

Frozen metadata with async body access. Pipeline stages that learn
something about the request (the resolved route, the parsed body) hand a
new ``Request`` down the chain instead of mutating the current one.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from wicket._internal.asgi import Receive
from wicket.errors import PayloadTooLarge
from wicket.http.headers import Headers

if TYPE_CHECKING:
    from wicket.routing.route import RouteMatch

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the percent-decoded path from the ASGI scope; ``raw_path``
    is the path as sent on the wire, which is what route matching uses so
    that an encoded ``/`` stays inside its segment.
    """

    method: str
    path: str
    raw_path: str
    headers: Headers
    query_string: bytes
    http_version: str
    client: tuple[str, int] | None

    # Set by the guard stage once the route is resolved
    route_match: RouteMatch | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for the body and its parsed JSON
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int, or None if absent or invalid."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def path_params(self) -> dict[str, str]:
        """Parameters captured by the matched route pattern."""
        if self.route_match is None:
            return {}
        return self.route_match.path_params

    def with_route(self, match: RouteMatch) -> Request:
        """Return a copy of this request bound to *match*.

        The body cache is shared so a body read upstream is not lost.
        """
        return replace(self, route_match=match)

    # -- Async body access --

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def body(self, *, limit: int | None = None) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes. With *limit*, reading stops with ``PayloadTooLarge``
        as soon as more than *limit* bytes have arrived.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if limit is not None and size > limit:
                raise PayloadTooLarge(limit)
            chunks.append(chunk)
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def json(self) -> Any:
        """Return the body parsed as JSON.

        Uses the value parsed by the body stage when present.
        """
        cached = self._cache.get("_json", _MISSING)
        if cached is not _MISSING:
            return cached
        raw = await self.body()
        value = json_module.loads(raw) if raw else None
        self._cache["_json"] = value
        return value

    def cache_json(self, value: Any) -> None:
        """Store an already-parsed JSON body."""
        self._cache["_json"] = value

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        raw_path = scope.get("raw_path") or b""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            raw_path=raw_path.decode("latin-1") if raw_path else quote(scope["path"], safe="/"),
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
