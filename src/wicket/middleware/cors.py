"""CORS stage.

Decides whether a cross-origin request may proceed, answers preflight
``OPTIONS`` requests for every path, and decorates permitted responses
with the ``Access-Control-*`` headers browsers look for.
"""

import logging
from dataclasses import dataclass

from wicket.http.request import Request
from wicket.http.response import Response
from wicket.middleware.protocol import Next

logger = logging.getLogger("wicket.cors")

LOCALHOST_PREFIX = "http://localhost"


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS stage configuration.

    An origin is permitted when it is absent, listed in ``allow_origins``,
    or (with ``allow_localhost``) starts with ``http://localhost``.
    """

    allow_origins: tuple[str, ...] = ()
    allow_localhost: bool = True
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "PUT", "PATCH", "POST", "DELETE")
    allow_headers: tuple[str, ...] = ()  # Empty = echo Access-Control-Request-Headers
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int | None = None


class CORSMiddleware:
    """Origin allow-list with preflight handling.

    - No ``Origin`` header: same-origin or non-browser client, passes
      through without CORS headers. A bare ``OPTIONS`` still gets 204.
    - Rejected origin: ``403 {"error": "Not allowed by CORS"}`` with no
      CORS headers, so the browser blocks the response. Logged at ERROR.
    - ``OPTIONS`` from a permitted origin: answered here with 204 and the
      preflight headers. Routing and guards never see preflights.
    - Any other permitted request: forwarded, and the response gets
      ``Access-Control-Allow-Origin`` echoing the origin.
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def is_allowed_origin(self, origin: str | None) -> bool:
        """Apply the allow rule to an ``Origin`` header value."""
        if origin is None:
            return True
        if origin in self.config.allow_origins:
            return True
        return self.config.allow_localhost and origin.startswith(LOCALHOST_PREFIX)

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config
        response = response.with_header("Access-Control-Allow-Origin", origin)
        response = response.with_header("Vary", "Origin")
        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")
        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )
        return response

    def _preflight_response(self, request: Request, origin: str | None) -> Response:
        cfg = self.config
        response = Response(body="", status=204)
        if origin is None:
            return response

        response = self._add_cors_headers(response, origin)
        response = response.with_header("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))

        if cfg.allow_headers:
            allow_headers = ", ".join(cfg.allow_headers)
        else:
            allow_headers = request.headers.get("access-control-request-headers") or ""
            response = response.with_header("Vary", "Access-Control-Request-Headers")
        if allow_headers:
            response = response.with_header("Access-Control-Allow-Headers", allow_headers)

        if cfg.max_age is not None:
            response = response.with_header("Access-Control-Max-Age", str(cfg.max_age))
        return response

    async def __call__(self, request: Request, next: Next) -> Response:
        origin = request.headers.get("origin")

        if not self.is_allowed_origin(origin):
            logger.error("Request with origin of %s is not allowed by CORS!", origin)
            return Response.error("Not allowed by CORS", 403)

        if request.method == "OPTIONS":
            return self._preflight_response(request, origin)

        response = await next(request)
        if origin is None:
            return response
        return self._add_cors_headers(response, origin)
