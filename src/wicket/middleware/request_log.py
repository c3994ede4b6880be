"""Request logging stage.

Observes every request that passed the CORS stage and always hands it on
unchanged.
"""

import logging

from wicket.http.request import Request
from wicket.http.response import Response
from wicket.middleware.protocol import Next

logger = logging.getLogger("wicket.requests")

IPV4_MAPPED_PREFIX = "::ffff:"


def normalize_ip(ip: str) -> str:
    """Strip the IPv4-mapped IPv6 prefix so dual-stack peers log as IPv4."""
    if ip.startswith(IPV4_MAPPED_PREFIX):
        return ip[len(IPV4_MAPPED_PREFIX) :]
    return ip


def client_ip(request: Request, *, trust_proxy: bool) -> str:
    """The client address as seen by the application.

    Behind a trusted proxy this is the left-most ``X-Forwarded-For``
    entry; otherwise the peer address of the connection.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",", 1)[0].strip()
            if first:
                return normalize_ip(first)
    if request.client is None:
        return "unknown"
    return normalize_ip(request.client[0])


class RequestLogMiddleware:
    """Log method, path, and client IP at INFO."""

    __slots__ = ("trust_proxy",)

    def __init__(self, *, trust_proxy: bool = True) -> None:
        self.trust_proxy = trust_proxy

    async def __call__(self, request: Request, next: Next) -> Response:
        ip = client_ip(request, trust_proxy=self.trust_proxy)
        logger.info(
            "Received request for %s %s from %s",
            request.method,
            request.path,
            ip,
            extra={"method": request.method, "path": request.path, "client_ip": ip},
        )
        return await next(request)
