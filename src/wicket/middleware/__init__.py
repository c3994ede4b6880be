"""Middleware — the pipeline stages every request passes through.

A stage is any callable matching:
    async def stage(request: Request, next: Next) -> Response

Stages, in pipeline order:
    CORSMiddleware -- origin allow-list and preflight answers
    RequestLogMiddleware -- method, path, and client IP at INFO
    GuardMiddleware -- route resolution and per-route access guards
    JSONBodyMiddleware -- size-limited JSON body parsing
"""

from wicket.middleware.body import JSONBodyMiddleware
from wicket.middleware.cors import CORSConfig, CORSMiddleware
from wicket.middleware.guards import GuardMiddleware
from wicket.middleware.protocol import Middleware, Next
from wicket.middleware.request_log import RequestLogMiddleware

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "GuardMiddleware",
    "JSONBodyMiddleware",
    "Middleware",
    "Next",
    "RequestLogMiddleware",
]
