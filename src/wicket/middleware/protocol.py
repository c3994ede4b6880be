"""Middleware protocol and Next type alias.

A pipeline stage is any callable matching::

    async def stage(request: Request, next: Next) -> Response: ...

No base class required. A stage either returns a response of its own,
ending the request, or awaits ``next`` to hand the request further down
the chain. Failures are raised, never turned into responses locally
unless the stage owns that response.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from wicket.http.request import Request
from wicket.http.response import Response

# The next stage in the chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for wicket pipeline stages.

    Accepts both functions and callable objects::

        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
