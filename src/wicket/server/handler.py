"""ASGI handler — runs one request through the dispatch pipeline.

The only component that touches raw ASGI for HTTP requests. Converts the
scope to a typed ``Request``, threads it through the middleware stages,
invokes the matched route handler, and sends exactly one response.
"""

from collections.abc import Callable
from typing import Any

import anyio

from wicket._internal.asgi import Receive, Scope, Send
from wicket._internal.invoke import Failure, Success, invoke, settle
from wicket.errors import GatewayTimeout, NotFound
from wicket.http.request import Request
from wicket.http.response import Response
from wicket.middleware.protocol import Next
from wicket.server.errors import handle_error
from wicket.server.negotiation import negotiate
from wicket.server.sender import send_response


class ErrorBoundary:
    """Funnel every failure from the stages behind it into the error stage.

    The rest of the chain is run through ``settle()``, so an exception
    raised synchronously by a handler and one raised by the coroutine it
    returned arrive as the same ``Failure`` and take the same branch.
    Stages that return their own response pass straight through and the
    error stage never sees them.
    """

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        match await settle(next, request):
            case Success(value=response):
                return response
            case Failure(error=exc):
                return handle_error(exc, request)
        raise AssertionError("unreachable")


def make_dispatch(*, request_timeout: float | None = None) -> Next:
    """Build the innermost stage: call the resolved route's handler."""

    async def dispatch(request: Request) -> Response:
        route_match = request.route_match
        if route_match is None:
            raise NotFound()

        handler = route_match.route.handler
        if request_timeout is None:
            return negotiate(await invoke(handler, request))

        with anyio.move_on_after(request_timeout):
            return negotiate(await invoke(handler, request))
        raise GatewayTimeout()

    return dispatch


def build_pipeline(middleware: tuple[Callable[..., Any], ...], endpoint: Next) -> Next:
    """Wrap *endpoint* in *middleware*, first stage outermost."""
    handler = endpoint
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(scope: Scope, receive: Receive, send: Send, *, pipeline: Next) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = await pipeline(request)
    await send_response(response, send)
