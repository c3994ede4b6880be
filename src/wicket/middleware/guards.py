"""Guard stage — route resolution and authorization.

Runs before body parsing and before any handler code, so unauthorized
requests cost as little as possible.
"""

import logging

from wicket._internal.invoke import invoke
from wicket.errors import GuardContractError
from wicket.http.request import Request
from wicket.http.response import Response
from wicket.middleware.protocol import Next
from wicket.routing.registry import Registry
from wicket.routing.route import GuardResult, RouteMatch

logger = logging.getLogger("wicket.guards")


class GuardMiddleware:
    """Resolve the route, then evaluate its guards in order.

    - ``OPTIONS`` is exempt: preflights never carry credentials.
    - No route for the method and path: ``404 {"error": "Unknown route"}``.
    - Guards are awaited one at a time, left to right. The first denial
      becomes the response and later guards are never called.
    - A denial missing ``status_code`` or ``error`` is a broken route
      declaration and raises ``GuardContractError`` (a 500).

    On success the request is forwarded with its ``RouteMatch`` attached.
    """

    __slots__ = ("registry",)

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method == "OPTIONS":
            return await next(request)

        match = self.registry.lookup(request.method, request.raw_path)
        if match is None:
            logger.debug("No route for %s %s", request.method, request.path)
            return Response.error("Unknown route", 404)

        denial = await self.check(match, request)
        if denial is not None:
            return denial

        return await next(request.with_route(match))

    async def check(self, match: RouteMatch, request: Request) -> Response | None:
        """Run the route's guards; return the denial response, if any."""
        route = match.route
        for guard in route.guards:
            result: GuardResult = await invoke(guard, request, route.path, request.method)
            if result.access_permitted:
                continue
            if result.status_code is None:
                raise GuardContractError(route.path, request.method, "status code")
            if result.error is None:
                raise GuardContractError(route.path, request.method, "error message")
            logger.info(
                "Guard denied %s %s: %d %s",
                request.method,
                request.path,
                result.status_code,
                result.error,
            )
            return Response.error(result.error, result.status_code)
        return None
