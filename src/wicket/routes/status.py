"""Status endpoint — confirms the API is online."""

from wicket.http.request import Request
from wicket.http.response import Response
from wicket.routing.route import Method, RouteDeclaration


async def get_status(request: Request) -> Response:
    return Response.json({"status": "ok"})


STATUS_ROUTES: tuple[RouteDeclaration, ...] = (
    RouteDeclaration(
        path="/",
        method=Method.GET,
        handler=get_status,
        description="Check the API is online",
    ),
)
