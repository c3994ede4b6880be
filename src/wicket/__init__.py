"""Wicket — a small guarded JSON API server.

Declared routes, a fixed request pipeline (CORS, logging, guards, JSON
body parsing), and one error path for every handler failure.

Basic usage::

    from wicket import App, GuardResult

    app = App()

    async def require_key(request, path, method):
        if request.headers.get("x-api-key") == "secret":
            return GuardResult.permit()
        return GuardResult.deny("Missing API key", 401)

    @app.route("/", guards=[require_key])
    async def status(request):
        return {"status": "ok"}

    await app.start()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "GuardResult",
    "HTTPError",
    "Method",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "RouteDeclaration",
    "WicketError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wicket`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wicket.app import App

        return App

    if name == "AppConfig":
        from wicket.config import AppConfig

        return AppConfig

    if name == "Request":
        from wicket.http.request import Request

        return Request

    if name == "Response":
        from wicket.http.response import Response

        return Response

    if name in ("GuardResult", "Method", "RouteDeclaration"):
        from wicket.routing import route as _route

        return getattr(_route, name)

    if name in ("Middleware", "Next"):
        from wicket.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("ConfigurationError", "HTTPError", "NotFound", "WicketError"):
        from wicket import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
