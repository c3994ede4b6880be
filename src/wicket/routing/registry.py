"""Route registry — the immutable, ordered route table.

Routes are declared once at startup. ``register()`` compiles each
declaration's path into a matcher, rejects duplicate ``(path, method)``
pairs, and returns a ``Registry`` that is never modified again, so any
number of in-flight requests may read it concurrently.
"""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from wicket.errors import ConfigurationError
from wicket.routing.route import Method, Route, RouteDeclaration, RouteMatch


def _coerce_method(declaration: RouteDeclaration) -> Method:
    try:
        return Method(str(declaration.method).upper())
    except ValueError:
        allowed = ", ".join(m.value for m in Method)
        msg = (
            f"Unsupported method {declaration.method!r} for route {declaration.path!r}. "
            f"Allowed methods: {allowed}."
        )
        raise ConfigurationError(msg) from None


class Registry:
    """Declared routes in declaration order, plus a ``(path, method)`` index.

    Usage::

        registry = register([
            RouteDeclaration("/", Method.GET, get_status),
            RouteDeclaration("/users/{id}", Method.GET, get_user, guards=(api_key,)),
        ])
        match = registry.lookup("GET", "/users/42")
    """

    __slots__ = ("_index", "_routes")

    def __init__(self, routes: Iterable[Route]) -> None:
        ordered = tuple(routes)
        index: dict[tuple[str, Method], Route] = {}
        for route in ordered:
            key = (route.path, route.method)
            if key in index:
                msg = (
                    f"Duplicate route {route.method} {route.path!r}. "
                    "Each (path, method) pair may be declared only once."
                )
                raise ConfigurationError(msg)
            index[key] = route
        self._routes = ordered
        self._index = MappingProxyType(index)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in declaration order."""
        return self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def get(self, path: str, method: str) -> Route | None:
        """Direct index lookup by declared path pattern and method."""
        try:
            return self._index.get((path, Method(method.upper())))
        except ValueError:
            return None

    def lookup(self, method: str, path: str) -> RouteMatch | None:
        """Resolve an incoming request to a route.

        Routes are tried in declaration order; the first one whose matcher
        accepts *path* and whose method equals *method* wins, even if a
        later route would match more specifically.
        """
        for route in self._routes:
            if route.method != method:
                continue
            params = route.matcher.test(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None


def register(declarations: Iterable[RouteDeclaration]) -> Registry:
    """Compile *declarations* into a ``Registry``.

    Raises ``ConfigurationError`` on an unsupported method, a malformed
    path pattern, or two declarations sharing a ``(path, method)``.
    """
    routes = [
        Route(
            path=declaration.path,
            method=_coerce_method(declaration),
            handler=declaration.handler,
            description=declaration.description,
            guards=tuple(declaration.guards),
        )
        for declaration in declarations
    ]
    return Registry(routes)
