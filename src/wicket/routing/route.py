"""Route declarations, compiled routes, and guard results."""

from dataclasses import dataclass, field
from enum import StrEnum

from wicket._internal.types import Guard, Handler
from wicket.routing.matcher import PathMatcher


class Method(StrEnum):
    """HTTP methods a route can be declared for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class GuardResult:
    """Outcome of one guard evaluation.

    When ``access_permitted`` is false both ``error`` and ``status_code``
    are required; they become the response.
    """

    access_permitted: bool
    error: str | None = None
    status_code: int | None = None

    @classmethod
    def permit(cls) -> "GuardResult":
        return cls(access_permitted=True)

    @classmethod
    def deny(cls, error: str, status_code: int = 403) -> "GuardResult":
        return cls(access_permitted=False, error=error, status_code=status_code)


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """A route as written in the static route table.

    ``guards`` run left to right before ``handler``; all must permit.
    """

    path: str
    method: Method | str
    handler: Handler
    description: str = ""
    guards: tuple[Guard, ...] = ()


@dataclass(frozen=True, slots=True)
class Route:
    """A declared route with its path compiled into a matcher.

    Built once by the registry. ``matcher`` is derived from ``path`` in
    ``__post_init__`` and never recompiled.
    """

    path: str
    method: Method
    handler: Handler
    description: str = ""
    guards: tuple[Guard, ...] = ()
    matcher: PathMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "matcher", PathMatcher(self.path))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    path_params: dict[str, str]
