"""Shared type aliases used across wicket modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wicket.http.request import Request
    from wicket.routing.route import GuardResult

# Route handler: receives the request, returns a response value (sync or async)
Handler: TypeAlias = Callable[["Request"], Any]

# Guard: receives (request, declared path, method), returns a GuardResult (sync or async)
Guard: TypeAlias = Callable[
    ["Request", str, str],
    "GuardResult | Awaitable[GuardResult]",
]
