"""Routing — declared routes compiled into an immutable, ordered table.

Routes are declared during setup and compiled into a ``Registry`` when
the app freezes.
"""

from wicket.routing.matcher import PathMatcher
from wicket.routing.registry import Registry, register
from wicket.routing.route import GuardResult, Method, Route, RouteDeclaration, RouteMatch

__all__ = [
    "GuardResult",
    "Method",
    "PathMatcher",
    "Registry",
    "Route",
    "RouteDeclaration",
    "RouteMatch",
    "register",
]
