"""Concrete routes shipped with wicket."""

from wicket.routes.status import STATUS_ROUTES, get_status

__all__ = ["STATUS_ROUTES", "get_status"]
