"""Centralized error stage.

The one place a failure becomes a response. Stages that already produced
a response never reach this module; stages and handlers that fail are
forwarded here by the error boundary in ``wicket.server.handler``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from wicket.errors import HTTPError
from wicket.http.request import Request
from wicket.http.response import Response

logger = logging.getLogger("wicket.server")


def describe(exc: BaseException) -> str:
    """The string representation sent to clients for an unhandled failure."""
    return str(exc) or type(exc).__name__


def failure_context(exc: BaseException) -> Mapping[str, Any] | None:
    """Structured context attached to an exception, if any.

    Any exception may carry a ``context`` mapping (a failing query, the
    offending record id, ...). It is logged alongside the failure.
    """
    context = getattr(exc, "context", None)
    if isinstance(context, Mapping):
        return context
    return None


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Serialize an HTTPError as ``{"error": detail}`` with its status."""
    level = logging.WARNING if exc.status >= 500 else logging.DEBUG
    logger.log(level, "%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    response = Response.error(exc.detail or f"Error {exc.status}", exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Log an unexpected failure at ERROR and respond 500."""
    context = failure_context(exc)
    if context is not None:
        logger.error(
            "500 %s %s: %s %s",
            request.method,
            request.path,
            describe(exc),
            dict(context),
            exc_info=exc,
            extra={"context": dict(context)},
        )
    else:
        logger.error(
            "500 %s %s: %s",
            request.method,
            request.path,
            describe(exc),
            exc_info=exc,
        )
    return Response.error(describe(exc), 500)


def handle_error(exc: Exception, request: Request) -> Response:
    """Map any failure raised inside the pipeline to a response."""
    if isinstance(exc, HTTPError):
        return handle_http_error(exc, request)
    return handle_internal_error(exc, request)
