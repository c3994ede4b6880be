"""Wicket exception hierarchy.

Shared across the registry, the pipeline stages, and the server so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WicketError(Exception):
    """Base for all wicket-specific errors."""


class ConfigurationError(WicketError):
    """Raised when the route table or app configuration is invalid.

    Surfaces during ``App._freeze()`` at startup, never per request.
    """


class GuardContractError(WicketError):
    """A guard denied access without a status code or error message."""

    def __init__(self, path: str, method: str, missing: str) -> None:
        self.path = path
        self.method = method
        self.missing = missing
        super().__init__(
            f"Guard on {method} {path} denied access without a {missing}"
        )


@dataclass(frozen=True, slots=True)
class HTTPError(WicketError):
    """An error that maps directly to an HTTP status code.

    Raised by pipeline stages or handlers. The centralized error stage
    serializes these as ``{"error": detail}`` with ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no declared route matches the request method and path."""

    def __init__(self, detail: str = "Unknown route") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818
    """400 — the request body could not be parsed."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the request body exceeds ``AppConfig.max_body_size``."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            status=413,
            detail=f"Request body exceeds the {limit} byte limit",
        )


class UnsupportedMediaType(HTTPError):  # noqa: N818
    """415 — a non-JSON body was sent to a JSON-only endpoint."""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            status=415,
            detail=f"Expected a JSON body, got {content_type or 'no content type'}",
        )


class GatewayTimeout(HTTPError):  # noqa: N818
    """504 — the handler did not finish within ``request_timeout``."""

    def __init__(self, detail: str = "Handler timed out") -> None:
        super().__init__(status=504, detail=detail)
