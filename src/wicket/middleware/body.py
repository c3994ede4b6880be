"""JSON body parsing stage.

Sits after the guard stage, so bodies are only read for requests that
resolved to a route and passed its guards.
"""

import json as json_module

from wicket.errors import BadRequest, PayloadTooLarge, UnsupportedMediaType
from wicket.http.request import Request
from wicket.http.response import Response
from wicket.middleware.protocol import Next


def is_json_content_type(content_type: str | None) -> bool:
    """True for ``application/json`` and ``application/*+json`` media types."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


class JSONBodyMiddleware:
    """Read and parse the request body as JSON, within a size limit.

    - Declared ``Content-Length`` over ``max_body_size``: 413, body unread.
    - Streamed body crossing ``max_body_size``: 413.
    - Empty body: nothing to parse, request passes through.
    - Non-JSON content type: 415.
    - Undecodable or malformed JSON: 400.

    Failures are raised as ``HTTPError`` for the error stage to serialize.
    """

    __slots__ = ("max_body_size",)

    def __init__(self, max_body_size: int) -> None:
        self.max_body_size = max_body_size

    async def __call__(self, request: Request, next: Next) -> Response:
        declared = request.content_length
        if declared is not None and declared > self.max_body_size:
            raise PayloadTooLarge(self.max_body_size)

        if declared == 0 or (declared is None and not self._may_have_body(request)):
            return await next(request)

        raw = await request.body(limit=self.max_body_size)
        if not raw:
            return await next(request)

        if not is_json_content_type(request.content_type):
            raise UnsupportedMediaType(request.content_type)

        try:
            value = json_module.loads(raw.decode("utf-8"))
        except UnicodeDecodeError:
            raise BadRequest("Request body is not valid UTF-8") from None
        except json_module.JSONDecodeError as exc:
            raise BadRequest(f"Malformed JSON body: {exc.msg}") from None

        request.cache_json(value)
        return await next(request)

    @staticmethod
    def _may_have_body(request: Request) -> bool:
        # Without Content-Length a body can only arrive chunked
        return "chunked" in (request.headers.get("transfer-encoding") or "").lower()
