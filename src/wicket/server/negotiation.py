"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from wicket.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``          -> pass through
    2. ``None``              -> 204, empty body
    3. ``dict`` / ``list``   -> 200, application/json
    4. ``str``               -> 200, text/plain
    5. ``bytes``             -> 200, application/octet-stream
    6. ``(value, int)``      -> negotiate value, override status
    7. ``(value, int, dict)`` -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case None:
            return Response(body="", status=204)
        case dict() | list():
            return Response.json(value)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return dict, list, str, bytes, None, or Response."
            )
            raise TypeError(msg)
