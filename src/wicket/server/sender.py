"""Response sending: one ``Response`` becomes exactly two ASGI messages."""

from wicket._internal.asgi import Send
from wicket.http.response import Response

_NO_BODY_STATUSES = frozenset({204, 304})


def has_body(status: int) -> bool:
    """False for informational, 204 and 304 responses."""
    return status >= 200 and status not in _NO_BODY_STATUSES


def encode_headers(response: Response, body: bytes) -> list[tuple[bytes, bytes]]:
    """ASGI header pairs for *response*, with names lower-cased.

    ``Content-Type`` is left out of bodiless 204/304 responses;
    ``Content-Length`` always reflects the bytes actually sent.
    """
    pairs = [(name.lower(), value) for name, value in response.headers]
    if body or response.status not in _NO_BODY_STATUSES:
        pairs.insert(0, ("content-type", response.content_type))
    pairs.append(("content-length", str(len(body))))
    return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as ``http.response.start`` plus a single body message."""
    body = response.body_bytes if has_body(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": encode_headers(response, body),
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})
