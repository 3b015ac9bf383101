"""ASGI response sending — one Response becomes exactly two ASGI messages."""

from collections.abc import MutableMapping
from typing import Any

from roost._internal.asgi import Send
from roost.http.response import Response

# RFC 9110: 1xx, 204, and 304 responses carry no content.
_NO_BODY_STATUSES = frozenset({204, 304})


def _body_allowed(status: int) -> bool:
    return status >= 200 and status not in _NO_BODY_STATUSES


def response_messages(response: Response) -> list[MutableMapping[str, Any]]:
    """Build the ``http.response.start`` and ``http.response.body`` messages.

    Header names are lower-cased. ``content-length`` always matches the
    body actually sent, which is empty for statuses that forbid one.
    """
    body = response.body_bytes if _body_allowed(response.status) else b""
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return [
        {"type": "http.response.start", "status": response.status, "headers": headers},
        {"type": "http.response.body", "body": body},
    ]


async def send_response(response: Response, send: Send) -> None:
    """Emit *response* through ASGI ``send``."""
    for message in response_messages(response):
        await send(message)
