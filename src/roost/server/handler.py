"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw ASGI directly. Reads the request,
resolves it against the route table, runs the bound handler, and sends
the single resulting Response back through ASGI send().
"""

from urllib.parse import quote

from roost._internal.asgi import Receive, Scope, Send
from roost.adapters import STRING
from roost.context import Context
from roost.errors import HTTPError
from roost.http.headers import Headers
from roost.http.request import IncomingRequest
from roost.http.response import Response
from roost.routing.router import RouteTable
from roost.server.errors import classify, error_response
from roost.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    context: Context,
) -> None:
    """Process a single HTTP request through resolution and dispatch."""
    if scope["type"] != "http":
        return

    response = await dispatch(scope, receive, routes=routes, context=context)
    await send_response(response, send)


async def dispatch(
    scope: Scope,
    receive: Receive,
    *,
    routes: RouteTable,
    context: Context,
) -> Response:
    """Resolve and run the handler for one request.

    Failures before a handler is chosen (body too large, no matching
    route) answer in ``text/plain`` and never reach handler code.
    """
    try:
        incoming = await IncomingRequest.from_asgi(
            scope, receive, max_body_size=context.config.max_body_size
        )
    except HTTPError as exc:
        fallback = IncomingRequest(
            method=scope.get("method", "GET"),
            uri=quote(scope.get("path", "/")),
            headers=Headers(tuple(scope.get("headers", ()))),
        )
        return error_response(classify(exc), STRING, fallback)

    try:
        match = routes.resolve(incoming.method, incoming.path)
    except HTTPError as exc:
        return error_response(classify(exc), STRING, incoming)

    return await match.route.handler(incoming, match.params, context)
