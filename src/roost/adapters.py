"""Handler adapters — fix a handler's request view, content type, and
serialization at registration time.

There are exactly three adapters::

    STRING  text/plain        body is the returned str, verbatim
    HTML    text/html         body is the returned str, verbatim (no escaping)
    JSON    application/json  body is the returned value, JSON-encoded

Wrap a handler with the matching factory and register the result::

    app.add_route("GET", "/json", json_handler(lambda request: {"ok": True}))

All three share one core (:class:`BoundHandler`): build the view, call the
handler, serialize the value or translate the error. A handler may return
``(value, status)`` to override the 200 default, or a ready ``Response``.
"""

from __future__ import annotations

import html
import json as json_module
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from roost._internal.invoke import invoke, positional_arity
from roost._internal.types import Handler, Serializer
from roost.context import Context
from roost.errors import ConfigurationError
from roost.http.request import IncomingRequest, JsonRequest, Request
from roost.http.response import APPLICATION_JSON, TEXT_HTML, TEXT_PLAIN, Response
from roost.server.errors import classify, error_response


def serialize_text(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"Text handlers must return str, got {type(value).__name__}."
        raise TypeError(msg)
    return value


def serialize_json(value: Any) -> str:
    """Encode *value* compactly, keeping dict insertion order.

    Equal values always produce identical bodies. NaN and infinity are
    rejected since they are not valid JSON.
    """
    return json_module.dumps(
        value,
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    )


def _text_error(status: int, message: str) -> str:
    return message


def _html_error(status: int, message: str) -> str:
    return html.escape(message, quote=False)


def _json_error(status: int, message: str) -> str:
    return serialize_json({"status": status, "message": message})


@dataclass(frozen=True, slots=True)
class Adapter:
    """One content type's request view, serializer, and error body."""

    name: str
    content_type: str
    serialize: Serializer
    render_error: Callable[[int, str], str]
    request_type: type[Request] | type[JsonRequest]

    def respond(self, result: Any) -> Response:
        """Turn a handler's return value into a response."""
        if isinstance(result, Response):
            return result
        status = 200
        if (
            isinstance(result, tuple)
            and len(result) == 2
            and isinstance(result[1], int)
            and not isinstance(result[1], bool)
        ):
            result, status = result
            if not 100 <= status <= 599:
                msg = f"Handler returned HTTP status {status}, expected 100..599"
                raise ValueError(msg)
        return Response(
            body=self.serialize(result),
            status=status,
            content_type=self.content_type,
        )


STRING = Adapter("string", TEXT_PLAIN, serialize_text, _text_error, Request)
HTML = Adapter("html", TEXT_HTML, serialize_text, _html_error, Request)
JSON = Adapter("json", APPLICATION_JSON, serialize_json, _json_error, JsonRequest)


@dataclass(frozen=True, slots=True)
class BoundHandler:
    """A user handler paired with its adapter.

    Calling it always yields exactly one ``Response``; the handler is
    invoked at most once and never retried.
    """

    func: Handler
    adapter: Adapter
    wants_context: bool = False

    async def __call__(
        self,
        incoming: IncomingRequest,
        params: Mapping[str, str],
        ctx: Context,
    ) -> Response:
        try:
            request = self.adapter.request_type.build(incoming, params)
            if self.wants_context:
                result = await invoke(self.func, request, ctx)
            else:
                result = await invoke(self.func, request)
            return self.adapter.respond(result)
        except Exception as exc:
            return error_response(classify(exc), self.adapter, incoming, debug=ctx.config.debug)


def bind(adapter: Adapter, func: Handler) -> BoundHandler:
    """Pair *func* with *adapter*.

    *func* must take ``(request)`` or ``(request, ctx)``; anything else is
    a ``ConfigurationError`` at registration.
    """
    if isinstance(func, BoundHandler):
        msg = f"Handler {func.func!r} is already bound to the {func.adapter.name} adapter."
        raise ConfigurationError(msg)
    arity = positional_arity(func)
    if arity not in (1, 2):
        name = getattr(func, "__qualname__", repr(func))
        msg = f"Handler {name} must accept (request) or (request, ctx), not {arity} arguments."
        raise ConfigurationError(msg)
    return BoundHandler(func=func, adapter=adapter, wants_context=arity == 2)


def string_handler(func: Handler) -> BoundHandler:
    """Wrap a handler returning ``str`` as ``text/plain``."""
    return bind(STRING, func)


def html_handler(func: Handler) -> BoundHandler:
    """Wrap a handler returning HTML markup as ``text/html``.

    The markup is sent as returned; the handler is trusted to escape.
    """
    return bind(HTML, func)


def json_handler(func: Handler) -> BoundHandler:
    """Wrap a handler returning a JSON-compatible value as ``application/json``."""
    return bind(JSON, func)
