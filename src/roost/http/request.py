"""Immutable HTTP requests.

``IncomingRequest`` is what the ASGI boundary reads off the wire.
``Request`` and ``JsonRequest`` are the read-only views handlers receive:
the same metadata plus route params, with the body decoded for the
adapter the route was registered with.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote

from roost._internal.asgi import Receive, Scope
from roost.errors import HTTPError
from roost.http.headers import Headers
from roost.http.path import ParsedPath, parse_path
from roost.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class IncomingRequest:
    """A request as received, before routing.

    ``uri`` is the path plus the raw query string, exactly what a handler
    sees as ``request.uri``.
    """

    method: str
    uri: str
    headers: Headers
    body: bytes = b""
    client: tuple[str, int] | None = None

    @property
    def path(self) -> str:
        return self.uri.partition("?")[0]

    @classmethod
    async def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        *,
        max_body_size: int | None = None,
    ) -> IncomingRequest:
        """Read an ASGI HTTP scope and its full body.

        ``uri`` is rebuilt from ``raw_path``, which servers leave encoded;
        ``path`` is already decoded and only used when ``raw_path`` is absent.

        Raises ``HTTPError(413)`` once the body grows past *max_body_size*.
        """
        raw_path: bytes | None = scope.get("raw_path")
        if raw_path:
            path = raw_path.partition(b"?")[0].decode("latin-1")
        else:
            path = quote(scope["path"])
        query_string: bytes = scope.get("query_string", b"")
        uri = f"{path}?{query_string.decode('latin-1')}" if query_string else path

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                size += len(chunk)
                if max_body_size is not None and size > max_body_size:
                    raise HTTPError(status=413, detail="Request body too large")
                chunks.append(chunk)
            if not message.get("more_body", False):
                break

        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            uri=uri,
            headers=Headers(tuple(scope.get("headers", ()))),
            body=b"".join(chunks),
            client=tuple(client) if client else None,
        )


class _RequestView:
    """URI accessors shared by the handler-facing request views."""

    __slots__ = ()

    uri: str
    params: Mapping[str, str]

    @property
    def parsed(self) -> ParsedPath:
        """The request URI decomposed by :func:`parse_path`, with route params."""
        return replace(parse_path(self.uri), params=self.params)

    @property
    def path(self) -> str:
        return self.parsed.path

    @property
    def query(self) -> QueryParams:
        """Decoded query parameters, repeated keys included."""
        return self.parsed.query


@dataclass(frozen=True, slots=True)
class Request(_RequestView):
    """Read-only request view for string and HTML handlers.

    ``body`` is the request body decoded as UTF-8 text.
    """

    method: str
    uri: str
    params: Mapping[str, str]
    headers: Headers
    body: str = ""

    @classmethod
    def build(cls, incoming: IncomingRequest, params: Mapping[str, str]) -> Request:
        return cls(
            method=incoming.method,
            uri=incoming.uri,
            params=dict(params),
            headers=incoming.headers,
            body=incoming.body.decode("utf-8", errors="replace"),
        )


@dataclass(frozen=True, slots=True)
class JsonRequest(_RequestView):
    """Read-only request view for JSON handlers.

    ``body`` is the decoded JSON value, or ``None`` for an empty body.
    A body that is not valid JSON is answered with 400 before the
    handler runs.
    """

    method: str
    uri: str
    params: Mapping[str, str]
    headers: Headers
    body: Any = None

    @classmethod
    def build(cls, incoming: IncomingRequest, params: Mapping[str, str]) -> JsonRequest:
        body: Any = None
        if incoming.body.strip():
            try:
                body = json_module.loads(incoming.body)
            except ValueError as exc:
                raise HTTPError(status=400, detail=f"Invalid JSON body: {exc}") from exc
        return cls(
            method=incoming.method,
            uri=incoming.uri,
            params=dict(params),
            headers=incoming.headers,
            body=body,
        )
