"""Tests for roost.adapters — the three handler adapters and their shared core."""

import asyncio
import json

import pytest

from roost.adapters import (
    HTML,
    JSON,
    STRING,
    BoundHandler,
    bind,
    html_handler,
    json_handler,
    serialize_json,
    string_handler,
)
from roost.config import AppConfig
from roost.context import Context
from roost.errors import ConfigurationError, HTTPError
from roost.http.headers import Headers
from roost.http.request import IncomingRequest, JsonRequest, Request
from roost.http.response import Response


def _incoming(uri: str = "/x", *, method: str = "GET", body: bytes = b"") -> IncomingRequest:
    return IncomingRequest(method=method, uri=uri, headers=Headers(), body=body)


async def _call(bound: BoundHandler, incoming: IncomingRequest | None = None, **kwargs) -> Response:
    ctx = kwargs.pop("ctx", None) or Context()
    params = kwargs.pop("params", {})
    return await bound(incoming or _incoming(), params, ctx)


class TestRegistration:
    def test_kinds(self) -> None:
        assert string_handler(lambda r: "").adapter is STRING
        assert html_handler(lambda r: "").adapter is HTML
        assert json_handler(lambda r: {}).adapter is JSON

    def test_one_arg_handler(self) -> None:
        assert string_handler(lambda request: "").wants_context is False

    def test_two_arg_handler(self) -> None:
        assert string_handler(lambda request, ctx: "").wants_context is True

    def test_zero_arg_handler_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must accept"):
            string_handler(lambda: "")

    def test_three_arg_handler_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            json_handler(lambda a, b, c: {})

    def test_double_wrap_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="already bound"):
            bind(JSON, string_handler(lambda r: ""))

    def test_views(self) -> None:
        assert STRING.request_type is Request
        assert HTML.request_type is Request
        assert JSON.request_type is JsonRequest


class TestStringAdapter:
    async def test_verbatim_text(self) -> None:
        response = await _call(string_handler(lambda r: "test: /x"))
        assert response.status == 200
        assert response.content_type.startswith("text/plain")
        assert response.text == "test: /x"

    async def test_async_handler_awaited(self) -> None:
        async def handler(request):
            await asyncio.sleep(0)
            return "done"

        response = await _call(string_handler(handler))
        assert response.text == "done"

    async def test_request_view(self) -> None:
        seen: list[Request] = []

        def handler(request):
            seen.append(request)
            return "ok"

        await _call(
            string_handler(handler),
            _incoming("/test/rows?x=1&x=2", body=b"hello"),
            params={"table": "rows"},
        )
        request = seen[0]
        assert request.uri == "/test/rows?x=1&x=2"
        assert request.path == "/test/rows"
        assert request.params == {"table": "rows"}
        assert request.query.get_list("x") == ["1", "2"]
        assert request.body == "hello"

    async def test_non_string_return_is_500(self) -> None:
        response = await _call(string_handler(lambda r: 42))
        assert response.status == 500
        assert response.text == "Internal Server Error"

    async def test_status_override(self) -> None:
        response = await _call(string_handler(lambda r: ("created", 201)))
        assert response.status == 201
        assert response.text == "created"

    async def test_response_passthrough(self) -> None:
        response = await _call(string_handler(lambda r: Response("raw", status=202)))
        assert response.status == 202
        assert response.text == "raw"


class TestHtmlAdapter:
    async def test_markup_not_escaped(self) -> None:
        markup = "<html><body><h1>Html Handler</h1></body></html>"
        response = await _call(html_handler(lambda r: markup))
        assert response.content_type.startswith("text/html")
        assert response.text == markup

    async def test_error_message_escaped(self) -> None:
        def handler(request):
            raise HTTPError(400, "<b>bad</b> input")

        response = await _call(html_handler(handler))
        assert response.status == 400
        assert response.text == "&lt;b&gt;bad&lt;/b&gt; input"


class TestJsonAdapter:
    async def test_structured_value(self) -> None:
        value = {"int": 5, "real": 4.2, "msg": "foo", "obj": {"nested": True}}
        response = await _call(json_handler(lambda r: value))
        assert response.status == 200
        assert response.content_type.startswith("application/json")
        assert response.text == '{"int":5,"real":4.2,"msg":"foo","obj":{"nested":true}}'

    async def test_key_order_preserved(self) -> None:
        response = await _call(json_handler(lambda r: {"z": 1, "a": 2}))
        assert response.text == '{"z":1,"a":2}'

    async def test_list_body(self) -> None:
        response = await _call(json_handler(lambda r: [1, "two", None]))
        assert json.loads(response.text) == [1, "two", None]

    async def test_status_override(self) -> None:
        response = await _call(json_handler(lambda r: ({"id": 1}, 201)))
        assert response.status == 201
        assert json.loads(response.text) == {"id": 1}

    @pytest.mark.parametrize("status", [99, 600, 999])
    async def test_out_of_range_status_is_500(self, status: int) -> None:
        response = await _call(json_handler(lambda r: ({"a": 1}, status)))
        assert response.status == 500
        assert json.loads(response.text) == {"status": 500, "message": "Internal Server Error"}

    async def test_bool_second_item_is_not_a_status(self) -> None:
        response = await _call(json_handler(lambda r: ("x", True)))
        assert response.status == 200
        assert json.loads(response.text) == ["x", True]

    async def test_json_body_decoded(self) -> None:
        seen: list[JsonRequest] = []

        def handler(request):
            seen.append(request)
            return {}

        await _call(json_handler(handler), _incoming(method="POST", body=b'{"a": [1, 2]}'))
        assert seen[0].body == {"a": [1, 2]}

    async def test_empty_body_is_none(self) -> None:
        seen: list[JsonRequest] = []

        def handler(request):
            seen.append(request)
            return {}

        await _call(json_handler(handler))
        assert seen[0].body is None

    async def test_invalid_json_body_is_400_without_invoking(self) -> None:
        calls: list[object] = []
        response = await _call(
            json_handler(lambda r: calls.append(r)), _incoming(method="POST", body=b"{nope")
        )
        assert response.status == 400
        assert calls == []

    async def test_application_error(self) -> None:
        def handler(request):
            raise HTTPError(418, "I'm a teapot")

        response = await _call(json_handler(handler))
        assert response.status == 418
        assert response.content_type.startswith("application/json")
        assert json.loads(response.text) == {"status": 418, "message": "I'm a teapot"}

    async def test_nan_rejected(self) -> None:
        response = await _call(json_handler(lambda r: {"x": float("nan")}))
        assert response.status == 500


class TestContext:
    async def test_context_injected(self) -> None:
        async def fake_query(sql, params=()):
            return [(3,)]

        async def handler(request, ctx):
            rows = await ctx.query("SELECT COUNT(*) FROM items", [])
            return f"entries: {rows[0][0]}"

        response = await _call(string_handler(handler), ctx=Context(query=fake_query))
        assert response.text == "entries: 3"

    async def test_missing_query_capability_is_500(self) -> None:
        async def handler(request, ctx):
            await ctx.query("SELECT 1", [])
            return "unreachable"

        response = await _call(string_handler(handler))
        assert response.status == 500

    async def test_handler_invoked_once_on_failure(self) -> None:
        calls: list[int] = []

        def handler(request):
            calls.append(1)
            raise RuntimeError("boom")

        response = await _call(string_handler(handler))
        assert response.status == 500
        assert calls == [1]

    async def test_debug_exposes_traceback(self) -> None:
        def handler(request):
            raise RuntimeError("boom")

        ctx = Context(config=AppConfig(debug=True))
        response = await _call(string_handler(handler), ctx=ctx)
        assert response.status == 500
        assert "RuntimeError: boom" in response.text


class TestSerializeJson:
    def test_deterministic(self) -> None:
        value = {"b": [1, {"c": 2.5}], "a": "é"}
        assert serialize_json(value) == serialize_json(dict(value))
        assert serialize_json(value) == '{"b":[1,{"c":2.5}],"a":"é"}'
