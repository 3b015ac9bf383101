"""Fixture — one route per adapter, plus a SQLite-backed row counter.

Demonstrates query parameters, path parameters, the three adapters, and
an application error.

Run with any ASGI server:
    uvicorn app:app
"""

from roost import App, HTTPError, html_handler, json_handler, parse_path, string_handler
from roost.data import SqliteQuery, first_value

query = SqliteQuery(":memory:")
app = App(query=query)


@app.on_startup
async def seed():
    await query.execute_script(
        """
        CREATE TABLE IF NOT EXISTS items (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
        DELETE FROM items;
        INSERT INTO items (name) VALUES ('a'), ('b'), ('c');
        """
    )


async def count_rows(ctx, table: str) -> str:
    if not table.isidentifier():
        raise HTTPError(400, f"Not a table name: {table!r}")
    rows = await ctx.query(f'SELECT COUNT(*) FROM "{table}"', [])
    return f"entries: {first_value(rows)}"


async def count_or_echo(request, ctx):
    uri = parse_path(request.uri)
    table = uri.query.get("table")
    if table:
        return await count_rows(ctx, table)
    return f"test: {request.uri}"


async def count_table(request, ctx):
    table = request.params.get("table")
    if table:
        return await count_rows(ctx, table)
    return f"test: {request.uri}"


def page(_request):
    return """
    <html>
      <body>
        <h1>Html Handler</h1>
      </body>
    </html>
    """


def data(_request):
    return {
        "int": 5,
        "real": 4.2,
        "msg": "foo",
        "obj": {
            "nested": True,
        },
    }


def teapot(_request):
    raise HTTPError(418, "I'm a teapot")


app.add_route("GET", "/test", string_handler(count_or_echo))
app.add_route("GET", "/test/:table", string_handler(count_table))
app.add_route("GET", "/html", html_handler(page))
app.add_route("GET", "/json", json_handler(data))
app.add_route("GET", "/error", json_handler(teapot))
