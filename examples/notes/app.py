"""Notes — a tiny JSON API over SQLite.

Demonstrates JSON request bodies, explicit status codes, the decorator
registration form, and typed query parameters.

Run with any ASGI server:
    uvicorn app:app
"""

from roost import App, HTTPError, json_handler
from roost.data import SqliteQuery

query = SqliteQuery(":memory:")
app = App(query=query)


@app.on_startup
async def schema():
    await query.execute_script(
        "CREATE TABLE IF NOT EXISTS notes (id INTEGER PRIMARY KEY, text TEXT NOT NULL)"
    )


@app.route("POST", "/notes", adapter=json_handler)
async def create(request, ctx):
    if not isinstance(request.body, dict) or not isinstance(request.body.get("text"), str):
        raise HTTPError(422, "Expected a JSON object with a 'text' string")
    rows = await ctx.query(
        "INSERT INTO notes (text) VALUES (?) RETURNING id", [request.body["text"]]
    )
    return {"id": rows[0][0], "text": request.body["text"]}, 201


@app.route("GET", "/notes", adapter=json_handler)
async def index(request, ctx):
    limit = request.query.get_int("limit", 50)
    rows = await ctx.query("SELECT id, text FROM notes ORDER BY id LIMIT ?", [limit])
    return [{"id": id_, "text": text} for id_, text in rows]


@app.route("GET", "/notes/:id", adapter=json_handler)
async def show(request, ctx):
    rows = await ctx.query("SELECT id, text FROM notes WHERE id = ?", [request.params["id"]])
    if not rows:
        raise HTTPError(404, f"No note {request.params['id']}")
    id_, text = rows[0]
    return {"id": id_, "text": text}
