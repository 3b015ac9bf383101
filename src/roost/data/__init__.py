"""The query capability handlers use to reach a data store.

Handlers never import a database. They receive a ``Context`` whose
``query`` is any async callable matching :class:`QueryFn`::

    async def count(request, ctx):
        rows = await ctx.query("SELECT COUNT(*) FROM items", [])
        return f"entries: {first_value(rows)}"

``SqliteQuery`` is the bundled implementation (stdlib ``sqlite3`` run
in worker threads via ``anyio``).
"""

from roost.data.errors import DataError, EmptyResultError, QueryError
from roost.data.query import QueryFn, Row, first_value
from roost.data.sqlite import SqliteQuery

__all__ = [
    "DataError",
    "EmptyResultError",
    "QueryError",
    "QueryFn",
    "Row",
    "SqliteQuery",
    "first_value",
]
