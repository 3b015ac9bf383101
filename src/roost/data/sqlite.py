"""SQLite-backed query capability."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from types import TracebackType
from typing import Any

import anyio

from roost.data._sqlite import AsyncConnection, connect
from roost.data.errors import DataError, QueryError
from roost.data.query import Row

logger = logging.getLogger("roost.data")


class SqliteQuery:
    """Query capability over a single SQLite connection.

    Calls are serialized with an ``anyio.Lock`` so concurrent requests
    never share the connection mid-statement.

    Usage::

        query = SqliteQuery("app.db")
        async with query:
            rows = await query("SELECT COUNT(*) FROM items", [])

    Pass ``":memory:"`` for an in-memory database. With ``echo=True``
    every statement is logged at DEBUG on ``roost.data``.
    """

    __slots__ = ("_conn", "_lock", "echo", "path")

    def __init__(self, path: str, /, *, echo: bool = False) -> None:
        self.path = path
        self.echo = echo
        self._conn: AsyncConnection | None = None
        self._lock: anyio.Lock | None = None  # Created lazily inside the event loop

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Open the connection. Calling it twice is a no-op."""
        if self._conn is None:
            self._conn = await connect(self.path)

    async def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            conn, self._conn = self._conn, None
            await conn.close()

    async def __aenter__(self) -> SqliteQuery:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def __call__(self, sql: str, params: Sequence[Any] = (), /) -> list[Row]:
        """Execute *sql* with positional *params* and return all rows.

        Raises ``QueryError`` wrapping the driver error on failure.
        """
        if self._conn is None:
            msg = "SqliteQuery is not connected; call connect() first."
            raise DataError(msg)
        if self._lock is None:
            self._lock = anyio.Lock()

        t0 = time.perf_counter()
        async with self._lock:
            try:
                return await self._conn.fetch_all(sql, params)
            except Exception as exc:
                raise QueryError(str(exc)) from exc
            finally:
                self._log_query(sql, params, time.perf_counter() - t0)

    async def execute_script(self, sql: str, /) -> None:
        """Execute several statements at once (schema setup, seeding)."""
        if self._conn is None:
            msg = "SqliteQuery is not connected; call connect() first."
            raise DataError(msg)
        if self._lock is None:
            self._lock = anyio.Lock()
        async with self._lock:
            try:
                await self._conn.executescript(sql)
            except Exception as exc:
                raise QueryError(str(exc)) from exc

    def _log_query(self, sql: str, params: Sequence[Any], elapsed: float) -> None:
        if not self.echo:
            return
        logger.debug("%6.1fms  %s  params=%r", elapsed * 1000, sql, tuple(params))
