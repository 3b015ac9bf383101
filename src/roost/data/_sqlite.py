"""Async SQLite wrapper using stdlib sqlite3 + anyio.

Runs all blocking sqlite3 calls in a worker thread via ``anyio.to_thread``.
``check_same_thread=False`` is required because the thread pool may
dispatch consecutive calls to different threads; callers serialize access.
"""

import sqlite3
from collections.abc import Callable, Sequence
from typing import Any

import anyio
import anyio.to_thread


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return anyio.to_thread.run_sync(func, *args)  # type: ignore[union-attr]


class AsyncConnection:
    """Async wrapper around ``sqlite3.Connection``."""

    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        """Execute *sql* and return every row as a tuple."""

        def _fetch() -> list[tuple[Any, ...]]:
            cursor = self._conn.execute(sql, tuple(params))
            try:
                return [tuple(row) for row in cursor.fetchall()]
            finally:
                cursor.close()

        return await _run_sync(_fetch)

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements at once."""
        await _run_sync(lambda: self._conn.executescript(sql))

    async def close(self) -> None:
        await _run_sync(self._conn.close)


async def connect(path: str) -> AsyncConnection:
    """Open an async SQLite connection.

    Uses ``isolation_level=None`` so individual statements commit
    immediately.
    """
    conn = await _run_sync(
        lambda: sqlite3.connect(path, isolation_level=None, check_same_thread=False)
    )
    return AsyncConnection(conn)
