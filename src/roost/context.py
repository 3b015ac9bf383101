"""Per-app dependencies handed to two-argument handlers.

Handlers declared as ``def handler(request, ctx)`` receive the app's
``Context``; there is no global accessor, so tests swap in a fake query
capability by building the app with one.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from roost.config import AppConfig
from roost.data.errors import DataError
from roost.data.query import QueryFn, Row


async def _no_query(sql: str, params: Sequence[Any] = (), /) -> list[Row]:
    msg = "No query capability configured; pass query=... to App()."
    raise DataError(msg)


@dataclass(frozen=True, slots=True)
class Context:
    """Dependencies shared by every request of one app."""

    query: QueryFn = _no_query
    config: AppConfig = field(default_factory=AppConfig)
