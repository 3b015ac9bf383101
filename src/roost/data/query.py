"""Query capability protocol and row helpers."""

from collections.abc import Sequence
from typing import Any, Protocol, TypeAlias, runtime_checkable

from roost.data.errors import EmptyResultError

Row: TypeAlias = tuple[Any, ...]


@runtime_checkable
class QueryFn(Protocol):
    """An async SQL capability: statement and positional params in, rows out.

    Each row is a sequence of scalars in column order.
    """

    async def __call__(self, sql: str, params: Sequence[Any] = (), /) -> list[Row]: ...


def first_value(rows: Sequence[Sequence[Any]]) -> Any:
    """Return the first column of the first row.

    Raises ``EmptyResultError`` when *rows* is empty or the first row has
    no columns.
    """
    if not rows or not rows[0]:
        msg = "Query returned no rows."
        raise EmptyResultError(msg)
    return rows[0][0]
