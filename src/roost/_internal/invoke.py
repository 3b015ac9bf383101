"""Invoke helpers — call sync or async handlers uniformly.

Roost handlers can be ``def`` or ``async def``. The adapter core calls
them through :func:`invoke` so the sync/async check lives in one place.
"""

import inspect
from collections.abc import Callable
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def positional_arity(func: Callable[..., Any]) -> int:
    """Count the positional parameters *func* accepts.

    ``*args`` counts as unbounded and is reported as 2, the most any
    roost handler is ever called with.
    """
    count = 0
    for param in inspect.signature(func).parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count
