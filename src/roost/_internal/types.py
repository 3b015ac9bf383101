"""Shared type aliases used across roost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user function taking (request) or (request, ctx)
Handler: TypeAlias = Callable[..., Any]

# Adapter serializer: handler return value to response body text
Serializer: TypeAlias = Callable[[Any], str]
