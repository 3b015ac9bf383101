"""Immutable query string parameters.

Implements ``Mapping[str, str]`` with multi-value lookup via ``get_list``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import unquote_plus


def decode_component(raw: str) -> str:
    """Percent-decode one query key or value.

    ``+`` decodes to a space. An escape sequence that does not decode to
    valid UTF-8 leaves the whole component raw instead of raising.
    """
    try:
        return unquote_plus(raw, errors="strict")
    except UnicodeDecodeError:
        return raw


def parse_query(query_string: str) -> QueryParams:
    """Split a raw query string on ``&`` and decode each ``key=value`` pair.

    A key without ``=`` is present with an empty value. Empty pairs
    (``a=1&&b=2``) are skipped.
    """
    pairs: list[tuple[str, str]] = []
    for part in query_string.split("&"):
        if not part:
            continue
        key, _, value = part.partition("=")
        pairs.append((decode_component(key), decode_component(value)))
    return QueryParams(pairs, raw=query_string)


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as key -> list of values, in order.
        _raw: Raw (undecoded) query string.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, pairs: Iterable[tuple[str, str]] = (), *, raw: str = "") -> None:
        data: dict[str, list[str]] = {}
        for key, value in pairs:
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryParams):
            return self._data == other._data
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        """The query string as received, before decoding."""
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def items_list(self) -> list[tuple[str, str]]:
        """Return every (key, value) pair, repeated keys included."""
        return [(key, value) for key, values in self._data.items() for value in values]

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Return value as bool (``true``/``1``/``yes``/``on`` → True)."""
        value = self.get(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")
