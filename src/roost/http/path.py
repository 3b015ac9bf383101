"""Request URI parsing.

``parse_path`` is pure: the same URI always yields an equal
``ParsedPath``, so handlers and the route table can both call it freely.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import unquote

from roost.http.query import QueryParams, parse_query


@dataclass(frozen=True, slots=True)
class ParsedPath:
    """A request URI split into its routing-relevant parts.

    ``params`` is empty when the value comes straight from
    :func:`parse_path`; a request view's ``parsed`` carries the
    params its route bound.
    """

    raw_uri: str
    path: str
    segments: tuple[str, ...]
    query: QueryParams
    params: Mapping[str, str] = field(default_factory=dict)


def split_segments(path: str) -> tuple[str, ...]:
    """Split a path on ``/``, dropping empty segments."""
    return tuple(part for part in path.split("/") if part)


def decode_segment(raw: str) -> str:
    """Percent-decode one path segment.

    Unlike query components, ``+`` stays literal. An escape that does not
    decode to valid UTF-8 leaves the segment raw.
    """
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError:
        return raw


def parse_path(uri: str) -> ParsedPath:
    """Decompose a raw request URI.

    *uri* is the target as sent, still percent-encoded, so an encoded
    ``%3F`` or ``%2F`` stays inside its segment. ``raw_uri`` keeps the
    input unchanged; a ``#fragment`` is ignored for parsing.

    Examples::

        parse_path("/test")             -> segments ("test",), empty query
        parse_path("//a/b/?x=1&x=2")    -> segments ("a", "b"), query x -> ["1", "2"]
        parse_path("/s?flag")           -> query flag -> [""]
    """
    path, _, query_string = uri.partition("#")[0].partition("?")
    return ParsedPath(
        raw_uri=uri,
        path=path,
        segments=split_segments(path),
        query=parse_query(query_string),
    )
