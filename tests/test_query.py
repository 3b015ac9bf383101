"""Tests for roost.http.query — immutable QueryParams."""

import pytest

from roost.http.query import QueryParams, decode_component, parse_query


class TestQueryParams:
    def test_getitem(self) -> None:
        q = parse_query("q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = parse_query("q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_contains(self) -> None:
        q = parse_query("q=hello")
        assert "q" in q
        assert "missing" not in q

    def test_len_counts_distinct_keys(self) -> None:
        q = parse_query("a=1&b=2&a=3")
        assert len(q) == 2

    def test_iter_in_first_seen_order(self) -> None:
        q = parse_query("b=1&a=2&b=3")
        assert list(q) == ["b", "a"]

    def test_get_with_default(self) -> None:
        q = parse_query("q=hello")
        assert q.get("q") == "hello"
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        q = parse_query("tag=python&tag=rust&q=hello")
        assert q.get_list("tag") == ["python", "rust"]
        assert q.get_list("q") == ["hello"]
        assert q.get_list("missing") == []

    def test_get_list_is_a_copy(self) -> None:
        q = parse_query("tag=a")
        q.get_list("tag").append("b")
        assert q.get_list("tag") == ["a"]

    def test_items_list(self) -> None:
        q = parse_query("a=1&b=2&a=3")
        assert q.items_list() == [("a", "1"), ("a", "3"), ("b", "2")]

    def test_get_int(self) -> None:
        q = parse_query("page=3&size=abc")
        assert q.get_int("page") == 3
        assert q.get_int("size") is None
        assert q.get_int("missing", 10) == 10

    def test_get_bool(self) -> None:
        q = parse_query("a=true&b=0&c=ON")
        assert q.get_bool("a") is True
        assert q.get_bool("b") is False
        assert q.get_bool("c") is True
        assert q.get_bool("missing") is None

    def test_raw(self) -> None:
        assert parse_query("a=%20").raw == "a=%20"

    def test_equality_includes_repeated_values(self) -> None:
        assert parse_query("a=1&a=2") == parse_query("a=1&a=2")
        assert parse_query("a=1&a=2") != parse_query("a=1&a=3")

    def test_empty(self) -> None:
        assert len(QueryParams()) == 0


class TestDecodeComponent:
    def test_plus_is_space(self) -> None:
        assert decode_component("a+b") == "a b"

    def test_utf8(self) -> None:
        assert decode_component("%E2%9C%93") == "✓"

    def test_invalid_utf8_falls_back(self) -> None:
        assert decode_component("%FF") == "%FF"
