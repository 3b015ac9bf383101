"""Tests for roost.http.headers — case-insensitive immutable headers."""

from roost.http.headers import Headers


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = Headers(((b"content-type", b"text/html"),))
        assert h["Content-Type"] == "text/html"
        assert "CONTENT-TYPE" in h

    def test_get_list(self) -> None:
        h = Headers(((b"x-tag", b"a"), (b"X-Tag", b"b")))
        assert h.get_list("x-tag") == ["a", "b"]
        assert h["x-tag"] == "a"
        assert len(h) == 1

    def test_missing(self) -> None:
        assert Headers().get("x") is None
        assert 1 not in Headers()

    def test_from_mapping(self) -> None:
        h = Headers.from_mapping({"Accept": "application/json"})
        assert h.raw == ((b"accept", b"application/json"),)
