"""Tests for waypoint.http.headers: immutable, case-insensitive Headers."""

import pytest

from waypoint.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    return Headers(pairs)


class TestHeaders:
    def test_getitem(self) -> None:
        assert _h(("Content-Type", "text/html"))["Content-Type"] == "text/html"

    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            _h(("Accept", "*/*"))["X-Missing"]

    def test_contains(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert "Accept" in h
        assert "x-missing" not in h
        assert 42 not in h  # type: ignore[operator]

    def test_len_deduplicates(self) -> None:
        assert len(_h(("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"))) == 1

    def test_iter_yields_unique_lowercase_keys(self) -> None:
        h = _h(("Accept", "*/*"), ("Content-Type", "text/html"), ("Accept", "text/xml"))
        assert list(h) == ["accept", "content-type"]

    def test_get_with_default(self) -> None:
        h = _h(("Accept", "*/*"))
        assert h.get("accept") == "*/*"
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        h = _h(("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"), ("Accept", "*/*"))
        assert h.get_list("set-cookie") == ["a=1", "b=2"]
        assert h.get_list("x-missing") == []

    def test_with_header_returns_new(self) -> None:
        h = _h(("A", "1"))
        h2 = h.with_header("B", "2")
        assert "b" not in h
        assert h2.pairs == (("A", "1"), ("B", "2"))

    def test_equality_ignores_name_case(self) -> None:
        assert _h(("Accept", "*/*")) == _h(("accept", "*/*"))
        assert _h(("Accept", "*/*")) == {"ACCEPT": "*/*"}
        assert _h(("Accept", "*/*")) != _h(("Accept", "text/html"))

    def test_hashable(self) -> None:
        assert hash(_h(("Accept", "*/*"))) == hash(_h(("accept", "*/*")))


class TestCoerce:
    def test_none(self) -> None:
        assert Headers.coerce(None) == Headers()

    def test_mapping(self) -> None:
        assert Headers.coerce({"X-Id": "7"})["x-id"] == "7"

    def test_pairs(self) -> None:
        h = Headers.coerce([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        assert h.get_list("set-cookie") == ["a=1", "b=2"]

    def test_headers_passthrough(self) -> None:
        h = _h(("A", "1"))
        assert Headers.coerce(h) is h

    def test_values_become_strings(self) -> None:
        assert Headers.coerce({"Content-Length": 12})["content-length"] == "12"  # type: ignore[dict-item]
