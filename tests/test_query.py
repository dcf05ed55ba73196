"""Tests for waypoint.http.query: immutable QueryParams."""

from waypoint.http.query import QueryParams


class TestQueryParams:
    def test_getitem_returns_first(self) -> None:
        q = QueryParams("a=1&a=2&b=3")
        assert q["a"] == "1"
        assert q.get_list("a") == ["1", "2"]

    def test_blank_values_kept(self) -> None:
        q = QueryParams("flag=&x=1")
        assert q["flag"] == ""

    def test_get_int(self) -> None:
        q = QueryParams("page=3&name=x")
        assert q.get_int("page") == 3
        assert q.get_int("name") is None
        assert q.get_int("missing", 1) == 1

    def test_raw(self) -> None:
        assert QueryParams("a=1&b=2").raw == "a=1&b=2"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.get("a") is None


class TestMatches:
    def test_subset_matches(self) -> None:
        assert QueryParams("a=1&b=2").matches(QueryParams("a=1"))

    def test_missing_key_fails(self) -> None:
        assert not QueryParams("b=2").matches(QueryParams("a=1"))

    def test_value_mismatch_fails(self) -> None:
        assert not QueryParams("a=2").matches({"a": "1"})

    def test_repeated_values_must_agree(self) -> None:
        assert QueryParams("a=1&a=2").matches(QueryParams("a=1&a=2"))
        assert not QueryParams("a=1").matches(QueryParams("a=1&a=2"))
