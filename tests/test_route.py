"""Tests for waypoint.routing.route: Route and RouteMatch."""

from waypoint.http.request import Request
from waypoint.routing.pattern import MethodPattern, PathPattern
from waypoint.routing.route import Route, RouteMatch


def _route(method: str, path: str) -> Route:
    return Route(method=MethodPattern.compile(method), path=PathPattern.compile(path))


class TestRoute:
    def test_match_returns_route_match(self) -> None:
        route = _route("GET", "/users/{id:int}")
        match = route.match(Request(method="GET", url="http://h/users/42"))
        assert match == RouteMatch(route=route, path_params={"id": "42"})

    def test_method_mismatch(self) -> None:
        route = _route("POST", "/users")
        assert route.match(Request(method="GET", url="http://h/users")) is None

    def test_path_mismatch(self) -> None:
        route = _route("*", "/users")
        assert route.match(Request(method="GET", url="http://h/teams")) is None

    def test_str(self) -> None:
        assert str(_route("get", "/foo/bar")) == "GET /foo/bar"
        assert str(_route("*", "/")) == "* /"
