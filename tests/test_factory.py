"""Tests for waypoint.routing.factory: route declarations become middleware."""

import pytest

from waypoint.context import Context, Mode
from waypoint.errors import InvalidArguments
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.routing.factory import RouteMiddleware, create_middleware


def _call(middleware: RouteMiddleware, url: str, method: str = "GET") -> tuple[object, Context]:
    context = Context(Mode.SYNC)
    return middleware(Request(method=method, url=url), context), context


class TestCreateMiddleware:
    def test_static_payload_returned_unchanged(self) -> None:
        payload = {"status": 201, "body": "made"}
        middleware = create_middleware("post", "/things", payload)
        result, _ = _call(middleware, "http://h/things", method="POST")
        assert result is payload

    def test_response_payload(self) -> None:
        payload = Response(status=204)
        middleware = create_middleware("*", "/", payload)
        result, _ = _call(middleware, "http://h/", method="DELETE")
        assert result is payload

    def test_no_match_returns_none(self) -> None:
        middleware = create_middleware("get", "/things", {"body": "x"})
        assert _call(middleware, "http://h/other")[0] is None
        assert _call(middleware, "http://h/things", method="POST")[0] is None

    def test_handler_receives_request_and_context(self) -> None:
        seen: list[tuple[Request, Context]] = []

        def handler(request: Request, context: Context) -> str:
            seen.append((request, context))
            return "hi"

        middleware = create_middleware("get", "/hello", handler)
        result, context = _call(middleware, "http://h/hello")
        assert result == "hi"
        assert seen == [(Request(method="GET", url="http://h/hello"), context)]

    def test_handler_not_called_without_match(self) -> None:
        calls: list[str] = []
        middleware = create_middleware("get", "/hello", lambda r, c: calls.append("x"))
        _call(middleware, "http://h/bye")
        assert calls == []

    def test_handler_none_passes_through(self) -> None:
        middleware = create_middleware("get", "/hello", lambda r, c: None)
        assert _call(middleware, "http://h/hello")[0] is None

    async def test_async_handler_result_is_awaitable(self) -> None:
        async def handler(request: Request, context: Context) -> str:
            return "later"

        middleware = create_middleware("get", "/hello", handler)
        result, _ = _call(middleware, "http://h/hello")
        assert await result == "later"  # type: ignore[misc]

    def test_captures_bound_into_context(self) -> None:
        middleware = create_middleware("get", "/users/{id:int}", lambda r, c: c.params["id"])
        result, context = _call(middleware, "http://h/users/9")
        assert result == "9"
        assert context.params == {"id": "9"}

    def test_captures_not_bound_without_match(self) -> None:
        middleware = create_middleware("post", "/users/{id:int}", {"body": "x"})
        _, context = _call(middleware, "http://h/users/9")
        assert context.params == {}

    def test_invalid_payload_raises(self) -> None:
        with pytest.raises(InvalidArguments, match="GET /x needs a handler or a response"):
            create_middleware("get", "/x", None)

    def test_repr_names_handler(self) -> None:
        def show(request: Request, context: Context) -> None:
            return None

        middleware = create_middleware("get", "/x", show)
        assert "GET /x" in repr(middleware)
        assert "show" in repr(middleware)
