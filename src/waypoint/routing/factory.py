"""Middleware factory: turn a route declaration into a middleware.

``create_middleware(method, path, handler_or_response)`` compiles both
patterns once and returns a ``RouteMiddleware``: a callable with the
uniform ``(request, context)`` middleware signature that answers only
the requests its route matches.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint._internal.types import Handler, MiddlewareResult, ResponseLike
from waypoint.context import Context
from waypoint.errors import InvalidArguments
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.routing.pattern import MethodPattern, MethodPatternLike, PathPattern, PathPatternLike
from waypoint.routing.route import Route


@dataclass(frozen=True, slots=True)
class RouteMiddleware:
    """A middleware bound to one route.

    Exactly one of ``handler`` / ``response`` is set. A static
    ``response`` is returned unchanged on every match; a ``handler`` is
    called with ``(request, context)`` and its result, possibly ``None``
    or awaitable, is returned as-is.
    """

    route: Route
    handler: Handler | None = None
    response: ResponseLike | None = None

    def __call__(self, request: Request, context: Context) -> MiddlewareResult:
        match = self.route.match(request)
        if match is None:
            return None
        context.params.update(match.path_params)
        if self.handler is not None:
            return self.handler(request, context)
        return self.response

    def __repr__(self) -> str:
        target = getattr(self.handler, "__qualname__", None) or repr(self.response)
        return f"<RouteMiddleware {self.route} -> {target}>"


def create_middleware(
    method: MethodPatternLike,
    path: PathPatternLike,
    handler_or_response: Handler | ResponseLike | Any,
) -> RouteMiddleware:
    """Build the middleware for one route.

    *handler_or_response* is either a callable ``(request, context)``
    handler or a static payload (``Response``, mapping, ``str`` or
    ``bytes``).

    Raises ``InvalidArguments`` if it is neither, or if a pattern does
    not compile.
    """
    route = Route(method=MethodPattern.compile(method), path=PathPattern.compile(path))
    if callable(handler_or_response):
        return RouteMiddleware(route=route, handler=handler_or_response)
    if isinstance(handler_or_response, (Response, Mapping, str, bytes)):
        return RouteMiddleware(route=route, response=handler_or_response)
    msg = (
        f"Route {route} needs a handler or a response, "
        f"got {type(handler_or_response).__name__}"
    )
    raise InvalidArguments(msg)
