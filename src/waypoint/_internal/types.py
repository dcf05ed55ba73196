"""Shared type aliases used across waypoint modules."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

from waypoint.context import Context
from waypoint.http.request import Request
from waypoint.http.response import Response

# Anything normalise_response() accepts
ResponseLike: TypeAlias = Response | Mapping[str, Any] | str | bytes

# What a middleware may hand back: a response, no opinion, or an eventual one
MiddlewareResult: TypeAlias = ResponseLike | None | Awaitable[ResponseLike | None]

# A link in the chain: always called as middleware(request, context)
Middleware: TypeAlias = Callable[[Request, Context], MiddlewareResult]

# Route handler: same shape as a middleware, only called on a match
Handler: TypeAlias = Middleware
