"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from waypoint.http.request import Request
from waypoint.routing.pattern import MethodPattern, PathPattern


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled method + path pattern pair.

    Created by the middleware factory at registration time. Immutable
    once built, like the middleware that wraps it.
    """

    method: MethodPattern
    path: PathPattern

    def match(self, request: Request) -> RouteMatch | None:
        """Return a ``RouteMatch`` if *request* satisfies both patterns."""
        if not self.method.matches(request.method):
            return None
        params = self.path.match(request)
        if params is None:
            return None
        return RouteMatch(route=self, path_params=params)

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
