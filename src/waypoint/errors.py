"""Waypoint exception hierarchy.

Shared across the router, the normalizers and the pattern matcher so
every module raises and catches the same types.

Middleware failures are never wrapped: whatever a middleware raises is
re-raised to the caller of ``route_sync()`` / ``route_async()`` as-is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waypoint.http.request import Request


class RouterError(Exception):
    """Base for all waypoint-specific errors."""


class InvalidArguments(RouterError, TypeError):
    """Raised when a registration call has an inconsistent set of arguments.

    Surfaced immediately to the caller of ``use()``, ``on()`` or a verb
    shortcut. Never emitted as an ``error`` event.
    """


class InvalidRequest(RouterError, ValueError):
    """The request does not normalize to an absolute URL.

    ``request`` holds the unvalidated request built from the caller's
    input, so ``error`` listeners still have something to report.
    """

    def __init__(self, url: str, request: Request | None = None) -> None:
        super().__init__(f"Request URL must be absolute: {url!r}")
        self.url = url
        self.request = request


class NoMatch(RouterError):
    """No middleware returned a response for the request."""

    def __init__(self, detail: str = "No middleware returned a response for the request.") -> None:
        super().__init__(detail)


class SyncViolation(RouterError):
    """A middleware returned an awaitable during synchronous dispatch."""

    def __init__(
        self,
        detail: str = (
            "A middleware returned a response asynchronously"
            " while the request was being handled synchronously."
        ),
    ) -> None:
        super().__init__(detail)
