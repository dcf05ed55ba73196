"""Immutable request description.

The router never touches a socket: callers hand it an already-built
request (or a partial mapping), and ``normalise_request`` turns that into
a frozen ``Request`` with an absolute URL.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any
from urllib.parse import SplitResult, urlsplit

from waypoint.errors import InvalidRequest
from waypoint.http.headers import Headers
from waypoint.http.query import QueryParams


@dataclass(frozen=True)
class Request:
    """An immutable request.

    ``method`` is stored upper-case; matching against it is
    case-insensitive anyway. ``url`` is absolute once the request has
    passed through ``normalise_request``.
    """

    method: str = "GET"
    url: str = ""
    headers: Headers = field(default_factory=Headers)
    body: Any = None

    # -- Computed properties --

    @cached_property
    def _parts(self) -> SplitResult:
        return urlsplit(self.url)

    @property
    def scheme(self) -> str:
        """URL scheme, e.g. ``"https"``."""
        return self._parts.scheme

    @property
    def host(self) -> str:
        """Network location, including the port when the URL has one."""
        return self._parts.netloc

    @property
    def path(self) -> str:
        """URL path; ``"/"`` when the URL has none."""
        return self._parts.path or "/"

    @property
    def query(self) -> QueryParams:
        """Parsed query string parameters."""
        return QueryParams(self._parts.query)

    @property
    def is_absolute(self) -> bool:
        """True if the URL carries both a scheme and a host."""
        return bool(self._parts.scheme and self._parts.netloc)


def normalise_request(
    partial: Request | Mapping[str, Any] | None,
    *,
    default_method: str = "GET",
) -> Request:
    """Coerce *partial* into a fully-populated ``Request``.

    Accepts a ``Request``, a mapping with any of ``method``, ``url``,
    ``headers`` and ``body``, or ``None``. Unknown mapping keys are
    ignored.

    Raises ``InvalidRequest`` if the resulting URL is not absolute. The
    exception carries the unvalidated request on ``.request``.
    """
    if isinstance(partial, Request):
        method, url, headers, body = partial.method, partial.url, partial.headers, partial.body
    else:
        data: Mapping[str, Any] = partial or {}
        method = data.get("method") or default_method
        url = data.get("url") or ""
        headers = data.get("headers")
        body = data.get("body")

    request = Request(
        method=str(method).upper(),
        url=str(url),
        headers=Headers.coerce(headers),
        body=body,
    )
    if not request.is_absolute:
        raise InvalidRequest(request.url, request)
    return request
