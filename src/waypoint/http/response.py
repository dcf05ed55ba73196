"""Response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from waypoint.http.headers import Headers

_FIELD_NAMES = frozenset({"status", "headers", "body"})


@dataclass(frozen=True)
class Response:
    """A response produced by a middleware and normalized by the router.

    ``status``, ``headers`` and ``body`` are the well-known fields. Any
    other payload field a middleware supplies lands in ``extra``; item
    access covers both::

        response = normalise_response({"status": 201, "body": "ok", "etag": "v1"})
        response["status"]  # 201
        response["etag"]    # "v1"
    """

    status: int = 200
    headers: Headers = field(default_factory=Headers)
    body: Any = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    # -- Field access --

    def __getitem__(self, key: str) -> Any:
        if key in _FIELD_NAMES:
            return getattr(self, key)
        return self.extra[key]

    def __contains__(self, key: object) -> bool:
        return key in _FIELD_NAMES or key in self.extra

    def get(self, key: str, default: Any = None) -> Any:
        """Return the payload field *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a plain dict: well-known fields plus ``extra``."""
        return {
            "status": self.status,
            "headers": dict(self.headers),
            "body": self.body,
            **self.extra,
        }

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=self.headers.with_header(name, value))

    def with_body(self, body: Any) -> Response:
        """Return a new Response with a different body."""
        return replace(self, body=body)

    def with_extra(self, **values: Any) -> Response:
        """Return a new Response with additional payload fields."""
        return replace(self, extra=MappingProxyType({**self.extra, **values}))


def normalise_response(partial: Any, *, default_status: int = 200) -> Response:
    """Coerce a middleware result into a ``Response``.

    - ``Response`` is returned unchanged.
    - A mapping is split into the well-known fields and ``extra``; a
      missing ``status`` becomes *default_status*. No key is dropped.
    - ``str`` / ``bytes`` become the body of a *default_status* response.

    Raises ``TypeError`` for anything else.
    """
    if isinstance(partial, Response):
        return partial
    if isinstance(partial, (str, bytes)):
        return Response(status=default_status, body=partial)
    if isinstance(partial, Mapping):
        status = partial.get("status")
        return Response(
            status=default_status if status is None else int(status),
            headers=Headers.coerce(partial.get("headers")),
            body=partial.get("body"),
            extra=MappingProxyType(
                {key: value for key, value in partial.items() if key not in _FIELD_NAMES}
            ),
        )
    msg = (
        f"Middleware returned {type(partial).__name__}; expected a Response,"
        " a mapping, str or bytes."
    )
    raise TypeError(msg)

