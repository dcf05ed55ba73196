"""Method and path patterns compiled into request predicates.

A method pattern is a literal (``"get"``, case-insensitive), the
wildcard ``"*"``, or an iterable of literals.

A path pattern is one of::

    "/users"                     literal path
    "/users?active=1"            literal path + required query parameters
    "http://api.local:8080/users"  absolute URL literal (scheme and host must match)
    "/users/{id}"                templated segment, bound into context.params
    "/users/{id:int}"            templated segment with a converter
    "/files/{rest:path}"         catch-all, consumes the remaining path
    "/users/:id"                 colon-style templated segment
    re.compile(r"^/v\\d+/")      general expression, searched against the path
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias
from urllib.parse import urlsplit

from waypoint.errors import InvalidArguments
from waypoint.http.query import QueryParams
from waypoint.http.request import Request
from waypoint.routing.params import converter_pattern

ANY_METHOD = "*"

MethodPatternLike: TypeAlias = str | Iterable[str]
PathPatternLike: TypeAlias = str | re.Pattern[str]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``    (is_param=False)
    Param:   ``/{id}``     (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    Colon:   ``/:id``      (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/users/:id"         -> [..., PathSegment(":id", is_param=True, param_name="id")]

    Raises ``InvalidArguments`` for ``<param>`` style segments.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> segments; "
                "use {param} or :param instead."
            )
            raise InvalidArguments(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        elif part.startswith(":") and len(part) > 1:
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            segments.append(PathSegment(value=part))
    return segments


def _compile_segments(path: str, segments: list[PathSegment]) -> re.Pattern[str]:
    pieces: list[str] = []
    for seg in segments:
        if seg.is_param:
            name = seg.param_name or ""
            if not name.isidentifier():
                msg = f"Invalid segment name {name!r} in route path {path!r}"
                raise InvalidArguments(msg)
            pieces.append(f"/(?P<{name}>{converter_pattern(seg.param_type)})")
        else:
            pieces.append("/" + re.escape(seg.value))
    try:
        return re.compile("".join(pieces) + "/?")
    except re.error as exc:
        msg = f"Cannot compile route path {path!r}: {exc}"
        raise InvalidArguments(msg) from exc


@dataclass(frozen=True, slots=True)
class MethodPattern:
    """Case-insensitive method matcher. ``methods is None`` means any method."""

    methods: frozenset[str] | None

    @classmethod
    def compile(cls, pattern: MethodPatternLike) -> MethodPattern:
        if isinstance(pattern, str):
            if pattern.strip() == ANY_METHOD:
                return cls(None)
            return cls(frozenset({pattern.upper()}))
        methods = frozenset(str(method).upper() for method in pattern)
        if not methods:
            msg = "Method pattern must name at least one method"
            raise InvalidArguments(msg)
        if ANY_METHOD in methods:
            return cls(None)
        return cls(methods)

    def matches(self, method: str) -> bool:
        return self.methods is None or method.upper() in self.methods

    def __str__(self) -> str:
        if self.methods is None:
            return ANY_METHOD
        return "|".join(sorted(self.methods))


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Compiled path pattern.

    ``scheme`` / ``host`` are set only for absolute URL literals.
    ``query`` holds parameters the request must carry. ``search`` marks
    a general expression, which may match anywhere in the path.
    """

    source: str
    regex: re.Pattern[str]
    scheme: str | None = None
    host: str | None = None
    query: QueryParams | None = None
    search: bool = False

    @classmethod
    def compile(cls, pattern: PathPatternLike) -> PathPattern:
        if isinstance(pattern, re.Pattern):
            return cls(source=pattern.pattern, regex=pattern, search=True)
        if not isinstance(pattern, str):
            msg = f"Path pattern must be a str or re.Pattern, got {type(pattern).__name__}"
            raise InvalidArguments(msg)

        parts = urlsplit(pattern)
        path = parts.path or "/"
        regex = _compile_segments(pattern, parse_path(path))
        query = QueryParams(parts.query) if parts.query else None
        if parts.scheme and parts.netloc:
            return cls(
                source=pattern,
                regex=regex,
                scheme=parts.scheme.lower(),
                host=parts.netloc.lower(),
                query=query,
            )
        return cls(source=pattern, regex=regex, query=query)

    def match(self, request: Request) -> dict[str, str] | None:
        """Return the named captures if *request* matches, else ``None``."""
        if self.scheme is not None and request.scheme.lower() != self.scheme:
            return None
        if self.host is not None and request.host.lower() != self.host:
            return None
        if self.query is not None and not request.query.matches(self.query):
            return None

        if self.search:
            found = self.regex.search(request.path)
        else:
            found = self.regex.fullmatch(request.path)
        if found is None:
            return None
        return {name: value for name, value in found.groupdict().items() if value is not None}

    def __str__(self) -> str:
        return self.source
