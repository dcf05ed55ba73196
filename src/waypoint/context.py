"""Per-call routing context.

Provides:
- ``Mode``: the execution discipline of one routing call.
- ``Context``: a caller-defined open record plus the router-managed
  ``mode`` and ``params`` fields.

A fresh ``Context`` is built for every ``route_sync()`` /
``route_async()`` call and shared, read-write, by every middleware and
every event emission of that call. It is never reused across calls.
"""

from collections.abc import Iterator, Mapping
from enum import StrEnum
from typing import Any

from waypoint.errors import InvalidArguments


class Mode(StrEnum):
    """How the router is dispatching the current call."""

    SYNC = "sync"
    ASYNC = "async"


class Context:
    """Open record of caller fields, plus ``mode`` and ``params``.

    Caller fields are reachable as attributes and as items::

        ctx = Context(Mode.SYNC, {"user": alice})
        ctx.user is ctx["user"]   # True
        ctx.trace_id = "abc"      # adds a field
        ctx.params                # named segment captures, e.g. {"id": "42"}

    ``mode`` is owned by the router; a caller-supplied ``mode`` key is
    overridden when the context is built.
    """

    __slots__ = ("_fields", "mode", "params")

    def __init__(
        self,
        mode: Mode,
        fields: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> None:
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "params", dict(params or {}))
        object.__setattr__(self, "_fields", dict(fields or {}))

    # -- Attribute access --

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not slots
        fields = object.__getattribute__(self, "_fields")
        try:
            return fields[name]
        except KeyError:
            msg = f"Context has no field {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in Context.__slots__:
            object.__setattr__(self, name, value)
        else:
            self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    # -- Item access --

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the caller field *key*, or *default* if missing."""
        return self._fields.get(key, default)

    def fields(self) -> dict[str, Any]:
        """Return a shallow copy of the caller fields."""
        return dict(self._fields)

    def __repr__(self) -> str:
        return f"Context(mode={self.mode.value!r}, params={self.params!r}, fields={self._fields!r})"


def normalise_context(fields: Mapping[str, Any] | Context | None, mode: Mode) -> Context:
    """Build the fresh per-call context.

    Caller keys are shallow-copied and never dropped. ``mode`` always
    comes from the router; a ``mode`` key in *fields* is discarded.
    When *fields* is already a ``Context``, its fields and params are
    copied into the new one.
    """
    if fields is None:
        return Context(mode)
    if isinstance(fields, Context):
        return Context(mode, fields.fields(), fields.params)
    if not isinstance(fields, Mapping):
        msg = f"Context must be a mapping or a Context, got {type(fields).__name__}"
        raise InvalidArguments(msg)
    merged = {key: value for key, value in fields.items() if key != "mode"}
    params = merged.pop("params", None)
    return Context(mode, merged, params)
