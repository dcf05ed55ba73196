"""Routing events and the synchronous event channel.

Every routing call emits exactly one of two sequences::

    before -> after      (a middleware produced a response)
    before? -> error     (normalization failed, nothing matched, or a middleware raised)

Payloads are frozen dataclasses, one shape per ``EventKind``. Listeners
run synchronously, in registration order, whatever the router's mode.

Listener failures are not caught here: an exception raised by a
listener propagates out of ``emit()`` to whoever emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal, TypeAlias, overload

from waypoint.context import Context
from waypoint.errors import InvalidArguments
from waypoint.http.request import Request
from waypoint.http.response import Response


class EventKind(StrEnum):
    """The closed set of routing events."""

    BEFORE = "before"
    AFTER = "after"
    ERROR = "error"

    @classmethod
    def coerce(cls, kind: EventKind | str) -> EventKind:
        """Accept a member or its string value; reject anything else."""
        try:
            return cls(kind)
        except ValueError:
            known = ", ".join(repr(member.value) for member in cls)
            msg = f"Unknown event kind {kind!r}. Expected one of {known}"
            raise InvalidArguments(msg) from None


@dataclass(frozen=True, slots=True)
class BeforeEvent:
    """Emitted once per call, after normalization, before any middleware."""

    request: Request
    context: Context


@dataclass(frozen=True, slots=True)
class AfterEvent:
    """Emitted once per successful call, before the response is returned."""

    request: Request
    response: Response
    context: Context


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """Emitted once per failed call, before the error is re-raised.

    ``request`` is best-effort: when the request itself failed to
    normalize it is the unvalidated request built from the caller's input.
    """

    request: Request | None
    context: Context
    error: BaseException


BeforeListener: TypeAlias = Callable[[BeforeEvent], Any]
AfterListener: TypeAlias = Callable[[AfterEvent], Any]
ErrorListener: TypeAlias = Callable[[ErrorEvent], Any]
AnyListener: TypeAlias = BeforeListener | AfterListener | ErrorListener
AnyEvent: TypeAlias = BeforeEvent | AfterEvent | ErrorEvent

_BeforeKind: TypeAlias = Literal[EventKind.BEFORE, "before"]
_AfterKind: TypeAlias = Literal[EventKind.AFTER, "after"]
_ErrorKind: TypeAlias = Literal[EventKind.ERROR, "error"]


class EventChannel:
    """Synchronous publish/subscribe bus for routing events.

    Each kind keeps an ordered multiset of listeners: registering the same
    listener twice makes it run twice; ``off()`` removes one occurrence
    and is a no-op for a listener that is not registered.

    Usage::

        channel = EventChannel()
        channel.on(EventKind.AFTER, lambda event: print(event.response.status))
        channel.emit(EventKind.AFTER, AfterEvent(request, response, context))
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: dict[EventKind, list[AnyListener]] = {kind: [] for kind in EventKind}

    @overload
    def on(self, kind: _BeforeKind, listener: BeforeListener) -> None: ...
    @overload
    def on(self, kind: _AfterKind, listener: AfterListener) -> None: ...
    @overload
    def on(self, kind: _ErrorKind, listener: ErrorListener) -> None: ...

    def on(self, kind: EventKind | str, listener: AnyListener) -> None:
        """Register *listener* for *kind*."""
        if not callable(listener):
            msg = f"Event listener must be callable, got {type(listener).__name__}"
            raise InvalidArguments(msg)
        self._listeners[EventKind.coerce(kind)].append(listener)

    @overload
    def off(self, kind: _BeforeKind, listener: BeforeListener) -> None: ...
    @overload
    def off(self, kind: _AfterKind, listener: AfterListener) -> None: ...
    @overload
    def off(self, kind: _ErrorKind, listener: ErrorListener) -> None: ...

    def off(self, kind: EventKind | str, listener: AnyListener) -> None:
        """Remove one registration of *listener* for *kind*, if present."""
        listeners = self._listeners[EventKind.coerce(kind)]
        if listener in listeners:
            listeners.remove(listener)

    @overload
    def emit(self, kind: _BeforeKind, event: BeforeEvent) -> None: ...
    @overload
    def emit(self, kind: _AfterKind, event: AfterEvent) -> None: ...
    @overload
    def emit(self, kind: _ErrorKind, event: ErrorEvent) -> None: ...

    def emit(self, kind: EventKind | str, event: AnyEvent) -> None:
        """Call every listener for *kind* with *event*, in registration order.

        Iterates over a snapshot, so listeners added or removed during
        emission take effect from the next ``emit()``.
        """
        for listener in tuple(self._listeners[EventKind.coerce(kind)]):
            listener(event)

    def listeners(self, kind: EventKind | str) -> tuple[AnyListener, ...]:
        """Return the listeners currently registered for *kind*."""
        return tuple(self._listeners[EventKind.coerce(kind)])


class LoggingErrorListener:
    """Fallback ``error`` listener: report unhandled routing failures.

    The router installs one at construction and retires it for good the
    first time the caller registers an ``error`` listener of their own.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def __call__(self, event: ErrorEvent) -> None:
        request = event.request
        method = request.method if request is not None else "?"
        url = request.url if request is not None else "?"
        self._logger.error(
            "Unhandled routing error (%s) for %s %s: %s",
            event.context.mode.value,
            method,
            url,
            event.error,
            exc_info=event.error,
        )

    def __repr__(self) -> str:
        return f"<LoggingErrorListener logger={self._logger.name!r}>"
