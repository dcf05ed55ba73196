"""Middleware-chain router with first-match-wins dispatch.

Middleware are tried in registration order; the first one that returns
something other than ``None`` produces the response and no later
middleware runs.

The dispatch protocol (normalize, emit ``before``, iterate, normalize
the response, emit ``after``, funnel failures into one ``error``
emission) is written once, as the ``_dispatch`` generator. It yields
each middleware's raw result and is resumed with the resolved value.
Two drivers run it:

- ``route_sync``  never suspends. An awaitable result is discarded and
  ``SyncViolation`` is thrown back into the generator.
- ``route_async`` awaits each awaitable result. An exception raised
  while awaiting is thrown back into the generator, so it takes the
  same failure path as a synchronous raise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias, TypeVar

from waypoint._internal.invoke import discard, is_pending, resolve
from waypoint._internal.types import Handler, Middleware, MiddlewareResult, ResponseLike
from waypoint.config import RouterConfig
from waypoint.context import Context, Mode, normalise_context
from waypoint.errors import InvalidArguments, InvalidRequest, NoMatch, SyncViolation
from waypoint.events import (
    AfterEvent,
    AnyListener,
    BeforeEvent,
    ErrorEvent,
    EventChannel,
    EventKind,
    LoggingErrorListener,
)
from waypoint.http.request import Request, normalise_request
from waypoint.http.response import Response, normalise_response
from waypoint.routing.factory import create_middleware
from waypoint.routing.pattern import MethodPatternLike, PathPatternLike

logger = logging.getLogger("waypoint.router")

_HandlerT = TypeVar("_HandlerT", bound=Callable[..., Any])

# Raw middleware result in, resolved result back, Response on completion
_Dispatch: TypeAlias = Generator[MiddlewareResult, Any, Response]


class ErrorListenerSlot(Enum):
    """Who answers ``error`` events when nobody else does.

    ``DEFAULT``: no explicit ``error`` listener was ever registered; the
    router's built-in listener is attached.
    ``RETIRED``: the caller registered one at some point; the built-in
    listener is detached and never comes back.
    """

    DEFAULT = "default"
    RETIRED = "retired"


@dataclass(slots=True)
class _Call:
    """Best-effort view of one routing call, for the failure path."""

    context: Context
    request: Request | None = None
    error: Exception | None = None


class Router:
    """Ordered middleware chain with synchronous and asynchronous dispatch.

    Usage::

        router = Router()
        router.get("/users/{id:int}", lambda request, ctx: {"body": ctx.params["id"]})
        router.use(lambda request, ctx: {"status": 404, "body": "fallback"})

        response = router.route_sync({"method": "GET", "url": "http://h/users/42"})
        response = await router.route_async({"url": "http://h/users/42"}, {"user": alice})

    Registration and event methods return the router, so calls chain.
    """

    __slots__ = ("_config", "_default_error_listener", "_error_slot", "_events", "_middleware")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._middleware: list[Middleware] = []
        self._events = EventChannel()
        self._default_error_listener: LoggingErrorListener | None = None
        self._error_slot = ErrorListenerSlot.DEFAULT
        if self._config.log_unhandled_errors:
            self._default_error_listener = LoggingErrorListener(
                logging.getLogger(self._config.logger_name)
            )
            self._events.on(EventKind.ERROR, self._default_error_listener)

    # -- Introspection --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Snapshot of the chain, in dispatch order."""
        return tuple(self._middleware)

    @property
    def error_listener_slot(self) -> ErrorListenerSlot:
        return self._error_slot

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(tuple(self._middleware))

    # -- Events --

    def on(self, kind: EventKind | str, listener: AnyListener) -> Router:
        """Register *listener* for ``before``, ``after`` or ``error``.

        The first ``error`` listener permanently retires the router's
        built-in error listener.
        """
        kind = EventKind.coerce(kind)
        self._events.on(kind, listener)  # type: ignore[call-overload]
        if kind is EventKind.ERROR:
            self._retire_default_error_listener()
        return self

    def off(self, kind: EventKind | str, listener: AnyListener) -> Router:
        """Remove one registration of *listener*. Never restores the built-in listener."""
        self._events.off(kind, listener)  # type: ignore[call-overload]
        return self

    def _retire_default_error_listener(self) -> None:
        if self._error_slot is ErrorListenerSlot.RETIRED:
            return
        if self._default_error_listener is not None:
            self._events.off(EventKind.ERROR, self._default_error_listener)
        self._error_slot = ErrorListenerSlot.RETIRED

    # -- Registration --

    def use(
        self,
        method_or_middleware: MethodPatternLike | Middleware,
        path: PathPatternLike | None = None,
        handler_or_response: Handler | ResponseLike | None = None,
    ) -> Router:
        """Append a middleware to the chain.

        ``use(middleware)`` appends a raw middleware that sees every request.
        ``use(method, path, handler_or_response)`` appends a middleware that
        answers only requests matching *method* and *path*.

        Raises ``InvalidArguments`` for any other combination.
        """
        if callable(method_or_middleware) and path is None and handler_or_response is None:
            self._middleware.append(method_or_middleware)
        elif (
            not callable(method_or_middleware)
            and path is not None
            and handler_or_response is not None
        ):
            self._middleware.append(
                create_middleware(method_or_middleware, path, handler_or_response)
            )
        else:
            msg = "Invalid parameters"
            raise InvalidArguments(msg)
        return self

    def options(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("OPTIONS", path, handler_or_response)

    def head(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("HEAD", path, handler_or_response)

    def get(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("GET", path, handler_or_response)

    def post(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("POST", path, handler_or_response)

    def put(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("PUT", path, handler_or_response)

    def patch(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("PATCH", path, handler_or_response)

    def delete(self, path: PathPatternLike, handler_or_response: Handler | ResponseLike) -> Router:
        return self.use("DELETE", path, handler_or_response)

    def route(
        self,
        path: PathPatternLike,
        *,
        methods: Iterable[str] | str = ("GET",),
    ) -> Callable[[_HandlerT], _HandlerT]:
        """Decorator form of ``use(methods, path, handler)``.

        Returns the handler unchanged::

            @router.route("/users/{id}", methods=["GET", "HEAD"])
            def show_user(request, ctx):
                return {"body": ctx.params["id"]}
        """

        def decorator(handler: _HandlerT) -> _HandlerT:
            self.use(methods, path, handler)
            return handler

        return decorator

    # -- Dispatch --

    def route_sync(
        self,
        request: Request | Mapping[str, Any] | None,
        context: Mapping[str, Any] | Context | None = None,
    ) -> Response:
        """Dispatch *request* without ever suspending.

        Returns the normalized response of the first middleware that
        produced one. Raises ``InvalidRequest``, ``NoMatch``,
        ``SyncViolation``, or whatever a middleware raised, after the
        ``error`` event has fired.
        """
        call = _Call(context=normalise_context(context, Mode.SYNC))
        steps = self._dispatch(request, call)
        send: Callable[[Any], MiddlewareResult] = steps.send
        value: Any = None
        while True:
            try:
                pending = send(value)
            except StopIteration as stop:
                return stop.value
            except RuntimeError as exc:
                # A StopIteration leaving the generator arrives wrapped
                if call.error is None or exc.__cause__ is not call.error:
                    raise
                raise call.error from None
            if is_pending(pending):
                discard(pending)
                send, value = steps.throw, SyncViolation()
            else:
                send, value = steps.send, pending

    async def route_async(
        self,
        request: Request | Mapping[str, Any] | None,
        context: Mapping[str, Any] | Context | None = None,
    ) -> Response:
        """Dispatch *request*, awaiting each middleware in turn.

        Middleware still run one at a time, in registration order.
        Raises ``InvalidRequest``, ``NoMatch``, or whatever a middleware
        raised (synchronously or while being awaited), after the
        ``error`` event has fired.

        A ``StopIteration`` from a middleware still reaches the caller as
        the interpreter's ``RuntimeError``, chained from the original,
        since no coroutine can raise ``StopIteration``.
        """
        call = _Call(context=normalise_context(context, Mode.ASYNC))
        steps = self._dispatch(request, call)
        send: Callable[[Any], MiddlewareResult] = steps.send
        value: Any = None
        while True:
            try:
                pending = send(value)
            except StopIteration as stop:
                return stop.value
            except RuntimeError as exc:
                if call.error is None or exc.__cause__ is not call.error:
                    raise
                raise call.error from None
            try:
                value = await resolve(pending)
            except Exception as exc:
                send, value = steps.throw, exc
            else:
                send = steps.send

    def _dispatch(self, request: Request | Mapping[str, Any] | None, call: _Call) -> _Dispatch:
        with self._failure_path(call):
            call.request = normalise_request(request, default_method=self._config.default_method)
        self._events.emit(EventKind.BEFORE, BeforeEvent(call.request, call.context))

        with self._failure_path(call):
            for middleware in tuple(self._middleware):
                result = yield middleware(call.request, call.context)
                if result is None:
                    continue
                response = normalise_response(result, default_status=self._config.default_status)
                break
            else:
                raise NoMatch()

        logger.debug(
            "%s %s -> %d (%s)",
            call.request.method,
            call.request.url,
            response.status,
            call.context.mode.value,
        )
        self._events.emit(EventKind.AFTER, AfterEvent(call.request, response, call.context))
        return response

    @contextmanager
    def _failure_path(self, call: _Call) -> Iterator[None]:
        """Emit ``error`` once for any failure inside the block, then re-raise it."""
        try:
            yield
        except Exception as exc:
            if isinstance(exc, InvalidRequest) and call.request is None:
                call.request = exc.request
            call.error = exc
            self._emit_error(call, exc)
            raise

    def _emit_error(self, call: _Call, error: Exception) -> None:
        logger.debug("Routing failed (%s): %r", call.context.mode.value, error)
        self._events.emit(EventKind.ERROR, ErrorEvent(call.request, call.context, error))
