"""Test utilities for waypoint routers.

``EventRecorder`` subscribes to a router's events and keeps them in
order, so tests can assert on what fired and with which payload::

    from waypoint.testing import EventRecorder

    recorder = EventRecorder.attach(router)
    router.route_sync({"url": "http://h/"})
    assert recorder.kinds == ["before", "after"]
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waypoint.events import AfterEvent, AnyEvent, BeforeEvent, ErrorEvent, EventKind

if TYPE_CHECKING:
    from waypoint.routing.router import Router


@dataclass(slots=True)
class EventRecorder:
    """Ordered log of ``(kind, event)`` pairs emitted by a router.

    Attaching registers an ``error`` listener, which retires the
    router's built-in error listener. Pass ``kinds=`` without
    ``"error"`` to leave it in place.
    """

    events: list[tuple[EventKind, AnyEvent]] = field(default_factory=list)

    @classmethod
    def attach(
        cls,
        router: Router,
        kinds: tuple[EventKind | str, ...] = tuple(EventKind),
    ) -> EventRecorder:
        recorder = cls()
        for kind in kinds:
            router.on(kind, recorder.listener_for(EventKind.coerce(kind)))
        return recorder

    def listener_for(self, kind: EventKind) -> Callable[[AnyEvent], None]:
        def record(event: AnyEvent) -> None:
            self.events.append((kind, event))

        return record

    @property
    def kinds(self) -> list[str]:
        return [kind.value for kind, _ in self.events]

    @property
    def before(self) -> list[BeforeEvent]:
        return [e for k, e in self.events if k is EventKind.BEFORE]  # type: ignore[misc]

    @property
    def after(self) -> list[AfterEvent]:
        return [e for k, e in self.events if k is EventKind.AFTER]  # type: ignore[misc]

    @property
    def errors(self) -> list[ErrorEvent]:
        return [e for k, e in self.events if k is EventKind.ERROR]  # type: ignore[misc]

    def clear(self) -> None:
        self.events.clear()
