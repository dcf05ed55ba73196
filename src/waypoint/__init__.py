"""Waypoint: a middleware-chain request router.

Register middleware in order; the first one to return a response wins.
Dispatch synchronously or asynchronously, and observe every call
through ``before`` / ``after`` / ``error`` events.

Basic usage::

    from waypoint import Router

    router = Router()
    router.get("/foo/bar", {"status": 200, "body": "ok"})

    response = router.route_sync({"method": "GET", "url": "http://h/foo/bar"})
    response = await router.route_async({"method": "GET", "url": "http://h/foo/bar"})
"""

__version__ = "0.1.0"
__all__ = [
    "AfterEvent",
    "BeforeEvent",
    "Context",
    "ErrorEvent",
    "EventChannel",
    "EventKind",
    "Headers",
    "InvalidArguments",
    "InvalidRequest",
    "Mode",
    "NoMatch",
    "Request",
    "Response",
    "Router",
    "RouterConfig",
    "RouterError",
    "SyncViolation",
    "create_middleware",
    "normalise_context",
    "normalise_request",
    "normalise_response",
]

_LAZY_IMPORTS: dict[str, str] = {
    "AfterEvent": "waypoint.events",
    "BeforeEvent": "waypoint.events",
    "ErrorEvent": "waypoint.events",
    "EventChannel": "waypoint.events",
    "EventKind": "waypoint.events",
    "Context": "waypoint.context",
    "Mode": "waypoint.context",
    "normalise_context": "waypoint.context",
    "Headers": "waypoint.http.headers",
    "Request": "waypoint.http.request",
    "normalise_request": "waypoint.http.request",
    "Response": "waypoint.http.response",
    "normalise_response": "waypoint.http.response",
    "InvalidArguments": "waypoint.errors",
    "InvalidRequest": "waypoint.errors",
    "NoMatch": "waypoint.errors",
    "RouterError": "waypoint.errors",
    "SyncViolation": "waypoint.errors",
    "Router": "waypoint.routing.router",
    "RouterConfig": "waypoint.config",
    "create_middleware": "waypoint.routing.factory",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module 'waypoint' has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
