"""Shared fixtures for waypoint tests.

``router`` is a fresh ``Router`` whose built-in error listener is
retired, so failing-dispatch tests do not spam the log. Tests about the
built-in listener build their own ``Router()``.
"""

import asyncio
from typing import Any

import pytest

from waypoint.context import Context
from waypoint.http.request import Request
from waypoint.routing.router import Router

FOOBAR_URL = "http://localhost/foo/bar"
BARFOO_URL = "http://localhost/bar/foo"
MIDDLEWARE_ERROR_MESSAGE = "boom"

GET_FOOBAR_RESPONSE: dict[str, Any] = {"status": 200, "body": "ok"}


def return_middleware(request: Request, context: Context) -> dict[str, Any]:
    return GET_FOOBAR_RESPONSE


async def resolve_middleware(request: Request, context: Context) -> dict[str, Any]:
    await asyncio.sleep(0)
    return GET_FOOBAR_RESPONSE


def throw_middleware(request: Request, context: Context) -> None:
    raise RuntimeError(MIDDLEWARE_ERROR_MESSAGE)


async def reject_middleware(request: Request, context: Context) -> None:
    await asyncio.sleep(0)
    raise RuntimeError(MIDDLEWARE_ERROR_MESSAGE)


def _silence(event: object) -> None:
    pass


@pytest.fixture
def router() -> Router:
    return Router().on("error", _silence)
