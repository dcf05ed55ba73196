"""Tests for waypoint.config: RouterConfig frozen dataclass."""

import pytest

from waypoint.config import RouterConfig
from waypoint.routing.router import Router


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()
        assert cfg.default_method == "GET"
        assert cfg.default_status == 200
        assert cfg.logger_name == "waypoint.router"
        assert cfg.log_unhandled_errors is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()
        with pytest.raises(AttributeError):
            cfg.default_status = 204  # type: ignore[misc]

    def test_router_uses_default_config(self) -> None:
        assert Router().config == RouterConfig()

    def test_default_status_applies(self) -> None:
        router = Router(RouterConfig(default_status=202)).on("error", print)
        router.use(lambda request, context: {"body": "queued"})
        assert router.route_sync({"url": "http://h/"}).status == 202

    def test_default_method_applies(self) -> None:
        router = Router(RouterConfig(default_method="post")).on("error", print)
        router.post("/submit", {"body": "ok"})
        assert router.route_sync({"url": "http://h/submit"}).body == "ok"
