"""Router configuration.

RouterConfig is a frozen dataclass, fixed once the router is built.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(default_status=204, logger_name="myapp.routes")
    """

    # Normalization
    default_method: str = "GET"
    default_status: int = 200

    # Logging
    logger_name: str = "waypoint.router"
    log_unhandled_errors: bool = True  # Default error listener logs until retired
