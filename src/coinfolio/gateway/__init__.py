"""Upstream request gateway."""

from coinfolio.gateway.request_gateway import (
    DEFAULT_RATE_LIMIT_DELAY_SECONDS,
    RequestCategory,
    RequestGateway,
)

__all__ = [
    "DEFAULT_RATE_LIMIT_DELAY_SECONDS",
    "RequestCategory",
    "RequestGateway",
]
