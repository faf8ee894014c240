"""Core utilities and shared functionality."""

from coinfolio.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    UTC,
)
from coinfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientHoldingError,
    UpstreamError,
    UpstreamThrottledError,
    UpstreamTransportError,
    PersistenceError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientHoldingError",
    "UpstreamError",
    "UpstreamThrottledError",
    "UpstreamTransportError",
    "PersistenceError",
]
