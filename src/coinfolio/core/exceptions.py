"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientHoldingError(AppError):
    """Raised when a sell asks for more of a coin than is held."""

    def __init__(self, coin_id: str, requested: str, available: str):
        super().__init__(
            f"Insufficient holding of {coin_id}: requested {requested}, available {available}",
            code="INSUFFICIENT_HOLDING",
        )


class UpstreamError(AppError):
    """Raised when the market data service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: str = "UPSTREAM_ERROR"):
        self.status_code = status_code
        super().__init__(message, code=code)

    @property
    def is_throttled(self) -> bool:
        return self.status_code == 429

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class UpstreamThrottledError(UpstreamError):
    """Raised on HTTP 429 when no fallback data exists for the request."""

    def __init__(self, message: str = "Rate limited. Please wait a moment and try again."):
        super().__init__(f"API Error: {message}", status_code=429, code="UPSTREAM_THROTTLED")


class UpstreamTransportError(UpstreamError):
    """Raised when the upstream could not be reached or its body was unreadable."""

    def __init__(self, message: str):
        super().__init__(f"API Error: {message}", status_code=None, code="UPSTREAM_UNAVAILABLE")


class PersistenceError(AppError):
    """Raised when a portfolio snapshot cannot be serialized or parsed."""

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_ERROR")
