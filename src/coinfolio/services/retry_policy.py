"""Caller-level retries with exponential backoff for market data requests."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from coinfolio.core.exceptions import UpstreamError

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Decides whether and when a failed request is retried.

    attempt / failure_count are 0-based: the first failure is failure 0.
    Throttling errors get fewer, slower retries; other client errors are
    never retried; everything else gets the default schedule.
    """

    throttled_max_retries: int = 2
    throttled_base_delay: float = 5.0
    default_max_retries: int = 3
    default_base_delay: float = 1.0
    max_delay: float = 30.0

    @staticmethod
    def is_throttled(error: BaseException) -> bool:
        return isinstance(error, UpstreamError) and error.is_throttled

    def should_retry(self, failure_count: int, error: BaseException) -> bool:
        if self.is_throttled(error):
            return failure_count < self.throttled_max_retries
        if isinstance(error, UpstreamError) and error.is_client_error:
            return False
        return failure_count < self.default_max_retries

    def retry_delay(self, attempt: int, error: BaseException) -> float:
        """Delay in seconds before retry number attempt."""
        base = self.throttled_base_delay if self.is_throttled(error) else self.default_base_delay
        return min(base * (2 ** attempt), self.max_delay)


async def execute_with_retry(
    func: Callable[[], Awaitable[T]],
    *,
    retry_policy: RetryPolicy,
    logger: Optional[logging.Logger] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    description: str = "request",
) -> T:
    """Await func(), retrying per retry_policy; the last error propagates."""
    failure_count = 0
    while True:
        try:
            return await func()
        except UpstreamError as exc:
            if not retry_policy.should_retry(failure_count, exc):
                raise
            delay = retry_policy.retry_delay(failure_count, exc)
            if logger:
                logger.warning(
                    "Retrying %s in %.1fs after failure %s: %s",
                    description,
                    delay,
                    failure_count + 1,
                    exc,
                )
            failure_count += 1
            await sleep(delay)
