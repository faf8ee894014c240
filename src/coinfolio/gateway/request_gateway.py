"""Rate-limited request gateway for the upstream market data service."""

import asyncio
import copy
import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import httpx

from coinfolio.core.exceptions import (
    UpstreamError,
    UpstreamThrottledError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT_DELAY_SECONDS = 1.2

RequestFn = Callable[[], Awaitable[httpx.Response]]


class RequestCategory(str, Enum):
    """Kind of upstream request; selects the fallback used on throttling."""

    MARKETS = "markets"
    SEARCH = "search"
    CHART = "chart"
    OTHER = "other"


@dataclass
class _PendingRequest:
    request_fn: RequestFn
    category: RequestCategory
    future: asyncio.Future


class RequestGateway:
    """
    Serializes upstream calls through one FIFO queue.

    At most one request is in flight, and each dispatch waits until
    min_interval_seconds have passed since the previous request completed.
    The dispatcher task exists only while the queue is non-empty; the next
    enqueue starts a new one.

    A 429 answer is not an error: the fallback dataset registered for the
    request's category is returned instead. Categories without a fallback
    raise UpstreamThrottledError.
    """

    def __init__(
        self,
        min_interval_seconds: float = DEFAULT_RATE_LIMIT_DELAY_SECONDS,
        fallbacks: Optional[dict[RequestCategory, Any]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._min_interval = min_interval_seconds
        self._fallbacks = dict(fallbacks or {})
        self._clock = clock
        self._sleep = sleep
        self._queue: deque[_PendingRequest] = deque()
        self._dispatcher: Optional[asyncio.Task] = None
        self._last_request_time: Optional[float] = None

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval

    @property
    def pending(self) -> int:
        """Number of requests waiting to be dispatched."""
        return len(self._queue)

    @property
    def is_processing(self) -> bool:
        return self._dispatcher is not None and not self._dispatcher.done()

    async def enqueue(
        self,
        request_fn: RequestFn,
        category: RequestCategory = RequestCategory.OTHER,
    ) -> Any:
        """
        Queue a request and wait for its decoded JSON result.

        request_fn is called with no arguments when the request reaches the
        head of the queue and must return an awaitable httpx.Response.
        """
        future = asyncio.get_running_loop().create_future()
        self._queue.append(_PendingRequest(request_fn, category, future))
        if not self.is_processing:
            self._dispatcher = asyncio.create_task(self._process_queue())
        return await future

    async def _process_queue(self) -> None:
        while self._queue:
            await self._wait_for_slot()
            pending = self._queue.popleft()
            try:
                result = await self._execute(pending)
            except Exception as exc:
                if not pending.future.done():
                    pending.future.set_exception(exc)
            else:
                if not pending.future.done():
                    pending.future.set_result(result)
            finally:
                self._last_request_time = self._clock()

    async def _wait_for_slot(self) -> None:
        if self._last_request_time is None:
            return
        remaining = self._min_interval - (self._clock() - self._last_request_time)
        # Timers may fire marginally early, so re-check after each sleep.
        while remaining > 0:
            await self._sleep(remaining)
            remaining = self._min_interval - (self._clock() - self._last_request_time)

    async def _execute(self, pending: _PendingRequest) -> Any:
        try:
            response = await pending.request_fn()
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code == 429:
            fallback = self._fallbacks.get(pending.category)
            if fallback is None:
                raise UpstreamThrottledError()
            logger.warning(
                "Rate limited on %s request, returning fallback data",
                pending.category.value,
            )
            return copy.deepcopy(fallback)

        if not response.is_success:
            raise UpstreamError(
                f"API Error: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamTransportError(f"Invalid JSON in response: {exc}") from exc


def _error_message(response: httpx.Response) -> str:
    """Prefer the upstream's own error text, as the public API returns {"error": ...}."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        error = body["error"]
        if isinstance(error, dict):
            error = error.get("error_message") or error.get("status") or error
        return str(error)
    return f"HTTP error! status: {response.status_code}"
