"""
Retry-on-timeout execution with bounded attempts and backoff.

Only transport timeouts are retried. Every other failure, and a timeout
once the attempt budget is spent, is re-raised unchanged so callers can
inspect the original exception type.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import httpx
import requests
from urllib3.exceptions import ReadTimeoutError

from console_http.constants import (
    DEFAULT_RETRY_DELAY_MS,
    DEFAULT_RETRY_MULTIPLIER,
    MS_PER_SECOND,
)
from console_http.exceptions import InvalidConfigurationError
from console_http.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Per-request retry configuration.

    ``max_attempts`` is the total number of dispatches allowed for one
    logical request, the first one included. 0 and 1 both mean a single
    dispatch. The wait before retry ``n`` (1-based) is
    ``retry_delay_ms * multiplier ** (n - 1)``, capped by ``max_delay_ms``.
    """
    max_attempts: int = 0
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    multiplier: float = DEFAULT_RETRY_MULTIPLIER
    max_delay_ms: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int) \
                or self.max_attempts < 0:
            raise InvalidConfigurationError("retry", self.max_attempts, "an integer >= 0")
        if isinstance(self.retry_delay_ms, bool) or not isinstance(self.retry_delay_ms, int) \
                or self.retry_delay_ms < 0:
            raise InvalidConfigurationError("retry_delay", self.retry_delay_ms, "an integer number of milliseconds >= 0")
        if self.multiplier < 1.0:
            raise InvalidConfigurationError("multiplier", self.multiplier, "a number >= 1.0")
        if self.max_delay_ms is not None and self.max_delay_ms < 0:
            raise InvalidConfigurationError("max_delay_ms", self.max_delay_ms, "an integer >= 0")

    @classmethod
    def from_options(cls, retry: Optional[int], retry_delay: Optional[int] = None) -> Optional["RetryPolicy"]:
        """Build a policy from ``retry``/``retry_delay`` request options.

        Returns None when retry is absent or 0.
        """
        if not retry:
            return None
        return cls(
            max_attempts=retry,
            retry_delay_ms=DEFAULT_RETRY_DELAY_MS if retry_delay is None else retry_delay,
        )

    def allows_retry(self, attempt: int) -> bool:
        """Whether another dispatch may follow attempt number ``attempt``."""
        return self.max_attempts > 0 and attempt < self.max_attempts

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds before the dispatch that follows ``attempt``."""
        delay_ms = self.retry_delay_ms * (self.multiplier ** (attempt - 1))
        if self.max_delay_ms is not None:
            delay_ms = min(delay_ms, self.max_delay_ms)
        return delay_ms / MS_PER_SECOND


@dataclass
class RetryState:
    """Attempt bookkeeping for one logical request."""
    attempt: int = 1
    delays: List[float] = field(default_factory=list)
    started: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started


def is_requests_timeout(exc: BaseException) -> bool:
    """Timeout classifier for the requests transport.

    Covers connect and read timeouts, and a read timeout while the body is
    downloaded, which requests reports as ConnectionError(ReadTimeoutError).
    """
    if isinstance(exc, requests.exceptions.Timeout):
        return True
    return (
        isinstance(exc, requests.exceptions.ConnectionError)
        and bool(exc.args)
        and isinstance(exc.args[0], ReadTimeoutError)
    )


def is_httpx_timeout(exc: BaseException) -> bool:
    """Timeout classifier for the httpx transport."""
    return isinstance(exc, httpx.TimeoutException)


class TimeoutRetrier:
    """Runs a dispatch callable, re-issuing it after transport timeouts.

    The loop is strictly sequential: a re-dispatch starts only after the
    previous failure was observed and its delay has elapsed.
    """

    def __init__(
        self,
        is_timeout: Callable[[BaseException], bool],
        sleep: Callable[[float], Any] = time.sleep,
        async_sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.is_timeout = is_timeout
        self._sleep = sleep
        self._async_sleep = async_sleep

    def execute(self, dispatch: Callable[[], T], policy: Optional[RetryPolicy], label: str = "request") -> T:
        """Call ``dispatch`` until it returns or fails for good.

        Raises:
            The last exception raised by ``dispatch`` when it is not a timeout
            or when the attempt budget is exhausted.
        """
        state = RetryState()
        while True:
            try:
                result = dispatch()
            except Exception as e:
                delay = self._next_delay(e, policy, state, label)
                if delay is None:
                    raise
                self._sleep(delay)
                continue
            self._log_success(state, label)
            return result

    async def execute_async(
        self,
        dispatch: Callable[[], Awaitable[T]],
        policy: Optional[RetryPolicy],
        label: str = "request",
    ) -> T:
        """Coroutine version of execute(); the backoff wait suspends the task."""
        state = RetryState()
        while True:
            try:
                result = await dispatch()
            except Exception as e:
                delay = self._next_delay(e, policy, state, label)
                if delay is None:
                    raise
                await self._async_sleep(delay)
                continue
            self._log_success(state, label)
            return result

    def _next_delay(
        self,
        exception: Exception,
        policy: Optional[RetryPolicy],
        state: RetryState,
        label: str,
    ) -> Optional[float]:
        """Return the delay before the next attempt, or None to give up."""
        if not self.is_timeout(exception):
            logger.debug(f"{label} failed without timing out, not retrying",
                         exception_type=type(exception).__name__,
                         attempt=state.attempt)
            return None

        if policy is None or not policy.allows_retry(state.attempt):
            self._annotate(exception, state)
            if policy is not None and policy.max_attempts > 1:
                logger.error(f"{label} timed out after all retry attempts",
                             attempts=state.attempt,
                             max_attempts=policy.max_attempts,
                             total_delay_ms=round(sum(state.delays) * MS_PER_SECOND, 3),
                             total_elapsed=round(state.elapsed, 3))
            else:
                logger.debug(f"{label} timed out, retry disabled")
            return None

        delay = policy.delay_for(state.attempt)
        logger.warning(f"{label} timed out, retrying",
                       attempt=state.attempt,
                       max_attempts=policy.max_attempts,
                       delay_ms=round(delay * MS_PER_SECOND, 3))
        state.attempt += 1
        state.delays.append(delay)
        return delay

    @staticmethod
    def _annotate(exception: Exception, state: RetryState) -> None:
        if hasattr(exception, '__dict__'):
            exception.retry_attempts = state.attempt
            exception.total_retry_time = state.elapsed

    @staticmethod
    def _log_success(state: RetryState, label: str) -> None:
        if state.attempt > 1:
            logger.info(f"{label} succeeded after {state.attempt} attempts",
                        total_delay_ms=round(sum(state.delays) * MS_PER_SECOND, 3),
                        total_elapsed=round(state.elapsed, 3))
