"""Resilience patterns for console-http transports."""

from .retry import (
    RetryPolicy,
    RetryState,
    TimeoutRetrier,
    is_httpx_timeout,
    is_requests_timeout,
)

__all__ = [
    "RetryPolicy",
    "RetryState",
    "TimeoutRetrier",
    "is_httpx_timeout",
    "is_requests_timeout",
]
