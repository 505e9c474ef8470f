import asyncio
from unittest.mock import Mock

import httpx
import pytest
import requests
from urllib3.exceptions import ProtocolError, ReadTimeoutError

from console_http.exceptions import InvalidConfigurationError
from console_http.infrastructure.resilience.retry import (
    RetryPolicy,
    RetryState,
    TimeoutRetrier,
    is_httpx_timeout,
    is_requests_timeout,
)


class TestRetryPolicy:
    def test_retry_policy_defaults(self):
        """Test RetryPolicy default values."""
        policy = RetryPolicy()

        assert policy.max_attempts == 0
        assert policy.retry_delay_ms == 1
        assert policy.multiplier == 1.0
        assert policy.max_delay_ms is None

    @pytest.mark.parametrize("kwargs", [
        {"max_attempts": -1},
        {"max_attempts": 2.5},
        {"max_attempts": True},
        {"retry_delay_ms": -5},
        {"multiplier": 0.5},
        {"max_delay_ms": -1},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            RetryPolicy(**kwargs)

    def test_from_options(self):
        assert RetryPolicy.from_options(None) is None
        assert RetryPolicy.from_options(0, 100) is None
        assert RetryPolicy.from_options(3) == RetryPolicy(max_attempts=3, retry_delay_ms=1)
        assert RetryPolicy.from_options(3, 10) == RetryPolicy(max_attempts=3, retry_delay_ms=10)

    def test_allows_retry_counts_total_attempts(self):
        policy = RetryPolicy(max_attempts=3)

        assert policy.allows_retry(1)
        assert policy.allows_retry(2)
        assert not policy.allows_retry(3)

    @pytest.mark.parametrize("max_attempts", [0, 1])
    def test_zero_or_one_means_single_dispatch(self, max_attempts):
        assert not RetryPolicy(max_attempts=max_attempts).allows_retry(1)

    def test_fixed_delay(self):
        policy = RetryPolicy(max_attempts=5, retry_delay_ms=10)

        assert [policy.delay_for(n) for n in (1, 2, 3)] == [0.01, 0.01, 0.01]

    def test_exponential_delay_with_cap(self):
        policy = RetryPolicy(max_attempts=5, retry_delay_ms=10, multiplier=2.0, max_delay_ms=25)

        assert [policy.delay_for(n) for n in (1, 2, 3)] == [0.01, 0.02, 0.025]


class TestRetryState:
    def test_initial_state(self):
        state = RetryState()

        assert state.attempt == 1
        assert state.delays == []
        assert state.elapsed >= 0


class TestTimeoutClassifiers:
    @pytest.mark.parametrize("exc", [
        requests.exceptions.Timeout("t"),
        requests.exceptions.ReadTimeout("t"),
        requests.exceptions.ConnectTimeout("t"),
    ])
    def test_requests_timeouts(self, exc):
        assert is_requests_timeout(exc)

    def test_body_read_timeout_is_timeout(self):
        """requests wraps a read timeout during body download in ConnectionError."""
        exc = requests.exceptions.ConnectionError(
            ReadTimeoutError(None, "/slow", "Read timed out.")
        )

        assert is_requests_timeout(exc)

    @pytest.mark.parametrize("exc", [
        requests.exceptions.ConnectionError(),
        requests.exceptions.ConnectionError(ProtocolError("Connection aborted.")),
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.TooManyRedirects("loop"),
        ValueError("x"),
    ])
    def test_requests_non_timeouts(self, exc):
        assert not is_requests_timeout(exc)

    @pytest.mark.parametrize("exc", [
        httpx.ReadTimeout("t"),
        httpx.ConnectTimeout("t"),
        httpx.WriteTimeout("t"),
        httpx.PoolTimeout("t"),
    ])
    def test_httpx_timeouts(self, exc):
        assert is_httpx_timeout(exc)

    def test_httpx_non_timeouts(self):
        assert not is_httpx_timeout(httpx.ConnectError("refused"))
        assert not is_httpx_timeout(requests.exceptions.ReadTimeout("t"))


class TestTimeoutRetrier:
    @pytest.fixture
    def sleeps(self):
        return []

    @pytest.fixture
    def retrier(self, sleeps):
        return TimeoutRetrier(is_timeout=is_requests_timeout, sleep=sleeps.append)

    def test_success_first_attempt(self, retrier, sleeps):
        dispatch = Mock(return_value="response")

        assert retrier.execute(dispatch, RetryPolicy(max_attempts=3)) == "response"
        assert dispatch.call_count == 1
        assert sleeps == []

    def test_exhaustion_reraises_original(self, retrier, sleeps):
        timeout = requests.exceptions.ReadTimeout("Read timed out")
        dispatch = Mock(side_effect=timeout)

        with pytest.raises(requests.exceptions.ReadTimeout) as exc_info:
            retrier.execute(dispatch, RetryPolicy(max_attempts=3, retry_delay_ms=10))

        assert exc_info.value is timeout
        assert dispatch.call_count == 3
        assert sleeps == [0.01, 0.01]
        assert timeout.retry_attempts == 3
        assert timeout.total_retry_time >= 0

    def test_exponential_backoff_delays(self, retrier, sleeps):
        dispatch = Mock(side_effect=requests.exceptions.ReadTimeout("t"))
        policy = RetryPolicy(max_attempts=4, retry_delay_ms=100, multiplier=2.0)

        with pytest.raises(requests.exceptions.ReadTimeout):
            retrier.execute(dispatch, policy)

        assert sleeps == [0.1, 0.2, 0.4]

    def test_recovers_after_timeouts(self, retrier, sleeps):
        dispatch = Mock(side_effect=[
            requests.exceptions.ReadTimeout("t"),
            requests.exceptions.ReadTimeout("t"),
            "response",
        ])

        assert retrier.execute(dispatch, RetryPolicy(max_attempts=3)) == "response"
        assert dispatch.call_count == 3

    def test_success_log_reports_total_delay(self, retrier, caplog):
        dispatch = Mock(side_effect=[requests.exceptions.ReadTimeout("t"), "response"])

        with caplog.at_level("INFO", logger="console_http"):
            retrier.execute(dispatch, RetryPolicy(max_attempts=2, retry_delay_ms=20), label="GET /x")

        record = next(r for r in caplog.records if "succeeded after 2 attempts" in r.getMessage())
        assert record.extra_context["total_delay_ms"] == 20.0

    def test_no_policy_means_single_attempt(self, retrier, sleeps):
        dispatch = Mock(side_effect=requests.exceptions.ReadTimeout("t"))

        with pytest.raises(requests.exceptions.ReadTimeout):
            retrier.execute(dispatch, None)

        assert dispatch.call_count == 1
        assert sleeps == []

    def test_non_timeout_not_retried(self, retrier, sleeps):
        dispatch = Mock(side_effect=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(requests.exceptions.ConnectionError):
            retrier.execute(dispatch, RetryPolicy(max_attempts=5))

        assert dispatch.call_count == 1
        assert sleeps == []

    def test_timeout_after_other_failure_kinds(self, retrier, sleeps):
        dispatch = Mock(side_effect=[
            requests.exceptions.ReadTimeout("t"),
            requests.exceptions.ConnectionError("refused"),
        ])

        with pytest.raises(requests.exceptions.ConnectionError):
            retrier.execute(dispatch, RetryPolicy(max_attempts=5))

        assert dispatch.call_count == 2


class TestTimeoutRetrierAsync:
    def test_async_exhaustion(self):
        sleeps = []
        calls = []

        async def record(delay):
            sleeps.append(delay)

        async def dispatch():
            calls.append(1)
            raise httpx.ReadTimeout("timed out")

        retrier = TimeoutRetrier(is_timeout=is_httpx_timeout, async_sleep=record)

        with pytest.raises(httpx.ReadTimeout) as exc_info:
            asyncio.run(retrier.execute_async(dispatch, RetryPolicy(max_attempts=2, retry_delay_ms=5)))

        assert len(calls) == 2
        assert sleeps == [0.005]
        assert exc_info.value.retry_attempts == 2

    def test_async_success_after_retry(self):
        outcomes = [httpx.ConnectTimeout("t"), "response"]

        async def dispatch():
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        retrier = TimeoutRetrier(is_timeout=is_httpx_timeout)

        result = asyncio.run(retrier.execute_async(dispatch, RetryPolicy(max_attempts=3)))

        assert result == "response"
        assert outcomes == []
