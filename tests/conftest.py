"""
Pytest configuration and shared fixtures for console-http tests.
"""

import json
import os
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from console_http.constants import ENV_PREFIX
from console_http.infrastructure.http import ClientCredentials, HttpClient
from console_http.infrastructure.resilience import TimeoutRetrier, is_requests_timeout

BASE_URL = "https://console.example.com/api"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CONSOLE_HTTP_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects."""
    def _make(status_code: int = 200, body: Any = None, reason: str = "OK",
              raw: Optional[bytes] = None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason
        if raw is not None:
            response._content = raw
        elif body is not None:
            response._content = json.dumps(body).encode("utf-8")
            response.headers["Content-Type"] = "application/json"
        else:
            response._content = b""
        return response
    return _make


@pytest.fixture
def credentials():
    return ClientCredentials(remember_me_token="token-1", browser_fingerprint="fp-1")


@pytest.fixture
def mock_session():
    return Mock(spec=requests.Session)


@pytest.fixture
def sleeps():
    """Delays requested by the retrier, in seconds."""
    return []


@pytest.fixture
def retrier(sleeps):
    return TimeoutRetrier(is_timeout=is_requests_timeout, sleep=sleeps.append)


@pytest.fixture
def http_client(mock_session, retrier, credentials):
    """HttpClient over a mocked session that records retry delays instead of sleeping."""
    return HttpClient(BASE_URL, session=mock_session, retrier=retrier, credentials=credentials)
