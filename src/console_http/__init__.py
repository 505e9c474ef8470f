"""
console-http: HTTP client for the admin console API.

Adds the console's fixed headers to every request, retries requests that
time out, and normalizes `{success, data, error}` responses into Ok/Err
results.

Architecture Overview:
- infrastructure.http: blocking (requests) and asynchronous (httpx) clients
- infrastructure.resilience: retry-on-timeout executor
- core.config: TOML and environment configuration
- logging / exceptions: cross-cutting concerns
- cli: command-line interface
"""

__version__ = "0.1.0"

from .exceptions import ApplicationError, ConsoleHttpError
from .infrastructure.http import (
    AsyncHttpClient,
    ClientCredentials,
    Err,
    HttpClient,
    Ok,
    RequestDescriptor,
    Result,
)
from .infrastructure.resilience import RetryPolicy

__all__ = [
    "__version__",
    "HttpClient",
    "AsyncHttpClient",
    "ClientCredentials",
    "RequestDescriptor",
    "RetryPolicy",
    "Ok",
    "Err",
    "Result",
    "ConsoleHttpError",
    "ApplicationError",
]
