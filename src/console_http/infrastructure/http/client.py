"""
HTTP client façade.

Wraps a requests.Session with the console's request pipeline: injected
headers, retry on timeout and Ok/Err response normalization.
"""

from dataclasses import replace
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from console_http.constants import (
    DEFAULT_POOL_CONNECTIONS,
    DEFAULT_POOL_MAXSIZE,
    DEFAULT_TIMEOUT_MS,
    MS_PER_SECOND,
)
from console_http.core.config.models import ClientConfig
from console_http.exceptions import MissingConfigurationError
from console_http.logging import get_logger

from ..resilience.retry import RetryPolicy, TimeoutRetrier, is_requests_timeout
from .headers import ClientCredentials, decorate_request
from .models import RequestDescriptor, ResponseEnvelope
from .normalizer import Err, Result, normalize_response


class BaseHttpClient:
    """Configuration, credentials and request building shared by both clients."""

    def __init__(
        self,
        base_url: str,
        with_credentials: bool = True,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        credentials: Optional[ClientCredentials] = None,
        default_retry: Optional[RetryPolicy] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL relative request paths resolve against
            with_credentials: Keep cookies between requests
            timeout_ms: Request timeout in milliseconds
            credentials: Header values to inject; a fresh set is created if omitted
            default_retry: Retry policy for requests that do not specify one
        """
        if not base_url:
            raise MissingConfigurationError("base_url")
        self.base_url = base_url.rstrip('/')
        self.with_credentials = with_credentials
        self.timeout_ms = timeout_ms
        self.credentials = credentials or ClientCredentials()
        self.default_retry = default_retry
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}").with_context(
            base_url=self.base_url
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs):
        """Build a client from a ClientConfig."""
        credentials = ClientCredentials(
            remember_me_token=config.remember_me_token,
            admin_header=config.admin_header,
        )
        if config.browser_fingerprint:
            credentials.set_browser_fingerprint(config.browser_fingerprint)
        return cls(
            config.base_url,
            with_credentials=config.with_credentials,
            timeout_ms=config.timeout_ms,
            credentials=credentials,
            default_retry=RetryPolicy.from_options(
                config.default_retry, config.default_retry_delay_ms
            ),
            **kwargs,
        )

    def set_remember_me_token(self, token: str) -> None:
        """Replace the token sent with every request dispatched from now on."""
        self.credentials.set_remember_me_token(token)
        self.logger.debug("Remember-me token updated")

    def set_browser_fingerprint(self, fp: str) -> None:
        """Replace the fingerprint sent with every request dispatched from now on."""
        self.credentials.set_browser_fingerprint(fp)
        self.logger.debug("Browser fingerprint updated")

    def build_descriptor(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        retry: Optional[int] = None,
        retry_delay: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> RequestDescriptor:
        """Build a request descriptor.

        Args:
            method: HTTP verb
            url: Path relative to base_url, or an absolute URL
            params: Query parameters
            json: JSON body
            data: Form data or raw body
            headers: Extra headers; the injected headers override same-named keys
            retry: Total attempts when the request times out; 0 disables retry,
                None falls back to the client's default policy
            retry_delay: Delay in milliseconds before each retry; with retry=None
                it replaces the delay of the default policy
            timeout: Timeout in milliseconds for this request
        """
        if retry is None:
            policy = self.default_retry
            if policy is not None and retry_delay is not None:
                policy = replace(policy, retry_delay_ms=retry_delay)
        else:
            policy = RetryPolicy.from_options(retry, retry_delay)
        return RequestDescriptor(
            method=method,
            url=url,
            headers=dict(headers or {}),
            params=params,
            json=json,
            data=data,
            timeout_ms=timeout,
            retry_policy=policy,
        )

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if endpoint.startswith(('http://', 'https://')):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _timeout_seconds(self, descriptor: RequestDescriptor) -> float:
        timeout_ms = descriptor.timeout_ms if descriptor.timeout_ms is not None else self.timeout_ms
        return timeout_ms / MS_PER_SECOND

    def _prepare(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        return decorate_request(descriptor, self.credentials)

    def _normalize(self, envelope: ResponseEnvelope, descriptor: RequestDescriptor) -> Result:
        result = normalize_response(envelope)
        if isinstance(result, Err):
            self.logger.info(f"{descriptor.label} returned an error",
                             status=result.status,
                             error=result.message)
        return result


class HttpClient(BaseHttpClient):
    """Blocking client built on requests."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        retrier: Optional[TimeoutRetrier] = None,
        **kwargs
    ):
        """Initialize the blocking client.

        Args:
            base_url: Base URL for all requests
            session: Optional existing session to use; its cookie policy is
                left to the caller
            retrier: Optional retry executor (defaults to requests timeout detection)
            **kwargs: Additional arguments for BaseHttpClient
        """
        super().__init__(base_url, **kwargs)
        self.session = session or self._create_session()
        self.retrier = retrier or TimeoutRetrier(is_timeout=is_requests_timeout)

    def _create_session(self) -> requests.Session:
        """Create a pooled session; transport-level retries stay off."""
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=DEFAULT_POOL_CONNECTIONS,
            pool_maxsize=DEFAULT_POOL_MAXSIZE,
            max_retries=0,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        if not self.with_credentials:
            session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        return session

    def send(self, descriptor: RequestDescriptor) -> Result:
        """Decorate, dispatch (retrying timeouts) and normalize a request.

        Returns:
            Ok with the response data, or Err with the error message

        Raises:
            requests.RequestException: transport failure, after any retries
            RequestConfigurationError: malformed descriptor
        """
        self._prepare(descriptor)
        response = self.retrier.execute(
            lambda: self._dispatch(descriptor),
            descriptor.retry_policy,
            label=descriptor.label,
        )
        return self._normalize(ResponseEnvelope.from_requests(response), descriptor)

    def request(self, method: str, url: str, **kwargs) -> Result:
        """Issue a request; keyword arguments as for build_descriptor()."""
        return self.send(self.build_descriptor(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> Result:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> Result:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs) -> Result:
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs) -> Result:
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs) -> Result:
        return self.request("DELETE", url, **kwargs)

    def _dispatch(self, descriptor: RequestDescriptor) -> requests.Response:
        url = self._build_url(descriptor.url)

        self.logger.debug(f"{descriptor.method} {url}")

        response = self.session.request(
            descriptor.method,
            url,
            params=descriptor.params,
            json=descriptor.json,
            data=descriptor.data,
            headers=dict(descriptor.headers),
            timeout=self._timeout_seconds(descriptor),
        )

        self._log_response(response)
        return response

    def _log_response(self, response: requests.Response) -> None:
        """Log response details."""
        self.logger.debug(
            f"Response: {response.status_code} - "
            f"{len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
