"""
Asynchronous HTTP client façade built on httpx.

Each logical request runs as its own coroutine; the backoff wait between
timeout retries suspends only that request.
"""

from typing import Any, Dict, Optional

import httpx

from console_http.constants import MS_PER_SECOND

from ..resilience.retry import TimeoutRetrier, is_httpx_timeout
from .client import BaseHttpClient
from .models import RequestDescriptor, ResponseEnvelope
from .normalizer import Result

DEFAULT_LIMITS = httpx.Limits(max_connections=100, max_keepalive_connections=20)


class AsyncHttpClient(BaseHttpClient):
    """Cooperative client with the same pipeline as HttpClient."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        retrier: Optional[TimeoutRetrier] = None,
        **kwargs
    ):
        super().__init__(base_url, **kwargs)
        self.client = client or httpx.AsyncClient(
            timeout=self.timeout_ms / MS_PER_SECOND,
            limits=DEFAULT_LIMITS,
        )
        self.retrier = retrier or TimeoutRetrier(is_timeout=is_httpx_timeout)

    async def send(self, descriptor: RequestDescriptor) -> Result:
        """Decorate, dispatch (retrying timeouts) and normalize a request.

        Raises:
            httpx.TransportError: transport failure, after any retries
            RequestConfigurationError: malformed descriptor
        """
        self._prepare(descriptor)
        response = await self.retrier.execute_async(
            lambda: self._dispatch(descriptor),
            descriptor.retry_policy,
            label=descriptor.label,
        )
        return self._normalize(ResponseEnvelope.from_httpx(response), descriptor)

    async def request(self, method: str, url: str, **kwargs) -> Result:
        return await self.send(self.build_descriptor(method, url, **kwargs))

    async def get(self, url: str, **kwargs) -> Result:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> Result:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs) -> Result:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs) -> Result:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> Result:
        return await self.request("DELETE", url, **kwargs)

    async def _dispatch(self, descriptor: RequestDescriptor) -> httpx.Response:
        url = self._build_url(descriptor.url)
        self.logger.debug(f"{descriptor.method} {url}")

        response = await self.client.request(
            descriptor.method,
            url,
            params=descriptor.params,
            json=descriptor.json,
            headers=dict(descriptor.headers),
            timeout=self._timeout_seconds(descriptor),
            **self._body_kwargs(descriptor),
        )
        if not self.with_credentials:
            self.client.cookies.clear()

        self.logger.debug(f"Response: {response.status_code} - {len(response.content)} bytes")
        return response

    @staticmethod
    def _body_kwargs(descriptor: RequestDescriptor) -> Dict[str, Any]:
        if descriptor.data is None:
            return {}
        if isinstance(descriptor.data, (bytes, str)):
            return {"content": descriptor.data}
        return {"data": descriptor.data}

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
