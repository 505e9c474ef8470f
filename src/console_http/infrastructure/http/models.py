"""
Request and response data structures shared by the HTTP clients.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
import requests

from ..resilience.retry import RetryPolicy


@dataclass
class RequestDescriptor:
    """Everything needed to dispatch one logical request.

    Mutable until dispatch; retries re-send the same instance, so the
    headers snapshotted at decoration time are reused as-is.
    """
    method: str
    url: str
    headers: Optional[Dict[str, str]] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    data: Any = None
    timeout_ms: Optional[int] = None
    retry_policy: Optional[RetryPolicy] = None

    def __post_init__(self):
        self.method = self.method.upper()

    @property
    def label(self) -> str:
        return f"{self.method} {self.url}"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Transport-independent view of a completed response.

    ``body`` is the decoded JSON payload, or None when the response had no
    body or the body was not valid JSON.
    """
    status: int
    status_text: str
    body: Any = None

    @classmethod
    def from_requests(cls, response: requests.Response) -> "ResponseEnvelope":
        return cls(
            status=response.status_code,
            status_text=response.reason or "",
            body=_decode_body(response),
        )

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ResponseEnvelope":
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            body=_decode_body(response),
        )


def _decode_body(response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
