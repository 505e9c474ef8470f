"""
Header injection for outgoing requests.

ClientCredentials holds the values injected into every request. They are
copied into a descriptor's headers when it is decorated, so changing them
affects only requests decorated afterwards.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Dict
from uuid import uuid4

from console_http.constants import (
    ADMIN_HEADER,
    BROWSER_FINGERPRINT_HEADER,
    DEFAULT_ADMIN_HEADER_VALUE,
    REMEMBER_ME_TOKEN_HEADER,
)
from console_http.exceptions import InvalidConfigurationError, RequestConfigurationError

from .models import RequestDescriptor


def generate_fingerprint() -> str:
    """Random fingerprint used when none is configured."""
    return uuid4().hex


@dataclass
class ClientCredentials:
    """Token, fingerprint and admin header values owned by one client."""
    remember_me_token: str = field(default="", repr=False)
    browser_fingerprint: str = field(default_factory=generate_fingerprint)
    admin_header: str = field(default=DEFAULT_ADMIN_HEADER_VALUE, repr=False)

    def __post_init__(self):
        _require_str("remember_me_token", self.remember_me_token)
        _require_non_empty("browser_fingerprint", self.browser_fingerprint)
        _require_non_empty("admin_header", self.admin_header)

    def set_remember_me_token(self, token: str) -> None:
        _require_str("remember_me_token", token)
        self.remember_me_token = token

    def set_browser_fingerprint(self, fp: str) -> None:
        _require_non_empty("browser_fingerprint", fp)
        self.browser_fingerprint = fp

    def as_headers(self) -> Dict[str, str]:
        return {
            REMEMBER_ME_TOKEN_HEADER: self.remember_me_token,
            BROWSER_FINGERPRINT_HEADER: self.browser_fingerprint,
            ADMIN_HEADER: self.admin_header,
        }


def decorate_request(descriptor: RequestDescriptor, credentials: ClientCredentials) -> RequestDescriptor:
    """Set the injected headers on ``descriptor`` from the current credentials.

    Raises:
        RequestConfigurationError: the descriptor has no headers mapping.
    """
    if not isinstance(descriptor.headers, MutableMapping):
        raise RequestConfigurationError(
            "headers must be a mutable mapping",
            method=descriptor.method,
            url=descriptor.url,
        )
    descriptor.headers.update(credentials.as_headers())
    return descriptor


def _require_str(name: str, value) -> None:
    if not isinstance(value, str):
        raise InvalidConfigurationError(name, value, "a string")


def _require_non_empty(name: str, value) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidConfigurationError(name, value, "a non-empty string")
