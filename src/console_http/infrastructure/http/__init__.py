"""HTTP infrastructure components."""

from .async_client import AsyncHttpClient
from .client import BaseHttpClient, HttpClient
from .headers import ClientCredentials, decorate_request, generate_fingerprint
from .models import RequestDescriptor, ResponseEnvelope
from .normalizer import Err, Ok, Result, normalize_response

__all__ = [
    "HttpClient",
    "AsyncHttpClient",
    "BaseHttpClient",
    "ClientCredentials",
    "decorate_request",
    "generate_fingerprint",
    "RequestDescriptor",
    "ResponseEnvelope",
    "Ok",
    "Err",
    "Result",
    "normalize_response",
]
