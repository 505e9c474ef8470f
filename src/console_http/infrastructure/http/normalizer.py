"""
Response normalization into Ok/Err results.

A well-formed response reporting ``success: false`` is not an exception:
it comes back as ``Err``. Only transport failures use the exception
channel. Callers who want an exception call ``result.unwrap()``.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from console_http.constants import DATA_FIELD, ERROR_FIELD, SUCCESS_FIELD
from console_http.exceptions import ApplicationError

from .models import ResponseEnvelope


@dataclass(frozen=True)
class Ok:
    """Successful outcome carrying the response's ``data`` payload."""
    data: Any

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> Any:
        return self.data

    def unwrap_or(self, default: Any) -> Any:
        return self.data


@dataclass(frozen=True)
class Err:
    """Unsuccessful outcome carrying a human-readable message."""
    message: str
    status: Optional[int] = None

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ApplicationError(self.message, self.status)

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Ok, Err]


def normalize_response(envelope: ResponseEnvelope) -> Result:
    """Classify a completed response.

    1. 2xx with ``success`` exactly True: Ok(body["data"]).
    2. A JSON object body whose ``success`` is falsy: Err(body["error"]).
    3. Anything else (no usable body): Err(status text).
    """
    body = envelope.body
    usable = isinstance(body, dict)

    if 200 <= envelope.status < 300 and usable and body.get(SUCCESS_FIELD) is True:
        return Ok(body.get(DATA_FIELD))

    if usable and not body.get(SUCCESS_FIELD):
        error = body.get(ERROR_FIELD)
        return Err("" if error is None else str(error), envelope.status)

    return Err(envelope.status_text, envelope.status)
