"""Error taxonomy and HTTP error classification shared by all providers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "ERROR: empty response"
INVALID_JSON_MESSAGE = "ERROR: invalid JSON returned"
AUTH_FAILED_MESSAGE = "ERROR: 401 — API key invalid"
RATE_LIMITED_MESSAGE = "ERROR: 429 — rate limit exceeded"
TIMEOUT_MESSAGE = "ERROR: request timed out"


class ErrorKind(str, Enum):
    """Every way a conversion can fail. All are terminal and never retried."""

    MISSING_CREDENTIAL = "missing_credential"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    HTTP_AUTH_FAILED = "http_auth_failed"
    HTTP_RATE_LIMITED = "http_rate_limited"
    HTTP_OTHER = "http_other"
    EMPTY_RESPONSE = "empty_response"
    INVALID_FORMAT = "invalid_format"
    TRANSPORT_FAILED = "transport_failed"


class TransformError(Exception):
    """Raised by adapters; carries a user-facing message and its kind."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def error_kind_for_status(status: int) -> ErrorKind:
    if status == 401:
        return ErrorKind.HTTP_AUTH_FAILED
    if status == 429:
        return ErrorKind.HTTP_RATE_LIMITED
    return ErrorKind.HTTP_OTHER


def _provider_message(body: Any) -> str:
    """Pull a human-readable message from ``error.message`` or ``message``."""
    if not isinstance(body, dict):
        return ""

    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    return ""


def classify_http_error(status: int, body: Any = None) -> str:
    """Map a non-success HTTP status (and its parsed body) to a message.

    401 and 429 get fixed messages regardless of the body. Anything else
    embeds the status and, if available, the provider's own message.
    Never raises: a body that is not a dict simply has no message.
    """
    if status == 401:
        return AUTH_FAILED_MESSAGE
    if status == 429:
        return RATE_LIMITED_MESSAGE

    message = _provider_message(body)
    return f"ERROR: {status}{' — ' + message if message else ''}"


def parse_error_body(response: httpx.Response) -> Any:
    """Decode an error response body, degrading to ``{}`` when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        logger.debug("HTTP %d error body is not JSON", response.status_code)
        return {}


def http_error(response: httpx.Response) -> TransformError:
    """Build the classified TransformError for a non-success response."""
    status = response.status_code
    body = parse_error_body(response)
    return TransformError(error_kind_for_status(status), classify_http_error(status, body))


def transport_error(exc: Exception, *, timed_out: bool = False) -> TransformError:
    """Reclassify a connection failure or timeout.

    Only the exception type is embedded; library messages can carry the
    request URL, and for some providers that URL holds the credential.
    """
    if timed_out:
        return TransformError(ErrorKind.TRANSPORT_FAILED, TIMEOUT_MESSAGE)
    return TransformError(
        ErrorKind.TRANSPORT_FAILED, f"ERROR: network error — {type(exc).__name__}"
    )
