"""Exceptions raised by the client."""

from typing import Any, Optional

import httpx


class MailosaurError(Exception):
    """Base class for every error the client surfaces."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class NotFoundError(MailosaurError):
    """Unknown or deleted resource (HTTP 404)."""


class ValidationError(MailosaurError):
    """Malformed request: bad search criteria or address (HTTP 400 or local check)."""


class WaitTimeoutError(MailosaurError):
    """No matching message arrived before the wait deadline."""


class TransportError(MailosaurError):
    """Network failure or an unexpected HTTP status."""


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def error_from_response(response: httpx.Response) -> MailosaurError:
    """Map a non-2xx response to the matching MailosaurError subclass."""
    request = response.request
    message = f"{request.method} {request.url.path} failed with HTTP {response.status_code}"
    details = _decode_body(response)
    if response.status_code == 404:
        return NotFoundError(message, status_code=404, details=details)
    if response.status_code == 400:
        return ValidationError(message, status_code=400, details=details)
    return TransportError(message, status_code=response.status_code, details=details)
