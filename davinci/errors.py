"""Exceptions raised by the completion client."""

from typing import Any, Optional


class CompletionError(Exception):
    """Base class for every failure of a completion call."""


class TransportError(CompletionError):
    """The request never produced an HTTP response (DNS, TLS, refused, timeout)."""


class ApiStatusError(CompletionError):
    """The provider answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the provider
        body: Raw response text
        error: Parsed provider error payload, if the body had one
    """

    def __init__(self, message: str, status_code: int, body: str = "", error: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.error = error


class AuthenticationError(ApiStatusError):
    """The provider rejected the bearer credential (HTTP 401 or 403)."""


class MalformedResponseError(CompletionError):
    """The response body does not match the completion response shape."""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.body = body


class EmptyChoicesError(MalformedResponseError):
    """The response parsed cleanly but carried no choices."""
