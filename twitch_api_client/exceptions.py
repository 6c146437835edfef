"""
Custom exception types for the Twitch API client.

These exceptions allow callers to distinguish between problems with
the request itself (missing credentials or fields), failures of the
network transport, error statuses returned by Twitch and response
bodies that could not be decoded.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class TwitchError(Exception):
    """Base exception for all Twitch client errors."""


class CredentialError(TwitchError):
    """Raised when the client id or client secret is missing or malformed."""


class MalformedRequestError(TwitchError):
    """Raised when a request builder is not ready to be sent."""


class MissingAuthError(MalformedRequestError):
    """Raised when a request that needs a token has none set."""

    def __init__(self, message: str = "Must provide an authorization token") -> None:
        super().__init__(message)


class TransportError(TwitchError):
    """Raised when the request could not be delivered (DNS, connection, TLS, timeout)."""


class DecodeError(TwitchError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


class ResponseCode(Enum):
    """Status classes shared by most Helix endpoints."""

    BAD_REQUEST = 400
    AUTH_ERROR = 401
    SERVER_ERROR = 500
    OTHER = None

    @classmethod
    def from_status(cls, status_code: int) -> "ResponseCode":
        if status_code == 400:
            return cls.BAD_REQUEST
        if status_code == 401:
            return cls.AUTH_ERROR
        if status_code >= 500:
            return cls.SERVER_ERROR
        return cls.OTHER


class ResponseStatusError(TwitchError):
    """Raised when Twitch answers with an error status.

    Attributes
    ----------
    status_code : int
        The HTTP status (or the ``status`` field of a failure body).
    message : str
        The ``message`` reported by Twitch, or the raw body text.
    body : Any
        The decoded JSON body when available, otherwise the raw text.
    """

    def __init__(self, status_code: int, message: str, body: Any = None) -> None:
        super().__init__(f"{status_code} Error: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body

    @property
    def code(self) -> ResponseCode:
        return ResponseCode.from_status(self.status_code)


class BadRequestError(ResponseStatusError):
    """400: a query parameter was missing or malformed."""


class AuthorizationError(ResponseStatusError):
    """401: the credentials or token were rejected."""


class ServerError(ResponseStatusError):
    """5xx: Twitch failed internally; retry once, then assume an outage."""


def status_error(status_code: int, message: str, body: Any = None) -> ResponseStatusError:
    """Return the most specific :class:`ResponseStatusError` for a status."""
    code = ResponseCode.from_status(status_code)
    if code is ResponseCode.BAD_REQUEST:
        return BadRequestError(status_code, message, body)
    if code is ResponseCode.AUTH_ERROR:
        return AuthorizationError(status_code, message, body)
    if code is ResponseCode.SERVER_ERROR:
        return ServerError(status_code, message, body)
    return ResponseStatusError(status_code, message, body)
