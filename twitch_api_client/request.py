"""
Base classes shared by every endpoint request.

A request is a small builder: callers set its fields through setter
methods (which return the builder so calls can be chained) and then call
:meth:`Request.make_request` with a :class:`~twitch_api_client.transport.Transport`.
``make_request`` first calls :meth:`Request.ready`, so an incomplete
request fails with :class:`~twitch_api_client.exceptions.MalformedRequestError`
without touching the network, then sends the request and decodes the
body into the endpoint's response model.

Decoding
--------
:func:`decode_response` maps a raw :class:`requests.Response` onto a
pydantic model.  Error statuses become
:class:`~twitch_api_client.exceptions.ResponseStatusError`, and bodies that are
not JSON or do not fit the model become
:class:`~twitch_api_client.exceptions.DecodeError`.  Twitch sometimes
reports a failure as a JSON body of the form
``{"error": ..., "status": ..., "message": ...}``; such bodies are treated
as error statuses even when the HTTP status says otherwise.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

import requests
from pydantic import BaseModel, ValidationError

from .exceptions import DecodeError, MalformedRequestError, MissingAuthError, status_error
from .transport import Transport

if TYPE_CHECKING:
    from .auth import AuthToken

logger = logging.getLogger(__name__)

#: Maximum number of search terms most Helix endpoints accept in one call.
MAX_TERMS = 100

R = TypeVar("R", bound=BaseModel)

QueryPairs = List[Tuple[str, str]]


class FailureStatus(BaseModel):
    """A response body in which Twitch denied the request."""

    status: int
    message: str = ""
    error: Optional[str] = None


def decode_response(response: requests.Response, model: Type[R]) -> R:
    """Decode ``response`` into ``model`` or raise a classified error."""
    text = response.text
    try:
        payload: Any = response.json()
        is_json = True
    except ValueError:
        payload, is_json = None, False

    if response.status_code >= 400:
        message = text
        if is_json and isinstance(payload, dict):
            message = str(payload.get("message") or payload.get("error") or text)
        logger.warning("Twitch returned %s: %s", response.status_code, message)
        raise status_error(response.status_code, message, payload if is_json else text)

    if not is_json:
        logger.warning("Response for %s is not valid JSON", model.__name__)
        raise DecodeError("Response body is not valid JSON", body=text)

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        try:
            failure = FailureStatus.model_validate(payload)
        except ValidationError:
            logger.warning("Unexpected response shape for %s", model.__name__)
            raise DecodeError(
                f"Response does not match {model.__name__}: {exc}", body=text
            ) from exc
        raise status_error(failure.status, failure.message or failure.error or "", payload) from None


class Request(ABC, Generic[R]):
    """A request that can be made to the Twitch API.

    Subclasses set ``ENDPOINT``, ``METHOD`` and ``response_model`` and
    implement :meth:`ready`.
    """

    ENDPOINT: ClassVar[str]
    METHOD: ClassVar[str] = "GET"
    response_model: ClassVar[Type[BaseModel]]

    def endpoint(self, transport: Transport) -> str:
        return self.ENDPOINT

    def headers(self) -> Dict[str, str]:
        return {}

    def parameters(self) -> QueryPairs:
        return []

    def body(self) -> Optional[QueryPairs]:
        return None

    @abstractmethod
    def ready(self) -> None:
        """Raise :class:`MalformedRequestError` unless the request can be sent."""

    def finish(self, response: R) -> R:
        """Hook for attaching request-dependent information to the response."""
        return response

    def make_request(self, transport: Transport) -> R:
        """Validate, send and decode this request.

        Raises
        ------
        MalformedRequestError
            If a required field is missing; nothing is sent.
        TransportError
            If the request could not be delivered.
        ResponseStatusError
            If Twitch answered with an error status.
        DecodeError
            If the response body did not have the expected shape.
        """
        self.ready()
        response = transport.send(
            self.METHOD,
            self.endpoint(transport),
            params=self.parameters() or None,
            data=self.body(),
            headers=self.headers(),
        )
        return self.finish(decode_response(response, self.response_model))  # type: ignore[arg-type]


class AuthenticatedRequest(Request[R]):
    """A Helix request that needs an :class:`~twitch_api_client.auth.AuthToken`."""

    def __init__(self) -> None:
        self._auth: Optional["AuthToken"] = None

    @property
    def auth(self) -> Optional["AuthToken"]:
        return self._auth

    def set_auth(self, auth: "AuthToken") -> "AuthenticatedRequest[R]":
        """Set the authorization token to send with this request."""
        self._auth = auth
        return self

    def headers(self) -> Dict[str, str]:
        if self._auth is None:
            raise MissingAuthError()
        return self._auth.headers()

    def ready(self) -> None:
        if self._auth is None:
            raise MissingAuthError()
        self.validate()

    def validate(self) -> None:
        """Check endpoint specific fields; called after the token check."""


def repeated(name: str, values: Iterable[str]) -> QueryPairs:
    """Encode ``values`` as repeated ``name=value`` query pairs."""
    return [(name, str(value)) for value in values]


def check_term_count(count: int, what: str) -> None:
    if count == 0:
        raise MalformedRequestError(f"At least one {what} must be provided")
    if count > MAX_TERMS:
        raise MalformedRequestError(
            f"Cannot send more than {MAX_TERMS} {what} values in one request, got {count}"
        )
