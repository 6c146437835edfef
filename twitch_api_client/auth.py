"""
Client credentials (application access token) flow.

An application trades its client id and client secret for a bearer
token that identifies the application itself rather than a user.  See
https://dev.twitch.tv/docs/authentication/getting-tokens-oauth#oauth-client-credentials-flow

Examples
--------

.. code-block:: python

    from twitch_api_client import Transport
    from twitch_api_client.auth import ClientAuthRequest, ClientAuthToken

    with Transport() as transport:
        response = (
            ClientAuthRequest()
            .set_client_id(client_id)
            .set_client_secret(client_secret)
            .make_request(transport)
        )
        token = ClientAuthToken.from_client(response, client_id)

The token is an immutable value and can be handed to any number of
concurrent requests.  It is never refreshed automatically: once it
expires, run the flow again and pass the new token to later requests.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MalformedRequestError
from .request import QueryPairs, Request
from .scopes import ScopeSet
from .transport import Transport
from .values import FieldValue


class ClientId(FieldValue):
    field_name = "client_id"


class ClientSecret(FieldValue):
    field_name = "client_secret"

    def __repr__(self) -> str:
        return "ClientSecret('****')"


class AuthToken(ABC):
    """A token that can be sent with a request as authorization headers."""

    @property
    @abstractmethod
    def scopes(self) -> ScopeSet:
        """Scopes granted to the token."""

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        """Headers that authorize a request with this token."""


class ClientAuthResponse(BaseModel):
    """Body of a successful token request."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    expires_in: int
    token_type: str = "bearer"
    scope: List[str] = Field(default_factory=list)

    def as_tuple(self) -> Tuple[str, int]:
        return self.access_token, self.expires_in


class ClientAuthRequest(Request[ClientAuthResponse]):
    """Request for the client credentials flow."""

    METHOD = "POST"
    ENDPOINT = "https://id.twitch.tv/oauth2/token"
    response_model = ClientAuthResponse

    def __init__(self) -> None:
        self._client_id: Optional[ClientId] = None
        self._client_secret: Optional[ClientSecret] = None
        self._scopes = ScopeSet()

    @classmethod
    def from_credentials(cls, client_id: str, client_secret: str) -> "ClientAuthRequest":
        return cls().set_client_id(client_id).set_client_secret(client_secret)

    def set_client_id(self, client_id: str) -> "ClientAuthRequest":
        self._client_id = ClientId(client_id)
        return self

    def set_client_secret(self, client_secret: str) -> "ClientAuthRequest":
        self._client_secret = ClientSecret(client_secret)
        return self

    def add_scope(self, scope: str) -> "ClientAuthRequest":
        self._scopes = self._scopes.with_scopes(scope)
        return self

    def set_scopes(self, scopes: Iterable[str]) -> "ClientAuthRequest":
        self._scopes = ScopeSet(scopes)
        return self

    def endpoint(self, transport: Transport) -> str:
        return transport.auth_url

    def ready(self) -> None:
        if self._client_id is None or not self._client_id.strip():
            raise MalformedRequestError("field client_id must be set")
        if self._client_secret is None or not self._client_secret.strip():
            raise MalformedRequestError("field client_secret must be set")

    def body(self) -> QueryPairs:
        assert self._client_id is not None and self._client_secret is not None
        form: List[Tuple[str, str]] = [
            ("client_id", str(self._client_id)),
            ("client_secret", str(self._client_secret)),
            ("grant_type", "client_credentials"),
        ]
        if self._scopes:
            form.append(("scope", self._scopes.to_param()))
        return form

    def headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/x-www-form-urlencoded"}


@dataclass(frozen=True)
class ClientAuthToken(AuthToken):
    """An application access token together with the client id it belongs to."""

    token: str = field(repr=False)
    client_id: ClientId
    expires_in: Optional[int] = None
    issued_at: float = field(default_factory=time.time, compare=False)
    _scopes: ScopeSet = field(default_factory=ScopeSet, repr=False)

    @classmethod
    def from_client(cls, response: ClientAuthResponse, client_id: str) -> "ClientAuthToken":
        """Create the token from a successful auth response and its client id."""
        return cls(
            token=response.access_token,
            client_id=ClientId(client_id),
            expires_in=response.expires_in,
            # scopes only apply to user tokens
            _scopes=ScopeSet(),
        )

    @property
    def scopes(self) -> ScopeSet:
        return self._scopes

    @property
    def expires_at(self) -> Optional[float]:
        if self.expires_in is None:
            return None
        return self.issued_at + self.expires_in

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Whether Twitch's advertised lifetime has passed.  Unknown lifetimes never expire."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return (now if now is not None else time.time()) >= expires_at

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Client-Id": str(self.client_id),
        }
