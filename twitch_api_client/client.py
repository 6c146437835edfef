"""
Client implementation for the Twitch Helix REST API.

This module defines the :class:`TwitchClient` class which obtains an
application access token using the OAuth2 client credentials grant and
runs the typed endpoint requests of :mod:`twitch_api_client.resources`
with it.  The client is a convenience layer: every request it makes can
also be built by hand from the request builders and a shared
:class:`~twitch_api_client.transport.Transport`.

Usage
-----

.. code-block:: python

    from concurrent.futures import ThreadPoolExecutor

    from twitch_api_client import TwitchClient

    with TwitchClient(client_id="abc123", client_secret="shhsecret") as client:
        client.authenticate()

        users = client.get_users(logins=["TheHoodlum12"]).users

        # The token and transport are shared by every worker
        with ThreadPoolExecutor() as pool:
            for response in pool.map(
                lambda user: client.get_clips(broadcaster_id=user.id), users
            ):
                for clip in response.clips:
                    print(clip.broadcaster_name, clip.title)

The token is not refreshed automatically.  When a request fails with
:class:`~twitch_api_client.exceptions.AuthorizationError`, call
:meth:`TwitchClient.authenticate` again; requests started afterwards use
the new token while requests already in flight keep the one they were
given.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .auth import ClientAuthRequest, ClientAuthToken
from .config import ClientSettings
from .exceptions import CredentialError, MalformedRequestError, MissingAuthError
from .request import MAX_TERMS
from .resources.channels import GetChannelInformationRequest, GetChannelInformationResponse
from .resources.clips import ClipInfo, GetClipsRequest, GetClipsResponse
from .resources.users import GetUsersRequest, GetUsersResponse, UserDescription
from .transport import Transport
from .values import Pagination

logger = logging.getLogger(__name__)

TimeValue = Union[datetime, str]


class TwitchClient:
    """A simple client for the Twitch Helix API.

    Parameters
    ----------
    client_id : str
        Your application's client identifier from the Twitch developer
        console.
    client_secret : str
        Your application's client secret.  Treat it like a password.
    transport : Transport, optional
        The shared transport to send requests over.  When omitted, one is
        built from ``settings`` and closed together with the client.
    settings : ClientSettings, optional
        Transport settings (URLs, timeout, user agent).  Ignored when a
        ``transport`` is given.
    scopes : iterable of str, optional
        Scopes to request with the token.

    Notes
    -----
    The current token is an immutable value.  :meth:`authenticate`
    replaces it wholesale, so the client can be used from several
    threads without locking.
    """

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        transport: Optional[Transport] = None,
        settings: Optional[ClientSettings] = None,
        scopes: Optional[Iterable[str]] = None,
    ) -> None:
        if not client_id or not client_id.strip():
            raise CredentialError("client_id must be provided")
        if not client_secret or not client_secret.strip():
            raise CredentialError("client_secret must be provided")

        self.client_id = client_id
        self._client_secret = client_secret
        self.scopes = list(scopes or [])
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else Transport.from_settings(settings)
        self._token: Optional[ClientAuthToken] = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def authenticate(self) -> ClientAuthToken:
        """Run the client credentials flow and store the resulting token.

        Returns
        -------
        ClientAuthToken
            The new token, also available as :attr:`token`.

        Raises
        ------
        TransportError
            If the token endpoint could not be reached.
        ResponseStatusError
            If Twitch rejected the credentials.
        DecodeError
            If the token response was malformed.
        """
        request = ClientAuthRequest.from_credentials(self.client_id, self._client_secret)
        request.set_scopes(self.scopes)
        response = request.make_request(self.transport)
        token = ClientAuthToken.from_client(response, self.client_id)
        self._token = token
        logger.info("Acquired app access token (expires in %s seconds)", response.expires_in)
        return token

    @property
    def token(self) -> ClientAuthToken:
        """The current token.  Raises :class:`MissingAuthError` before :meth:`authenticate`."""
        if self._token is None:
            raise MissingAuthError("Call authenticate() before making requests")
        return self._token

    def set_token(self, token: ClientAuthToken) -> None:
        """Use a token obtained elsewhere, e.g. shared between several clients."""
        self._token = token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_users(
        self,
        *,
        ids: Optional[Iterable[str]] = None,
        logins: Optional[Iterable[str]] = None,
    ) -> GetUsersResponse:
        """Look users up by id and/or login (at most 100 terms combined)."""
        request = GetUsersRequest().set_auth(self.token)
        request.set_ids(ids or [])
        request.set_logins(logins or [])
        return request.make_request(self.transport)

    def get_users_batched(
        self,
        *,
        ids: Sequence[str] = (),
        logins: Sequence[str] = (),
    ) -> List[UserDescription]:
        """Look up any number of users, 100 terms per request.

        Users that Twitch does not return are left out, as with
        :meth:`get_users`.
        """
        terms: List[Tuple[str, str]] = [("id", i) for i in ids] + [("login", n) for n in logins]
        if not terms:
            raise MalformedRequestError("At least one id or login must be provided")

        users: List[UserDescription] = []
        for start in range(0, len(terms), MAX_TERMS):
            chunk = terms[start : start + MAX_TERMS]
            response = self.get_users(
                ids=[value for kind, value in chunk if kind == "id"],
                logins=[value for kind, value in chunk if kind == "login"],
            )
            users.extend(response.users)
        return users

    # ------------------------------------------------------------------
    # Clips
    # ------------------------------------------------------------------
    def _clips_request(
        self,
        *,
        broadcaster_id: Optional[str],
        game_id: Optional[str],
        clip_ids: Optional[Iterable[str]],
        count: Optional[int],
        started_at: Optional[TimeValue],
        ended_at: Optional[TimeValue],
    ) -> GetClipsRequest:
        modes = [m for m in (broadcaster_id, game_id, clip_ids) if m is not None]
        if len(modes) != 1:
            raise MalformedRequestError(
                "Exactly one of broadcaster_id, game_id, clip_ids must be given"
            )
        request = GetClipsRequest()
        request.set_auth(self.token)
        if broadcaster_id is not None:
            request.set_broadcaster_id(broadcaster_id)
        elif game_id is not None:
            request.set_game_id(game_id)
        else:
            request.set_clip_ids(clip_ids or [])
        if count is not None:
            request.set_count(count)
        if started_at is not None:
            request.set_started_at(started_at)
            if ended_at is not None:
                request.set_ended_at(ended_at)
        return request

    def get_clips(
        self,
        *,
        broadcaster_id: Optional[str] = None,
        game_id: Optional[str] = None,
        clip_ids: Optional[Iterable[str]] = None,
        count: Optional[int] = None,
        started_at: Optional[TimeValue] = None,
        ended_at: Optional[TimeValue] = None,
        after: Optional[Pagination] = None,
    ) -> GetClipsResponse:
        """Fetch one page of clips.

        Exactly one of ``broadcaster_id``, ``game_id`` and ``clip_ids``
        must be given.  ``ended_at`` is only used together with
        ``started_at``.
        """
        request = self._clips_request(
            broadcaster_id=broadcaster_id,
            game_id=game_id,
            clip_ids=clip_ids,
            count=count,
            started_at=started_at,
            ended_at=ended_at,
        )
        if after is not None:
            request.after(after)
        return request.make_request(self.transport)

    def iter_clips(
        self,
        *,
        broadcaster_id: Optional[str] = None,
        game_id: Optional[str] = None,
        count: Optional[int] = None,
        started_at: Optional[TimeValue] = None,
        ended_at: Optional[TimeValue] = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[ClipInfo]:
        """Yield clips page by page until Twitch stops returning a cursor."""
        pagination: Optional[Pagination] = None
        pages = 0
        while max_pages is None or pages < max_pages:
            response = self.get_clips(
                broadcaster_id=broadcaster_id,
                game_id=game_id,
                count=count,
                started_at=started_at,
                ended_at=ended_at,
                after=pagination,
            )
            pages += 1
            yield from response.clips
            if not response.clips or response.pagination is None or not response.pagination.has_next:
                break
            pagination = response.pagination

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------
    def get_channel_information(self, broadcaster_id: str) -> GetChannelInformationResponse:
        request = GetChannelInformationRequest()
        request.set_auth(self.token)
        request.set_broadcaster_id(broadcaster_id)
        return request.make_request(self.transport)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "TwitchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TwitchClient(client_id={self.client_id!r}, authenticated={self.is_authenticated})"
