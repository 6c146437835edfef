"""
Python client for the Twitch Helix REST API.

This package provides typed request builders for a small set of Helix
endpoints, typed response models, and a :class:`TwitchClient` that
handles OAuth2 client-credentials authentication against the Twitch
identity server.

Examples
--------

```python
from twitch_api_client import TwitchClient

client = TwitchClient(
    client_id="YOUR_CLIENT_ID",
    client_secret="YOUR_CLIENT_SECRET",
)
client.authenticate()

user = client.get_users(logins=["TheHoodlum12"]).users[0]
for clip in client.get_clips(broadcaster_id=user.id, count=20).clips:
    print(clip.title, clip.view_count)
```

The same requests can be built directly:

```python
from twitch_api_client import GetClipsRequest, Transport

with Transport() as transport:
    clips = (
        GetClipsRequest()
        .set_auth(client.token)
        .set_broadcaster_id(user.id)
        .make_request(transport)
    )
```

See Also
--------
Twitch's developer console (https://dev.twitch.tv/console) is where an
application's client id and client secret are created.  A new secret
invalidates the previous one and is only shown once.
"""

from .auth import AuthToken, ClientAuthRequest, ClientAuthResponse, ClientAuthToken, ClientId, ClientSecret
from .client import TwitchClient
from .config import ClientSettings, Credentials
from .exceptions import (
    AuthorizationError,
    BadRequestError,
    CredentialError,
    DecodeError,
    MalformedRequestError,
    MissingAuthError,
    ResponseCode,
    ResponseStatusError,
    ServerError,
    TransportError,
    TwitchError,
)
from .resources import (
    ChannelInformation,
    ClipInfo,
    GetChannelInformationRequest,
    GetChannelInformationResponse,
    GetClipsRequest,
    GetClipsResponse,
    GetUsersRequest,
    GetUsersResponse,
    UserDescription,
)
from .scopes import ScopeSet
from .transport import Transport

__all__ = [
    "TwitchClient",
    "Transport",
    "ClientSettings",
    "Credentials",
    # auth
    "AuthToken",
    "ClientAuthRequest",
    "ClientAuthResponse",
    "ClientAuthToken",
    "ClientId",
    "ClientSecret",
    "ScopeSet",
    # endpoints
    "GetUsersRequest",
    "GetUsersResponse",
    "UserDescription",
    "GetClipsRequest",
    "GetClipsResponse",
    "ClipInfo",
    "GetChannelInformationRequest",
    "GetChannelInformationResponse",
    "ChannelInformation",
    # errors
    "TwitchError",
    "CredentialError",
    "MalformedRequestError",
    "MissingAuthError",
    "TransportError",
    "ResponseStatusError",
    "BadRequestError",
    "AuthorizationError",
    "ServerError",
    "ResponseCode",
    "DecodeError",
]
