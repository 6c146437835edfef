"""Requests to do with the ``Users`` resource.

See https://dev.twitch.tv/docs/api/reference#get-users

.. code-block:: python

    response = (
        GetUsersRequest()
        .set_auth(token)
        .add_login("TheHoodlum12")
        .make_request(transport)
    )
    for user in response.users:
        print(user.id, user.display_name)

Twitch silently leaves out users it cannot find, so a lookup for N users
may return fewer.  The identifiers that did not come back are listed in
:attr:`GetUsersResponse.missing_ids` and
:attr:`GetUsersResponse.missing_logins`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..request import AuthenticatedRequest, QueryPairs, check_term_count, repeated
from ..values import (
    BroadcasterType,
    BroadcasterViews,
    RFC3339Time,
    Url,
    UserEmail,
    UserId,
    UserLogin,
    UserName,
    UserType,
)


class UserDescription(BaseModel):
    """A single user returned by :class:`GetUsersRequest`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: UserId
    login: UserLogin
    display_name: UserName
    broadcaster_type: BroadcasterType = BroadcasterType.NONE
    description: str = ""
    # only present when the token has the user:read:email scope
    email: Optional[UserEmail] = None
    offline_image_url: Url = Url("")
    profile_image_url: Url = Url("")
    user_type: UserType = Field(default=UserType.NONE, alias="type")
    view_count: BroadcasterViews = BroadcasterViews(0)
    created_at: Optional[RFC3339Time] = None


class GetUsersResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    users: List[UserDescription] = Field(alias="data")
    missing_ids: List[UserId] = Field(default_factory=list)
    missing_logins: List[UserLogin] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every requested id and login was found."""
        return not self.missing_ids and not self.missing_logins


class GetUsersRequest(AuthenticatedRequest[GetUsersResponse]):
    """Request to the Get Users endpoint.

    Up to 100 ids and logins combined may be sent at once.
    """

    ENDPOINT = "users"
    response_model = GetUsersResponse

    def __init__(self) -> None:
        super().__init__()
        self._ids: List[UserId] = []
        self._logins: List[UserLogin] = []

    @property
    def ids(self) -> List[UserId]:
        return list(self._ids)

    @property
    def logins(self) -> List[UserLogin]:
        return list(self._logins)

    def add_id(self, user_id: str) -> "GetUsersRequest":
        self._ids.append(UserId(user_id))
        return self

    def set_ids(self, user_ids: Iterable[str]) -> "GetUsersRequest":
        self._ids = [UserId(i) for i in user_ids]
        return self

    def clear_ids(self) -> "GetUsersRequest":
        self._ids.clear()
        return self

    def add_login(self, login: str) -> "GetUsersRequest":
        self._logins.append(UserLogin(login))
        return self

    def set_logins(self, logins: Iterable[str]) -> "GetUsersRequest":
        self._logins = [UserLogin(login) for login in logins]
        return self

    def clear_logins(self) -> "GetUsersRequest":
        self._logins.clear()
        return self

    def validate(self) -> None:
        check_term_count(len(self._ids) + len(self._logins), "id or login")

    def parameters(self) -> QueryPairs:
        return repeated("id", self._ids) + repeated("login", self._logins)

    def finish(self, response: GetUsersResponse) -> GetUsersResponse:
        found_ids = {user.id for user in response.users}
        found_logins = {user.login.lower() for user in response.users}
        return response.model_copy(
            update={
                "missing_ids": [i for i in self._ids if i not in found_ids],
                "missing_logins": [
                    login for login in self._logins if login.lower() not in found_logins
                ],
            }
        )
