"""Requests to do with the ``Channels`` resource.

See https://dev.twitch.tv/docs/api/reference#get-channel-information
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedRequestError
from ..request import AuthenticatedRequest, QueryPairs
from ..values import (
    BroadcasterId,
    BroadcasterLanguage,
    BroadcasterName,
    GameId,
    GameName,
    UserLogin,
)


class ChannelInformation(BaseModel):
    """A single channel."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    broadcaster_id: BroadcasterId
    broadcaster_login: Optional[UserLogin] = None
    broadcaster_name: BroadcasterName
    broadcaster_language: BroadcasterLanguage = BroadcasterLanguage("")
    # the game being played on the current or most recent stream
    game_id: GameId = GameId("")
    game_name: GameName = GameName("")
    title: str = ""
    delay: int = 0


class GetChannelInformationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    channels: List[ChannelInformation] = Field(alias="data")


class GetChannelInformationRequest(AuthenticatedRequest[GetChannelInformationResponse]):
    """Request to the Get Channel Information endpoint."""

    ENDPOINT = "channels"
    response_model = GetChannelInformationResponse

    def __init__(self) -> None:
        super().__init__()
        self._broadcaster_id: Optional[BroadcasterId] = None

    def set_broadcaster_id(self, broadcaster_id: str) -> "GetChannelInformationRequest":
        self._broadcaster_id = BroadcasterId(broadcaster_id)
        return self

    def validate(self) -> None:
        if not self._broadcaster_id:
            raise MalformedRequestError("You must provide a broadcaster_id")

    def parameters(self) -> QueryPairs:
        return [(BroadcasterId.field_name, str(self._broadcaster_id))]
