"""Endpoints organised by the Helix resource they belong to.

See https://dev.twitch.tv/docs/api/reference
"""

from .channels import (
    ChannelInformation,
    GetChannelInformationRequest,
    GetChannelInformationResponse,
)
from .clips import ClipInfo, GetClipsRequest, GetClipsResponse
from .users import GetUsersRequest, GetUsersResponse, UserDescription

__all__ = [
    "ChannelInformation",
    "GetChannelInformationRequest",
    "GetChannelInformationResponse",
    "ClipInfo",
    "GetClipsRequest",
    "GetClipsResponse",
    "GetUsersRequest",
    "GetUsersResponse",
    "UserDescription",
]
