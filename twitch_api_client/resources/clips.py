"""Requests to do with the ``Clips`` resource.

See https://dev.twitch.tv/docs/api/reference#get-clips

Clips are looked up in exactly one of three ways: by broadcaster, by
game, or by a list of clip ids.  Setting one replaces whichever was set
before.

.. code-block:: python

    response = (
        GetClipsRequest()
        .set_auth(token)
        .set_broadcaster_id(user_id)
        .set_count(50)
        .make_request(transport)
    )
    for clip in response.clips:
        print(clip.title)

    if response.pagination and response.pagination.has_next:
        next_page = (
            GetClipsRequest()
            .set_auth(token)
            .set_broadcaster_id(user_id)
            .after(response.pagination)
            .make_request(transport)
        )
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedRequestError
from ..request import MAX_TERMS, AuthenticatedRequest, QueryPairs, check_term_count, repeated
from ..values import (
    BroadcasterId,
    BroadcasterName,
    ClipId,
    ClipTitle,
    Count,
    EndedAt,
    GameId,
    ISOLanguage,
    Pagination,
    Period,
    RFC3339Time,
    StartedAt,
    Url,
    UserId,
    UserName,
    VideoId,
    ViewCount,
)

TimeValue = Union[datetime, str]


class ClipInfo(BaseModel):
    """Information relating to a single clip."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    clip_id: ClipId = Field(alias="id")
    url: Url
    embed_url: Url = Url("")
    broadcaster_id: BroadcasterId
    broadcaster_name: BroadcasterName
    creator_id: UserId
    creator_name: UserName
    video_id: VideoId = VideoId("")
    game_id: GameId = GameId("")
    language: ISOLanguage = ISOLanguage("")
    title: ClipTitle
    view_count: ViewCount
    created_at: RFC3339Time
    thumbnail_url: Url = Url("")
    duration: Optional[float] = None
    vod_offset: Optional[int] = None


class GetClipsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    clips: List[ClipInfo] = Field(alias="data")
    pagination: Optional[Pagination] = None
    # only filled in when clips were requested by id
    missing_clip_ids: List[ClipId] = Field(default_factory=list)


class GetClipsRequest(AuthenticatedRequest[GetClipsResponse]):
    """Request to the Get Clips endpoint."""

    ENDPOINT = "clips"
    response_model = GetClipsResponse

    def __init__(self) -> None:
        super().__init__()
        self._broadcaster_id: Optional[BroadcasterId] = None
        self._game_id: Optional[GameId] = None
        self._clip_ids: Optional[List[ClipId]] = None
        self._pagination: Optional[Tuple[str, str]] = None
        self._count: Optional[Count] = None
        self._period: Optional[Period] = None

    # ------------------------------------------------------------------
    # Query mode
    # ------------------------------------------------------------------
    def _reset_query(self) -> None:
        self._broadcaster_id = None
        self._game_id = None
        self._clip_ids = None

    def set_broadcaster_id(self, broadcaster_id: str) -> "GetClipsRequest":
        """Look clips up by broadcaster, replacing any game or clip id query."""
        self._reset_query()
        self._broadcaster_id = BroadcasterId(broadcaster_id)
        return self

    def set_game_id(self, game_id: str) -> "GetClipsRequest":
        """Look clips up by game, replacing any broadcaster or clip id query."""
        self._reset_query()
        self._game_id = GameId(game_id)
        return self

    def add_clip_id(self, clip_id: str) -> "GetClipsRequest":
        """Add a clip id to look up, replacing any broadcaster or game query."""
        if self._clip_ids is None:
            self._reset_query()
            self._clip_ids = []
        self._clip_ids.append(ClipId(clip_id))
        return self

    def set_clip_ids(self, clip_ids: Iterable[str]) -> "GetClipsRequest":
        self._reset_query()
        self._clip_ids = [ClipId(c) for c in clip_ids]
        return self

    def clear_clip_ids(self) -> "GetClipsRequest":
        if self._clip_ids is not None:
            self._clip_ids.clear()
        return self

    # ------------------------------------------------------------------
    # Optional filters
    # ------------------------------------------------------------------
    def set_count(self, count: int) -> "GetClipsRequest":
        """Set the maximum number of clips returned (Twitch defaults to 20)."""
        self._count = Count(count)
        return self

    def reset_count(self) -> "GetClipsRequest":
        self._count = None
        return self

    def set_period(self, started_at: TimeValue, ended_at: TimeValue) -> "GetClipsRequest":
        self._period = Period(
            started_at=StartedAt.coerce(started_at),
            ended_at=EndedAt.coerce(ended_at),
        )
        return self

    def set_started_at(self, started_at: TimeValue) -> "GetClipsRequest":
        """Set the start of the time window.

        Without an end, Twitch closes the window one week after the start.
        """
        ended_at = self._period.ended_at if self._period else None
        self._period = Period(started_at=StartedAt.coerce(started_at), ended_at=ended_at)
        return self

    def set_ended_at(self, ended_at: TimeValue) -> "GetClipsRequest":
        """Set the end of the time window.  Does nothing until a start is set."""
        if self._period is not None:
            self._period = Period(
                started_at=self._period.started_at, ended_at=EndedAt.coerce(ended_at)
            )
        return self

    def before(self, pagination: Pagination) -> "GetClipsRequest":
        """Page backwards from a cursor returned by a previous response."""
        self._pagination = ("before", self._cursor(pagination))
        return self

    def after(self, pagination: Pagination) -> "GetClipsRequest":
        """Page forwards from a cursor returned by a previous response."""
        self._pagination = ("after", self._cursor(pagination))
        return self

    @staticmethod
    def _cursor(pagination: Pagination) -> str:
        if not pagination.cursor:
            raise MalformedRequestError("pagination has no cursor to continue from")
        return pagination.cursor

    # ------------------------------------------------------------------
    # Request
    # ------------------------------------------------------------------
    def validate(self) -> None:
        if self._broadcaster_id is None and self._game_id is None and self._clip_ids is None:
            raise MalformedRequestError(
                "Must provide at least one of broadcaster_id, game_id, clip_id"
            )
        if self._clip_ids is not None:
            check_term_count(len(self._clip_ids), "clip_id")
        if self._count is not None and not 1 <= self._count <= MAX_TERMS:
            raise MalformedRequestError(
                f"count must be between 1 and {MAX_TERMS}, got {int(self._count)}"
            )

    def parameters(self) -> QueryPairs:
        params: QueryPairs = []
        if self._broadcaster_id is not None:
            params.append((BroadcasterId.field_name, str(self._broadcaster_id)))
        elif self._game_id is not None:
            params.append((GameId.field_name, str(self._game_id)))
        elif self._clip_ids is not None:
            params.extend(repeated(ClipId.field_name, self._clip_ids))

        if self._pagination is not None:
            params.append(self._pagination)
        if self._count is not None:
            params.append((Count.field_name, str(int(self._count))))
        if self._period is not None:
            params.append((StartedAt.field_name, str(self._period.started_at)))
            if self._period.ended_at is not None:
                params.append((EndedAt.field_name, str(self._period.ended_at)))
        return params

    def finish(self, response: GetClipsResponse) -> GetClipsResponse:
        if not self._clip_ids:
            return response
        found = {clip.clip_id for clip in response.clips}
        return response.model_copy(
            update={"missing_clip_ids": [c for c in self._clip_ids if c not in found]}
        )
