"""
Shared pytest fixtures for the Twitch client tests.

Requests never reach the network: the transport is given a mocked
``requests.Session`` whose ``request`` method returns real
``requests.Response`` objects built by :func:`make_response`.
"""

import json
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from twitch_api_client.auth import ClientAuthToken, ClientId
from twitch_api_client.transport import Transport


def _make_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    text: Optional[str] = None,
    content_type: str = "application/json",
) -> requests.Response:
    """Build a real ``requests.Response`` with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload if payload is not None else {})
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = content_type
    return response


def _user_payload(user_id: str, login: str) -> dict:
    return {
        "id": user_id,
        "login": login,
        "display_name": login.capitalize(),
        "type": "",
        "broadcaster_type": "affiliate",
        "description": "Just a streamer",
        "profile_image_url": f"https://static-cdn.jtvnw.net/{login}.png",
        "offline_image_url": "",
        "view_count": 1234,
        "created_at": "2016-12-14T20:32:28Z",
    }


def _clip_payload(clip_id: str, broadcaster_id: str = "141981764", title: str = "A clip") -> dict:
    return {
        "id": clip_id,
        "url": f"https://clips.twitch.tv/{clip_id}",
        "embed_url": f"https://clips.twitch.tv/embed?clip={clip_id}",
        "broadcaster_id": broadcaster_id,
        "broadcaster_name": "TwitchDev",
        "creator_id": "123456",
        "creator_name": "MrMarshall",
        "video_id": "",
        "game_id": "488191",
        "language": "en",
        "title": title,
        "view_count": 10,
        "created_at": "2017-11-30T22:34:18Z",
        "thumbnail_url": f"https://clips-media-assets.twitch.tv/{clip_id}-preview.jpg",
        "duration": 12.9,
        "vod_offset": None,
    }


@pytest.fixture
def session():
    """A mocked ``requests.Session``; set ``session.request.return_value``."""
    return Mock(spec=requests.Session)


@pytest.fixture
def transport(session):
    return Transport(
        api_base_url="https://api.twitch.test/helix",
        auth_url="https://id.twitch.test/oauth2/token",
        timeout=5.0,
        user_agent="tests",
        session=session,
    )


@pytest.fixture
def token():
    return ClientAuthToken(token="abcdef0123456789", client_id=ClientId("my-client-id"), expires_in=5000)


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def user_payload():
    return _user_payload


@pytest.fixture
def clip_payload():
    return _clip_payload
