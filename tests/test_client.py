"""Tests for the TwitchClient facade."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from twitch_api_client import TwitchClient
from twitch_api_client.auth import ClientAuthToken
from twitch_api_client.exceptions import (
    AuthorizationError,
    CredentialError,
    MalformedRequestError,
    MissingAuthError,
)


@pytest.fixture
def client(transport):
    return TwitchClient(client_id="my-client-id", client_secret="my-secret", transport=transport)


@pytest.fixture
def authed_client(client, token):
    client.set_token(token)
    return client


class TestConstruction:
    @pytest.mark.parametrize(
        "client_id, client_secret",
        [("", "secret"), ("   ", "secret"), ("id", ""), ("id", "  ")],
    )
    def test_blank_credentials_rejected_before_network(self, session, transport, client_id, client_secret):
        with pytest.raises(CredentialError):
            TwitchClient(client_id=client_id, client_secret=client_secret, transport=transport)
        session.request.assert_not_called()

    def test_repr_hides_secret(self, client):
        assert "my-secret" not in repr(client)

    def test_borrowed_transport_stays_open(self, session, client):
        with client:
            pass
        session.close.assert_not_called()


class TestAuthentication:
    def test_token_before_authenticate(self, client):
        assert not client.is_authenticated
        with pytest.raises(MissingAuthError):
            client.token

    def test_requests_need_a_token(self, session, client):
        with pytest.raises(MissingAuthError):
            client.get_users(logins=["twitchdev"])
        session.request.assert_not_called()

    def test_authenticate_stores_token(self, session, client, make_response):
        session.request.return_value = make_response(200, {"access_token": "tok-1", "expires_in": 60})

        token = client.authenticate()

        assert client.is_authenticated
        assert client.token is token
        assert token.token == "tok-1"
        assert token.client_id == "my-client-id"

    def test_reauthenticate_replaces_token(self, session, client, make_response):
        session.request.side_effect = [
            make_response(200, {"access_token": "tok-1", "expires_in": 60}),
            make_response(200, {"access_token": "tok-2", "expires_in": 60}),
        ]

        first = client.authenticate()
        second = client.authenticate()

        assert first.token == "tok-1"
        assert client.token is second
        assert second.token == "tok-2"

    def test_rejected_credentials(self, session, client, make_response):
        session.request.return_value = make_response(401, {"status": 401, "message": "invalid client secret"})

        with pytest.raises(AuthorizationError):
            client.authenticate()
        assert not client.is_authenticated

    def test_scopes_are_requested(self, session, transport, make_response):
        session.request.return_value = make_response(200, {"access_token": "tok", "expires_in": 60})
        client = TwitchClient(
            client_id="id", client_secret="secret", transport=transport, scopes=["user:read:email"]
        )

        client.authenticate()

        assert dict(session.request.call_args.kwargs["data"])["scope"] == "user:read:email"


class TestEndpoints:
    def test_get_users(self, session, authed_client, make_response, user_payload):
        session.request.return_value = make_response(200, {"data": [user_payload("1", "alpha")]})

        response = authed_client.get_users(ids=["1"], logins=["beta"])

        assert session.request.call_args.kwargs["params"] == [("id", "1"), ("login", "beta")]
        assert [u.login for u in response.users] == ["alpha"]
        assert response.missing_logins == ["beta"]

    def test_get_users_batched_splits_requests(self, session, authed_client, make_response, user_payload):
        def respond(**kwargs):
            return make_response(
                200, {"data": [user_payload(value, f"user{value}") for key, value in kwargs["params"] if key == "id"]}
            )

        session.request.side_effect = respond

        users = authed_client.get_users_batched(ids=[str(i) for i in range(150)], logins=["extra"])

        assert session.request.call_count == 2
        first, second = session.request.call_args_list
        assert len(first.kwargs["params"]) == 100
        assert second.kwargs["params"][-1] == ("login", "extra")
        assert len(users) == 150

    def test_get_users_batched_needs_terms(self, session, authed_client):
        with pytest.raises(MalformedRequestError):
            authed_client.get_users_batched()
        session.request.assert_not_called()

    def test_get_clips_needs_exactly_one_mode(self, session, authed_client):
        with pytest.raises(MalformedRequestError):
            authed_client.get_clips()
        with pytest.raises(MalformedRequestError):
            authed_client.get_clips(broadcaster_id="1", game_id="2")
        session.request.assert_not_called()

    def test_get_clips_by_ids(self, session, authed_client, make_response, clip_payload):
        session.request.return_value = make_response(200, {"data": [clip_payload("A")], "pagination": {}})

        response = authed_client.get_clips(clip_ids=["A", "B"], count=5)

        assert session.request.call_args.kwargs["params"] == [("id", "A"), ("id", "B"), ("first", "5")]
        assert response.missing_clip_ids == ["B"]

    def test_iter_clips_follows_cursor(self, session, authed_client, make_response, clip_payload):
        session.request.side_effect = [
            make_response(200, {"data": [clip_payload("A"), clip_payload("B")], "pagination": {"cursor": "c1"}}),
            make_response(200, {"data": [clip_payload("C")], "pagination": {}}),
        ]

        clips = list(authed_client.iter_clips(broadcaster_id="141981764", count=2))

        assert [c.clip_id for c in clips] == ["A", "B", "C"]
        first, second = session.request.call_args_list
        assert ("after", "c1") not in first.kwargs["params"]
        assert ("after", "c1") in second.kwargs["params"]

    def test_iter_clips_max_pages(self, session, authed_client, make_response, clip_payload):
        session.request.return_value = make_response(
            200, {"data": [clip_payload("A")], "pagination": {"cursor": "again"}}
        )

        clips = list(authed_client.iter_clips(game_id="488191", max_pages=3))

        assert len(clips) == 3
        assert session.request.call_count == 3

    def test_get_channel_information(self, session, authed_client, make_response):
        session.request.return_value = make_response(
            200, {"data": [{"broadcaster_id": "1", "broadcaster_name": "Alpha", "title": "hi"}]}
        )

        response = authed_client.get_channel_information("1")

        assert response.channels[0].title == "hi"

    def test_concurrent_clip_requests(self, session, authed_client, make_response, clip_payload):
        def respond(**kwargs):
            (_, broadcaster_id), = kwargs["params"]
            return make_response(
                200, {"data": [clip_payload(f"clip-{broadcaster_id}", broadcaster_id)], "pagination": {}}
            )

        session.request.side_effect = respond
        broadcasters = [str(i) for i in range(16)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            responses = list(pool.map(lambda b: authed_client.get_clips(broadcaster_id=b), broadcasters))

        for broadcaster_id, response in zip(broadcasters, responses):
            assert [c.broadcaster_id for c in response.clips] == [broadcaster_id]
            assert response.clips[0].clip_id == f"clip-{broadcaster_id}"

    def test_shared_token_between_clients(self, transport, token):
        other = TwitchClient(client_id="my-client-id", client_secret="my-secret", transport=transport)
        other.set_token(token)

        assert isinstance(other.token, ClientAuthToken)
        assert other.token is token
