"""Tests for the Get Users request builder and response decoding."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from twitch_api_client.exceptions import (
    AuthorizationError,
    MalformedRequestError,
    MissingAuthError,
    ServerError,
)
from twitch_api_client.resources.users import GetUsersRequest, GetUsersResponse
from twitch_api_client.values import BroadcasterType, UserId, UserLogin, UserType


class TestGetUsersValidation:
    """A request missing required fields never reaches the network."""

    def test_missing_auth(self, session, transport):
        with pytest.raises(MissingAuthError):
            GetUsersRequest().add_login("TheHoodlum12").make_request(transport)
        session.request.assert_not_called()

    def test_missing_terms(self, session, transport, token):
        with pytest.raises(MalformedRequestError, match="At least one id or login"):
            GetUsersRequest().set_auth(token).make_request(transport)
        session.request.assert_not_called()

    def test_cleared_terms(self, session, transport, token):
        request = GetUsersRequest().set_auth(token)
        request.add_id("1").add_login("foo").clear_ids().clear_logins()

        with pytest.raises(MalformedRequestError):
            request.make_request(transport)
        session.request.assert_not_called()

    def test_too_many_terms(self, session, transport, token):
        request = GetUsersRequest().set_auth(token)
        request.set_ids(str(i) for i in range(60))
        request.set_logins(f"user{i}" for i in range(41))

        with pytest.raises(MalformedRequestError, match="100"):
            request.make_request(transport)
        session.request.assert_not_called()


class TestGetUsersRequest:
    def test_parameters_and_headers(self, session, transport, token, make_response):
        session.request.return_value = make_response(200, {"data": []})

        request = GetUsersRequest().set_auth(token)
        request.add_id("141981764").add_id("12826").add_login("twitchdev")
        request.make_request(transport)

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://api.twitch.test/helix/users"
        assert kwargs["params"] == [("id", "141981764"), ("id", "12826"), ("login", "twitchdev")]
        assert kwargs["headers"]["Authorization"] == "Bearer abcdef0123456789"
        assert kwargs["headers"]["Client-Id"] == "my-client-id"
        assert kwargs["data"] is None

    def test_typed_identifier_round_trips_into_query(self, session, transport, token, make_response):
        session.request.return_value = make_response(200, {"data": []})
        user_id = UserId("0000141981764")

        GetUsersRequest().set_auth(token).add_id(user_id).make_request(transport)

        assert session.request.call_args.kwargs["params"] == [("id", "0000141981764")]

    def test_decodes_typed_users(self, session, transport, token, make_response, user_payload):
        session.request.return_value = make_response(200, {"data": [user_payload("141981764", "twitchdev")]})

        response = GetUsersRequest().set_auth(token).add_id("141981764").make_request(transport)

        assert isinstance(response, GetUsersResponse)
        (user,) = response.users
        assert isinstance(user.id, UserId)
        assert isinstance(user.login, UserLogin)
        assert user.id == "141981764"
        assert user.display_name == "Twitchdev"
        assert user.broadcaster_type is BroadcasterType.AFFILIATE
        assert user.user_type is UserType.NONE
        assert user.view_count == 1234
        assert user.email is None
        assert response.complete

    def test_partial_batch_is_not_an_error(self, session, transport, token, make_response, user_payload):
        session.request.return_value = make_response(
            200, {"data": [user_payload("1", "alpha"), user_payload("3", "gamma")]}
        )

        response = (
            GetUsersRequest()
            .set_auth(token)
            .set_ids(["1", "2", "3"])
            .set_logins(["Gamma", "delta"])
            .make_request(transport)
        )

        assert [u.id for u in response.users] == ["1", "3"]
        assert response.missing_ids == ["2"]
        assert response.missing_logins == ["delta"]
        assert not response.complete

    def test_empty_batch(self, session, transport, token, make_response):
        session.request.return_value = make_response(200, {"data": []})

        response = GetUsersRequest().set_auth(token).add_login("nobody").make_request(transport)

        assert response.users == []
        assert response.missing_logins == ["nobody"]

    def test_expired_token(self, session, transport, token, make_response):
        body = {"error": "Unauthorized", "status": 401, "message": "Invalid OAuth token"}
        session.request.return_value = make_response(401, body)

        with pytest.raises(AuthorizationError) as excinfo:
            GetUsersRequest().set_auth(token).add_id("1").make_request(transport)

        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Invalid OAuth token"
        assert excinfo.value.body == body

    def test_server_error_with_plain_body(self, session, transport, token, make_response):
        session.request.return_value = make_response(503, text="upstream unavailable", content_type="text/plain")

        with pytest.raises(ServerError) as excinfo:
            GetUsersRequest().set_auth(token).add_id("1").make_request(transport)

        assert excinfo.value.body == "upstream unavailable"

    def test_concurrent_requests_share_token_and_transport(
        self, session, transport, token, make_response, user_payload
    ):
        def respond(**kwargs):
            (_, user_id), = kwargs["params"]
            return make_response(200, {"data": [user_payload(user_id, f"user{user_id}")]})

        session.request.side_effect = respond

        def lookup(user_id):
            return GetUsersRequest().set_auth(token).add_id(user_id).make_request(transport)

        ids = [str(i) for i in range(20)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            responses = list(pool.map(lookup, ids))

        for user_id, response in zip(ids, responses):
            assert [u.id for u in response.users] == [user_id]
            assert response.users[0].login == f"user{user_id}"
        assert session.request.call_count == len(ids)
