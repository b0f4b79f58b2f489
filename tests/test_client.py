"""Tests for the HTTP client, with the requests session mocked out."""

from unittest.mock import MagicMock

import pytest
import requests

from sentenceboard.api.client import BoardClient
from sentenceboard.api.errors import (
    AuthRequired,
    Forbidden,
    NetworkFailure,
    ServerRejected,
)
from sentenceboard.core.models import FilterState, NewSentence


def fake_response(status=200, json_data=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if json_error:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = json_data
    return resp


class TestBoardClient:

    def setup_method(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = BoardClient("http://board.test/", timeout=5, session=self.session)

    def test_url(self):
        assert self.client.url("/api/sentences") == "http://board.test/api/sentences"
        assert self.client.url("auth/login") == "http://board.test/auth/login"

    def test_headers_applied(self):
        session = MagicMock()
        session.headers = {}
        BoardClient("http://board.test", headers={"Cookie": "sid=1"}, session=session)
        assert session.headers["Cookie"] == "sid=1"

    def test_list_users(self):
        self.session.request.return_value = fake_response(200, ["bob", "alice", "bob"])
        assert self.client.list_users() == ["bob", "alice"]
        self.session.request.assert_called_once_with(
            "GET", "http://board.test/api/sentences/users", timeout=5
        )

    def test_list_users_failure(self):
        self.session.request.return_value = fake_response(500, json_error=True)
        with pytest.raises(ServerRejected) as exc:
            self.client.list_users()
        assert exc.value.message == "Failed to load users"

    def test_list_sentences_sends_filters(self):
        self.session.request.return_value = fake_response(200, [
            {"_id": "1", "text": "hi", "name": "bob", "category": "jokes",
             "createdAt": "2024-01-01T00:00:00Z"},
        ])
        filters = FilterState(category="jokes")
        sentences = self.client.list_sentences(filters)

        assert [s.id for s in sentences] == ["1"]
        self.session.request.assert_called_once_with(
            "GET",
            "http://board.test/api/sentences",
            timeout=5,
            params={"category": "jokes", "user": "all", "sortBy": "newest", "search": ""},
        )

    def test_query_string(self):
        # What requests will actually put on the wire for those params
        prepared = requests.Request(
            "GET", "http://board.test/api/sentences", params=FilterState(category="jokes").to_params()
        ).prepare()
        assert prepared.url == "http://board.test/api/sentences?category=jokes&user=all&sortBy=newest&search="

    def test_list_sentences_invalid_json(self):
        self.session.request.return_value = fake_response(200, json_error=True)
        with pytest.raises(NetworkFailure):
            self.client.list_sentences(FilterState())

    def test_list_sentences_not_a_list(self):
        self.session.request.return_value = fake_response(200, {"error": "nope"})
        with pytest.raises(NetworkFailure):
            self.client.list_sentences(FilterState())

    def test_network_error(self):
        self.session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(NetworkFailure):
            self.client.list_sentences(FilterState())

    def test_create_sentence(self):
        self.session.request.return_value = fake_response(201)
        self.client.create_sentence(NewSentence("hi", "bob", "facts"))
        self.session.request.assert_called_once_with(
            "POST",
            "http://board.test/api/sentences",
            timeout=5,
            json={"text": "hi", "name": "bob", "category": "facts"},
        )

    def test_create_unauthorized(self):
        self.session.request.return_value = fake_response(401)
        with pytest.raises(AuthRequired):
            self.client.create_sentence(NewSentence("hi", "bob", "facts"))

    def test_create_server_error_message(self):
        self.session.request.return_value = fake_response(400, {"error": "Text too long"})
        with pytest.raises(ServerRejected) as exc:
            self.client.create_sentence(NewSentence("hi", "bob", "facts"))
        assert str(exc.value) == "Text too long"
        assert exc.value.status == 400

    def test_create_server_error_fallback(self):
        self.session.request.return_value = fake_response(500, json_error=True)
        with pytest.raises(ServerRejected) as exc:
            self.client.create_sentence(NewSentence("hi", "bob", "facts"))
        assert str(exc.value) == "Failed to add message."

    def test_delete_sentence(self):
        self.session.request.return_value = fake_response(200)
        self.client.delete_sentence("abc")
        self.session.request.assert_called_once_with(
            "DELETE", "http://board.test/api/sentences/abc", timeout=5
        )

    def test_delete_quotes_id(self):
        self.session.request.return_value = fake_response(200)
        self.client.delete_sentence("a/b")
        assert self.session.request.call_args.args[1] == "http://board.test/api/sentences/a%2Fb"

    def test_delete_forbidden(self):
        self.session.request.return_value = fake_response(403)
        with pytest.raises(Forbidden):
            self.client.delete_sentence("abc")

    def test_delete_unauthorized(self):
        self.session.request.return_value = fake_response(401)
        with pytest.raises(AuthRequired):
            self.client.delete_sentence("abc")

    def test_delete_other_error(self):
        self.session.request.return_value = fake_response(404, {"error": "Not found"})
        with pytest.raises(ServerRejected) as exc:
            self.client.delete_sentence("abc")
        assert exc.value.message == "Not found"
