"""Tests for the low-level Jira API client."""

import base64
import threading

import pytest
import requests
from unittest.mock import Mock

from myjiratickets.adapters.jira.client import JiraApiClient, build_basic_auth_header
from myjiratickets.core.ports.issue_tracker import (
    AuthenticationError,
    PermissionError,
    NotFoundError,
    ResponseParseError,
    SyncCancelledError,
    TransportError,
)


def make_response(status_code=200, json_data=None, text=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if text is None:
        text = "{}" if json_data is None else "json"
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Expecting value")
    return response


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    return JiraApiClient(
        base_url="https://jira.example.com/",
        username="alice",
        api_key="token",
        session=session,
    )


def requested_urls(session):
    return [call.args[1] for call in session.request.call_args_list]


class TestAuth:
    """Tests for authentication headers."""

    def test_basic_auth_header(self):
        header = build_basic_auth_header("alice", "secret")
        assert header == "Basic " + base64.b64encode(b"alice:secret").decode("ascii")

    def test_api_key_preferred_over_password(self, session):
        JiraApiClient("https://j", "alice", password="pw", api_key="key", session=session)
        assert session.headers["Authorization"] == build_basic_auth_header("alice", "key")

    def test_password_used_without_api_key(self, session):
        client = JiraApiClient("https://j", "alice", password="pw", session=session)
        assert session.headers["Authorization"] == build_basic_auth_header("alice", "pw")
        assert client.describe_auth() == "alice (password)"

    def test_no_secret_means_not_configured(self, session):
        client = JiraApiClient("https://j", "alice", session=session)
        assert not client.is_configured
        assert "Authorization" not in session.headers

    def test_accept_json(self, client, session):
        assert session.headers["Accept"] == "application/json"


class TestUrls:
    """Tests for URL building."""

    def test_trailing_slash_stripped(self, client):
        assert client.browse_url("AB-1") == "https://jira.example.com/browse/AB-1"

    def test_api_url(self, client):
        assert client.api_url("3") == "https://jira.example.com/rest/api/3"


class TestGenerationFallback:
    """Tests for trying API generation 2 before 3."""

    def test_generation_2_answers(self, client, session):
        session.request.return_value = make_response(json_data={"issues": []})

        assert client.search("project = AB", max_results=10) == {"issues": []}
        assert requested_urls(session) == ["https://jira.example.com/rest/api/2/search"]

    def test_search_params(self, client, session):
        session.request.return_value = make_response(json_data={})

        client.search("project = AB", max_results=10)

        kwargs = session.request.call_args.kwargs
        assert kwargs["params"] == {"jql": "project = AB", "maxResults": 10}
        assert kwargs["timeout"] == 30.0

    def test_falls_back_to_generation_3(self, client, session):
        session.request.side_effect = [
            make_response(500, text="boom"),
            make_response(json_data={"issues": [{"key": "AB-1"}]}),
        ]

        data = client.search("x")

        assert data == {"issues": [{"key": "AB-1"}]}
        assert requested_urls(session) == [
            "https://jira.example.com/rest/api/2/search",
            "https://jira.example.com/rest/api/3/search",
        ]

    def test_connection_error_falls_back(self, client, session):
        session.request.side_effect = [
            requests.exceptions.ConnectionError("refused"),
            make_response(json_data={"ok": True}),
        ]
        assert client.get("serverInfo") == {"ok": True}

    def test_both_generations_fail(self, client, session):
        session.request.side_effect = [
            make_response(500, text="first"),
            make_response(502, text="second"),
        ]

        with pytest.raises(TransportError) as exc_info:
            client.search("x")

        assert exc_info.value.status_code == 502

    def test_timeout_is_transport_error(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(TransportError, match="timed out"):
            client.search("x")
        assert session.request.call_count == 2

    def test_401_is_terminal(self, client, session):
        session.request.return_value = make_response(401, text="nope")

        with pytest.raises(AuthenticationError):
            client.search("x")
        assert session.request.call_count == 1

    def test_403_is_terminal(self, client, session):
        session.request.return_value = make_response(403, text="nope")

        with pytest.raises(PermissionError):
            client.search("x")
        assert session.request.call_count == 1

    def test_invalid_json_is_terminal(self, client, session):
        session.request.return_value = make_response(200, text="<html>login</html>")

        with pytest.raises(ResponseParseError) as exc_info:
            client.search("x")

        assert exc_info.value.raw_body == "<html>login</html>"
        assert session.request.call_count == 1

    def test_404(self, client, session):
        session.request.return_value = make_response(404, text="missing")

        with pytest.raises(NotFoundError):
            client.get_issue("AB-9")
        assert session.request.call_count == 2

    def test_cancelled_before_request(self, client, session):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(SyncCancelledError):
            client.search("x", cancel_event=cancel)
        session.request.assert_not_called()

    def test_cancelled_between_generations(self, client, session):
        cancel = threading.Event()

        def fail_and_cancel(*args, **kwargs):
            cancel.set()
            return make_response(500, text="boom")

        session.request.side_effect = fail_and_cancel

        with pytest.raises(SyncCancelledError):
            client.search("x", cancel_event=cancel)
        assert session.request.call_count == 1


class TestNonObjectBodies:
    """Tests for success responses whose JSON is not an object."""

    @staticmethod
    def json_response(text, value):
        response = make_response(200, text=text)
        response.json.side_effect = None
        response.json.return_value = value
        return response

    @pytest.mark.parametrize("text, value", [("null", None), ("[]", []), ("42", 42)])
    def test_search_rejects_non_object(self, client, session, text, value):
        session.request.return_value = self.json_response(text, value)

        with pytest.raises(ResponseParseError) as exc_info:
            client.search("x")

        assert exc_info.value.raw_body == text
        assert exc_info.value.status_code == 200
        assert session.request.call_count == 1

    def test_get_issue_rejects_null(self, client, session):
        session.request.return_value = self.json_response("null", None)

        with pytest.raises(ResponseParseError, match="NoneType"):
            client.get_issue("AB-1")
        assert session.request.call_count == 1

    def test_empty_body_is_empty_object(self, client, session):
        session.request.return_value = make_response(204, text="")
        assert client.get("serverInfo") == {}
