"""Tests for the requests-based client and the MessageBoard view-model."""

import json

import pytest
import requests

import message_api
from message_api import MessageAPI, MessageBoard


def make_response(status_code, body=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://server/api/message"
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    return response


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def api_with(*responses, timeout=10):
    session = FakeSession(*responses)
    return MessageAPI(base_url="http://server/", session=session, timeout=timeout), session


class TestMessageAPI:
    def test_get_message_returns_content(self):
        api, session = api_with(make_response(200, {"message": "Hello Full Stack World!"}), timeout=3)

        message, error = api.get_message()

        assert (message, error) == ("Hello Full Stack World!", None)
        assert session.calls[0]["method"] == "GET"
        assert session.calls[0]["url"] == "http://server/api/message"
        assert session.calls[0]["timeout"] == 3

    def test_update_message_posts_new_message(self):
        api, session = api_with(
            make_response(
                200,
                {"status": "success", "message": "Message updated successfully", "updatedMessage": "Hi there"},
            )
        )

        updated, error = api.update_message("Hi there")

        assert (updated, error) == ("Hi there", None)
        assert session.calls[0]["method"] == "POST"
        assert session.calls[0]["json"] == {"newMessage": "Hi there"}

    def test_http_error_uses_server_details(self):
        api, _ = api_with(make_response(400, {"error": "Bad Request", "details": "newMessage is required"}))

        updated, error = api.update_message("x")

        assert updated is None
        assert error == {"status_code": 400, "message": "newMessage is required"}

    def test_http_error_without_json_uses_text(self):
        api, _ = api_with(make_response(502, text="Bad Gateway"))

        message, error = api.get_message()

        assert message is None
        assert error == {"status_code": 502, "message": "Bad Gateway"}

    def test_http_error_with_non_object_json_body_uses_its_text(self):
        api, _ = api_with(make_response(503, ["Service Unavailable"]))

        message, error = api.get_message()

        assert message is None
        assert error["status_code"] == 503
        assert "Service Unavailable" in error["message"]

    def test_http_error_with_object_missing_fields_uses_whole_body(self):
        api, _ = api_with(make_response(422, {"detail": "Unprocessable"}))

        updated, error = api.update_message("x")

        assert updated is None
        assert error["status_code"] == 422
        assert "Unprocessable" in error["message"]

    def test_transport_failure_has_no_status_code(self):
        api, _ = api_with(requests.ConnectionError("Connection refused"))

        message, error = api.get_message()

        assert message is None
        assert error["status_code"] is None
        assert "Connection refused" in error["message"]

    def test_unexpected_body_is_an_error(self):
        api, _ = api_with(make_response(200, {"something": "else"}))

        message, error = api.get_message()

        assert message is None
        assert error["message"] == "Unexpected response from server"

    def test_invalid_json_is_an_error(self):
        api, _ = api_with(make_response(200, text="<html>oops</html>"))

        message, error = api.get_message()

        assert message is None
        assert error["status_code"] is None
        assert error["message"].startswith("Invalid response from server")


class StubAPI:
    """Records calls and lets tests inspect board state mid-request."""

    def __init__(self, get_results=(), update_results=()):
        self.get_results = list(get_results)
        self.update_results = list(update_results)
        self.updates = []
        self.board = None
        self.seen_states = []

    def get_message(self):
        self.seen_states.append(("get", self.board.state, self.board.loading))
        return self.get_results.pop(0)

    def update_message(self, text):
        self.seen_states.append(("update", self.board.updating))
        self.updates.append(text)
        return self.update_results.pop(0)


def board_with(**kwargs):
    api = StubAPI(**kwargs)
    board = MessageBoard(api)
    api.board = board
    return board, api


class TestMessageBoard:
    def test_new_board_is_loading(self):
        board, _ = board_with()

        assert board.state == "loading"
        assert board.message is None

    def test_load_failure_with_list_error_body_is_displayed(self):
        api, _ = api_with(make_response(503, ["Service Unavailable"]))
        board = MessageBoard(api)

        assert board.load() is False

        assert board.state == "error"
        assert "Service Unavailable" in board.error

    def test_load_shows_message(self):
        board, api = board_with(get_results=[("Hello", None)])

        assert board.load() is True

        assert board.message == "Hello"
        assert board.state == "ready"
        assert api.seen_states == [("get", "loading", True)]
        assert board.loading is False

    def test_failed_load_sets_error_and_retry_recovers(self):
        board, _ = board_with(
            get_results=[
                (None, {"status_code": None, "message": "Could not reach the server"}),
                ("Hello", None),
            ]
        )

        assert board.load() is False
        assert board.state == "error"
        assert "Could not reach the server" in board.error

        assert board.retry() is True
        assert board.state == "ready"
        assert board.error is None
        assert board.message == "Hello"

    def test_failed_reload_keeps_previous_message(self):
        board, _ = board_with(
            get_results=[("Hello", None), (None, {"status_code": 500, "message": "disk I/O error"})]
        )
        board.load()

        board.load()

        assert board.message == "Hello"
        assert board.state == "error"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_submit_sends_nothing_and_keeps_state(self, text):
        board, api = board_with(get_results=[("Hello", None)])
        board.load()

        assert board.submit(text) is False

        assert api.updates == []
        assert board.validation_error == "Message cannot be empty."
        assert board.error is None
        assert board.state == "ready"

    def test_valid_submit_clears_validation_error(self):
        board, _ = board_with(get_results=[("Hello", None)], update_results=[("Fixed", None)])
        board.load()
        board.submit("   ")

        assert board.submit("Fixed") is True

        assert board.validation_error is None
        assert board.message == "Fixed"

    def test_submit_uses_server_returned_message(self):
        board, api = board_with(get_results=[("Hello", None)], update_results=[("Stored by server", None)])
        board.load()

        assert board.submit("  Hi there  ") is True

        assert api.updates == ["Hi there"]
        assert api.seen_states[-1] == ("update", True)
        assert board.updating is False
        assert board.message == "Stored by server"
        # No re-fetch after a successful update.
        assert [state for state in api.seen_states if state[0] == "get"] == [("get", "loading", True)]

    def test_failed_submit_keeps_displayed_message(self):
        board, _ = board_with(
            get_results=[("Hello", None)],
            update_results=[(None, {"status_code": 500, "message": "attempt to write a readonly database"})],
        )
        board.load()

        assert board.submit("New") is False

        assert board.message == "Hello"
        assert board.updating is False
        assert "readonly database" in board.error


class TestCommandLine:
    def test_get_prints_message(self, monkeypatch, capsys):
        monkeypatch.setattr(MessageAPI, "get_message", lambda self: ("Hello", None))

        assert message_api.main(["--base-url", "http://server", "get"]) == 0

        assert capsys.readouterr().out.strip() == "Hello"

    def test_set_failure_exits_with_error(self, monkeypatch, capsys):
        monkeypatch.setattr(
            MessageAPI, "update_message", lambda self, text: (None, {"status_code": 500, "message": "boom"})
        )

        assert message_api.main(["set", "Hi"]) == 1

        assert "boom" in capsys.readouterr().err
