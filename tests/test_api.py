import requests

from roster_core.api import ApiResult, post_json, register_bulk
from roster_core.models import Participant


class FakeResponse:
    def __init__(self, status, text="", payload=None):
        self.status_code = status
        self.text = text
        self._payload = payload
        self.ok = status < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def test_post_json_success():
    session = FakeSession(FakeResponse(200, "{}", {"inserted": 1}))
    res = post_json("http://api.test", {"a": 1}, session=session, timeout=2)
    assert res == ApiResult(ok=True, data={"inserted": 1}, status=200)
    assert session.calls == [("http://api.test", {"a": 1}, 2)]


def test_post_json_network_error():
    res = post_json("http://api.test", {}, session=FakeSession(error=requests.ConnectionError("refused")))
    assert not res.ok
    assert res.status is None
    assert "refused" in res.message


def test_post_json_error_status_uses_server_message():
    res = post_json("http://api.test", {}, session=FakeSession(FakeResponse(400, "x", {"message": "bad rows"})))
    assert (res.ok, res.status, res.message) == (False, 400, "bad rows")
    res = post_json("http://api.test", {}, session=FakeSession(FakeResponse(502, "<html>")))
    assert (res.ok, res.status, res.message) == (False, 502, "Request failed (502)")


def test_post_json_invalid_json_on_success():
    res = post_json("http://api.test", {}, session=FakeSession(FakeResponse(200, "<html>")))
    assert not res.ok
    assert res.message == "Invalid JSON response"


def test_register_bulk():
    calls = []

    def poster(url, body, timeout):
        calls.append((url, body, timeout))
        return ApiResult(ok=True, data=[1], status=200)

    assert register_bulk([Participant(name="A")], "", poster=poster).message == "endpoint not configured"
    assert calls == []
    res = register_bulk([Participant(name="A", note="n")], "http://api.test", poster=poster, timeout=3)
    assert calls == [("http://api.test", {"items": [{"name": "A", "note": "n"}]}, 3)]
    assert not res.ok
    assert res.message == "Unexpected response body"
