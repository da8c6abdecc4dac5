import json

import pytest
import requests


def make_response(status_code=200, payload=None, reason="OK", text=None, url="http://test/api"):
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp.url = url
    if text is not None:
        resp._content = text.encode("utf-8")
    else:
        resp._content = json.dumps(payload).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """Stands in for requests.Session; replies from a queue and records calls."""

    def __init__(self, *replies):
        self.headers = {}
        self.calls = []
        self.replies = list(replies)

    def queue(self, reply):
        self.replies.append(reply)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture(name="make_response")
def make_response_fixture():
    return make_response
