"""Fixtures for exercising the HTTP clients without a network."""

import json
import threading

import pytest
import requests
from requests.cookies import RequestsCookieJar

from frontend.clients.token_manager import TokenManager

BASE_URL = "http://api.local"


def make_response(status_code: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode() if body is not None else b""
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Stand-in for ``requests.Session`` that replays scripted responses.

    Each route holds a queue of ``(status, body)`` entries; the last entry is
    reused once the queue is down to one. An exception instance in place of
    the status is raised instead of returning a response.
    """

    def __init__(self) -> None:
        self.cookies = RequestsCookieJar()
        self.calls: list[dict] = []
        self._routes: dict[tuple[str, str], list] = {}
        self._lock = threading.Lock()

    def add(self, method: str, path: str, status, body=None) -> None:
        self._routes.setdefault((method, path), []).append((status, body))

    def count(self, method: str, path: str) -> int:
        return sum(1 for c in self.calls if c["method"] == method and c["path"] == path)

    def request(self, method, url, headers=None, **kwargs):
        path = url[len(BASE_URL):]
        with self._lock:
            self.calls.append({"method": method, "path": path, "headers": dict(headers or {}), **kwargs})
            queue = self._routes[(method, path)]
            status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(status, BaseException):
            raise status
        return make_response(status, body)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def token_manager(fake_session):
    return TokenManager(BASE_URL, session=fake_session)


class BlockingSession:
    """Holds every request open until ``release`` is set."""

    def __init__(self, status_code: int, body=None) -> None:
        self.cookies = RequestsCookieJar()
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = 0
        self._status_code = status_code
        self._body = body
        self._lock = threading.Lock()

    def request(self, method, url, **_kwargs):
        with self._lock:
            self.calls += 1
        self.started.set()
        assert self.release.wait(timeout=5)
        return make_response(self._status_code, self._body)


@pytest.fixture
def blocking_manager():
    """Factory returning ``(TokenManager, BlockingSession)`` for a scripted refresh outcome."""

    def _build(status_code: int, body=None):
        session = BlockingSession(status_code, body)
        return TokenManager(BASE_URL, session=session), session

    return _build
