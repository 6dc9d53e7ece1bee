"""
Shared pytest fixtures for openvidu_session tests.

FakeHttp stands in for aiohttp.ClientSession: every POST is recorded and
answered from a queue of canned replies or exceptions.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, List, Optional

import pytest

from openvidu_session.core.session import SessionClient


@dataclass
class FakeReply:
    """A canned server reply."""
    status: int
    body: Any = None
    delay: float = 0.0

    def raw(self) -> bytes:
        if self.body is None:
            return b""
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(self.body).encode("utf-8")


@dataclass
class RecordedRequest:
    """Record of a POST made during testing."""
    url: str
    body: Any
    headers: dict


class _FakeResponse:
    def __init__(self, reply: FakeReply):
        self.status = reply.status
        self._raw = reply.raw()

    async def read(self) -> bytes:
        return self._raw


class _FakeRequestContext:
    def __init__(self, http: "FakeHttp", item):
        self._http = http
        self._item = item

    async def __aenter__(self) -> _FakeResponse:
        if isinstance(self._item, BaseException):
            raise self._item
        if self._item.delay:
            await asyncio.sleep(self._item.delay)
        return _FakeResponse(self._item)

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeHttp:
    """Mock of the aiohttp.ClientSession surface used by the client."""

    def __init__(self):
        self.queue: List[Any] = []
        self.requests: List[RecordedRequest] = []
        self.closed = False

    def reply(self, status: int, body: Any = None, delay: float = 0.0) -> "FakeHttp":
        self.queue.append(FakeReply(status, body, delay))
        return self

    def fail(self, error: BaseException) -> "FakeHttp":
        self.queue.append(error)
        return self

    def post(self, url: str, data: Optional[str] = None, headers: Optional[dict] = None):
        self.requests.append(
            RecordedRequest(url=url, body=json.loads(data) if data else None, headers=headers or {})
        )
        if not self.queue:
            raise AssertionError(f"unexpected request to {url}")
        return _FakeRequestContext(self, self.queue.pop(0))

    async def close(self):
        self.closed = True

    @property
    def last_body(self) -> Any:
        return self.requests[-1].body


@pytest.fixture
def fake_http():
    """Create a FakeHttp with an empty reply queue."""
    return FakeHttp()


@pytest.fixture
def make_client(fake_http):
    """Build SessionClient instances bound to the fake HTTP session."""
    def _make(properties=None, timeout=1.0):
        return SessionClient(
            "media.example.com",
            4443,
            "Basic T1BFTlZJRFVBUFA6TVlfU0VDUkVU",
            properties,
            http=fake_http,
            timeout=timeout,
        )
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove OPENVIDU_* variables from the environment."""
    for name in (
        "OPENVIDU_HOST",
        "OPENVIDU_PORT",
        "OPENVIDU_SECRET",
        "OPENVIDU_USERNAME",
        "OPENVIDU_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
