"""Test configuration and fixtures."""

import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("UPSTREAM_API_URL", "http://upstream.test/api")
os.environ["UPSTREAM_API_TOKEN"] = ""

from techportal.cache import MemoryCache  # noqa: E402
from techportal.datasource import HttpDataSource  # noqa: E402
from techportal.main import app  # noqa: E402 - must set env vars before importing


class FakeClock:
    """Monotonic clock the tests move by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Upstream:
    """
    Stand-in for the Technicians Web API.

    ``responses`` maps a request path to a JSON payload, an httpx.Response, or
    an exception to raise. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.responses = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/api", "", 1)
        reply = self.responses.get(path)
        if reply is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return httpx.Response(reply.status_code, content=reply.content, headers=reply.headers)
        return httpx.Response(200, content=json.dumps(reply), headers={"Content-Type": "application/json"})

    def source(self) -> HttpDataSource:
        return HttpDataSource(
            base_url="http://upstream.test/api",
            token=None,
            timeout=5,
            transport=httpx.MockTransport(self),
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    return MemoryCache(clock=clock)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
