"""Shared test fixtures: a fake ERC3 server and clients wired to it."""

import pytest
import requests

from fastapi.testclient import TestClient

from erc3 import ERC3
from fake_server import API_KEY, create_app

BASE_URL = "http://testserver"


class RecordingTransport:
    """Session adapter that forwards to a TestClient and records each request."""

    def __init__(self, test_client: TestClient):
        self._client = test_client
        self.requests = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({"url": url, "json": json, "headers": headers or {}})
        return self._client.post(url, json=json, headers=headers)

    @property
    def last(self) -> dict:
        return self.requests[-1]


class StubResponse:
    def __init__(self, payload=None, error=None):
        self._payload = payload
        self._error = error

    def json(self):
        if self._error is not None:
            raise self._error
        return self._payload


class StubSession:
    """Session returning a canned reply, or raising on post()."""

    def __init__(self, payload=None, json_error=None, post_error=None):
        self.payload = payload
        self.json_error = json_error
        self.post_error = post_error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.post_error is not None:
            raise self.post_error
        return StubResponse(self.payload, self.json_error)


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def transport(app):
    return RecordingTransport(TestClient(app))


@pytest.fixture
def client(transport):
    """ERC3 client talking to the fake server."""
    return ERC3(API_KEY, base_url=BASE_URL, session=transport)


@pytest.fixture
def demo_task(client):
    """A started task of a fresh demo session."""
    session = client.start_session(benchmark="demo", workspace="w", name="n")
    task = client.session_status(session["session_id"])["tasks"][0]
    client.start_task(task)
    return task


@pytest.fixture
def store(client):
    """Store client for a started task of a fresh store session."""
    session = client.start_session(benchmark="store", workspace="w", name="n")
    task = client.session_status(session["session_id"])["tasks"][0]
    client.start_task(task)
    return client.get_store_client(task)


@pytest.fixture
def cli_env(monkeypatch, transport):
    """Route every requests.Session the CLIs create to the fake server."""
    monkeypatch.setenv("ERC3_API_KEY", API_KEY)
    monkeypatch.setenv("ERC3_BASE_URL", BASE_URL)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.setattr(requests, "Session", lambda: transport)
    return transport
