"""Shared fixtures: a recording mock transport and sample cluster values."""

import json

import httpx
import pytest

from weedclient.client.weed_client import WeedFSClient
from weedclient.models.schemas import FileHandle, Location

MASTER_URL = "http://master:9333"


class RecordingTransport:
    """Wraps httpx.MockTransport and keeps every request it handled.

    ``responses`` maps "METHOD path" to a callable or a ready response;
    unknown routes fail the test loudly.
    """

    def __init__(self):
        self.requests = []
        self.responses = {}
        self.transport = httpx.MockTransport(self._handle)

    def route(self, method: str, path: str, response):
        self.responses[f"{method} {path}"] = response

    def json_route(self, method: str, path: str, payload, status_code: int = 200):
        self.route(
            method,
            path,
            lambda request: httpx.Response(
                status_code,
                content=json.dumps(payload).encode(),
                headers={"Content-Type": "application/json"},
            ),
        )

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.responses:
            raise AssertionError(f"Unexpected request: {key}")
        response = self.responses[key]
        return response(request) if callable(response) else response


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def http_client(transport):
    with httpx.Client(transport=transport.transport) as client:
        yield client


@pytest.fixture
def client(http_client):
    return WeedFSClient(MASTER_URL, http_client)


@pytest.fixture
def location():
    return Location(public_url="10.0.0.1:8080", url="10.0.0.1:8080")


@pytest.fixture
def file():
    return FileHandle(fid="3,01637037d6")
