# tests/conftest.py
"""
Shared fixtures: a recording httpx transport standing in for the PostgSail API.
"""

import httpx
import pytest

from postgsail_mcp.core.tool_registry import ToolRegistry
from postgsail_mcp.models.common import Session
from postgsail_mcp.services.postgsail_client import PostgSailClient

BASE_URL = "http://postgsail.test/api"
TOKEN = "test-token"


class RecordingBackend:
    """Records every request and answers from a table of canned responses."""

    def __init__(self):
        self.requests = []
        self._routes = {}
        self._default = {"status_code": 200, "json": []}

    def respond(self, endpoint, **response_kwargs):
        self._routes[endpoint] = response_kwargs

    def fail_with(self, exc):
        self._routes["*"] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self._routes.get("*"), Exception):
            raise self._routes["*"]
        endpoint = request.url.path[len("/api/"):]
        kwargs = self._routes.get(endpoint, self._default)
        return httpx.Response(**kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def endpoint(self, request: httpx.Request) -> str:
        return request.url.path[len("/api/"):]


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def client(backend):
    return PostgSailClient(Session(base_url=BASE_URL, token=TOKEN), transport=backend.transport)


@pytest.fixture
def registry(client):
    return ToolRegistry(client)
